# clinic_booking/services/scheduling/config.py
"""
Scheduling configuration: services, durations, slot grid, working windows.
"""

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache


class ServiceKey(str, Enum):
    CONSULTATION = "consultation"
    TREATMENT = "treatment"
    EXTRACTION = "extraction"
    PROSTHETICS = "prosthetics"


SERVICE_DURATION_MINUTES: dict[ServiceKey, int] = {
    ServiceKey.CONSULTATION: 15,
    ServiceKey.TREATMENT: 45,
    ServiceKey.EXTRACTION: 45,
    ServiceKey.PROSTHETICS: 45,
}

_missing = set(ServiceKey) - set(SERVICE_DURATION_MINUTES)
if _missing:
    raise RuntimeError(f"No duration configured for services: {sorted(s.value for s in _missing)}")


@dataclass(frozen=True)
class WorkingWindow:
    """Local open/close clock hours for a day, end exclusive."""
    start_hour: int
    end_hour: int

    @property
    def minutes(self) -> int:
        return (self.end_hour - self.start_hour) * 60


@dataclass(frozen=True)
class SchedulingConfig:
    """
    Configuration for the availability engine.

    Attributes:
        slot_step_minutes: Base grid step, equal to the shortest service
        default_duration_minutes: Duration assumed when no service is given
        weekday_window: Mon-Fri opening hours
        weekend_window: Sat-Sun opening hours
    """
    slot_step_minutes: int = 15
    default_duration_minutes: int = 45
    weekday_window: WorkingWindow = WorkingWindow(9, 18)
    weekend_window: WorkingWindow = WorkingWindow(9, 13)

    def __post_init__(self):
        """Validate configuration."""
        if self.slot_step_minutes <= 0 or 60 % self.slot_step_minutes:
            raise ValueError(f"slot_step_minutes must divide 60, got {self.slot_step_minutes}")
        for window in (self.weekday_window, self.weekend_window):
            if not 0 <= window.start_hour < window.end_hour <= 24:
                raise ValueError(f"invalid working window {window}")

    def duration_for(self, service: ServiceKey | None) -> int:
        """Minutes a booking of `service` occupies (default when None)."""
        if service is None:
            return self.default_duration_minutes
        return SERVICE_DURATION_MINUTES[service]

    def chunks_for(self, duration_minutes: int) -> int:
        """Number of grid steps a booking of this duration spans."""
        return max(1, -(-duration_minutes // self.slot_step_minutes))


def parse_service(value: str | ServiceKey | None) -> ServiceKey | None:
    """
    Map a raw service key to ServiceKey.

    Raises:
        ValueError: unknown key
    """
    if value is None or isinstance(value, ServiceKey):
        return value
    return ServiceKey(value)


@lru_cache
def get_scheduling_config() -> SchedulingConfig:
    """Scheduling configuration (singleton)."""
    return SchedulingConfig()
