# clinic_booking/services/scheduling/working_hours.py

from datetime import date, datetime, time, timedelta

from .config import SchedulingConfig, WorkingWindow, get_scheduling_config


def day_of_week(local_date: date) -> int:
    """0 = Sunday ... 6 = Saturday, taken at local noon."""
    local_noon = datetime.combine(local_date, time(12, 0))
    return (local_noon.weekday() + 1) % 7


def resolve_working_window(
    local_date: date,
    config: SchedulingConfig | None = None,
) -> WorkingWindow:
    """Weekends (Sat, Sun) use the short window; all other days the full one."""
    config = config or get_scheduling_config()
    if day_of_week(local_date) in (0, 6):
        return config.weekend_window
    return config.weekday_window


def window_bounds(window: WorkingWindow, midnight: datetime) -> tuple[datetime, datetime]:
    """Absolute (open, close) instants of a window given local midnight."""
    return (
        midnight + timedelta(hours=window.start_hour),
        midnight + timedelta(hours=window.end_hour),
    )
