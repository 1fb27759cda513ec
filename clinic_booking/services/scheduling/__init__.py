# clinic_booking/services/scheduling/__init__.py
"""
Availability and scheduling engine.

Pure calculation (timezone, working_hours, calculator) plus the two
store-backed operations: availability for a day and booking validation.
"""

from .config import (
    SERVICE_DURATION_MINUTES,
    SchedulingConfig,
    ServiceKey,
    WorkingWindow,
    get_scheduling_config,
)
from .calculator import generate_slot_starts
from .availability import Availability, get_availability
from .validator import BookingSlot, validate_booking
from .result import Err, ErrorKind, Ok, Result
from .store import AppointmentStore, OverlapConflict
from .locks import LockUnavailable, build_booking_locks

__all__ = [
    "SERVICE_DURATION_MINUTES",
    "SchedulingConfig",
    "ServiceKey",
    "WorkingWindow",
    "get_scheduling_config",
    "generate_slot_starts",
    "Availability",
    "get_availability",
    "BookingSlot",
    "validate_booking",
    "Err",
    "ErrorKind",
    "Ok",
    "Result",
    "AppointmentStore",
    "OverlapConflict",
    "LockUnavailable",
    "build_booking_locks",
]
