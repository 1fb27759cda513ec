# clinic_booking/services/scheduling/validator.py
"""
Booking validation, shared by create and update.

A booking is accepted when:
- start parses and the service is known
- [start, start + duration) lies inside the working window of the local
  day start falls on (no clipping at the edges)
- no stored appointment, other than the one being updated, overlaps it
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from .config import SchedulingConfig, ServiceKey, get_scheduling_config, parse_service
from .result import Err, ErrorKind, Ok, Result
from .store import AppointmentStore
from .timezone import local_date_of, local_midnight, parse_instant, resolve_tz_offset
from .working_hours import resolve_working_window, window_bounds

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BookingSlot:
    service: ServiceKey
    start: datetime
    end: datetime


def check_booking_window(
    service,
    start,
    tz_offset=None,
    config: SchedulingConfig | None = None,
) -> Result[BookingSlot]:
    """Parse and place a booking inside working hours. No store access."""
    config = config or get_scheduling_config()

    start_at = parse_instant(start)
    if start_at is None:
        return Err(ErrorKind.INVALID_INPUT, "invalid start")
    try:
        service_key = parse_service(service)
    except ValueError:
        return Err(ErrorKind.INVALID_INPUT, f"invalid service: {service}")
    if service_key is None:
        return Err(ErrorKind.INVALID_INPUT, "service is required")

    offset = resolve_tz_offset(tz_offset)
    try:
        end_at = start_at + timedelta(minutes=config.duration_for(service_key))
        window = resolve_working_window(local_date_of(start_at, offset), config)
        day_start, day_end = window_bounds(window, local_midnight(start_at, offset))
    except OverflowError:
        return Err(ErrorKind.INVALID_INPUT, "start out of range")

    if start_at < day_start or end_at > day_end:
        return Err(ErrorKind.OUT_OF_WINDOW, "Outside working hours")

    return Ok(BookingSlot(service=service_key, start=start_at, end=end_at))


def validate_booking(
    store: AppointmentStore,
    service,
    start,
    tz_offset=None,
    exclude_id: int | None = None,
    config: SchedulingConfig | None = None,
) -> Result[BookingSlot]:
    """Full validation: working hours, then overlap against the store."""
    placed = check_booking_window(service, start, tz_offset, config)
    if not placed.ok:
        return placed

    slot = placed.value
    if store.exists_overlap(slot.start, slot.end, exclude_id=exclude_id):
        logger.info(f"Rejected {slot.service.value} at {slot.start.isoformat()}: slot busy")
        return Err(ErrorKind.SLOT_BUSY, "Time slot is busy")

    return placed
