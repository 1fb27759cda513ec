# clinic_booking/services/scheduling/availability.py
"""
Availability for one local calendar day.

Three views of the day are returned:
- working: every grid point of the working window (total capacity)
- busy: grid points covered by an existing appointment
- available: service-sized starts whose every grid chunk is free,
  minus starts already in the past when the day is the client's today
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from .calculator import generate_slot_starts
from .config import SchedulingConfig, get_scheduling_config, parse_service
from .result import Err, ErrorKind, Ok, Result
from .store import AppointmentStore
from .timezone import (
    local_date_of,
    local_midnight_for_date,
    parse_instant,
    parse_local_date,
    resolve_tz_offset,
    to_iso,
)
from .working_hours import resolve_working_window

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Availability:
    available_slots: list[str] = field(default_factory=list)
    busy_slots: list[str] = field(default_factory=list)
    working_slots: list[str] = field(default_factory=list)


def get_availability(
    store: AppointmentStore,
    date_str: str | None,
    service: str | None = None,
    tz_offset=None,
    now: datetime | None = None,
    config: SchedulingConfig | None = None,
) -> Result[Availability]:
    """
    Compute slots for a date ("YYYY-MM-DD", client-local).

    Without a service the default duration is assumed; short services
    may then be offered fewer starts than actually fit.
    """
    config = config or get_scheduling_config()
    now = now or datetime.now(timezone.utc)

    if not date_str:
        return Err(ErrorKind.INVALID_INPUT, "date is required (YYYY-MM-DD)")
    local_date = parse_local_date(date_str)
    if local_date is None:
        return Err(ErrorKind.INVALID_INPUT, "invalid date")

    try:
        service_key = parse_service(service or None)
    except ValueError:
        return Err(ErrorKind.INVALID_INPUT, f"invalid service: {service}")

    offset = resolve_tz_offset(tz_offset)
    step = config.slot_step_minutes
    duration = config.duration_for(service_key)

    # Step 1: Base grid for the day
    window = resolve_working_window(local_date, config)
    try:
        # date is already the client's calendar day, shift only its midnight
        midnight = local_midnight_for_date(local_date, offset)
        grid = generate_slot_starts(window, midnight, step, step)
        day_end = midnight + (timedelta(days=1) - timedelta(milliseconds=1))
    except OverflowError:
        return Err(ErrorKind.INVALID_INPUT, "date out of range")

    # Step 2: Appointments touching the local day
    intervals = _busy_intervals(store, midnight, day_end)

    # Step 3: Grid points inside [start, end) of any appointment
    busy: set[datetime] = set()
    for appt_start, appt_end in intervals:
        for t in grid:
            if appt_start <= t < appt_end:
                busy.add(t)

    # Step 4-5: Service-sized starts with every chunk free
    chunks = config.chunks_for(duration)
    chunk = timedelta(minutes=step)
    candidates = generate_slot_starts(window, midnight, step, duration)
    available = [
        t for t in candidates
        if all(t + i * chunk not in busy for i in range(chunks))
    ]

    # Step 6: Drop past starts on the client's today
    if local_date == local_date_of(now, offset):
        available = [t for t in available if t > now]

    return Ok(Availability(
        available_slots=[to_iso(t) for t in available],
        busy_slots=[to_iso(t) for t in sorted(busy)],
        working_slots=[to_iso(t) for t in grid],
    ))


def _busy_intervals(
    store: AppointmentStore,
    range_start: datetime,
    range_end: datetime,
) -> list[tuple[datetime, datetime]]:
    intervals = []
    for appt in store.find_overlapping(range_start, range_end):
        start = parse_instant(appt.start)
        end = parse_instant(appt.end)
        if start is None or end is None:
            logger.warning(f"Skipping appointment {appt.id} with unreadable interval")
            continue
        intervals.append((start, end))
    return intervals
