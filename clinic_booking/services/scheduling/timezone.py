# clinic_booking/services/scheduling/timezone.py
"""
Conversion between absolute instants and a client's local calendar.

Offsets follow the browser `Date.getTimezoneOffset()` convention:
local wall clock = UTC - offset (UTC+4 is -240, UTC-5 is 300).
The host timezone is never consulted.
"""

import math
import re
from datetime import date, datetime, time, timedelta, timezone

_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")

# Real offsets stay within a day either way
MAX_TZ_OFFSET_MINUTES = 24 * 60


def resolve_tz_offset(value) -> float:
    """Offset in minutes; absent, unparseable, non-finite or out-of-range values give 0."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        minutes = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(minutes) or abs(minutes) > MAX_TZ_OFFSET_MINUTES:
        return 0
    return int(minutes) if minutes.is_integer() else minutes


def _offset(tz_offset_minutes: float) -> timedelta:
    return timedelta(minutes=tz_offset_minutes)


def local_date_of(instant: datetime, tz_offset_minutes: float) -> date:
    """Local calendar date `instant` falls on."""
    wall_clock = instant.astimezone(timezone.utc) - _offset(tz_offset_minutes)
    return wall_clock.date()


def local_midnight_for_date(local_date: date, tz_offset_minutes: float) -> datetime:
    """Instant of local midnight of a calendar date."""
    midnight_as_utc = datetime.combine(local_date, time.min, tzinfo=timezone.utc)
    return midnight_as_utc + _offset(tz_offset_minutes)


def local_midnight(instant: datetime, tz_offset_minutes: float) -> datetime:
    """Instant of local midnight of the day `instant` falls on."""
    return local_midnight_for_date(local_date_of(instant, tz_offset_minutes), tz_offset_minutes)


def parse_instant(value) -> datetime | None:
    """
    Parse an ISO-8601 instant into an aware UTC datetime.

    Accepts a trailing "Z" or an explicit offset; naive values are UTC.
    Returns None when the value cannot be parsed.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value.strip():
        try:
            dt = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    try:
        return dt.astimezone(timezone.utc)
    except (OverflowError, ValueError):
        # e.g. 0001-01-01T00:00+05:00 has no UTC representation
        return None


def parse_local_date(value) -> date | None:
    """Parse a "YYYY-MM-DD" calendar date. None if empty or malformed."""
    if not isinstance(value, str) or not _DATE_RE.fullmatch(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def to_iso(instant: datetime) -> str:
    """Format as "YYYY-MM-DDTHH:MM:SS.mmmZ"."""
    utc = instant.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"
