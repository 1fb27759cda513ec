# clinic_booking/services/scheduling/calculator.py
"""
Candidate slot generation.

A slot is a start instant on the grid anchored at the window opening:
    start = open + k * slot_minutes
and it is a candidate when the whole booking still fits:
    start + duration <= close
"""

from datetime import datetime, timedelta

from .config import WorkingWindow
from .working_hours import window_bounds


def generate_slot_starts(
    window: WorkingWindow,
    midnight: datetime,
    slot_minutes: int,
    duration_minutes: int,
) -> list[datetime]:
    """
    Ascending start instants for a day.

    Args:
        window: Local working hours of the day
        midnight: Instant of local midnight of the day
        slot_minutes: Grid step
        duration_minutes: Contiguous time each start must leave before close
    """
    if slot_minutes <= 0:
        raise ValueError(f"slot_minutes must be positive, got {slot_minutes}")

    open_at, close_at = window_bounds(window, midnight)
    step = timedelta(minutes=slot_minutes)
    duration = timedelta(minutes=duration_minutes)

    slots: list[datetime] = []
    t = open_at
    while t + duration <= close_at:
        slots.append(t)
        t += step
    return slots
