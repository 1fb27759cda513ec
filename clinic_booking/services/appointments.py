"""
Appointment lifecycle: create, update, delete, list.

Proposed -> Validated -> Persisted on create; Persisted -> Re-validated ->
Persisted on update; Deleted is terminal. Every write that places a booking
runs its overlap check and the write itself under the booking locks.
"""

import logging

from ..models import Appointments
from ..schemas.appointments import AppointmentCreate, AppointmentUpdate
from .scheduling import (
    AppointmentStore,
    Err,
    ErrorKind,
    LockUnavailable,
    Ok,
    OverlapConflict,
    Result,
    validate_booking,
)
from .scheduling.locks import LocalBookingLocks, RedisBookingLocks
from .scheduling.validator import check_booking_window

logger = logging.getLogger(__name__)

BookingLocks = LocalBookingLocks | RedisBookingLocks

_BUSY = "Time slot is busy"
_LOCKED = "Time slot is being booked, try again"
_NOT_FOUND = "Appointment not found"


def list_appointments(store: AppointmentStore) -> list[Appointments]:
    return store.list_all()


def create_appointment(
    store: AppointmentStore,
    locks: BookingLocks,
    data: AppointmentCreate,
) -> Result[Appointments]:
    if not (data.name and data.phone_number and data.service and data.start):
        return Err(ErrorKind.INVALID_INPUT, "name, phoneNumber, service, start are required")

    placed = check_booking_window(data.service, data.start, data.tz_offset)
    if not placed.ok:
        return placed
    slot = placed.value

    try:
        with locks.hold(slot.start, slot.end):
            checked = validate_booking(store, slot.service, slot.start, data.tz_offset)
            if not checked.ok:
                return checked
            obj = store.insert(
                name=data.name,
                phone_number=data.phone_number,
                service=slot.service.value,
                start=slot.start,
                end=slot.end,
            )
    except LockUnavailable:
        logger.warning(f"Booking lock busy for {slot.start.isoformat()}")
        return Err(ErrorKind.SLOT_BUSY, _LOCKED)
    except OverlapConflict:
        return Err(ErrorKind.SLOT_BUSY, _BUSY)

    logger.info(f"Appointment {obj.id} created: {obj.service} {obj.start} - {obj.end}")
    return Ok(obj)


def update_appointment(
    store: AppointmentStore,
    locks: BookingLocks,
    appointment_id: int,
    data: AppointmentUpdate,
) -> Result[Appointments]:
    """
    Partial update.

    Supplying start or service re-validates the booking (stored values fill
    in whichever is missing) and re-derives end. Otherwise start/end stay
    as stored. A client-sent end is never written.

    The offset is not stored: callers changing start or service must send
    tz_offset again, otherwise the working window is judged in UTC.
    """
    obj = store.get(appointment_id)
    if not obj:
        return Err(ErrorKind.NOT_FOUND, _NOT_FOUND)

    changes = {
        field: value
        for field, value in data.model_dump(exclude_unset=True).items()
        if value is not None and field not in ("tz_offset", "end")
    }
    for field in ("name", "phone_number"):
        if field in changes and not changes[field]:
            return Err(ErrorKind.INVALID_INPUT, f"{field} cannot be empty")

    if not (data.start or data.service):
        changes.pop("start", None)
        changes.pop("service", None)
        obj = store.update(obj, changes)
        logger.info(f"Appointment {obj.id} updated: {sorted(changes)}")
        return Ok(obj)

    service = data.service or obj.service
    start = data.start or obj.start

    placed = check_booking_window(service, start, data.tz_offset)
    if not placed.ok:
        return placed
    slot = placed.value

    try:
        with locks.hold(slot.start, slot.end):
            checked = validate_booking(
                store, slot.service, slot.start, data.tz_offset, exclude_id=appointment_id
            )
            if not checked.ok:
                return checked
            changes.update(service=slot.service.value, start=slot.start, end=slot.end)
            obj = store.update(obj, changes)
    except LockUnavailable:
        logger.warning(f"Booking lock busy for {slot.start.isoformat()}")
        return Err(ErrorKind.SLOT_BUSY, _LOCKED)
    except OverlapConflict:
        return Err(ErrorKind.SLOT_BUSY, _BUSY)

    logger.info(f"Appointment {obj.id} rescheduled: {obj.service} {obj.start} - {obj.end}")
    return Ok(obj)


def delete_appointment(store: AppointmentStore, appointment_id: int) -> Result[str]:
    if not store.delete(appointment_id):
        return Err(ErrorKind.NOT_FOUND, _NOT_FOUND)
    logger.info(f"Appointment {appointment_id} deleted")
    return Ok("Appointment deleted successfully")
