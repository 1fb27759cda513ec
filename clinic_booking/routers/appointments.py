# clinic_booking/routers/appointments.py
"""
Appointments API endpoints.

Error kinds from the service layer map to: NOT_FOUND -> 404, any other -> 400.
"""

from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..config import settings
from ..database import get_db
from ..redis_client import redis_client
from ..schemas.appointments import (
    AppointmentCreate,
    AppointmentRead,
    AppointmentUpdate,
    AvailabilityResponse,
    MessageResponse,
)
from ..services import appointments as appointment_service
from ..services.scheduling import (
    AppointmentStore,
    Err,
    ErrorKind,
    build_booking_locks,
    get_availability,
)

router = APIRouter(prefix="/appointments", tags=["appointments"])


def get_store(db: Session = Depends(get_db)) -> AppointmentStore:
    return AppointmentStore(db)


@lru_cache
def get_booking_locks():
    return build_booking_locks(
        redis_client,
        timeout_seconds=settings.booking_lock_timeout_seconds,
        wait_seconds=settings.booking_lock_wait_seconds,
    )


def _raise_for(err: Err):
    code = (
        status.HTTP_404_NOT_FOUND
        if err.kind == ErrorKind.NOT_FOUND
        else status.HTTP_400_BAD_REQUEST
    )
    raise HTTPException(status_code=code, detail=err.message)


@router.get("", response_model=list[AppointmentRead])
def list_appointments(store: AppointmentStore = Depends(get_store)):
    return appointment_service.list_appointments(store)


@router.get("/availability", response_model=AvailabilityResponse)
def get_appointments_availability(
    date: str | None = None,
    service: str | None = None,
    tzOffset: str | None = None,
    store: AppointmentStore = Depends(get_store),
):
    """Available, busy and working slots for a client-local date."""
    result = get_availability(store, date, service, tzOffset)
    if not result.ok:
        _raise_for(result)
    return result.value


@router.post("", response_model=AppointmentRead, status_code=status.HTTP_201_CREATED)
def create_appointment(
    data: AppointmentCreate,
    store: AppointmentStore = Depends(get_store),
    locks=Depends(get_booking_locks),
):
    result = appointment_service.create_appointment(store, locks, data)
    if not result.ok:
        _raise_for(result)
    return result.value


@router.patch("/{id}", response_model=AppointmentRead)
def update_appointment(
    id: int,
    data: AppointmentUpdate,
    store: AppointmentStore = Depends(get_store),
    locks=Depends(get_booking_locks),
):
    """
    Partial update. Resend tzOffset with start or service: it is not stored
    and defaults to UTC.
    """
    result = appointment_service.update_appointment(store, locks, id, data)
    if not result.ok:
        _raise_for(result)
    return result.value


@router.delete("/{id}", response_model=MessageResponse)
def delete_appointment(id: int, store: AppointmentStore = Depends(get_store)):
    result = appointment_service.delete_appointment(store, id)
    if not result.ok:
        _raise_for(result)
    return MessageResponse(message=result.value)
