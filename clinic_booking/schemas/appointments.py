# clinic_booking/schemas/appointments.py

from typing import Optional
from pydantic import BaseModel, Field


class AppointmentCreate(BaseModel):
    # Required-ness is checked by the service so it can answer 400
    name: Optional[str] = None
    phone_number: Optional[str] = Field(None, alias="phoneNumber")
    service: Optional[str] = None
    start: Optional[str] = None  # ISO-8601
    tz_offset: float | str | None = Field(None, alias="tzOffset")  # Date.getTimezoneOffset()

    model_config = {"populate_by_name": True}


class AppointmentUpdate(BaseModel):
    name: Optional[str] = None
    phone_number: Optional[str] = Field(None, alias="phoneNumber")
    service: Optional[str] = None
    start: Optional[str] = None
    tz_offset: float | str | None = Field(None, alias="tzOffset")
    # Accepted for compatibility; end is always derived from start + service
    end: Optional[str] = None

    model_config = {"populate_by_name": True}


class AppointmentRead(BaseModel):
    id: int

    name: str
    phone_number: str = Field(serialization_alias="phoneNumber")
    service: str

    start: str
    end: str

    created_at: Optional[str] = Field(None, serialization_alias="createdAt")
    updated_at: Optional[str] = Field(None, serialization_alias="updatedAt")

    model_config = {"from_attributes": True}


class AvailabilityResponse(BaseModel):
    """Slots for one day, all instants as ISO-8601 UTC strings."""
    available_slots: list[str] = Field(serialization_alias="availableSlots")
    busy_slots: list[str] = Field(serialization_alias="busySlots")
    working_slots: list[str] = Field(serialization_alias="workingSlots")

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    message: str
