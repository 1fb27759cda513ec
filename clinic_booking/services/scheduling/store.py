# clinic_booking/services/scheduling/store.py
"""
Appointment storage over a SQLAlchemy session.

start/end are kept as ISO-8601 UTC strings with millisecond precision,
so interval comparisons run directly in SQL on the text columns.
"""

import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...models import Appointments
from ...models.appointments import OVERLAP_ABORT_MESSAGE
from .timezone import to_iso

logger = logging.getLogger(__name__)


class OverlapConflict(Exception):
    """The database refused a write that would overlap another booking."""


class AppointmentStore:
    """Repository wrapper around a session; one instance per request."""

    def __init__(self, db: Session):
        self.db = db

    # ── Read ─────────────────────────────────────────────────────────────

    def find_overlapping(
        self,
        range_start: datetime,
        range_end: datetime,
    ) -> list[Appointments]:
        """Appointments whose [start, end) intersects the range."""
        return (
            self.db.query(Appointments)
            .filter(
                Appointments.start < to_iso(range_end),
                Appointments.end > to_iso(range_start),
            )
            .order_by(Appointments.start)
            .all()
        )

    def exists_overlap(
        self,
        start: datetime,
        end: datetime,
        exclude_id: int | None = None,
    ) -> bool:
        """True when a stored appointment overlaps [start, end)."""
        query = self.db.query(Appointments.id).filter(
            Appointments.start < to_iso(end),
            Appointments.end > to_iso(start),
        )
        if exclude_id is not None:
            query = query.filter(Appointments.id != exclude_id)
        return query.first() is not None

    def get(self, appointment_id: int) -> Appointments | None:
        return self.db.get(Appointments, appointment_id)

    def list_all(self) -> list[Appointments]:
        """All appointments, latest start first."""
        return self.db.query(Appointments).order_by(Appointments.start.desc()).all()

    # ── Write ────────────────────────────────────────────────────────────

    def insert(
        self,
        name: str,
        phone_number: str,
        service: str,
        start: datetime,
        end: datetime,
    ) -> Appointments:
        obj = Appointments(
            name=name,
            phone_number=phone_number,
            service=service,
            start=to_iso(start),
            end=to_iso(end),
        )
        self.db.add(obj)
        self._commit()
        self.db.refresh(obj)
        return obj

    def update(self, obj: Appointments, changes: dict) -> Appointments:
        """
        Apply a partial field set.

        datetime values for start/end are serialized; other values are
        written as given.
        """
        for field, value in changes.items():
            if isinstance(value, datetime):
                value = to_iso(value)
            setattr(obj, field, value)
        self._commit()
        self.db.refresh(obj)
        return obj

    def delete(self, appointment_id: int) -> bool:
        obj = self.get(appointment_id)
        if not obj:
            return False
        self.db.delete(obj)
        self.db.commit()
        return True

    # ── Helpers ──────────────────────────────────────────────────────────

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if OVERLAP_ABORT_MESSAGE in str(e.orig):
                logger.warning("Overlap guard rejected write: %s", e.orig)
                raise OverlapConflict(str(e.orig)) from e
            raise
