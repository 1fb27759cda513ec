from __future__ import annotations

import os

# In-memory database and no Redis for everything imported below
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.pop("REDIS_URL", None)

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from clinic_booking.models import Base
from clinic_booking.services.scheduling import SERVICE_DURATION_MINUTES, AppointmentStore, ServiceKey
from clinic_booking.services.scheduling.locks import LocalBookingLocks
from clinic_booking.services.scheduling.timezone import parse_instant


def utc(value: str) -> datetime:
    """ISO string to an aware UTC datetime."""
    return parse_instant(value)


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def store(db) -> AppointmentStore:
    return AppointmentStore(db)


@pytest.fixture
def locks() -> LocalBookingLocks:
    return LocalBookingLocks(wait_seconds=0.05)


@pytest.fixture
def book(store):
    """Insert an appointment directly, bypassing validation."""
    def _book(start: str, service: str = "treatment", name: str = "Anna"):
        start_at = utc(start)
        end_at = start_at + timedelta(minutes=SERVICE_DURATION_MINUTES[ServiceKey(service)])
        return store.insert(
            name=name,
            phone_number="+37400000000",
            service=service,
            start=start_at,
            end=end_at,
        )

    return _book


@pytest.fixture
def client(db, locks):
    from clinic_booking.database import get_db
    from clinic_booking.main import app
    from clinic_booking.routers.appointments import get_booking_locks

    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_booking_locks] = lambda: locks
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
