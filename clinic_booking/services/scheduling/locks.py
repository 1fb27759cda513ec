# clinic_booking/services/scheduling/locks.py
"""
Write serialization for bookings.

The overlap check and the write that follows it must not interleave with
another booking for the same time. Writers take one lock per UTC date
touched by [start - longest duration, end); any two overlapping bookings
share at least one of those dates.

Key format: booking:lock:{YYYY-MM-DD}

Redis lock when REDIS_URL is configured (safe across worker processes),
otherwise a per-process lock registry.
"""

import logging
import threading
from contextlib import ExitStack, contextmanager
from datetime import date, datetime, timedelta, timezone
from typing import Iterator

from redis import Redis
from redis.exceptions import LockNotOwnedError

from .config import SERVICE_DURATION_MINUTES

logger = logging.getLogger(__name__)

KEY_PREFIX = "booking:lock"


class LockUnavailable(Exception):
    """Another writer held the lock past the wait time."""


def lock_dates(start: datetime, end: datetime) -> list[date]:
    """UTC dates whose lock must be held to write [start, end)."""
    reach = timedelta(minutes=max(SERVICE_DURATION_MINUTES.values()))
    first = (start - reach).astimezone(timezone.utc).date()
    last = (end - timedelta(milliseconds=1)).astimezone(timezone.utc).date()

    return [first + timedelta(days=i) for i in range((last - first).days + 1)]


def lock_key(dt: date) -> str:
    return f"{KEY_PREFIX}:{dt.isoformat()}"


class LocalBookingLocks:
    """In-process locks, one per key."""

    def __init__(self, wait_seconds: float = 5.0):
        self.wait_seconds = wait_seconds
        self._locks: dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, key: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    @contextmanager
    def _hold_one(self, key: str) -> Iterator[None]:
        lock = self._lock_for(key)
        if not lock.acquire(timeout=self.wait_seconds):
            raise LockUnavailable(key)
        try:
            yield
        finally:
            lock.release()

    @contextmanager
    def hold(self, start: datetime, end: datetime) -> Iterator[None]:
        # Sorted acquisition order, no deadlock between overlapping writers
        with ExitStack() as stack:
            for dt in lock_dates(start, end):
                stack.enter_context(self._hold_one(lock_key(dt)))
            yield


class RedisBookingLocks:
    """Redis locks (SET NX PX under the hood), shared by all workers."""

    def __init__(
        self,
        redis: Redis,
        timeout_seconds: float = 10.0,
        wait_seconds: float = 5.0,
    ):
        self.redis = redis
        self.timeout_seconds = timeout_seconds
        self.wait_seconds = wait_seconds

    @contextmanager
    def _hold_one(self, key: str) -> Iterator[None]:
        lock = self.redis.lock(
            key,
            timeout=self.timeout_seconds,
            blocking_timeout=self.wait_seconds,
        )
        if not lock.acquire():
            raise LockUnavailable(key)
        try:
            yield
        finally:
            try:
                lock.release()
            except LockNotOwnedError:
                # Expired while held; the write itself already finished
                logger.warning(f"Booking lock {key} expired before release")

    @contextmanager
    def hold(self, start: datetime, end: datetime) -> Iterator[None]:
        with ExitStack() as stack:
            for dt in lock_dates(start, end):
                stack.enter_context(self._hold_one(lock_key(dt)))
            yield


def build_booking_locks(
    redis: Redis | None,
    timeout_seconds: float = 10.0,
    wait_seconds: float = 5.0,
) -> LocalBookingLocks | RedisBookingLocks:
    if redis is not None:
        return RedisBookingLocks(redis, timeout_seconds, wait_seconds)
    logger.info("REDIS_URL not set, booking locks are per-process")
    return LocalBookingLocks(wait_seconds)
