"""
Tests for booking validation: working window and overlap.
"""

from datetime import datetime, timezone

import pytest

from clinic_booking.services.scheduling import ErrorKind, ServiceKey, validate_booking


class TestWorkingWindow:

    def test_last_fitting_start_accepted(self, store):
        result = validate_booking(store, "treatment", "2024-06-10T17:15:00.000Z", 0)

        assert result.ok
        assert result.value.service is ServiceKey.TREATMENT
        assert result.value.end == datetime(2024, 6, 10, 18, 0, tzinfo=timezone.utc)

    def test_one_millisecond_later_rejected(self, store):
        result = validate_booking(store, "treatment", "2024-06-10T17:15:00.001Z", 0)

        assert not result.ok
        assert result.kind == ErrorKind.OUT_OF_WINDOW
        assert result.message == "Outside working hours"

    def test_before_opening_rejected(self, store):
        result = validate_booking(store, "consultation", "2024-06-10T08:45:00.000Z", 0)
        assert result.kind == ErrorKind.OUT_OF_WINDOW

    def test_weekend_closes_early(self, store):
        assert validate_booking(store, "consultation", "2024-06-15T12:45:00.000Z", 0).ok
        result = validate_booking(store, "treatment", "2024-06-15T12:30:00.000Z", 0)
        assert result.kind == ErrorKind.OUT_OF_WINDOW

    def test_window_follows_client_offset(self, store):
        # 05:00Z is 09:00 at UTC+4
        assert validate_booking(store, "treatment", "2024-06-10T05:00:00.000Z", -240).ok
        result = validate_booking(store, "treatment", "2024-06-10T05:00:00.000Z", 0)
        assert result.kind == ErrorKind.OUT_OF_WINDOW

    def test_missing_offset_means_utc(self, store):
        assert validate_booking(store, "treatment", "2024-06-10T09:00:00.000Z", None).ok
        assert validate_booking(store, "treatment", "2024-06-10T09:00:00.000Z", "garbage").ok


class TestOverlap:

    def test_overlapping_booking_rejected(self, store, book):
        book("2024-06-10T09:00:00.000Z", "treatment")

        for service in ServiceKey:
            result = validate_booking(store, service, "2024-06-10T09:15:00.000Z", 0)
            assert result.kind == ErrorKind.SLOT_BUSY
            assert result.message == "Time slot is busy"

    def test_touching_intervals_do_not_overlap(self, store, book):
        book("2024-06-10T09:00:00.000Z", "treatment")

        assert validate_booking(store, "treatment", "2024-06-10T09:45:00.000Z", 0).ok
        assert validate_booking(store, "consultation", "2024-06-10T08:45:00.000Z", -15).ok

    def test_starting_earlier_and_running_into_booking(self, store, book):
        book("2024-06-10T10:00:00.000Z", "consultation")

        result = validate_booking(store, "treatment", "2024-06-10T09:30:00.000Z", 0)
        assert result.kind == ErrorKind.SLOT_BUSY

    def test_own_booking_excluded_on_update(self, store, book):
        appt = book("2024-06-10T09:00:00.000Z", "treatment")

        result = validate_booking(
            store, "treatment", "2024-06-10T09:15:00.000Z", 0, exclude_id=appt.id
        )
        assert result.ok


class TestInvalidInput:

    @pytest.mark.parametrize("start", ["", "tomorrow", None, "2024-06-10T25:00:00Z"])
    def test_bad_start(self, store, start):
        result = validate_booking(store, "treatment", start, 0)
        assert result.kind == ErrorKind.INVALID_INPUT

    def test_bad_service(self, store):
        result = validate_booking(store, "whitening", "2024-06-10T09:00:00.000Z", 0)
        assert result.kind == ErrorKind.INVALID_INPUT

    def test_end_past_calendar_edge(self, store):
        result = validate_booking(store, "treatment", "9999-12-31T23:50:00.000Z", 0)
        assert result.kind == ErrorKind.INVALID_INPUT

    def test_huge_offset_treated_as_utc(self, store):
        assert validate_booking(store, "treatment", "2024-06-10T09:00:00.000Z", 1e10).ok
