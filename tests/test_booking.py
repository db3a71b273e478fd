"""Tests for the appointment book and status lifecycle."""

from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest

from detailing_scheduler.booking import AppointmentBook, StatusTrigger, next_status, valid_triggers
from detailing_scheduler.booking.lifecycle import is_terminal
from detailing_scheduler.catalog import SERVICE_CATALOG
from detailing_scheduler.errors import InvalidTransitionError, SchedulingConflictError
from detailing_scheduler.schemas import AppointmentStatus
from tests.conftest import MONDAY, TUESDAY, at, make_appointment


@pytest.fixture
def book(settings):
    return AppointmentBook(settings)


class TestBooking:
    def test_book_sets_work_end(self, book):
        appt = book.book(at(MONDAY, 11, 30), 90)
        assert appt.id.startswith("AP-")
        assert appt.end_datetime == at(MONDAY, 14)
        assert appt.drying_end_datetime is None
        assert appt.status == AppointmentStatus.SCHEDULED

    def test_book_with_drying(self, book):
        appt = book.book(at(MONDAY, 17), 60, 120)
        assert appt.end_datetime == at(MONDAY, 18)
        assert appt.drying_end_datetime == at(MONDAY, 20)

    def test_overlap_raises_with_reasons(self, book):
        book.book(at(MONDAY, 9), 60)
        with pytest.raises(SchedulingConflictError) as exc_info:
            book.book(at(MONDAY, 9, 30), 30)
        assert len(exc_info.value.conflicts) == 1
        assert "Work overlaps" in exc_info.value.conflicts[0]

    def test_adjacent_booking_allowed(self, book):
        book.book(at(MONDAY, 9), 60)
        appt = book.book(at(MONDAY, 10), 60)
        assert appt.start_datetime == at(MONDAY, 10)

    def test_outside_hours_rejected(self, book):
        with pytest.raises(SchedulingConflictError, match="Scheduling conflict"):
            book.book(at(MONDAY, 12, 30), 30)

    def test_cancel_frees_the_slot(self, book):
        first = book.book(at(MONDAY, 9), 60)
        book.cancel(first.id)
        second = book.book(at(MONDAY, 9), 60)
        assert second.id != first.id
        assert len(book.snapshot()) == 2

    def test_check_does_not_book(self, book):
        result = book.check(at(MONDAY, 9), 60, 0)
        assert result.can_schedule
        assert book.snapshot() == []

    def test_book_services_derives_duration_and_price(self, settings):
        book = AppointmentBook(settings)
        appt = book.book_services(at(MONDAY, 8), ["1", "3"], "medium", SERVICE_CATALOG)
        assert appt.end_datetime == at(MONDAY, 13, 30)
        assert appt.drying_end_datetime == at(MONDAY, 15, 30)
        assert appt.total_price == Decimal("250.00")
        assert appt.service_ids == ["1", "3"]

    def test_seeded_appointments_block(self, settings):
        seeded = [make_appointment(at(MONDAY, 9), at(MONDAY, 10), appointment_id="S1")]
        book = AppointmentBook(settings, seeded)
        assert book.get("S1") is not None
        with pytest.raises(SchedulingConflictError):
            book.book(at(MONDAY, 9), 30)

    def test_concurrent_bookings_only_one_wins(self, book):
        def attempt(_):
            try:
                return book.book(at(MONDAY, 9), 60)
            except SchedulingConflictError:
                return None

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(attempt, range(16)))

        assert sum(1 for r in results if r is not None) == 1
        assert len(book.snapshot()) == 1

    def test_by_date_and_upcoming(self, book):
        a = book.book(at(MONDAY, 15), 30)
        b = book.book(at(MONDAY, 8), 30)
        c = book.book(at(TUESDAY, 8), 30)
        book.cancel(a.id)
        assert [appt.id for appt in book.by_date(MONDAY)] == [b.id]
        upcoming = book.upcoming(now=at(MONDAY, 7), days=7)
        assert [appt.id for appt in upcoming] == [b.id, c.id]

    def test_delete_and_reset(self, book):
        appt = book.book(at(MONDAY, 8), 30)
        assert book.delete(appt.id)
        assert not book.delete(appt.id)
        book.book(at(MONDAY, 8), 30)
        book.reset()
        assert book.snapshot() == []

    def test_snapshot_is_a_copy(self, book):
        appt = book.book(at(MONDAY, 8), 30)
        book.snapshot()[0].status = AppointmentStatus.CANCELLED
        assert book.get(appt.id).status == AppointmentStatus.SCHEDULED


class TestStatusLifecycle:
    def test_start_then_finish(self, book):
        appt = book.book(at(MONDAY, 8), 30)
        assert book.transition(appt.id, StatusTrigger.START).status == AppointmentStatus.IN_PROGRESS
        assert book.transition(appt.id, StatusTrigger.FINISH).status == AppointmentStatus.COMPLETED

    def test_cannot_finish_before_start(self, book):
        appt = book.book(at(MONDAY, 8), 30)
        with pytest.raises(InvalidTransitionError, match="Valid triggers"):
            book.transition(appt.id, StatusTrigger.FINISH)

    def test_cannot_cancel_completed(self):
        with pytest.raises(InvalidTransitionError):
            next_status(AppointmentStatus.COMPLETED, StatusTrigger.CANCEL)

    def test_in_progress_can_be_cancelled(self):
        assert next_status(AppointmentStatus.IN_PROGRESS, StatusTrigger.CANCEL) == \
            AppointmentStatus.CANCELLED

    def test_unknown_appointment(self, book):
        with pytest.raises(KeyError, match="not found"):
            book.transition("AP-NOPE", StatusTrigger.START)

    def test_terminal_statuses(self):
        assert is_terminal(AppointmentStatus.COMPLETED)
        assert is_terminal(AppointmentStatus.CANCELLED)
        assert not is_terminal(AppointmentStatus.SCHEDULED)
        assert valid_triggers(AppointmentStatus.CANCELLED) == []
