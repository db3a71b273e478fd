"""Tests for slot search and the day grid."""

from datetime import timedelta

from detailing_scheduler.schemas import AppointmentStatus, BusinessSettings, SameDayPolicy
from detailing_scheduler.scheduling.slots import (
    calculate_time_slots,
    find_available_slots,
    get_appointments_by_date,
    iter_available_slots,
)
from tests.conftest import MONDAY, SATURDAY, SUNDAY, TUESDAY, at, make_appointment


class TestFindAvailableSlots:
    def test_empty_day_offers_every_step(self, settings, early_monday):
        slots = find_available_slots(MONDAY, MONDAY, 60, 0, [], settings, now=early_monday)
        starts = [slot.start_time for slot in slots]
        assert len(slots) == 18
        assert starts[0] == "08:00"
        assert "12:00" not in starts and "12:30" not in starts
        assert starts[-1] == "17:30"

    def test_slot_fields(self, settings, early_monday):
        first = find_available_slots(MONDAY, MONDAY, 60, 30, [], settings, now=early_monday)[0]
        assert first.date == MONDAY
        assert first.end_time == "09:00"
        assert first.work_end == at(MONDAY, 9)
        assert first.service_complete == at(MONDAY, 9, 30)
        assert first.available_duration == 240
        assert first.can_start_service
        assert not first.spills_over

    def test_lunch_spanning_slot(self, settings, early_monday):
        slots = find_available_slots(MONDAY, MONDAY, 60, 0, [], settings, now=early_monday)
        by_start = {slot.start_time: slot for slot in slots}
        assert by_start["11:30"].end_time == "13:30"

    def test_spillover_slot_reads_earlier_clock(self, settings, early_monday):
        slots = find_available_slots(MONDAY, MONDAY, 60, 0, [], settings, now=early_monday)
        last = slots[-1]
        assert last.start_time == "17:30"
        assert last.end_time == "08:30"
        assert last.work_end == at(TUESDAY, 8, 30)
        assert last.spills_over

    def test_chronological_order(self, settings, early_monday):
        slots = find_available_slots(MONDAY, TUESDAY, 90, 0, [], settings, now=early_monday)
        keys = [(slot.date, slot.start_time) for slot in slots]
        assert keys == sorted(keys)

    def test_booked_time_is_skipped(self, settings, early_monday):
        booked = [make_appointment(at(MONDAY, 9), at(MONDAY, 10))]
        slots = find_available_slots(MONDAY, MONDAY, 60, 0, booked, settings, now=early_monday)
        morning = [slot.start_time for slot in slots if slot.start_time < "12:00"]
        assert morning == ["08:00", "10:00", "10:30", "11:00", "11:30"]

    def test_cancelled_appointment_does_not_block(self, settings, early_monday):
        booked = [make_appointment(at(MONDAY, 8), at(MONDAY, 18),
                                   status=AppointmentStatus.CANCELLED)]
        slots = find_available_slots(MONDAY, MONDAY, 60, 0, booked, settings, now=early_monday)
        assert len(slots) == 18

    def test_closed_days_are_skipped(self, settings):
        now = at(SATURDAY, 7)
        slots = find_available_slots(SATURDAY, SATURDAY + timedelta(days=2), 30, 0, [], settings,
                                     now=now)
        assert {slot.date for slot in slots} == {SATURDAY, SATURDAY + timedelta(days=2)}

    def test_fully_booked_range_is_empty(self, settings, early_monday):
        booked = [make_appointment(at(MONDAY, 7), at(TUESDAY, 19))]
        assert find_available_slots(MONDAY, TUESDAY, 30, 0, booked, settings,
                                    now=early_monday) == []

    def test_idempotent(self, settings, early_monday):
        booked = [make_appointment(at(MONDAY, 9), at(MONDAY, 10), drying_end=at(MONDAY, 12))]
        first = find_available_slots(MONDAY, TUESDAY, 45, 60, booked, settings, now=early_monday)
        second = find_available_slots(MONDAY, TUESDAY, 45, 60, booked, settings, now=early_monday)
        assert first == second

    def test_iterator_is_lazy(self, settings, early_monday):
        slots = iter_available_slots(MONDAY, MONDAY.replace(day=30), 60, 0, [], settings,
                                     now=early_monday)
        assert next(slots).start_time == "08:00"
        assert next(slots).start_time == "08:30"


class TestSameDay:
    def test_past_times_never_offered(self, settings):
        now = at(MONDAY, 10, 10)
        slots = find_available_slots(MONDAY, MONDAY, 30, 0, [], settings, now=now)
        assert slots[0].start_time == "10:30"

    def test_on_boundary_is_offered(self, settings):
        now = at(MONDAY, 10, 30)
        slots = find_available_slots(MONDAY, MONDAY, 30, 0, [], settings, now=now)
        assert slots[0].start_time == "10:30"

    def test_after_closing_today_has_nothing(self, settings):
        now = at(MONDAY, 18, 5)
        assert find_available_slots(MONDAY, MONDAY, 30, 0, [], settings, now=now) == []

    def test_earlier_dates_are_clipped(self, settings):
        now = at(TUESDAY, 7)
        slots = find_available_slots(MONDAY, TUESDAY, 30, 0, [], settings, now=now)
        assert {slot.date for slot in slots} == {TUESDAY}

    def test_forbid_policy_skips_today(self, settings):
        forbid = settings.model_copy(update={"same_day_policy": SameDayPolicy.FORBID})
        now = at(MONDAY, 7)
        slots = find_available_slots(MONDAY, TUESDAY, 30, 0, [], forbid, now=now)
        assert slots[0].date == TUESDAY
        assert slots[0].start_time == "08:00"


class TestBookingHorizon:
    def test_range_clipped_to_advance_days(self):
        settings = BusinessSettings(
            working_hours={"start": "08:00", "end": "10:00"},
            working_days=[1, 2, 3, 4, 5, 6],
            advance_booking_days=1,
        )
        now = at(MONDAY, 7)
        slots = find_available_slots(MONDAY, SATURDAY, 30, 0, [], settings, now=now)
        assert {slot.date for slot in slots} == {MONDAY, TUESDAY}

    def test_custom_step(self):
        settings = BusinessSettings(
            working_hours={"start": "08:00", "end": "10:00"},
            working_days=[1],
            slot_step_minutes=45,
        )
        slots = find_available_slots(MONDAY, MONDAY, 15, 0, [], settings, now=at(MONDAY, 7))
        assert [slot.start_time for slot in slots] == ["08:00", "08:45", "09:30"]


class TestDayGrid:
    def test_grid_marks_busy_steps(self, settings):
        booked = [make_appointment(at(MONDAY, 9), at(MONDAY, 10), appointment_id="A1")]
        grid = calculate_time_slots(MONDAY, booked, 60, 0, settings)
        by_start = {slot.start: slot for slot in grid}
        assert len(grid) == 18
        assert by_start["08:00"].available
        assert not by_start["09:30"].available
        assert "A1" in by_start["09:30"].reason
        assert by_start["10:00"].available
        assert by_start["10:00"].reason is None
        assert by_start["10:00"].duration == 60

    def test_closed_day_has_empty_grid(self, settings):
        assert calculate_time_slots(SUNDAY, [], 60, 0, settings) == []


class TestAppointmentsByDate:
    def test_sorted_and_filtered(self):
        late = make_appointment(at(MONDAY, 15), at(MONDAY, 16), appointment_id="late")
        early = make_appointment(at(MONDAY, 8), at(MONDAY, 9), appointment_id="early")
        other = make_appointment(at(TUESDAY, 8), at(TUESDAY, 9), appointment_id="other")
        gone = make_appointment(at(MONDAY, 10), at(MONDAY, 11), appointment_id="gone",
                                status=AppointmentStatus.CANCELLED)
        result = get_appointments_by_date([late, other, gone, early], MONDAY)
        assert [appt.id for appt in result] == ["early", "late"]
