"""
Slot generation.

Probes candidate start times across a date range at the configured step
and keeps those the conflict detector accepts. Jobs may spill over into
later days; a slot's ``work_end`` carries the full completion instant.
"""

from datetime import date, datetime, timedelta
from typing import Iterable, Iterator, Optional

from detailing_scheduler.logging_context import get_query_logger
from detailing_scheduler.schemas.appointment_schema import (
    Appointment,
    AvailabilitySlot,
    TimeSlot,
)
from detailing_scheduler.schemas.settings_schema import BusinessSettings, SameDayPolicy
from detailing_scheduler.scheduling.calendar import get_working_periods, is_working_day
from detailing_scheduler.scheduling.conflicts import active_appointments, can_schedule_service
from detailing_scheduler.utils import format_clock, minutes_between, round_up_to_step

logger = get_query_logger(__name__)


def _as_date(value) -> date:
    return value.date() if isinstance(value, datetime) else value


def _search_window(
    range_start: date, range_end: date, settings: BusinessSettings, now: datetime
) -> tuple[date, date]:
    """Clip the requested range to today through the advance booking horizon."""
    today = now.date()
    first = max(range_start, today)
    if settings.same_day_policy == SameDayPolicy.FORBID and first == today:
        first = today + timedelta(days=1)
    last = min(range_end, today + timedelta(days=settings.advance_booking_days))
    return first, last


def iter_available_slots(
    range_start,
    range_end,
    work_minutes: int,
    drying_minutes: int,
    appointments: Iterable[Appointment],
    settings: BusinessSettings,
    now: Optional[datetime] = None,
) -> Iterator[AvailabilitySlot]:
    """
    Yield open slots in chronological order, one day at a time.

    ``range_start`` and ``range_end`` are dates (datetimes are truncated) and
    both ends are inclusive. ``now`` defaults to the current local time;
    earlier times are never offered.
    """
    if now is None:
        now = datetime.now()
    snapshot = active_appointments(appointments)
    step = timedelta(minutes=settings.slot_step_minutes)
    first, last = _search_window(_as_date(range_start), _as_date(range_end), settings, now)

    day = first
    while day <= last:
        if is_working_day(day, settings):
            for period in get_working_periods(day, settings):
                candidate = period.start
                if day == now.date():
                    candidate = round_up_to_step(now, settings.slot_step_minutes, period.start)

                while candidate < period.end:
                    check = can_schedule_service(
                        candidate, work_minutes, drying_minutes, snapshot, settings
                    )
                    if check.can_schedule:
                        yield AvailabilitySlot(
                            date=day,
                            start_time=format_clock(candidate),
                            end_time=format_clock(check.work_end_time),
                            available_duration=minutes_between(candidate, period.end),
                            can_start_service=True,
                            work_end=check.work_end_time,
                            service_complete=check.service_complete_time,
                        )
                    candidate += step
        day += timedelta(days=1)


def find_available_slots(
    range_start,
    range_end,
    work_minutes: int,
    drying_minutes: int,
    appointments: Iterable[Appointment],
    settings: BusinessSettings,
    now: Optional[datetime] = None,
) -> list[AvailabilitySlot]:
    """Return every open slot in the range. An empty list means no availability."""
    slots = list(
        iter_available_slots(
            range_start, range_end, work_minutes, drying_minutes,
            appointments, settings, now=now,
        )
    )
    logger.debug(
        "Found %d slots between %s and %s for %d+%d minutes",
        len(slots), range_start, range_end, work_minutes, drying_minutes,
    )
    return slots


def calculate_time_slots(
    day: date,
    appointments: Iterable[Appointment],
    work_minutes: int,
    drying_minutes: int,
    settings: BusinessSettings,
) -> list[TimeSlot]:
    """Grid of every step in a day's working periods, marked available or not."""
    snapshot = active_appointments(appointments)
    step = timedelta(minutes=settings.slot_step_minutes)
    grid: list[TimeSlot] = []

    for period in get_working_periods(day, settings):
        candidate = period.start
        while candidate < period.end:
            check = can_schedule_service(
                candidate, work_minutes, drying_minutes, snapshot, settings
            )
            grid.append(
                TimeSlot(
                    start=format_clock(candidate),
                    end=format_clock(check.work_end_time),
                    available=check.can_schedule,
                    duration=work_minutes,
                    reason=check.conflicts[0] if check.conflicts else None,
                )
            )
            candidate += step
    return grid


def get_appointments_by_date(appointments: Iterable[Appointment], day: date) -> list[Appointment]:
    """Non-cancelled appointments starting on ``day``, earliest first."""
    return sorted(
        (appt for appt in active_appointments(appointments) if appt.start_datetime.date() == day),
        key=lambda appt: appt.start_datetime,
    )
