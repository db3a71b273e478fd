"""
Business calendar.

Turns ``BusinessSettings`` into concrete working periods for a date.
A day yields no periods (closed), one period (no lunch break) or two
periods split around lunch.
"""

from datetime import date, datetime, time, timedelta
from typing import Optional

from detailing_scheduler.errors import ConfigurationError
from detailing_scheduler.schemas.appointment_schema import WorkingPeriod
from detailing_scheduler.schemas.settings_schema import BusinessSettings


def weekday_number(day: date) -> int:
    """Weekday with 0=Sunday through 6=Saturday."""
    return day.isoweekday() % 7


def is_working_day(day: date, settings: BusinessSettings) -> bool:
    return weekday_number(day) in settings.working_days


def _at(day: date, clock: time) -> datetime:
    return datetime.combine(day, clock.replace(second=0, microsecond=0))


def get_working_periods(day: date, settings: BusinessSettings) -> list[WorkingPeriod]:
    """Return the day's working periods in chronological order."""
    if not is_working_day(day, settings):
        return []

    hours = settings.working_hours
    day_start = _at(day, hours.start_time)
    day_end = _at(day, hours.end_time)

    if not hours.has_lunch:
        return [WorkingPeriod(start=day_start, end=day_end)]

    return [
        WorkingPeriod(start=day_start, end=_at(day, hours.lunch_start_time)),
        WorkingPeriod(start=_at(day, hours.lunch_end_time), end=day_end),
    ]


def require_working_days(settings: BusinessSettings) -> None:
    """Raise ConfigurationError if no weekday is open for work."""
    if not settings.working_days:
        raise ConfigurationError(
            "Business settings have no working days; no work can ever be scheduled"
        )


def next_working_day_start(day: date, settings: BusinessSettings) -> datetime:
    """Opening time of the first working day strictly after ``day``."""
    require_working_days(settings)
    candidate = day + timedelta(days=1)
    while not is_working_day(candidate, settings):
        candidate += timedelta(days=1)
    return _at(candidate, settings.working_hours.start_time)


def find_period(instant: datetime, settings: BusinessSettings) -> Optional[WorkingPeriod]:
    """Return the working period containing ``instant``, if any."""
    for period in get_working_periods(instant.date(), settings):
        if period.contains(instant):
            return period
    return None
