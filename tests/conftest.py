"""Shared test fixtures and helpers.

Dates are anchored on the week of Monday 2026-10-19 so weekday rules are
explicit: 2026-10-18 is a Sunday and 2026-10-24 a Saturday.
"""

from datetime import date, datetime, timedelta
from typing import Optional

import pytest

from detailing_scheduler.schemas import (
    Appointment,
    AppointmentStatus,
    BusinessSettings,
    default_business_settings,
)

MONDAY = date(2026, 10, 19)
TUESDAY = MONDAY + timedelta(days=1)
SATURDAY = MONDAY + timedelta(days=5)
SUNDAY = MONDAY - timedelta(days=1)


def at(day: date, hour: int, minute: int = 0) -> datetime:
    """Helper to build a wall-clock instant on ``day``."""
    return datetime(day.year, day.month, day.day, hour, minute)


def make_appointment(
    start: datetime,
    end: datetime,
    drying_end: Optional[datetime] = None,
    status: AppointmentStatus = AppointmentStatus.SCHEDULED,
    appointment_id: str = "",
) -> Appointment:
    """Helper to create an Appointment with sensible defaults."""
    return Appointment(
        id=appointment_id,
        start_datetime=start,
        end_datetime=end,
        drying_end_datetime=drying_end,
        status=status,
    )


@pytest.fixture
def settings() -> BusinessSettings:
    return default_business_settings()


@pytest.fixture
def no_lunch_settings() -> BusinessSettings:
    return BusinessSettings(
        working_hours={"start": "09:00", "end": "17:00"},
        working_days=[1, 2, 3, 4, 5],
    )


@pytest.fixture
def early_monday() -> datetime:
    """A "now" before the shop opens on Monday."""
    return at(MONDAY, 7, 0)
