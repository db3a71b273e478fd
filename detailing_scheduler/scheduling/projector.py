"""
Work projector.

Given a start instant and a number of active-work minutes, walks the
business calendar forward and returns when the work is done. Work only
advances inside working periods; lunch breaks, evenings and closed days
are skipped over.

Usage:
    end = calculate_work_end_time(datetime(2026, 10, 19, 11, 30), 90, settings)
    # 30 minutes before lunch, 60 after: 14:00 the same day
"""

from datetime import datetime, timedelta
from typing import Optional

from detailing_scheduler.logging_context import TraceHook, emit
from detailing_scheduler.schemas.settings_schema import BusinessSettings
from detailing_scheduler.scheduling.calendar import (
    get_working_periods,
    next_working_day_start,
    require_working_days,
)


def calculate_work_end_time(
    start: datetime,
    work_minutes: int,
    settings: BusinessSettings,
    trace: Optional[TraceHook] = None,
) -> datetime:
    """
    Project when ``work_minutes`` of active work starting at ``start`` finishes.

    A start outside working hours is not rejected; the walk simply begins
    at the next working period.

    Raises:
        ValueError: If ``work_minutes`` is negative.
        ConfigurationError: If the settings have no working days.
    """
    if work_minutes < 0:
        raise ValueError(f"work_minutes must be >= 0, got {work_minutes}")
    if work_minutes == 0:
        return start

    require_working_days(settings)

    remaining = timedelta(minutes=work_minutes)
    cursor = start

    while True:
        for period in get_working_periods(cursor.date(), settings):
            if cursor >= period.end:
                continue

            effective_start = max(cursor, period.start)
            available = period.end - effective_start
            if available <= timedelta(0):
                continue

            if remaining <= available:
                end = effective_start + remaining
                emit(trace, "work_finished", start=effective_start, end=end)
                return end

            remaining -= available
            cursor = period.end
            emit(
                trace,
                "period_consumed",
                start=effective_start,
                end=period.end,
                remaining_minutes=remaining.total_seconds() / 60,
            )

        next_start = next_working_day_start(cursor.date(), settings)
        emit(trace, "day_rolled", from_cursor=cursor, to=next_start)
        cursor = next_start
