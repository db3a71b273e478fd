"""
Conflict detection between a candidate job and existing appointments.

Intervals are half-open, so an appointment ending at 10:00 and another
starting at 10:00 do not conflict. Cancelled appointments are ignored.
"""

from datetime import datetime, timedelta
from typing import Iterable, Optional

from detailing_scheduler.logging_context import TraceHook, get_query_logger
from detailing_scheduler.schemas.appointment_schema import Appointment, ScheduleCheck
from detailing_scheduler.schemas.settings_schema import BusinessSettings
from detailing_scheduler.scheduling.calendar import find_period
from detailing_scheduler.scheduling.projector import calculate_work_end_time
from detailing_scheduler.utils import format_clock

logger = get_query_logger(__name__)


def intervals_overlap(
    a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime
) -> bool:
    return a_start < b_end and b_start < a_end


def has_conflict(a: Appointment, b: Appointment) -> bool:
    """True if the active-work intervals of two appointments overlap."""
    return intervals_overlap(a.start_datetime, a.end_datetime, b.start_datetime, b.end_datetime)


def active_appointments(appointments: Iterable[Appointment]) -> list[Appointment]:
    """Appointments that take part in conflict checks (everything not cancelled)."""
    return [appt for appt in appointments if not appt.is_cancelled]


def _describe(appt: Appointment, end: datetime) -> str:
    label = f"appointment {appt.id}" if appt.id else "an existing appointment"
    return (
        f"{label} ({appt.start_datetime:%Y-%m-%d} "
        f"{format_clock(appt.start_datetime)}-{format_clock(end)})"
    )


def can_schedule_service(
    start: datetime,
    work_minutes: int,
    drying_minutes: int,
    appointments: Iterable[Appointment],
    settings: BusinessSettings,
    trace: Optional[TraceHook] = None,
) -> ScheduleCheck:
    """
    Check whether a job can start at ``start``.

    Returns every reason the start is unusable rather than stopping at the
    first one. The work and completion times are always computed.

    Raises:
        ValueError: If ``work_minutes`` or ``drying_minutes`` is negative.
        ConfigurationError: If the settings have no working days.
    """
    if drying_minutes < 0:
        raise ValueError(f"drying_minutes must be >= 0, got {drying_minutes}")
    work_end = calculate_work_end_time(start, work_minutes, settings, trace=trace)
    service_complete = work_end + timedelta(minutes=drying_minutes)
    conflicts: list[str] = []

    if find_period(start, settings) is None:
        conflicts.append(
            f"Start time {start:%Y-%m-%d} {format_clock(start)} is outside working hours"
        )

    candidates = active_appointments(appointments)

    for appt in candidates:
        if intervals_overlap(start, work_end, appt.start_datetime, appt.end_datetime):
            conflicts.append(f"Work overlaps {_describe(appt, appt.end_datetime)}")

    if drying_minutes > 0:
        for appt in candidates:
            if intervals_overlap(work_end, service_complete, appt.start_datetime, appt.final_end):
                conflicts.append(f"Drying overlaps {_describe(appt, appt.final_end)}")

    if conflicts:
        logger.debug("Start %s rejected: %s", start.isoformat(), "; ".join(conflicts))

    return ScheduleCheck(
        can_schedule=not conflicts,
        work_end_time=work_end,
        service_complete_time=service_complete,
        conflicts=conflicts,
    )
