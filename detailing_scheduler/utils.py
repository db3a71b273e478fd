"""Shared time helpers used across the scheduling engine."""

import re
from datetime import datetime, time, timedelta
from typing import Optional

_CLOCK_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def parse_clock(value: str) -> time:
    """Parse a 24h ``"HH:MM"`` wall-clock string.

    Examples:
        >>> parse_clock("08:00")
        datetime.time(8, 0)
        >>> parse_clock("17:45")
        datetime.time(17, 45)
    """
    match = _CLOCK_RE.match(value.strip())
    if not match:
        raise ValueError(f"Invalid clock time {value!r}, expected HH:MM")
    return time(int(match.group(1)), int(match.group(2)))


def format_clock(instant: datetime) -> str:
    """Format an instant as ``"HH:MM"``."""
    return instant.strftime("%H:%M")


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes from ``start`` to ``end`` (negative if end is earlier)."""
    return int((end - start).total_seconds() // 60)


def round_up_to_step(
    instant: datetime, step_minutes: int, anchor: Optional[datetime] = None
) -> datetime:
    """Return the first ``anchor + k * step`` that is at or after ``instant``.

    The anchor defaults to midnight of the instant's day, so a 30-minute step
    rounds to the next ``:00`` or ``:30``.

    Examples:
        >>> round_up_to_step(datetime(2026, 1, 5, 9, 10), 30)
        datetime.datetime(2026, 1, 5, 9, 30)
        >>> round_up_to_step(datetime(2026, 1, 5, 9, 30), 30)
        datetime.datetime(2026, 1, 5, 9, 30)
    """
    if step_minutes <= 0:
        raise ValueError(f"step_minutes must be > 0, got {step_minutes}")
    if anchor is None:
        anchor = instant.replace(hour=0, minute=0, second=0, microsecond=0)
    if instant <= anchor:
        return anchor
    step = timedelta(minutes=step_minutes)
    steps, remainder = divmod(instant - anchor, step)
    if remainder:
        steps += 1
    return anchor + steps * step


def format_duration(minutes: int) -> str:
    """Render a minute count the way the shop shows durations.

    Examples:
        >>> format_duration(45)
        '45min'
        >>> format_duration(120)
        '2h'
        >>> format_duration(150)
        '2h 30min'
    """
    hours, mins = divmod(max(0, int(minutes)), 60)
    if hours == 0:
        return f"{mins}min"
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h {mins}min"
