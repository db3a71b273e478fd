"""
Appointment status lifecycle.

    scheduled --start--> in-progress --finish--> completed
        |                     |
        +------cancel---------+--> cancelled

Completed and cancelled are terminal. Cancelled appointments stay on
record but no longer block the calendar.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from detailing_scheduler.errors import InvalidTransitionError
from detailing_scheduler.schemas.appointment_schema import AppointmentStatus

logger = logging.getLogger(__name__)


class StatusTrigger(str, Enum):
    """Events that move an appointment between statuses."""
    START = "start"
    FINISH = "finish"
    CANCEL = "cancel"


@dataclass(frozen=True)
class StatusTransition:
    from_status: AppointmentStatus
    to_status: AppointmentStatus
    trigger: StatusTrigger


TRANSITIONS: list[StatusTransition] = [
    StatusTransition(AppointmentStatus.SCHEDULED, AppointmentStatus.IN_PROGRESS,
                     StatusTrigger.START),
    StatusTransition(AppointmentStatus.IN_PROGRESS, AppointmentStatus.COMPLETED,
                     StatusTrigger.FINISH),
    StatusTransition(AppointmentStatus.SCHEDULED, AppointmentStatus.CANCELLED,
                     StatusTrigger.CANCEL),
    StatusTransition(AppointmentStatus.IN_PROGRESS, AppointmentStatus.CANCELLED,
                     StatusTrigger.CANCEL),
]

TERMINAL_STATUSES = frozenset({AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED})


def valid_triggers(status: AppointmentStatus) -> list[StatusTrigger]:
    """Return all triggers valid from ``status``."""
    return [t.trigger for t in TRANSITIONS if t.from_status == status]


def next_status(status: AppointmentStatus, trigger: StatusTrigger) -> AppointmentStatus:
    """
    Resolve the status reached by applying ``trigger``.

    Raises:
        InvalidTransitionError: If no transition exists for the pair.
    """
    for t in TRANSITIONS:
        if t.from_status == status and t.trigger == trigger:
            logger.debug("Status transition: %s -> %s (%s)",
                         status.value, t.to_status.value, trigger.value)
            return t.to_status

    valid = [t.value for t in valid_triggers(status)]
    raise InvalidTransitionError(
        f"No valid transition from '{status.value}' with trigger "
        f"'{trigger.value}'. Valid triggers: {valid}"
    )


def is_terminal(status: AppointmentStatus) -> bool:
    return status in TERMINAL_STATUSES
