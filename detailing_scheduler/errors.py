"""Error taxonomy for the scheduling engine.

Only configuration problems and booking-time conflicts are exceptions.
Unschedulable searches return empty results and conflict checks return
their reasons as data.
"""


class SchedulerError(Exception):
    """Base class for all scheduler errors."""


class ConfigurationError(SchedulerError, ValueError):
    """Raised when business settings cannot be used for scheduling.

    Subclasses ``ValueError`` so pydantic validators can raise it and have
    it reported as a regular validation error.
    """


class SchedulingConflictError(SchedulerError):
    """Raised by the appointment book when a booking fails its conflict check."""

    def __init__(self, message: str, conflicts: list[str]) -> None:
        super().__init__(message)
        self.conflicts = list(conflicts)


class InvalidTransitionError(SchedulerError):
    """Raised when an appointment status change is not allowed."""
