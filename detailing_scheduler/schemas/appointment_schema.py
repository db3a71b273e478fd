"""Appointment records and the ephemeral results of scheduling queries."""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class AppointmentStatus(str, Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Appointment(BaseModel):
    """
    A booked job.

    ``end_datetime`` marks the end of active work. ``drying_end_datetime``,
    when present, marks the end of the passive drying phase.
    """
    id: str = ""
    start_datetime: datetime
    end_datetime: datetime
    drying_end_datetime: Optional[datetime] = None
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    client_id: Optional[str] = None
    vehicle_id: Optional[str] = None
    service_ids: list[str] = Field(default_factory=list)
    total_price: Decimal = Decimal("0")
    observations: Optional[str] = None
    created_at: Optional[datetime] = None

    @model_validator(mode="after")
    def _check_times(self) -> "Appointment":
        if self.end_datetime < self.start_datetime:
            raise ValueError("end_datetime must not be before start_datetime")
        if self.drying_end_datetime is not None and self.drying_end_datetime < self.end_datetime:
            raise ValueError("drying_end_datetime must not be before end_datetime")
        return self

    @property
    def is_cancelled(self) -> bool:
        return self.status == AppointmentStatus.CANCELLED

    @property
    def final_end(self) -> datetime:
        """Last instant the vehicle is in the shop."""
        return self.drying_end_datetime or self.end_datetime


class WorkingPeriod(BaseModel):
    """A contiguous stretch of working time within one day, half-open ``[start, end)``."""
    start: datetime
    end: datetime

    @property
    def minutes(self) -> int:
        return int((self.end - self.start).total_seconds() // 60)

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant < self.end


class DurationResult(BaseModel):
    """Work, drying and total minutes for a set of selected services."""
    work_duration: int = 0
    drying_duration: int = 0
    total_duration: int = 0


class ScheduleCheck(BaseModel):
    """Outcome of checking one candidate start against the calendar and bookings."""
    can_schedule: bool
    work_end_time: datetime
    service_complete_time: datetime
    conflicts: list[str] = Field(default_factory=list)


class AvailabilitySlot(BaseModel):
    """
    A bookable start offered to the caller.

    ``end_time`` is the clock time active work finishes, which may be on a
    later date than ``date``; compare ``work_end.date()`` to detect spillover.
    """
    date: date
    start_time: str
    end_time: str
    available_duration: int
    can_start_service: bool = True
    work_end: datetime
    service_complete: datetime

    @property
    def spills_over(self) -> bool:
        return self.work_end.date() != self.date


class TimeSlot(BaseModel):
    """One step of a day's grid with its availability."""
    start: str
    end: str
    available: bool
    duration: int
    reason: Optional[str] = None
