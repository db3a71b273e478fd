"""Business hours and working-day configuration models."""

from datetime import time
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from detailing_scheduler.errors import ConfigurationError
from detailing_scheduler.utils import parse_clock

DEFAULT_WORKING_DAYS = frozenset({1, 2, 3, 4, 5, 6})  # Monday to Saturday


class SameDayPolicy(str, Enum):
    """Whether a slot search may offer times later today."""
    ALLOW = "allow"
    FORBID = "forbid"


class WorkingHours(BaseModel):
    """Daily opening hours as 24h ``"HH:MM"`` strings, with an optional lunch break."""
    model_config = ConfigDict(frozen=True)

    start: str = "08:00"
    end: str = "18:00"
    lunch_start: Optional[str] = None
    lunch_end: Optional[str] = None

    @field_validator("start", "end", "lunch_start", "lunch_end")
    @classmethod
    def _check_clock(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        try:
            return parse_clock(value).strftime("%H:%M")
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from None

    @model_validator(mode="after")
    def _check_order(self) -> "WorkingHours":
        if self.start_time >= self.end_time:
            raise ConfigurationError(
                f"Working hours start {self.start} must be before end {self.end}"
            )
        if (self.lunch_start is None) != (self.lunch_end is None):
            raise ConfigurationError("lunch_start and lunch_end must be set together")
        if self.has_lunch and not (
            self.start_time < self.lunch_start_time < self.lunch_end_time < self.end_time
        ):
            raise ConfigurationError(
                f"Lunch break {self.lunch_start}-{self.lunch_end} must fall strictly "
                f"inside working hours {self.start}-{self.end}"
            )
        return self

    @property
    def has_lunch(self) -> bool:
        return self.lunch_start is not None and self.lunch_end is not None

    @property
    def start_time(self) -> time:
        return parse_clock(self.start)

    @property
    def end_time(self) -> time:
        return parse_clock(self.end)

    @property
    def lunch_start_time(self) -> Optional[time]:
        return parse_clock(self.lunch_start) if self.lunch_start else None

    @property
    def lunch_end_time(self) -> Optional[time]:
        return parse_clock(self.lunch_end) if self.lunch_end else None


class BusinessSettings(BaseModel):
    """
    Shop-wide scheduling rules.

    Weekdays are numbered 0=Sunday through 6=Saturday. An empty
    ``working_days`` set is rejected here, since the work projector would
    otherwise search forward forever for a day to work on.
    """
    model_config = ConfigDict(frozen=True)

    working_hours: WorkingHours = Field(default_factory=WorkingHours)
    working_days: frozenset[int] = DEFAULT_WORKING_DAYS
    advance_booking_days: int = Field(default=30, ge=0)
    slot_step_minutes: int = Field(default=30, ge=1)
    same_day_policy: SameDayPolicy = SameDayPolicy.ALLOW

    @field_validator("working_days")
    @classmethod
    def _check_working_days(cls, value: frozenset[int]) -> frozenset[int]:
        if not value:
            raise ConfigurationError("working_days must contain at least one weekday")
        invalid = sorted(d for d in value if not 0 <= d <= 6)
        if invalid:
            raise ConfigurationError(
                f"working_days must be weekday numbers 0-6 (0=Sunday), got {invalid}"
            )
        return value


def default_business_settings() -> BusinessSettings:
    """08:00-18:00 with lunch 12:00-13:00, Monday to Saturday, 30-day horizon."""
    return BusinessSettings(
        working_hours=WorkingHours(
            start="08:00", end="18:00", lunch_start="12:00", lunch_end="13:00"
        ),
        working_days=DEFAULT_WORKING_DAYS,
        advance_booking_days=30,
    )
