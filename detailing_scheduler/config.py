"""
Centralized configuration with environment variable overrides.

Shop hours, working days and search limits are configurable here and
turned into a ``BusinessSettings`` value that callers pass explicitly to
the scheduling functions. Nothing in the engine reads this module.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from detailing_scheduler.errors import ConfigurationError
from detailing_scheduler.schemas.settings_schema import (
    BusinessSettings,
    SameDayPolicy,
    WorkingHours,
)

load_dotenv()

logger = logging.getLogger(__name__)


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _optional_str(env_var: str, default: str) -> Optional[str]:
    """Read an env var, treating an empty value as unset."""
    raw = os.getenv(env_var, default).strip()
    return raw or None


def _parse_days(raw: str) -> frozenset[int]:
    """Parse a comma separated weekday list such as ``"1,2,3,4,5,6"``."""
    try:
        return frozenset(int(part) for part in raw.split(",") if part.strip())
    except ValueError:
        raise ConfigurationError(f"Invalid WORKING_DAYS: {raw!r}") from None


@dataclass(frozen=True)
class ShopHoursConfig:
    """Opening hours and working days loaded from environment or defaults."""

    start: str = os.getenv("WORK_START", "08:00")
    end: str = os.getenv("WORK_END", "18:00")
    lunch_start: Optional[str] = _optional_str("LUNCH_START", "12:00")
    lunch_end: Optional[str] = _optional_str("LUNCH_END", "13:00")
    working_days: str = os.getenv("WORKING_DAYS", "1,2,3,4,5,6")


@dataclass(frozen=True)
class BookingConfig:
    """Slot search limits and the same-day booking rule."""

    advance_booking_days: int = _safe_int("ADVANCE_BOOKING_DAYS", "30")
    slot_step_minutes: int = _safe_int("SLOT_STEP_MINUTES", "30")
    same_day_policy: str = os.getenv("SAME_DAY_POLICY", "allow")
    search_window_days: int = _safe_int("SEARCH_WINDOW_DAYS", "14")
    max_slots_shown: int = _safe_int("MAX_SLOTS_SHOWN", "10")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    shop_name: str = os.getenv("SHOP_NAME", "Shine Auto Detailing")
    hours: ShopHoursConfig = field(default_factory=ShopHoursConfig)
    booking: BookingConfig = field(default_factory=BookingConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    def business_settings(self) -> BusinessSettings:
        """Build the validated settings value threaded through scheduling calls.

        Raises:
            ConfigurationError: If the hours or working days are unusable.
        """
        try:
            return BusinessSettings(
                working_hours=WorkingHours(
                    start=self.hours.start,
                    end=self.hours.end,
                    lunch_start=self.hours.lunch_start,
                    lunch_end=self.hours.lunch_end,
                ),
                working_days=_parse_days(self.hours.working_days),
                advance_booking_days=self.booking.advance_booking_days,
                slot_step_minutes=self.booking.slot_step_minutes,
                same_day_policy=SameDayPolicy(self.booking.same_day_policy),
            )
        except (ValidationError, ValueError) as exc:
            raise ConfigurationError(f"Invalid business settings: {exc}") from exc


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if not _parse_days(config.hours.working_days):
        raise ConfigurationError("WORKING_DAYS must list at least one weekday (0=Sunday)")
    if config.booking.advance_booking_days < 0:
        raise ValueError(
            f"ADVANCE_BOOKING_DAYS must be >= 0, got {config.booking.advance_booking_days}"
        )
    if config.booking.slot_step_minutes < 1:
        raise ValueError(
            f"SLOT_STEP_MINUTES must be >= 1, got {config.booking.slot_step_minutes}"
        )
    if config.booking.search_window_days < 0:
        raise ValueError(
            f"SEARCH_WINDOW_DAYS must be >= 0, got {config.booking.search_window_days}"
        )
    if config.booking.max_slots_shown < 1:
        raise ValueError(
            f"MAX_SLOTS_SHOWN must be >= 1, got {config.booking.max_slots_shown}"
        )
    valid_policies = [p.value for p in SameDayPolicy]
    if config.booking.same_day_policy not in valid_policies:
        raise ValueError(
            f"SAME_DAY_POLICY must be one of {valid_policies}, "
            f"got {config.booking.same_day_policy!r}"
        )


def load_config() -> AppConfig:
    """Load and validate application configuration.

    Also validates the derived business settings so a bad hours setup is
    refused here rather than at the first scheduling call.
    """
    config = AppConfig()
    _validate_config(config)
    config.business_settings()
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger.info("Configuration loaded for '%s'", config.shop_name)
    return config
