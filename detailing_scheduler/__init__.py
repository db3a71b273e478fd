"""Availability and scheduling engine for a single-shop detailing business."""

from detailing_scheduler.errors import (
    ConfigurationError,
    InvalidTransitionError,
    SchedulerError,
    SchedulingConflictError,
)
from detailing_scheduler.schemas import (
    Appointment,
    AppointmentStatus,
    AvailabilitySlot,
    BusinessSettings,
    DurationResult,
    ScheduleCheck,
    Service,
    ServiceConfiguration,
    VehicleSize,
    WorkingHours,
    default_business_settings,
)
from detailing_scheduler.scheduling import (
    calculate_service_duration,
    calculate_work_end_time,
    can_schedule_service,
    find_available_slots,
    has_conflict,
)

__all__ = [
    "calculate_service_duration", "calculate_work_end_time", "can_schedule_service",
    "find_available_slots", "has_conflict", "default_business_settings",
    "Appointment", "AppointmentStatus", "AvailabilitySlot", "BusinessSettings",
    "DurationResult", "ScheduleCheck", "Service", "ServiceConfiguration",
    "VehicleSize", "WorkingHours",
    "ConfigurationError", "InvalidTransitionError", "SchedulerError",
    "SchedulingConflictError",
]
