from detailing_scheduler.schemas.appointment_schema import (
    Appointment,
    AppointmentStatus,
    AvailabilitySlot,
    DurationResult,
    ScheduleCheck,
    TimeSlot,
    WorkingPeriod,
)
from detailing_scheduler.schemas.service_schema import (
    Service,
    ServiceCategory,
    ServiceConfiguration,
    VehicleSize,
    VehicleType,
)
from detailing_scheduler.schemas.settings_schema import (
    BusinessSettings,
    SameDayPolicy,
    WorkingHours,
    default_business_settings,
)

__all__ = [
    "Appointment", "AppointmentStatus", "AvailabilitySlot", "DurationResult",
    "ScheduleCheck", "TimeSlot", "WorkingPeriod",
    "Service", "ServiceCategory", "ServiceConfiguration", "VehicleSize", "VehicleType",
    "BusinessSettings", "SameDayPolicy", "WorkingHours", "default_business_settings",
]
