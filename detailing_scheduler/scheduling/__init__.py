from detailing_scheduler.scheduling.calendar import (
    get_working_periods,
    is_working_day,
    next_working_day_start,
)
from detailing_scheduler.scheduling.conflicts import can_schedule_service, has_conflict
from detailing_scheduler.scheduling.duration import (
    calculate_service_duration,
    calculate_total_price,
)
from detailing_scheduler.scheduling.projector import calculate_work_end_time
from detailing_scheduler.scheduling.slots import (
    calculate_time_slots,
    find_available_slots,
    get_appointments_by_date,
    iter_available_slots,
)

__all__ = [
    "get_working_periods", "is_working_day", "next_working_day_start",
    "can_schedule_service", "has_conflict",
    "calculate_service_duration", "calculate_total_price",
    "calculate_work_end_time",
    "calculate_time_slots", "find_available_slots", "get_appointments_by_date",
    "iter_available_slots",
]
