from detailing_scheduler.booking.book import AppointmentBook
from detailing_scheduler.booking.lifecycle import StatusTrigger, next_status, valid_triggers

__all__ = ["AppointmentBook", "StatusTrigger", "next_status", "valid_triggers"]
