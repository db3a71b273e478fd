"""
In-memory appointment book.

Stands in for the record-keeping layer around the scheduling engine. The
engine itself is pure; this is where the read-check-write sequence is
serialized so two concurrent bookings cannot both pass a conflict check
against the same stale snapshot.
"""

import threading
import uuid
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterable, Optional, Union

from detailing_scheduler.errors import SchedulingConflictError
from detailing_scheduler.logging_context import get_query_logger
from detailing_scheduler.schemas.appointment_schema import Appointment, ScheduleCheck
from detailing_scheduler.schemas.service_schema import Service, VehicleSize
from detailing_scheduler.schemas.settings_schema import BusinessSettings
from detailing_scheduler.scheduling.conflicts import can_schedule_service
from detailing_scheduler.scheduling.duration import (
    calculate_service_duration,
    calculate_total_price,
)
from detailing_scheduler.scheduling.slots import get_appointments_by_date
from detailing_scheduler.booking.lifecycle import StatusTrigger, next_status

logger = get_query_logger(__name__)


def _new_id() -> str:
    return f"AP-{uuid.uuid4().hex[:6].upper()}"


class AppointmentBook:
    """Thread-safe store of appointments with conflict-checked booking."""

    def __init__(
        self,
        settings: BusinessSettings,
        appointments: Optional[Iterable[Appointment]] = None,
    ) -> None:
        self.settings = settings
        self._lock = threading.Lock()
        self._appointments: dict[str, Appointment] = {}
        for appt in appointments or []:
            appt_id = appt.id or _new_id()
            self._appointments[appt_id] = appt.model_copy(update={"id": appt_id})

    def snapshot(self) -> list[Appointment]:
        """Point-in-time copy of every stored appointment, cancelled included."""
        with self._lock:
            return [appt.model_copy() for appt in self._appointments.values()]

    def get(self, appointment_id: str) -> Optional[Appointment]:
        with self._lock:
            appt = self._appointments.get(appointment_id)
            return appt.model_copy() if appt else None

    def check(self, start: datetime, work_minutes: int, drying_minutes: int) -> ScheduleCheck:
        """Run the conflict check against the current appointments without booking."""
        return can_schedule_service(
            start, work_minutes, drying_minutes, self.snapshot(), self.settings
        )

    def book(
        self,
        start: datetime,
        work_minutes: int,
        drying_minutes: int = 0,
        *,
        client_id: Optional[str] = None,
        vehicle_id: Optional[str] = None,
        service_ids: Optional[list[str]] = None,
        total_price: Decimal = Decimal("0"),
        observations: Optional[str] = None,
    ) -> Appointment:
        """
        Check and store a new appointment as one atomic step.

        Raises:
            SchedulingConflictError: If the start is outside working hours or
                overlaps a non-cancelled appointment.
        """
        with self._lock:
            check = can_schedule_service(
                start, work_minutes, drying_minutes,
                list(self._appointments.values()), self.settings,
            )
            if not check.can_schedule:
                logger.info("Booking at %s rejected: %s", start.isoformat(), check.conflicts)
                raise SchedulingConflictError(
                    f"Scheduling conflict for {start:%Y-%m-%d %H:%M}", check.conflicts
                )

            appt = Appointment(
                id=_new_id(),
                start_datetime=start,
                end_datetime=check.work_end_time,
                drying_end_datetime=(
                    check.service_complete_time if drying_minutes > 0 else None
                ),
                client_id=client_id,
                vehicle_id=vehicle_id,
                service_ids=list(service_ids or []),
                total_price=total_price,
                observations=observations,
                created_at=datetime.now(),
            )
            self._appointments[appt.id] = appt

        logger.info(
            "Appointment %s booked: %s -> %s",
            appt.id, appt.start_datetime.isoformat(), appt.final_end.isoformat(),
        )
        return appt.model_copy()

    def book_services(
        self,
        start: datetime,
        service_ids: list[str],
        vehicle_size: Union[VehicleSize, str],
        services: Iterable[Service],
        **kwargs,
    ) -> Appointment:
        """Book a selection of catalog services, deriving durations and price."""
        services = list(services)
        duration = calculate_service_duration(service_ids, vehicle_size, services)
        price = calculate_total_price(service_ids, vehicle_size, services)
        return self.book(
            start,
            duration.work_duration,
            duration.drying_duration,
            service_ids=service_ids,
            total_price=price,
            **kwargs,
        )

    def transition(self, appointment_id: str, trigger: StatusTrigger) -> Appointment:
        """
        Apply a status trigger to an appointment.

        Raises:
            KeyError: If the appointment does not exist.
            InvalidTransitionError: If the trigger is not valid from its status.
        """
        with self._lock:
            if appointment_id not in self._appointments:
                raise KeyError(f"Appointment {appointment_id} not found")
            appt = self._appointments[appointment_id]
            updated = appt.model_copy(update={"status": next_status(appt.status, trigger)})
            self._appointments[appointment_id] = updated

        logger.info("Appointment %s is now %s", appointment_id, updated.status.value)
        return updated.model_copy()

    def cancel(self, appointment_id: str) -> Appointment:
        return self.transition(appointment_id, StatusTrigger.CANCEL)

    def delete(self, appointment_id: str) -> bool:
        """Remove an appointment entirely. Returns False if it did not exist."""
        with self._lock:
            return self._appointments.pop(appointment_id, None) is not None

    def by_date(self, day: date) -> list[Appointment]:
        return get_appointments_by_date(self.snapshot(), day)

    def upcoming(self, now: Optional[datetime] = None, days: int = 7) -> list[Appointment]:
        """Non-cancelled appointments starting between ``now`` and ``days`` ahead."""
        now = now or datetime.now()
        horizon = now + timedelta(days=days)
        return sorted(
            (
                appt for appt in self.snapshot()
                if not appt.is_cancelled and now <= appt.start_datetime < horizon
            ),
            key=lambda appt: appt.start_datetime,
        )

    def reset(self) -> None:
        """Clear all appointments. Used by test fixtures for isolation."""
        with self._lock:
            self._appointments.clear()
