"""Aggregate work time, drying time and price for a selection of services."""

import logging
from decimal import Decimal
from typing import Iterable, Union

from detailing_scheduler.schemas.appointment_schema import DurationResult
from detailing_scheduler.schemas.service_schema import Service, VehicleSize

logger = logging.getLogger(__name__)


def _selected(service_ids: Iterable[str], services: Iterable[Service]) -> list[Service]:
    by_id = {service.id: service for service in services}
    selected = []
    for service_id in service_ids:
        service = by_id.get(service_id)
        if service is None:
            logger.debug("Ignoring unknown service id %s", service_id)
            continue
        selected.append(service)
    return selected


def calculate_service_duration(
    service_ids: Iterable[str],
    vehicle_size: Union[VehicleSize, str],
    services: Iterable[Service],
) -> DurationResult:
    """
    Combine the durations of the selected services for one vehicle size.

    Work minutes are summed. A service without an available configuration
    for the size contributes no work. Drying phases share the same bay and
    overlap, so the combined drying time is the longest single one.
    """
    size = VehicleSize(vehicle_size)
    work = 0
    drying = 0
    for service in _selected(service_ids, services):
        config = service.configuration_for(size)
        if config is not None:
            work += config.work_minutes
        else:
            logger.debug("Service %s has no %s configuration", service.id, size.value)
        drying = max(drying, service.drying_time or 0)

    return DurationResult(
        work_duration=work,
        drying_duration=drying,
        total_duration=work + drying,
    )


def calculate_total_price(
    service_ids: Iterable[str],
    vehicle_size: Union[VehicleSize, str],
    services: Iterable[Service],
) -> Decimal:
    """Sum the prices of the selected services for one vehicle size."""
    size = VehicleSize(vehicle_size)
    total = Decimal("0")
    for service in _selected(service_ids, services):
        config = service.configuration_for(size)
        if config is not None:
            total += config.price
    return total
