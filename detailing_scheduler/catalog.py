"""Sample detailing service catalog with per-size durations, prices and drying times."""

import logging
from decimal import Decimal
from typing import Optional, Union

from detailing_scheduler.schemas.service_schema import (
    Service,
    ServiceCategory,
    ServiceConfiguration,
    VehicleSize,
    VehicleType,
)

logger = logging.getLogger(__name__)


def _sizes(*rows: tuple[bool, int, int, str]) -> dict[VehicleSize, ServiceConfiguration]:
    """Build configurations in small, medium, large, extra-large order."""
    return {
        size: ServiceConfiguration(
            available=available,
            duration_hours=hours,
            duration_minutes=minutes,
            price=Decimal(price),
        )
        for size, (available, hours, minutes, price) in zip(VehicleSize, rows)
    }


SERVICE_CATALOG: list[Service] = [
    Service(
        id="1",
        name="Full Wash",
        description="Complete exterior and interior wash.",
        vehicle_type=VehicleType.CAR,
        category=ServiceCategory.CLEANING,
        configurations=_sizes(
            (True, 1, 0, "35.00"),
            (True, 1, 30, "50.00"),
            (True, 2, 0, "70.00"),
            (True, 2, 30, "90.00"),
        ),
    ),
    Service(
        id="2",
        name="Premium Wax",
        description="High quality protective wax application.",
        vehicle_type=VehicleType.CAR,
        category=ServiceCategory.PROTECTION,
        configurations=_sizes(
            (True, 1, 30, "60.00"),
            (True, 2, 0, "80.00"),
            (True, 2, 30, "100.00"),
            (False, 0, 0, "0"),
        ),
    ),
    Service(
        id="3",
        name="Paint Touch-up",
        description="Paint retouching on small damaged areas.",
        vehicle_type=VehicleType.CAR,
        category=ServiceCategory.PAINTING,
        drying_time=120,
        configurations=_sizes(
            (True, 2, 0, "150.00"),
            (True, 3, 0, "200.00"),
            (True, 4, 0, "280.00"),
            (True, 5, 0, "350.00"),
        ),
    ),
    Service(
        id="4",
        name="Interior Detailing",
        description="Detailed interior cleaning with specialist products.",
        vehicle_type=VehicleType.CAR,
        category=ServiceCategory.DETAILING,
        configurations=_sizes(
            (True, 1, 0, "80.00"),
            (True, 1, 30, "120.00"),
            (True, 2, 0, "160.00"),
            (True, 2, 30, "200.00"),
        ),
    ),
]


def get_all_services() -> list[Service]:
    """Return every catalog service."""
    return list(SERVICE_CATALOG)


def get_service(service_id: str) -> Optional[Service]:
    """Look up a catalog service by id."""
    for service in SERVICE_CATALOG:
        if service.id == service_id.strip():
            return service
    return None


def compatible_services(size: Union[VehicleSize, str]) -> list[Service]:
    """Services that can be booked for a vehicle of ``size``."""
    return [service for service in SERVICE_CATALOG if service.supports(size)]
