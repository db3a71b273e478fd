"""Service catalog models: per-size durations, prices and drying time."""

from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field


class VehicleSize(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    EXTRA_LARGE = "extra-large"


class VehicleType(str, Enum):
    CAR = "car"
    MOTORCYCLE = "motorcycle"
    TRUCK = "truck"
    VAN = "van"
    SUV = "suv"


class ServiceCategory(str, Enum):
    CLEANING = "cleaning"
    DETAILING = "detailing"
    PAINTING = "painting"
    PROTECTION = "protection"
    REPAIR = "repair"


class ServiceConfiguration(BaseModel):
    """Duration and price of a service for one vehicle size. Duration is active work only."""
    available: bool = True
    duration_hours: int = Field(default=0, ge=0)
    duration_minutes: int = Field(default=0, ge=0)
    price: Decimal = Decimal("0")

    @property
    def work_minutes(self) -> int:
        return self.duration_hours * 60 + self.duration_minutes


class Service(BaseModel):
    """A catalog service. ``drying_time`` (minutes) is passive time after the work."""
    id: str
    name: str
    description: str = ""
    vehicle_type: VehicleType = VehicleType.CAR
    category: ServiceCategory = ServiceCategory.CLEANING
    drying_time: Optional[int] = Field(default=None, ge=0)
    configurations: dict[VehicleSize, ServiceConfiguration] = Field(default_factory=dict)

    def configuration_for(
        self, size: Union[VehicleSize, str]
    ) -> Optional[ServiceConfiguration]:
        """Return the configuration for ``size`` if it exists and is available."""
        config = self.configurations.get(VehicleSize(size))
        if config is None or not config.available:
            return None
        return config

    def supports(self, size: Union[VehicleSize, str]) -> bool:
        return self.configuration_for(size) is not None
