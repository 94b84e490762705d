"""
stackpark - single-lane (LIFO) parking garage core

Layers:
- domain: occupancy stack, ledger, fee calculation
- application: request/response DTOs and the garage service
- infrastructure: in-memory event bus
"""

from .domain.models import VehicleCategory, ParkedVehicle, ParkingEvent, EventKind, GarageFailure
from .domain.aggregates import ParkingGarage, Ledger
from .domain.occupancy import OccupancyStack

__version__ = "1.0.0"

__all__ = [
    "VehicleCategory",
    "ParkedVehicle",
    "ParkingEvent",
    "EventKind",
    "GarageFailure",
    "ParkingGarage",
    "Ledger",
    "OccupancyStack",
]
