"""
Garage Application Service

This module implements the application service layer for the stack garage.
It is the API surface consumed by the presentation collaborator (forms,
dialogs, list widgets, report renderers).

Responsibilities:
1. Translate request DTOs into aggregate commands
2. Publish the aggregate's domain events after each successful command
3. Project garage state into response DTOs

The service is single-threaded like the aggregate it wraps.
"""

from typing import List, Optional, Union, Dict, Any
from datetime import datetime
import logging

from ..domain.models import VehicleCategory
from ..domain.aggregates import ParkingGarage
from ..infrastructure.messaging import EventBus
from .dtos import (
    ParkRequestDTO, ExitRequestDTO, OperationResultDTO,
    ParkingEventDTO, DailyStatsDTO, GarageStatusDTO
)


class GarageService:
    """
    Main application service for the stack garage

    Use cases:
    1. Vehicle entry (by category or by numeric menu code)
    2. Vehicle exit by slot number
    3. Occupancy status and daily statistics
    4. Entry/exit ledger queries
    """

    def __init__(self, garage: ParkingGarage, event_bus: Optional[EventBus] = None):
        self.garage = garage
        self.event_bus = event_bus or EventBus()
        self.logger = logging.getLogger(self.__class__.__name__)
        self.logger.info(f"GarageService initialized for garage {garage.id}")

    def _publish_changes(self) -> None:
        events = self.garage.clear_events()
        if events:
            self.event_bus.publish_all(events)

    # ========================================================================
    # COMMANDS
    # ========================================================================

    def park_vehicle(self, request: Union[ParkRequestDTO, Dict[str, Any]]) -> OperationResultDTO:
        """
        Park a vehicle on top of the lane

        Use Case: Vehicle Entry
        1. Validate the request (non-empty plate, known category)
        2. Push the vehicle if there is space
        3. Publish the entry event
        """
        if isinstance(request, dict):
            request = ParkRequestDTO.from_dict(request)

        self.logger.info(f"Processing park request for {request.license_plate}")
        result = self.garage.try_park(request.license_plate, request.category)
        if result.success:
            self._publish_changes()
        return OperationResultDTO.from_park_result(result, request.license_plate)

    def park_by_code(self, license_plate: str, category_code: int) -> OperationResultDTO:
        """
        Park using the numeric category codes of the entry form
        (1 General, 2 Compact, 3 Disabled, 4 Official).
        Unknown codes are parked as General.
        """
        category = VehicleCategory.from_code(category_code)
        if category.code != category_code:
            self.logger.warning(
                f"Category code {category_code!r} not recognized, parking {license_plate} as {category.label}"
            )
        return self.park_vehicle(ParkRequestDTO(license_plate=license_plate, category=category))

    def exit_vehicle(self, request: Union[ExitRequestDTO, Dict[str, Any], int]) -> OperationResultDTO:
        """
        Remove the vehicle at a slot (1 = most recently parked)

        Use Case: Vehicle Exit
        1. Reshuffle the lane down to the slot and take the vehicle out
        2. Bill every started hour at the category rate
        3. Publish the exit event
        """
        if isinstance(request, dict):
            request = ExitRequestDTO.from_dict(request)
        elif isinstance(request, int):
            request = ExitRequestDTO(slot_number=request)

        self.logger.info(f"Processing exit request for slot {request.slot_number}")
        result = self.garage.try_exit_by_slot(request.slot_number)
        if result.success:
            self._publish_changes()
        return OperationResultDTO.from_exit_result(result, request.slot_number)

    # ========================================================================
    # QUERIES
    # ========================================================================

    def get_status(self) -> GarageStatusDTO:
        return GarageStatusDTO(
            garage_id=self.garage.id,
            capacity=self.garage.capacity,
            current_count=self.garage.current_count,
            remaining_space=self.garage.remaining_space,
            occupants=self.garage.list_occupants(),
            timestamp=datetime.now()
        )

    def get_daily_stats(self) -> DailyStatsDTO:
        return DailyStatsDTO.from_stats(self.garage.daily_stats())

    def get_entry_records(self) -> List[ParkingEventDTO]:
        return [ParkingEventDTO.from_event(event) for event in self.garage.entry_records()]

    def get_exit_records(self) -> List[ParkingEventDTO]:
        return [ParkingEventDTO.from_event(event) for event in self.garage.exit_records()]
