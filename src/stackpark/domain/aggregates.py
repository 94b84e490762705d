"""
Aggregate Roots for the Stack Parking Garage

Aggregates:
1. Ledger - Append-only record of entry/exit events and daily aggregates
2. ParkingGarage - Root aggregate owning the occupancy stack and the ledger

Key Concepts:
- The aggregate root enforces the capacity and ledger invariants
- Rejected requests are returned as results, never raised
- Domain events are collected for important state changes
- All modifications go through aggregate root methods
"""

from typing import Callable, List, Optional
from datetime import datetime
import logging
import uuid

from .models import (
    ParkedVehicle, ParkingEvent, EventKind, VehicleCategory,
    DailyStats, ParkResult, ExitResult, GarageFailure,
    ParkingFeeCalculator, DomainEvent, VehicleParkedEvent, VehicleExitedEvent
)
from .occupancy import OccupancyStack


Clock = Callable[[], datetime]


# ============================================================================
# BASE AGGREGATE ROOT
# ============================================================================

class AggregateRoot:
    """
    Base class for all aggregate roots
    Provides identity, domain event collection and versioning
    """

    def __init__(self, id: Optional[str] = None):
        self._id = id or str(uuid.uuid4())
        self._version: int = 1
        self._changes: List[DomainEvent] = []
        self._logger = logging.getLogger(self.__class__.__name__)

    @property
    def id(self) -> str:
        return self._id

    @property
    def version(self) -> int:
        """Get current aggregate version"""
        return self._version

    def _increment_version(self) -> None:
        self._version += 1

    def _add_domain_event(self, event: DomainEvent) -> None:
        self._changes.append(event)
        self._logger.debug(f"Added domain event: {event.__class__.__name__}")

    def clear_events(self) -> List[DomainEvent]:
        """Clear and return all domain events"""
        events = self._changes.copy()
        self._changes.clear()
        return events

    @property
    def has_changes(self) -> bool:
        return len(self._changes) > 0

    def _validate_invariants(self) -> None:
        """Validate aggregate invariants - to be overridden by subclasses"""
        pass


# ============================================================================
# LEDGER
# ============================================================================

class Ledger:
    """
    Append-only record of entry and exit events.
    Counters and revenue are kept alongside the records; callers only ever
    receive copies of the record lists.
    """

    def __init__(self):
        self._entries: List[ParkingEvent] = []
        self._exits: List[ParkingEvent] = []
        self._entry_count = 0
        self._exit_count = 0
        self._revenue = 0

    def record_entry(self, event: ParkingEvent) -> None:
        if event.kind != EventKind.ENTRY:
            raise ValueError(f"Expected an entry event, got {event.kind.value}")
        self._entries.append(event)
        self._entry_count += 1

    def record_exit(self, event: ParkingEvent) -> None:
        if event.kind != EventKind.EXIT:
            raise ValueError(f"Expected an exit event, got {event.kind.value}")
        self._exits.append(event)
        self._exit_count += 1
        self._revenue += event.fee

    @property
    def entry_count(self) -> int:
        return self._entry_count

    @property
    def exit_count(self) -> int:
        return self._exit_count

    @property
    def revenue(self) -> int:
        return self._revenue

    def entry_records(self) -> List[ParkingEvent]:
        return list(self._entries)

    def exit_records(self) -> List[ParkingEvent]:
        return list(self._exits)

    def stats(self) -> DailyStats:
        return DailyStats(
            entry_count=self._entry_count,
            exit_count=self._exit_count,
            revenue=self._revenue
        )

    def validate(self) -> None:
        """Check counters against the records"""
        if self._entry_count != len(self._entries):
            raise RuntimeError(
                f"Entry count {self._entry_count} does not match {len(self._entries)} entry records"
            )
        if self._exit_count != len(self._exits):
            raise RuntimeError(
                f"Exit count {self._exit_count} does not match {len(self._exits)} exit records"
            )
        total = sum(event.fee for event in self._exits)
        if self._revenue != total:
            raise RuntimeError(f"Revenue {self._revenue} does not match exit fees {total}")


# ============================================================================
# PARKING GARAGE AGGREGATE
# ============================================================================

class ParkingGarage(AggregateRoot):
    """
    Aggregate Root: Single-lane garage with a fixed capacity.

    Not thread-safe. The exit reshuffle is a multi-step sequence, so callers
    sharing a garage across threads must serialize every call themselves.
    """

    def __init__(
        self,
        capacity: int,
        clock: Optional[Clock] = None,
        id: Optional[str] = None
    ):
        super().__init__(id)
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            raise ValueError(f"Capacity must be a positive integer, got: {capacity!r}")

        self._capacity = capacity
        self._clock: Clock = clock or datetime.now
        self._stack = OccupancyStack()
        self._ledger = Ledger()

        self._logger.info(f"Created ParkingGarage {self.id} with capacity {capacity}")

    def _validate_invariants(self) -> None:
        occupancy = self._stack.size()
        if not 0 <= occupancy <= self._capacity:
            raise RuntimeError(f"Occupancy {occupancy} outside [0, {self._capacity}]")
        self._ledger.validate()

    # ========================================================================
    # COMMANDS
    # ========================================================================

    def try_park(self, plate: str, category: VehicleCategory) -> ParkResult:
        """
        Park a vehicle on top of the lane.
        Returns a rejected result with GARAGE_FULL when there is no space.
        """
        if self._stack.size() >= self._capacity:
            self._logger.warning(f"Rejected {plate}: garage full ({self._capacity} vehicles)")
            return ParkResult.rejected(GarageFailure.GARAGE_FULL)

        vehicle = ParkedVehicle(plate=plate, category=category, entry_time=self._clock())
        self._stack.push(vehicle)

        record = ParkingEvent.entry(vehicle)
        self._ledger.record_entry(record)

        self._increment_version()
        self._add_domain_event(VehicleParkedEvent(self.id, record, self._stack.size()))
        self._logger.info(
            f"Vehicle {plate} ({category.label}) parked, "
            f"occupancy {self._stack.size()}/{self._capacity}"
        )
        return ParkResult(success=True, vehicle=vehicle)

    def park(self, plate: str, category: VehicleCategory) -> bool:
        return self.try_park(plate, category).success

    def try_exit_by_slot(self, slot_number: int) -> ExitResult:
        """
        Remove the vehicle at the given slot (1 = most recently parked).
        Bills every started hour at the category's hourly rate.
        """
        if self._stack.is_empty():
            self._logger.warning(f"Rejected exit from slot {slot_number}: garage empty")
            return ExitResult.rejected(GarageFailure.GARAGE_EMPTY)

        if self._stack.vehicle_at(slot_number) is None:
            self._logger.warning(
                f"Rejected exit from slot {slot_number!r}: valid slots are 1..{self._stack.size()}"
            )
            return ExitResult.rejected(GarageFailure.SLOT_OUT_OF_RANGE)

        vehicle = self._stack.extract(slot_number)
        if vehicle is None:
            self._logger.error(f"Slot {slot_number} passed the bounds check but held no vehicle")
            raise RuntimeError(f"Occupancy stack lost the vehicle at slot {slot_number}")

        exit_time = self._clock()
        billed_hours = ParkingFeeCalculator.billed_hours(vehicle.entry_time, exit_time)
        fee = ParkingFeeCalculator.calculate_fee(vehicle.category, billed_hours)

        record = ParkingEvent.exit(vehicle, exit_time, billed_hours, fee)
        self._ledger.record_exit(record)

        self._increment_version()
        self._add_domain_event(
            VehicleExitedEvent(self.id, record, slot_number, self._stack.size())
        )
        self._logger.info(
            f"Vehicle {vehicle.plate} left from slot {slot_number}: "
            f"{billed_hours} hour(s), fee {fee}"
        )
        return ExitResult(success=True, record=record)

    def exit_by_slot(self, slot_number: int) -> bool:
        return self.try_exit_by_slot(slot_number).success

    # ========================================================================
    # QUERIES
    # ========================================================================

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def current_count(self) -> int:
        return self._stack.size()

    @property
    def remaining_space(self) -> int:
        return self._capacity - self._stack.size()

    @property
    def is_full(self) -> bool:
        return self.remaining_space == 0

    @property
    def daily_entry_count(self) -> int:
        return self._ledger.entry_count

    @property
    def daily_exit_count(self) -> int:
        return self._ledger.exit_count

    @property
    def daily_revenue(self) -> int:
        return self._ledger.revenue

    def daily_stats(self) -> DailyStats:
        return self._ledger.stats()

    def entry_records(self) -> List[ParkingEvent]:
        return self._ledger.entry_records()

    def exit_records(self) -> List[ParkingEvent]:
        return self._ledger.exit_records()

    def occupants(self) -> List[ParkedVehicle]:
        """Parked vehicles, earliest first"""
        return self._stack.snapshot_bottom_up()

    def list_occupants(self) -> List[str]:
        """Display lines for parked vehicles, earliest first"""
        return [vehicle.describe() for vehicle in self._stack.snapshot_bottom_up()]

    def vehicle_at_slot(self, slot_number: int) -> Optional[ParkedVehicle]:
        return self._stack.vehicle_at(slot_number)

    def check_invariants(self) -> None:
        """Raise RuntimeError if the garage state is inconsistent"""
        self._validate_invariants()

    def __repr__(self) -> str:
        return (
            f"ParkingGarage(id={self.id}, occupancy={self.current_count}/{self._capacity}, "
            f"version={self.version})"
        )
