"""
Domain Models for the Stack Parking Garage

This module contains:
1. Enums: Vehicle categories (with hourly rates) and ledger event kinds
2. Value Objects: Parked vehicles and immutable ledger records
3. Results: Explicit outcomes of park/exit operations
4. Domain Services: Fee calculation from elapsed time
5. Domain Events: Events raised by the garage aggregate

Timestamps rendered for display always use the fixed pattern
``YYYY-MM-DD HH:mm:ss``; report lines can also be rendered with the
compact ``HH:mm:ss`` pattern.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Dict, Any
from datetime import datetime
from enum import Enum
import logging
import uuid


TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
COMPACT_TIME_FORMAT = "%H:%M:%S"

_logger = logging.getLogger(__name__)


def format_timestamp(value: datetime, pattern: str = TIMESTAMP_FORMAT) -> str:
    """Format a timestamp with one of the display patterns"""
    return value.strftime(pattern)


# ============================================================================
# ENUMS FOR DOMAIN TYPES
# ============================================================================

class VehicleCategory(Enum):
    """
    Enumeration of vehicle categories
    Each category carries its menu code, hourly rate and display label
    """
    GENERAL = (1, 1000, "General")
    COMPACT = (2, 500, "Compact")
    DISABLED = (3, 0, "Disabled")
    OFFICIAL = (4, 0, "Official")

    def __init__(self, code: int, hourly_rate: int, label: str):
        self.code = code
        self.hourly_rate = hourly_rate
        self.label = label

    @classmethod
    def from_code(cls, code: int) -> 'VehicleCategory':
        """
        Look up a category by its numeric code.
        Unrecognized codes fall back to GENERAL instead of failing.
        """
        for category in cls:
            if category.code == code:
                return category
        _logger.debug(f"Unknown category code {code!r}, falling back to {cls.GENERAL.label}")
        return cls.GENERAL

    @classmethod
    def from_name(cls, name: str) -> 'VehicleCategory':
        """Strict lookup by member name or label (case-insensitive)"""
        wanted = name.strip().lower()
        for category in cls:
            if wanted in (category.name.lower(), category.label.lower()):
                return category
        raise ValueError(f"Unknown vehicle category: {name!r}")

    def __str__(self) -> str:
        return self.label


class EventKind(Enum):
    """Kind of a ledger record"""
    ENTRY = "entry"
    EXIT = "exit"


class GarageFailure(Enum):
    """Reasons a park or exit request is rejected"""
    GARAGE_FULL = "garage_full"
    GARAGE_EMPTY = "garage_empty"
    SLOT_OUT_OF_RANGE = "slot_out_of_range"

    @property
    def message(self) -> str:
        messages = {
            GarageFailure.GARAGE_FULL: "The garage is full",
            GarageFailure.GARAGE_EMPTY: "The garage is empty",
            GarageFailure.SLOT_OUT_OF_RANGE: "No vehicle at the requested slot",
        }
        return messages[self]


# ============================================================================
# VALUE OBJECTS
# ============================================================================

@dataclass(frozen=True)
class ParkedVehicle:
    """
    Value Object: A vehicle currently inside the garage
    Created on park and consumed on exit, never mutated in between
    """
    plate: str
    category: VehicleCategory
    entry_time: datetime

    def describe(self) -> str:
        """Occupant line: '<plate> (<label>) - entry: <timestamp>'"""
        return f"{self.plate} ({self.category.label}) - entry: {format_timestamp(self.entry_time)}"

    def __str__(self) -> str:
        return self.describe()


@dataclass(frozen=True)
class ParkingEvent:
    """
    Value Object: Immutable ledger record of an entry or an exit
    Entry records carry no exit time, zero billed hours and zero fee
    """
    plate: str
    category: VehicleCategory
    entry_time: datetime
    kind: EventKind
    exit_time: Optional[datetime] = None
    billed_hours: int = 0
    fee: int = 0

    @classmethod
    def entry(cls, vehicle: ParkedVehicle) -> 'ParkingEvent':
        return cls(
            plate=vehicle.plate,
            category=vehicle.category,
            entry_time=vehicle.entry_time,
            kind=EventKind.ENTRY
        )

    @classmethod
    def exit(
        cls,
        vehicle: ParkedVehicle,
        exit_time: datetime,
        billed_hours: int,
        fee: int
    ) -> 'ParkingEvent':
        return cls(
            plate=vehicle.plate,
            category=vehicle.category,
            entry_time=vehicle.entry_time,
            kind=EventKind.EXIT,
            exit_time=exit_time,
            billed_hours=billed_hours,
            fee=fee
        )

    @property
    def is_entry(self) -> bool:
        return self.kind == EventKind.ENTRY

    @property
    def timestamp(self) -> datetime:
        """Time the event happened: entry time for entries, exit time for exits"""
        if self.is_entry or self.exit_time is None:
            return self.entry_time
        return self.exit_time

    def format_for_report(self, pattern: str = TIMESTAMP_FORMAT) -> str:
        """Render a single report line using the given timestamp pattern"""
        when = format_timestamp(self.timestamp, pattern)
        if self.is_entry:
            return f"ENTRY | time: {when} | plate: {self.plate} ({self.category.label})"
        return (
            f"EXIT | time: {when} | plate: {self.plate} ({self.category.label}) "
            f"| hours: {self.billed_hours} | fee: {self.fee}"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "plate": self.plate,
            "category": self.category.name,
            "entry_time": self.entry_time.isoformat(),
            "exit_time": self.exit_time.isoformat() if self.exit_time else None,
            "billed_hours": self.billed_hours,
            "fee": self.fee,
            "kind": self.kind.value
        }

    def __str__(self) -> str:
        return self.format_for_report(COMPACT_TIME_FORMAT)


@dataclass(frozen=True)
class DailyStats:
    """Value Object: Daily entry/exit counts and revenue"""
    entry_count: int = 0
    exit_count: int = 0
    revenue: int = 0


# ============================================================================
# OPERATION RESULTS
# ============================================================================

@dataclass(frozen=True)
class ParkResult:
    """Outcome of a park request"""
    success: bool
    reason: Optional[GarageFailure] = None
    vehicle: Optional[ParkedVehicle] = None

    @classmethod
    def rejected(cls, reason: GarageFailure) -> 'ParkResult':
        return cls(success=False, reason=reason)

    def __bool__(self) -> bool:
        return self.success


@dataclass(frozen=True)
class ExitResult:
    """Outcome of an exit request; carries the exit record on success"""
    success: bool
    reason: Optional[GarageFailure] = None
    record: Optional[ParkingEvent] = None

    @classmethod
    def rejected(cls, reason: GarageFailure) -> 'ExitResult':
        return cls(success=False, reason=reason)

    def __bool__(self) -> bool:
        return self.success


# ============================================================================
# DOMAIN SERVICES
# ============================================================================

class ParkingFeeCalculator:
    """
    Domain Service: Computes billed hours and fees from elapsed time.
    Any started hour is billed in full; seconds beyond the last whole
    minute are not counted.
    """

    @staticmethod
    def elapsed_minutes(entry_time: datetime, exit_time: datetime) -> int:
        seconds = (exit_time - entry_time).total_seconds()
        if seconds <= 0:
            return 0
        return int(seconds // 60)

    @staticmethod
    def billed_hours(entry_time: datetime, exit_time: datetime) -> int:
        minutes = ParkingFeeCalculator.elapsed_minutes(entry_time, exit_time)
        hours, remainder = divmod(minutes, 60)
        return hours + (1 if remainder > 0 else 0)

    @staticmethod
    def calculate_fee(category: VehicleCategory, billed_hours: int) -> int:
        return billed_hours * category.hourly_rate


# ============================================================================
# DOMAIN EVENTS
# ============================================================================

class DomainEvent(ABC):
    """
    Base class for all domain events
    Events represent something that happened in the garage
    """
    event_type: str = "domain.event"

    def __init__(self, timestamp: Optional[datetime] = None):
        self.event_id = str(uuid.uuid4())
        self.timestamp = timestamp or datetime.now()

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization"""
        pass

    def __str__(self) -> str:
        return f"{self.__class__.__name__} at {self.timestamp}"


class VehicleParkedEvent(DomainEvent):
    """Event raised when a vehicle enters the garage"""
    event_type = "vehicle.parked"

    def __init__(self, garage_id: str, record: ParkingEvent, occupancy: int):
        super().__init__(record.entry_time)
        self.garage_id = garage_id
        self.record = record
        self.occupancy = occupancy

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": self.event_type,
            "event_id": self.event_id,
            "timestamp": self.timestamp.isoformat(),
            "data": {
                "garage_id": self.garage_id,
                "occupancy": self.occupancy,
                **self.record.to_dict()
            }
        }


class VehicleExitedEvent(DomainEvent):
    """Event raised when a vehicle leaves the garage"""
    event_type = "vehicle.exited"

    def __init__(self, garage_id: str, record: ParkingEvent, slot_number: int, occupancy: int):
        super().__init__(record.exit_time)
        self.garage_id = garage_id
        self.record = record
        self.slot_number = slot_number
        self.occupancy = occupancy

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": self.event_type,
            "event_id": self.event_id,
            "timestamp": self.timestamp.isoformat(),
            "data": {
                "garage_id": self.garage_id,
                "slot_number": self.slot_number,
                "occupancy": self.occupancy,
                **self.record.to_dict()
            }
        }
