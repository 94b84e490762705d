"""
Data Transfer Objects (DTOs) for the Stack Parking Garage

This module defines DTOs for data transfer between the garage core and its
callers (forms, dialogs, report renderers):
1. Input DTOs - Park and exit requests, validated at creation
2. Output DTOs - Operation results, ledger records, statistics, status

DTO Principles:
- Validation at creation (pydantic)
- No business logic, only data
- Serialization/deserialization support
"""

from typing import Dict, List, Optional, Any
from datetime import datetime
import json

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from ..domain.models import (
    VehicleCategory, ParkingEvent, DailyStats,
    ParkResult, ExitResult, GarageFailure
)


# ============================================================================
# BASE DTO CLASSES
# ============================================================================

class BaseDTO(BaseModel):
    """Base DTO with common functionality"""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    def to_dict(self, exclude_none: bool = False, **kwargs) -> Dict[str, Any]:
        """Convert DTO to dictionary"""
        data = self.model_dump(**kwargs)
        if exclude_none:
            data = {k: v for k, v in data.items() if v is not None}
        return data

    def to_json(self, **kwargs) -> str:
        """Convert DTO to JSON string"""
        return self.model_dump_json(**kwargs)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BaseDTO':
        """Create DTO from dictionary"""
        return cls(**data)

    @classmethod
    def from_json(cls, json_str: str) -> 'BaseDTO':
        """Create DTO from JSON string"""
        data = json.loads(json_str)
        return cls(**data)


def _coerce_category(value: Any) -> Any:
    # Names and labels are matched strictly; numeric codes go through
    # GarageService.park_by_code where the fallback is explicit.
    if isinstance(value, str):
        return VehicleCategory.from_name(value)
    return value


# ============================================================================
# INPUT DTOs
# ============================================================================

class ParkRequestDTO(BaseDTO):
    """DTO for park requests"""
    license_plate: str = Field(min_length=1, max_length=20, description="License plate number")
    category: VehicleCategory = Field(default=VehicleCategory.GENERAL, description="Vehicle category")

    @field_validator('license_plate', mode='before')
    @classmethod
    def strip_plate(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator('category', mode='before')
    @classmethod
    def parse_category(cls, v: Any) -> Any:
        return _coerce_category(v)

    @field_serializer('category')
    def serialize_category(self, category: VehicleCategory) -> str:
        return category.name


class ExitRequestDTO(BaseDTO):
    """DTO for exit requests; slot 1 is the most recently parked vehicle"""
    slot_number: int = Field(description="1-based slot counted from the top of the lane")


# ============================================================================
# OUTPUT DTOs
# ============================================================================

class ParkingEventDTO(BaseDTO):
    """DTO for a single ledger record"""
    license_plate: str
    category: str
    category_label: str
    kind: str
    entry_time: datetime
    exit_time: Optional[datetime] = None
    billed_hours: int = 0
    fee: int = 0
    report_line: str

    @classmethod
    def from_event(cls, event: ParkingEvent) -> 'ParkingEventDTO':
        return cls(
            license_plate=event.plate,
            category=event.category.name,
            category_label=event.category.label,
            kind=event.kind.value,
            entry_time=event.entry_time,
            exit_time=event.exit_time,
            billed_hours=event.billed_hours,
            fee=event.fee,
            report_line=event.format_for_report()
        )


class OperationResultDTO(BaseDTO):
    """DTO for park/exit results"""
    success: bool
    reason: Optional[str] = None
    message: str = ""
    license_plate: Optional[str] = None
    slot_number: Optional[int] = None
    billed_hours: Optional[int] = None
    fee: Optional[int] = None
    timestamp: Optional[datetime] = None

    @classmethod
    def failed(cls, reason: GarageFailure, slot_number: Optional[int] = None) -> 'OperationResultDTO':
        return cls(
            success=False,
            reason=reason.value,
            message=reason.message,
            slot_number=slot_number
        )

    @classmethod
    def from_park_result(cls, result: ParkResult, plate: str) -> 'OperationResultDTO':
        if not result.success:
            return cls(
                success=False,
                reason=result.reason.value,
                message=result.reason.message,
                license_plate=plate
            )
        vehicle = result.vehicle
        return cls(
            success=True,
            message=f"Vehicle {vehicle.plate} parked",
            license_plate=vehicle.plate,
            slot_number=1,
            timestamp=vehicle.entry_time
        )

    @classmethod
    def from_exit_result(cls, result: ExitResult, slot_number: int) -> 'OperationResultDTO':
        if not result.success:
            return cls.failed(result.reason, slot_number)
        record = result.record
        return cls(
            success=True,
            message=f"Vehicle {record.plate} left after {record.billed_hours} hour(s)",
            license_plate=record.plate,
            slot_number=slot_number,
            billed_hours=record.billed_hours,
            fee=record.fee,
            timestamp=record.exit_time
        )


class DailyStatsDTO(BaseDTO):
    """DTO for daily entry/exit counts and revenue"""
    entry_count: int = Field(ge=0)
    exit_count: int = Field(ge=0)
    revenue: int = Field(ge=0)

    @classmethod
    def from_stats(cls, stats: DailyStats) -> 'DailyStatsDTO':
        return cls(
            entry_count=stats.entry_count,
            exit_count=stats.exit_count,
            revenue=stats.revenue
        )


class GarageStatusDTO(BaseDTO):
    """DTO for garage occupancy status"""
    garage_id: str
    capacity: int = Field(gt=0)
    current_count: int = Field(ge=0)
    remaining_space: int = Field(ge=0)
    occupants: List[str] = Field(default_factory=list, description="Earliest parked first")
    timestamp: datetime

    @property
    def occupancy_rate(self) -> float:
        return self.current_count / self.capacity
