#!/usr/bin/env python3
"""
Application DTO and Configuration Unit Tests
"""

import json
import logging
import unittest
from datetime import datetime, timedelta

from pydantic import ValidationError

from stackpark.application.dtos import (
    ParkRequestDTO, ExitRequestDTO, OperationResultDTO,
    ParkingEventDTO, DailyStatsDTO, GarageStatusDTO
)
from stackpark.config import GarageConfig
from stackpark.domain.models import (
    VehicleCategory, ParkedVehicle, ParkingEvent, DailyStats,
    ExitResult, GarageFailure
)


class TestRequestDTOs(unittest.TestCase):
    """Unit tests for input DTOs"""

    def test_plate_is_stripped(self):
        request = ParkRequestDTO(license_plate="  12GA3456 ", category=VehicleCategory.COMPACT)
        self.assertEqual(request.license_plate, "12GA3456")
        self.assertIs(request.category, VehicleCategory.COMPACT)

    def test_empty_plate_rejected(self):
        """Non-empty plates are enforced at the application boundary"""
        for plate in ("", "   "):
            with self.assertRaises(ValidationError, msg=f"Failed for plate={plate!r}"):
                ParkRequestDTO(license_plate=plate)

    def test_default_category(self):
        self.assertIs(ParkRequestDTO(license_plate="A").category, VehicleCategory.GENERAL)

    def test_category_by_name(self):
        request = ParkRequestDTO.from_dict({"license_plate": "A", "category": "disabled"})
        self.assertIs(request.category, VehicleCategory.DISABLED)

    def test_unknown_category_name_rejected(self):
        with self.assertRaises(ValidationError):
            ParkRequestDTO(license_plate="A", category="limousine")

    def test_park_request_round_trip_through_json(self):
        request = ParkRequestDTO(license_plate="A", category=VehicleCategory.OFFICIAL)
        data = json.loads(request.to_json())
        self.assertEqual(data, {"license_plate": "A", "category": "OFFICIAL"})
        self.assertEqual(ParkRequestDTO.from_json(request.to_json()), request)

    def test_exit_request_requires_integer_slot(self):
        self.assertEqual(ExitRequestDTO(slot_number=2).slot_number, 2)
        for slot in ("two", 1.5, None):
            with self.assertRaises(ValidationError, msg=f"Failed for slot={slot!r}"):
                ExitRequestDTO(slot_number=slot)


class TestResponseDTOs(unittest.TestCase):
    """Unit tests for output DTOs"""

    def setUp(self):
        self.entry_time = datetime(2024, 5, 1, 9, 0)
        self.vehicle = ParkedVehicle("A", VehicleCategory.GENERAL, self.entry_time)
        self.record = ParkingEvent.exit(self.vehicle, self.entry_time + timedelta(minutes=90), 2, 2000)

    def test_event_dto(self):
        dto = ParkingEventDTO.from_event(self.record)
        self.assertEqual(dto.kind, "exit")
        self.assertEqual(dto.category, "GENERAL")
        self.assertEqual(dto.category_label, "General")
        self.assertEqual(dto.fee, 2000)
        self.assertEqual(dto.report_line, self.record.format_for_report())

    def test_exit_result_dto(self):
        dto = OperationResultDTO.from_exit_result(ExitResult(success=True, record=self.record), 3)
        self.assertTrue(dto.success)
        self.assertEqual((dto.slot_number, dto.billed_hours, dto.fee), (3, 2, 2000))

        failed = OperationResultDTO.from_exit_result(ExitResult.rejected(GarageFailure.GARAGE_EMPTY), 1)
        self.assertFalse(failed.success)
        self.assertEqual(failed.reason, "garage_empty")
        self.assertIsNone(failed.fee)
        self.assertNotIn("fee", failed.to_dict(exclude_none=True))

    def test_stats_dto(self):
        dto = DailyStatsDTO.from_stats(DailyStats(entry_count=3, exit_count=1, revenue=500))
        self.assertEqual(dto.to_dict(), {"entry_count": 3, "exit_count": 1, "revenue": 500})
        with self.assertRaises(ValidationError):
            DailyStatsDTO(entry_count=-1, exit_count=0, revenue=0)

    def test_status_occupancy_rate(self):
        status = GarageStatusDTO(
            garage_id="g", capacity=4, current_count=1, remaining_space=3,
            occupants=["A (General) - entry: 2024-05-01 09:00:00"], timestamp=self.entry_time
        )
        self.assertAlmostEqual(status.occupancy_rate, 0.25)


class TestGarageConfig(unittest.TestCase):
    """Unit tests for GarageConfig"""

    def test_defaults(self):
        config = GarageConfig()
        self.assertEqual(config.capacity, 10)
        self.assertEqual(config.log_level, "INFO")
        self.assertIsNone(config.log_dir)

    def test_from_env(self):
        config = GarageConfig.from_env({"STACKPARK_CAPACITY": "5", "STACKPARK_LOG_LEVEL": "debug"})
        self.assertEqual(config.capacity, 5)
        self.assertEqual(config.numeric_log_level, logging.DEBUG)

    def test_overrides_win_over_env(self):
        config = GarageConfig.from_env({"STACKPARK_CAPACITY": "5"}, capacity=7, log_dir=None)
        self.assertEqual(config.capacity, 7)

    def test_invalid_values(self):
        with self.assertRaises(ValidationError):
            GarageConfig(capacity=0)
        with self.assertRaises(ValidationError):
            GarageConfig(log_level="LOUD")


if __name__ == '__main__':
    unittest.main()
