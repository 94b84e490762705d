#!/usr/bin/env python3
"""
Occupancy Stack Unit Tests

Tests for the LIFO lane and slot extraction.
"""

import unittest
from datetime import datetime, timedelta

from stackpark.domain.models import ParkedVehicle, VehicleCategory
from stackpark.domain.occupancy import OccupancyStack


def make_vehicle(plate, minutes=0):
    return ParkedVehicle(plate, VehicleCategory.GENERAL, datetime(2024, 5, 1, 9, 0) + timedelta(minutes=minutes))


class TestOccupancyStack(unittest.TestCase):
    """Unit tests for OccupancyStack"""

    def setUp(self):
        self.stack = OccupancyStack()
        self.plates = ["A", "B", "C", "D", "E"]
        self.vehicles = [make_vehicle(p, i) for i, p in enumerate(self.plates)]

    def fill(self):
        for vehicle in self.vehicles:
            self.stack.push(vehicle)

    def plates_bottom_up(self):
        return [v.plate for v in self.stack.snapshot_bottom_up()]

    def test_empty_stack(self):
        self.assertTrue(self.stack.is_empty())
        self.assertIsNone(self.stack.pop())
        self.assertIsNone(self.stack.peek())
        self.assertEqual(len(self.stack), 0)

    def test_push_pop_is_lifo(self):
        self.fill()
        self.assertEqual(self.stack.peek().plate, "E")
        self.assertEqual(self.stack.pop().plate, "E")
        self.assertEqual(self.stack.pop().plate, "D")
        self.assertEqual(self.stack.size(), 3)

    def test_iteration_is_top_down(self):
        self.fill()
        self.assertEqual([v.plate for v in self.stack], ["E", "D", "C", "B", "A"])

    def test_vehicle_at(self):
        """Slot 1 is the top of the lane"""
        self.fill()
        self.assertEqual(self.stack.vehicle_at(1).plate, "E")
        self.assertEqual(self.stack.vehicle_at(5).plate, "A")
        self.assertIsNone(self.stack.vehicle_at(0))
        self.assertIsNone(self.stack.vehicle_at(6))
        self.assertEqual(self.stack.size(), 5)

    def test_extract_every_slot_preserves_order(self):
        """Extracting any slot keeps the others in their relative order"""
        for slot in range(1, 6):
            stack = OccupancyStack()
            for vehicle in self.vehicles:
                stack.push(vehicle)

            removed = stack.extract(slot)

            expected_plate = self.plates[-slot]
            self.assertEqual(removed.plate, expected_plate, msg=f"Failed for slot={slot}")
            remaining = [v.plate for v in stack.snapshot_bottom_up()]
            self.assertEqual(remaining, [p for p in self.plates if p != expected_plate],
                             msg=f"Failed for slot={slot}")
            self.assertEqual(stack._buffer, [])

    def test_extract_out_of_range(self):
        """Out-of-range slots leave the lane untouched"""
        self.fill()
        for slot in (0, -1, 6, 2.0, True, "1"):
            self.assertIsNone(self.stack.extract(slot), msg=f"Failed for slot={slot!r}")
        self.assertEqual(self.plates_bottom_up(), self.plates)

    def test_extract_from_empty(self):
        self.assertIsNone(self.stack.extract(1))

    def test_snapshot_is_a_copy(self):
        self.fill()
        snapshot = self.stack.snapshot_bottom_up()
        snapshot.clear()
        self.assertEqual(self.stack.size(), 5)


if __name__ == '__main__':
    unittest.main()
