"""
Occupancy Stack for the single-lane garage

Vehicles enter and leave through one access point, so the lane behaves as a
LIFO stack. Slot numbers count from the top: slot 1 is the most recently
parked vehicle, slot N the earliest one.

    push / pop / peek : O(1)
    extract(slot)     : O(slot), side buffer of up to slot - 1 vehicles
"""

from typing import Iterator, List, Optional
import logging

from .models import ParkedVehicle


class OccupancyStack:
    """
    Order-preserving LIFO container of parked vehicles.
    Insertion only at the top; arbitrary slots are reached by moving the
    vehicles above them into a side buffer and putting them back.
    """

    def __init__(self) -> None:
        self._lane: List[ParkedVehicle] = []
        self._buffer: List[ParkedVehicle] = []
        self._logger = logging.getLogger(self.__class__.__name__)

    def push(self, vehicle: ParkedVehicle) -> None:
        self._lane.append(vehicle)

    def pop(self) -> Optional[ParkedVehicle]:
        if not self._lane:
            return None
        return self._lane.pop()

    def peek(self) -> Optional[ParkedVehicle]:
        if not self._lane:
            return None
        return self._lane[-1]

    def size(self) -> int:
        return len(self._lane)

    def is_empty(self) -> bool:
        return self.size() == 0

    def __len__(self) -> int:
        return self.size()

    def __iter__(self) -> Iterator[ParkedVehicle]:
        """Iterate top to bottom over a snapshot"""
        return iter(list(reversed(self._lane)))

    def _in_range(self, slot: int) -> bool:
        return isinstance(slot, int) and not isinstance(slot, bool) and 1 <= slot <= len(self._lane)

    def vehicle_at(self, slot: int) -> Optional[ParkedVehicle]:
        """Read-only lookup of the vehicle at a slot (1 = top)"""
        if not self._in_range(slot):
            return None
        return self._lane[-slot]

    def extract(self, slot: int) -> Optional[ParkedVehicle]:
        """
        Remove and return the vehicle at the given slot.

        Vehicles above the target are popped into the side buffer in pop
        order, the target is taken out, and the buffer is drained back by
        popping it, which restores their original relative order.
        Returns None without touching the lane when the slot is out of range.
        """
        if not self._in_range(slot):
            return None

        target: Optional[ParkedVehicle] = None
        position = 1
        while self._lane:
            vehicle = self._lane.pop()
            if position == slot:
                target = vehicle
                break
            self._buffer.append(vehicle)
            position += 1

        moved = len(self._buffer)
        while self._buffer:
            self._lane.append(self._buffer.pop())

        self._logger.debug(f"Extracted slot {slot}, reshuffled {moved} vehicle(s)")
        return target

    def snapshot_bottom_up(self) -> List[ParkedVehicle]:
        """Independent copy ordered from earliest to most recently parked"""
        return list(self._lane)
