"""
Tests for room status derivation.
"""

from __future__ import annotations

import itertools

import pytest

from core.constants import RoomStatus
from rooms.status import derive_status, room_status, status_summary


class TestDeriveStatus:
    """derive_status is a pure function of (occupants, capacity, maintenance)."""

    @pytest.mark.parametrize(
        "count, capacity, maintenance, expected",
        [
            (0, 1, False, RoomStatus.VACANT),
            (0, 4, False, RoomStatus.VACANT),
            (1, 4, False, RoomStatus.AVAILABLE),
            (3, 4, False, RoomStatus.AVAILABLE),
            (4, 4, False, RoomStatus.FULL),
            (1, 1, False, RoomStatus.FULL),
            (0, 2, True, RoomStatus.MAINTENANCE),
            (2, 2, True, RoomStatus.MAINTENANCE),
        ],
    )
    def test_table(self, count, capacity, maintenance, expected):
        assert derive_status(count, capacity, maintenance) == expected

    def test_over_capacity_reports_full(self):
        """More occupants than capacity must not crash."""
        assert derive_status(5, 2, False) == RoomStatus.FULL

    def test_deterministic_regardless_of_call_order(self):
        triples = list(itertools.product(range(4), range(1, 4), (False, True)))
        first = [derive_status(*t) for t in triples]
        second = [derive_status(*t) for t in reversed(triples)]
        assert first == list(reversed(second))


@pytest.mark.django_db
class TestRoomStatus:
    """Status always follows the live occupant list."""

    def test_follows_occupants(self, make_room, place, registry):
        room = make_room(capacity=2)
        assert room_status(registry.get_room(room.id)) == RoomStatus.VACANT

        place(room, "T1")
        assert registry.get_room(room.id).status == RoomStatus.AVAILABLE

        place(room, "T2")
        assert registry.get_room(room.id).status == RoomStatus.FULL

        registry.remove_occupant(room.id, "T1")
        assert registry.get_room(room.id).status == RoomStatus.AVAILABLE

    def test_maintenance_overrides(self, make_room, place, registry):
        room = make_room(capacity=1)
        place(room, "T1")
        room = registry.set_maintenance(room.id, True)
        assert room.status == RoomStatus.MAINTENANCE
        room = registry.set_maintenance(room.id, False)
        assert room.status == RoomStatus.FULL

    def test_summary(self, make_room, place, registry):
        full = make_room(capacity=1)
        partly = make_room(capacity=3)
        make_room(capacity=2)
        make_room(capacity=2, maintenance=True)
        place(full, "T1")
        place(partly, "T2")

        summary = status_summary(registry.list_rooms())
        assert summary == {'total': 4, 'vacant': 1, 'available': 1, 'full': 1, 'maintenance': 1}
