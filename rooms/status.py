"""
Room status derivation.

The one place a room's display status is computed. Nothing stores or caches
the result; every read recomputes it from the live occupant count.
"""
from typing import Dict, Iterable

from core.constants import RoomStatus


def derive_status(occupant_count: int, capacity: int, maintenance: bool) -> str:
    """
    Status from (occupant count, capacity, maintenance flag).

    MAINTENANCE overrides everything; FULL is checked before AVAILABLE so an
    over-capacity room still reports FULL rather than failing.
    """
    if maintenance:
        return RoomStatus.MAINTENANCE
    if occupant_count == 0:
        return RoomStatus.VACANT
    if occupant_count >= capacity:
        return RoomStatus.FULL
    return RoomStatus.AVAILABLE


def room_status(room) -> str:
    return derive_status(room.occupant_count, room.capacity, room.maintenance)


def status_summary(rooms: Iterable) -> Dict[str, int]:
    """Count rooms per status, e.g. for a property overview"""
    summary = {'total': 0}
    for status in RoomStatus.ALL:
        summary[status.lower()] = 0
    for room in rooms:
        summary[room_status(room).lower()] += 1
        summary['total'] += 1
    return summary
