"""
Room repository - Data access layer for Room and Occupant.
"""
from typing import Optional
from django.db.models import QuerySet, Prefetch
from core.repositories import BaseRepository
from .models import Room, Occupant


class RoomRepository(BaseRepository[Room]):
    """Repository for Room model"""

    def __init__(self):
        super().__init__(Room)

    def with_occupants(self, queryset: QuerySet[Room] = None) -> QuerySet[Room]:
        """Prefetch occupants in move-in order"""
        queryset = self.get_queryset() if queryset is None else queryset
        return queryset.select_related('boarding_property').prefetch_related(
            Prefetch('occupants', queryset=Occupant.objects.order_by('added_at', 'id'))
        )

    def get_with_occupants(self, room_id: int) -> Optional[Room]:
        return self.with_occupants(self.get_all(id=room_id)).first()

    def get_by_property(self, property_id: int) -> QuerySet[Room]:
        return self.with_occupants(self.get_all(boarding_property_id=property_id))

    def search(self, property_id: int = None, min_capacity: int = None) -> QuerySet[Room]:
        queryset = self.get_queryset()
        if property_id:
            queryset = queryset.filter(boarding_property_id=property_id)
        if min_capacity:
            queryset = queryset.filter(capacity__gte=min_capacity)
        return self.with_occupants(queryset)


class OccupantRepository(BaseRepository[Occupant]):
    """Repository for Occupant model"""

    def __init__(self):
        super().__init__(Occupant)

    def get_in_room(self, room_id: int, tenant_id: str) -> Optional[Occupant]:
        return self.get_all(room_id=room_id, tenant_id=tenant_id).first()

    def find_by_tenant(self, tenant_id: str) -> Optional[Occupant]:
        """The tenant's current placement, if any (at most one exists)"""
        return self.get_all(tenant_id=tenant_id).select_related('room').first()

    def count_in_room(self, room_id: int) -> int:
        return self.count(room_id=room_id)

    def all_with_rooms(self) -> QuerySet[Occupant]:
        return self.get_queryset().select_related('room', 'room__boarding_property').order_by('room_id', 'added_at', 'id')
