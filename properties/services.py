"""
Property service - Business logic layer for Property domain.
Services orchestrate repositories and contain business rules.
"""
from dataclasses import asdict
from typing import Dict, List

from django.db import transaction

from core.services import BaseService
from core.exceptions import PropertyNotFound, PropertyNotEmpty
from core.dto import PropertyDTO
from .repositories import PropertyRepository
from .models import Property


class PropertyService(BaseService):
    """Service for property-related business logic"""

    def __init__(self):
        super().__init__()
        self.property_repo = PropertyRepository()

    def create_property(self, data: PropertyDTO) -> Property:
        """
        Create a new property.

        Args:
            data: Property data

        Returns:
            Created Property instance
        """
        fields = asdict(data)
        fields.pop('id')
        with transaction.atomic():
            prop = self.property_repo.create(**fields)
        self.log_info(f"Property created: {prop.name}", property_id=prop.id)
        return prop

    def get_property(self, property_id: int) -> Property:
        """
        Get a property.

        Raises:
            PropertyNotFound: If property doesn't exist
        """
        prop = self.property_repo.get_by_id(property_id)
        if not prop:
            raise PropertyNotFound(property_id)
        return prop

    def list_properties(self, city: str = None, active: bool = None) -> List[Property]:
        return list(self.property_repo.search(city=city, active=active))

    def update_property(self, property_id: int, changes: Dict) -> Property:
        """Update descriptive fields of a property"""
        with transaction.atomic():
            prop = self.property_repo.lock(property_id)
            if not prop:
                raise PropertyNotFound(property_id)
            changes = {k: v for k, v in changes.items() if k != 'id'}
            self.property_repo.update(prop, **changes)
        self.log_info(f"Property updated: {prop.name}", property_id=prop.id)
        return prop

    def delete_property(self, property_id: int) -> None:
        """
        Delete a property.

        Raises:
            PropertyNotEmpty: If the property still has rooms
        """
        with transaction.atomic():
            prop = self.property_repo.lock(property_id)
            if not prop:
                raise PropertyNotFound(property_id)
            room_count = prop.rooms.count()
            if room_count:
                raise PropertyNotEmpty(property_id, room_count=room_count)
            self.property_repo.delete(prop)
        self.log_info(f"Property deleted: {prop.name}", property_id=property_id)

    def get_rooms(self, property_id: int):
        """All rooms of a property, occupants prefetched"""
        from rooms.repositories import RoomRepository

        self.get_property(property_id)
        return list(RoomRepository().get_by_property(property_id))

    def get_stats(self, property_id: int) -> Dict[str, int]:
        """Room counts per derived status"""
        from rooms.status import status_summary

        return status_summary(self.get_rooms(property_id))
