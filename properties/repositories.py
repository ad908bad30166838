"""
Property repository - Data access layer for Property domain.
Follows Repository pattern for clean separation of concerns.
"""
from django.db.models import QuerySet
from core.repositories import BaseRepository
from .models import Property


class PropertyRepository(BaseRepository[Property]):
    """Repository for Property model"""

    def __init__(self):
        super().__init__(Property)

    def search(self, city: str = None, active: bool = None) -> QuerySet[Property]:
        queryset = self.get_queryset()
        if city:
            queryset = queryset.filter(city__iexact=city)
        if active is not None:
            queryset = queryset.filter(is_active=active)
        return queryset
