"""
Repository pattern implementation.
Abstracts data access and provides a clean interface for domain services.
"""
from typing import Generic, Iterable, List, Optional, TypeVar
from django.db.models import QuerySet, Model
import logging

logger = logging.getLogger(__name__)

T = TypeVar('T', bound=Model)


class BaseRepository(Generic[T]):
    """
    Base repository providing common CRUD operations.
    Follows Repository pattern for data access abstraction.
    """

    def __init__(self, model: type[T]):
        self.model = model

    def get_by_id(self, id: int, **filters) -> Optional[T]:
        """Get a single instance by ID"""
        return self.model.objects.filter(id=id, **filters).first()

    def get_all(self, **filters) -> QuerySet[T]:
        """Get all instances matching filters"""
        return self.model.objects.filter(**filters)

    def create(self, **kwargs) -> T:
        """Create a new instance"""
        return self.model.objects.create(**kwargs)

    def update(self, instance: T, **kwargs) -> T:
        """Update an existing instance"""
        for key, value in kwargs.items():
            setattr(instance, key, value)
        instance.save()
        return instance

    def delete(self, instance: T) -> None:
        """Delete an instance"""
        instance.delete()

    def exists(self, **filters) -> bool:
        """Check if instance exists"""
        return self.model.objects.filter(**filters).exists()

    def count(self, **filters) -> int:
        """Count instances matching filters"""
        return self.model.objects.filter(**filters).count()

    def lock(self, id: int) -> Optional[T]:
        """Row-lock a single instance. Must run inside transaction.atomic."""
        return self.model.objects.select_for_update().filter(id=id).first()

    def lock_many(self, ids: Iterable[int]) -> List[T]:
        """
        Row-lock several instances in ascending id order.
        Acquiring locks in one global order keeps two-row operations deadlock free.
        """
        return list(
            self.model.objects.select_for_update().filter(id__in=set(ids)).order_by('id')
        )

    def get_queryset(self) -> QuerySet[T]:
        """Get base queryset for custom queries"""
        return self.model.objects.all()
