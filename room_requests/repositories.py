"""
Room request repository - Data access layer for RoomRequest.
"""
from typing import Optional
from django.db.models import QuerySet, Q
from core.constants import RequestStatus
from core.repositories import BaseRepository
from .models import RoomRequest


class RoomRequestRepository(BaseRepository[RoomRequest]):
    """Repository for RoomRequest model"""

    def __init__(self):
        super().__init__(RoomRequest)

    def lock_pending(self, tenant_id: str, request_type: str) -> Optional[RoomRequest]:
        """Row-lock the tenant's pending request of this family, if any"""
        return self.model.objects.select_for_update().filter(
            tenant_id=tenant_id,
            request_type=request_type,
            status=RequestStatus.PENDING,
        ).first()

    def search(self, status: str = None, request_type: str = None, tenant_id: str = None,
               room_id: int = None) -> QuerySet[RoomRequest]:
        queryset = self.get_queryset()
        if status:
            queryset = queryset.filter(status=status.upper())
        if request_type:
            queryset = queryset.filter(request_type=request_type.upper())
        if tenant_id:
            queryset = queryset.filter(tenant_id=tenant_id)
        if room_id:
            queryset = queryset.filter(Q(source_room_id=room_id) | Q(target_room_id=room_id))
        return queryset.order_by('-requested_at', '-id')
