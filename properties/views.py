from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from api.permissions import IsAdminOrReadOnly
from audit.helpers import log_action
from audit.models import AuditLog
from core.dto import PropertyDTO
from .models import Property
from .serializers import PropertySerializer, PropertyListSerializer
from .services import PropertyService


class PropertyViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Property management

    Writes go through PropertyService; a property with rooms cannot be deleted.
    """
    permission_classes = [IsAuthenticated, IsAdminOrReadOnly]
    lookup_value_regex = r'\d+'
    search_fields = ['name', 'city']
    ordering_fields = ['name', 'created_at']
    ordering = ['name']

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.service = PropertyService()

    def get_serializer_class(self):
        if self.action == 'list':
            return PropertyListSerializer
        return PropertySerializer

    def get_queryset(self):
        active = self.request.query_params.get('active')
        if active is not None:
            active = active.lower() == 'true'
        return self.service.property_repo.search(
            city=self.request.query_params.get('city'),
            active=active,
        )

    def retrieve(self, request, pk=None):
        prop = self.service.get_property(pk)
        return Response(PropertySerializer(prop).data)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        prop = self.service.create_property(PropertyDTO(**serializer.validated_data))
        log_action(
            action=AuditLog.ACTION_CREATE,
            resource_type=AuditLog.RESOURCE_PROPERTY,
            resource_id=prop.id,
            description=f"Created property: {prop.name}",
            user=request.user,
            request=request
        )
        return Response(PropertySerializer(prop).data, status=status.HTTP_201_CREATED)

    def update(self, request, pk=None, partial=False):
        prop = self.service.get_property(pk)
        serializer = self.get_serializer(prop, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        prop = self.service.update_property(prop.id, serializer.validated_data)
        return Response(PropertySerializer(prop).data)

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk, partial=True)

    def destroy(self, request, pk=None):
        self.service.delete_property(pk)
        log_action(
            action=AuditLog.ACTION_DELETE,
            resource_type=AuditLog.RESOURCE_PROPERTY,
            resource_id=pk,
            description=f"Deleted property #{pk}",
            user=request.user,
            request=request
        )
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['get'])
    def rooms(self, request, pk=None):
        """All rooms of this property with derived status"""
        from rooms.serializers import RoomListSerializer

        rooms = self.service.get_rooms(pk)
        return Response(RoomListSerializer(rooms, many=True).data)

    @action(detail=True, methods=['get'])
    def stats(self, request, pk=None):
        """Room counts per status"""
        return Response(self.service.get_stats(pk))
