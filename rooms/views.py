from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from api.permissions import IsAdminOrReadOnly
from audit import helpers as audit
from audit.models import AuditLog
from core.dto import OccupantDTO, RoomDTO
from core.exceptions import NotFoundError
from .serializers import (
    MaintenanceSerializer,
    OccupantCreateSerializer,
    OccupantSerializer,
    OccupantUpdateSerializer,
    RoomListSerializer,
    RoomSerializer,
    RoomWriteSerializer,
    parse_statuses,
)
from .services import RoomRegistry


class RoomViewSet(viewsets.ViewSet):
    """
    ViewSet for Room management

    All writes go through RoomRegistry, which locks the room row and
    enforces capacity. Status is derived on every read.
    """
    permission_classes = [IsAuthenticated, IsAdminOrReadOnly]
    lookup_value_regex = r'\d+'

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.registry = RoomRegistry()

    def list(self, request):
        """
        Query params:
        - property: property id
        - status: comma-separated statuses, e.g. ``vacant,available``
        - capacity: minimum capacity
        """
        params = request.query_params
        min_capacity = params.get('capacity')
        property_id = params.get('property')
        rooms = self.registry.list_rooms(
            property_id=int(property_id) if property_id and property_id.isdigit() else None,
            statuses=parse_statuses(params.get('status')),
            min_capacity=int(min_capacity) if min_capacity and min_capacity.isdigit() else None,
        )
        return Response(RoomListSerializer(rooms, many=True).data)

    def retrieve(self, request, pk=None):
        room = self.registry.get_room(int(pk))
        return Response(RoomSerializer(room).data)

    def create(self, request):
        serializer = RoomWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        property_id = data.pop('property_id')
        capacity = data.pop('capacity')

        room = self.registry.create_room(property_id, capacity, RoomDTO(**data))
        audit.log_room_create(request.user, room, request=request)
        return Response(RoomSerializer(self.registry.get_room(room.id)).data, status=status.HTTP_201_CREATED)

    def update(self, request, pk=None):
        serializer = RoomWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        changes = dict(serializer.validated_data)
        if 'property_id' in changes:
            changes['boarding_property_id'] = changes.pop('property_id')

        room = self.registry.update_room(int(pk), changes)
        audit.log_action(
            action=AuditLog.ACTION_UPDATE,
            resource_type=AuditLog.RESOURCE_ROOM,
            resource_id=room.id,
            description=f"Updated room {room.room_code}: {', '.join(sorted(changes))}",
            user=request.user,
            request=request,
            metadata={'fields': sorted(changes), 'capacity': room.capacity}
        )
        return Response(RoomSerializer(room).data)

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    def destroy(self, request, pk=None):
        self.registry.delete_room(int(pk))
        audit.log_room_delete(request.user, pk, request=request)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['post'])
    def maintenance(self, request, pk=None):
        """Body: { "maintenance": true }"""
        serializer = MaintenanceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        room = self.registry.set_maintenance(int(pk), serializer.validated_data['maintenance'])
        audit.log_maintenance(request.user, room, request=request)
        return Response(RoomSerializer(room).data)

    @action(detail=True, methods=['post'], url_path='occupants')
    def add_occupant(self, request, pk=None):
        """Place a tenant directly, bypassing the request workflow"""
        serializer = OccupantCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        room = self.registry.add_occupant(int(pk), OccupantDTO(**serializer.validated_data))
        audit.log_direct_assignment(
            request.user, room, serializer.validated_data['tenant_id'], request=request
        )
        return Response(RoomSerializer(room).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['patch', 'delete'], url_path=r'occupants/(?P<tenant_id>[^/]+)')
    def occupant(self, request, pk=None, tenant_id=None):
        if request.method == 'DELETE':
            room = self.registry.remove_occupant(int(pk), tenant_id)
            audit.log_direct_vacate(request.user, room, tenant_id, request=request)
            return Response(RoomSerializer(room).data)

        serializer = OccupantUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        occupant = self.registry.update_occupant(int(pk), tenant_id, dict(serializer.validated_data))
        return Response(OccupantSerializer(occupant).data)

    @action(detail=False, methods=['get'], url_path=r'tenant/(?P<tenant_id>[^/]+)')
    def tenant(self, request, tenant_id=None):
        """The room a tenant currently lives in"""
        room = self.registry.find_room_for_tenant(tenant_id)
        if room is None:
            raise NotFoundError(
                resource_type="Tenant placement",
                resource_id=tenant_id,
                message=f"Tenant {tenant_id} does not occupy any room",
                code="TENANT_NOT_HOUSED",
            )
        return Response(RoomSerializer(room).data)

    @action(detail=False, methods=['get'], url_path='occupants')
    def all_occupants(self, request):
        """Every housed tenant across all rooms"""
        occupants = self.registry.list_occupants()
        return Response(OccupantSerializer(occupants, many=True).data)
