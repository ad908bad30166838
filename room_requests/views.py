from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from api.permissions import IsAdministrator
from audit.helpers import log_request_submitted
from .serializers import (
    RoomRequestResponseSerializer,
    RoomRequestSerializer,
    RoomRequestSubmitSerializer,
)
from .services import RequestStore


class RoomRequestViewSet(viewsets.ViewSet):
    """
    Submit, list and answer room requests.

    Any authenticated caller may submit; approving and rejecting needs an
    administrator. Requests are never deleted.
    """
    permission_classes = [IsAuthenticated]
    lookup_value_regex = r'\d+'

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.store = RequestStore()

    def get_permissions(self):
        if self.action in ('approve', 'reject'):
            return [IsAuthenticated(), IsAdministrator()]
        return super().get_permissions()

    def list(self, request):
        """
        Query params: status, type, tenant, room
        """
        params = request.query_params
        room = params.get('room')
        requests = self.store.list(
            status=params.get('status'),
            request_type=params.get('type'),
            tenant_id=params.get('tenant'),
            room_id=int(room) if room and room.isdigit() else None,
        )
        return Response(RoomRequestSerializer(requests, many=True).data)

    def retrieve(self, request, pk=None):
        return Response(RoomRequestSerializer(self.store.get(int(pk))).data)

    def create(self, request):
        serializer = RoomRequestSubmitSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        room_request = self.store.submit(**serializer.validated_data)
        log_request_submitted(room_request, user=request.user, request=request)
        return Response(RoomRequestSerializer(room_request).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'])
    def approve(self, request, pk=None):
        """Body: { "message": "..." } (optional)"""
        return self._respond(request, pk, self.store.approve)

    @action(detail=True, methods=['post'])
    def reject(self, request, pk=None):
        """Body: { "message": "..." } (optional)"""
        return self._respond(request, pk, self.store.reject)

    def _respond(self, request, pk, handler):
        serializer = RoomRequestResponseSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        room_request = handler(
            int(pk),
            message=serializer.validated_data['message'] or None,
            admin_id=request.user.get_username(),
        )
        return Response(RoomRequestSerializer(room_request).data)
