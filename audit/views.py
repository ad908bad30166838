"""
Audit Log API Views

Provides read-only access to audit logs for administrators.
"""

from datetime import timedelta

from django.db.models import Count
from django.utils import timezone
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from api.permissions import IsAdministrator
from audit.models import AuditLog
from audit.serializers import AuditLogSerializer


class AuditLogViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Read-only ViewSet for audit logs.

    Features:
    - List all logs
    - Filter by action, resource_type, tenant
    - Search by description
    - Get audit trail for specific resource
    """

    serializer_class = AuditLogSerializer
    permission_classes = [IsAuthenticated, IsAdministrator]
    search_fields = ['description', 'actor']
    ordering_fields = ['timestamp', 'action']
    ordering = ['-timestamp']

    def get_queryset(self):
        queryset = AuditLog.objects.select_related('user')

        action_filter = self.request.query_params.get('action')
        if action_filter:
            queryset = queryset.for_action(action_filter.upper())

        resource_type = self.request.query_params.get('resource_type')
        if resource_type:
            queryset = queryset.filter(resource_type=resource_type)

        tenant_id = self.request.query_params.get('tenant_id')
        if tenant_id:
            queryset = queryset.for_tenant(tenant_id)

        return queryset

    @action(detail=False, methods=['get'])
    def resource_trail(self, request):
        """
        Get audit trail for a specific resource.

        Example: GET /api/audit/logs/resource_trail/?resource_type=Room&resource_id=3
        """
        resource_type = request.query_params.get('resource_type')
        resource_id = request.query_params.get('resource_id')

        if not resource_type or not resource_id:
            return Response(
                {'detail': 'Both resource_type and resource_id are required', 'code': 'VALIDATION_ERROR'},
                status=status.HTTP_400_BAD_REQUEST
            )

        queryset = self.get_queryset().for_resource(resource_type, resource_id)
        serializer = self.get_serializer(queryset, many=True)

        return Response({
            'resource_type': resource_type,
            'resource_id': resource_id,
            'audit_trail': serializer.data,
            'count': queryset.count()
        })

    @action(detail=False, methods=['get'])
    def stats(self, request):
        """Totals by action and resource type, plus activity in the last 24 hours"""
        queryset = self.get_queryset()

        by_action = dict(
            queryset.order_by().values_list('action')
            .annotate(count=Count('id'))
        )
        by_resource = dict(
            queryset.order_by().values_list('resource_type')
            .annotate(count=Count('id'))
        )
        recent_threshold = timezone.now() - timedelta(hours=24)

        return Response({
            'total_logs': queryset.count(),
            'by_action': by_action,
            'by_resource': by_resource,
            'recent_24h': queryset.filter(timestamp__gte=recent_threshold).count(),
        })
