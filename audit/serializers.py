"""
Audit Log Serializers
"""

from rest_framework import serializers
from audit.models import AuditLog


class AuditLogSerializer(serializers.ModelSerializer):
    """
    Serializer for AuditLog model.

    Read-only: Audit logs cannot be created/updated via API.
    """

    actor_display = serializers.CharField(read_only=True)
    action_display = serializers.CharField(read_only=True)
    resource_display = serializers.CharField(read_only=True)
    user_username = serializers.CharField(source='user.username', read_only=True, allow_null=True)

    class Meta:
        model = AuditLog
        fields = [
            'id',
            'user',
            'user_username',
            'actor',
            'actor_display',
            'action',
            'action_display',
            'resource_type',
            'resource_display',
            'resource_id',
            'description',
            'ip_address',
            'metadata',
            'timestamp'
        ]
        read_only_fields = fields
