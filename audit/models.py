"""
Audit Log Model

IMMUTABLE: Audit logs cannot be edited or deleted after creation.
Purpose: Permanent trail of room, occupancy and request actions.
"""

from django.db import models
from django.conf import settings
from django.core.exceptions import PermissionDenied


# ============================================================================
# CUSTOM MANAGER AND QUERYSET
# ============================================================================

class AuditLogQuerySet(models.QuerySet):
    """Custom queryset for audit logs with filtering helpers"""

    def for_resource(self, resource_type, resource_id):
        return self.filter(resource_type=resource_type, resource_id=str(resource_id))

    def for_action(self, action):
        return self.filter(action=action)

    def for_tenant(self, tenant_id):
        return self.filter(metadata__tenant_id=tenant_id)


AuditLogManager = models.Manager.from_queryset(AuditLogQuerySet)


# ============================================================================
# AUDIT LOG MODEL
# ============================================================================

class AuditLog(models.Model):
    """
    Immutable audit log.

    Rows are written by explicit calls from the API layer and by receivers of
    the occupancy domain events (see audit.signals).
    """

    # Action types
    ACTION_CREATE = 'CREATE'
    ACTION_UPDATE = 'UPDATE'
    ACTION_DELETE = 'DELETE'
    ACTION_MAINTENANCE = 'MAINTENANCE'
    ACTION_ASSIGN_TENANT = 'ASSIGN_TENANT'
    ACTION_VACATE = 'VACATE'
    ACTION_SUBMIT_REQUEST = 'SUBMIT_REQUEST'
    ACTION_APPROVE_REQUEST = 'APPROVE_REQUEST'
    ACTION_REJECT_REQUEST = 'REJECT_REQUEST'
    ACTION_OCCUPANCY_CHANGED = 'OCCUPANCY_CHANGED'

    ACTION_CHOICES = [
        (ACTION_CREATE, 'Create'),
        (ACTION_UPDATE, 'Update'),
        (ACTION_DELETE, 'Delete'),
        (ACTION_MAINTENANCE, 'Maintenance'),
        (ACTION_ASSIGN_TENANT, 'Assign Tenant'),
        (ACTION_VACATE, 'Vacate'),
        (ACTION_SUBMIT_REQUEST, 'Submit Request'),
        (ACTION_APPROVE_REQUEST, 'Approve Request'),
        (ACTION_REJECT_REQUEST, 'Reject Request'),
        (ACTION_OCCUPANCY_CHANGED, 'Occupancy Changed'),
    ]

    # Resource types
    RESOURCE_PROPERTY = 'Property'
    RESOURCE_ROOM = 'Room'
    RESOURCE_OCCUPANT = 'Occupant'
    RESOURCE_REQUEST = 'RoomRequest'

    RESOURCE_TYPE_CHOICES = [
        (RESOURCE_PROPERTY, 'Property'),
        (RESOURCE_ROOM, 'Room'),
        (RESOURCE_OCCUPANT, 'Occupant'),
        (RESOURCE_REQUEST, 'Room Request'),
    ]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='audit_logs',
        help_text="User who performed the action"
    )

    actor = models.CharField(
        max_length=150,
        blank=True,
        help_text="Actor identifier when there is no user (e.g. 'system', an admin id)"
    )

    action = models.CharField(max_length=20, choices=ACTION_CHOICES, db_index=True)

    resource_type = models.CharField(max_length=50, choices=RESOURCE_TYPE_CHOICES, db_index=True)

    resource_id = models.CharField(max_length=64, db_index=True, blank=True)

    description = models.TextField(help_text="Human-readable description of the action")

    ip_address = models.GenericIPAddressField(null=True, blank=True)

    user_agent = models.TextField(null=True, blank=True)

    metadata = models.JSONField(default=dict, blank=True, help_text="Additional context data")

    timestamp = models.DateTimeField(auto_now_add=True, db_index=True)

    objects = AuditLogManager()

    class Meta:
        verbose_name = "Audit Log"
        verbose_name_plural = "Audit Logs"
        ordering = ['-timestamp', '-id']
        indexes = [
            models.Index(fields=['user', '-timestamp'], name='audit_user_time_idx'),
            models.Index(fields=['resource_type', 'resource_id'], name='audit_resource_idx'),
            models.Index(fields=['action', '-timestamp'], name='audit_action_time_idx'),
        ]

    def __str__(self):
        return f"{self.actor_display} - {self.action} - {self.resource_type} #{self.resource_id} - {self.timestamp}"

    def save(self, *args, **kwargs):
        """Only creation is allowed"""
        if self.pk is not None:
            raise PermissionDenied(
                "Audit logs are immutable and cannot be modified after creation."
            )
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise PermissionDenied(
            "Audit logs are immutable and cannot be deleted."
        )

    @property
    def actor_display(self):
        if self.user:
            return self.user.get_full_name() or self.user.username
        return self.actor or "System"

    @property
    def action_display(self):
        return dict(self.ACTION_CHOICES).get(self.action, self.action)

    @property
    def resource_display(self):
        return dict(self.RESOURCE_TYPE_CHOICES).get(self.resource_type, self.resource_type)
