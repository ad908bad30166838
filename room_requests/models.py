from django.db import models
from django.db.models import Q
from django.utils import timezone

from core.constants import RequestStatus, RequestType
from core.dto import MoveOut, NewAssignment, TenantSnapshot, Transfer
from rooms.models import Room


NEW_ASSIGNMENT_SHAPE = (
    Q(request_type=RequestType.NEW_ASSIGNMENT)
    & Q(target_room__isnull=False)
    & Q(source_room__isnull=True)
    & Q(planned_move_out_date__isnull=True)
)
TRANSFER_SHAPE = (
    Q(request_type=RequestType.TRANSFER)
    & Q(source_room__isnull=False)
    & Q(target_room__isnull=False)
    & ~Q(source_room=models.F('target_room'))
    & Q(planned_move_out_date__isnull=True)
)
MOVE_OUT_SHAPE = (
    Q(request_type=RequestType.MOVE_OUT)
    & Q(source_room__isnull=False)
    & Q(target_room__isnull=True)
    & Q(planned_move_out_date__isnull=False)
)


class RoomRequest(models.Model):
    """
    Tenant-initiated occupancy change: new assignment, transfer or move-out.

    Created PENDING, moved exactly once to APPROVED or REJECTED by an
    administrator, never deleted. Room references are plain ids without a
    database constraint so the record survives deletion of a room.
    """
    request_type = models.CharField(max_length=20, choices=RequestType.CHOICES)
    status = models.CharField(max_length=20, choices=RequestStatus.CHOICES, default=RequestStatus.PENDING)

    # Tenant snapshot (identity is owned externally)
    tenant_id = models.CharField(max_length=64, db_index=True)
    tenant_name = models.CharField(max_length=255)
    tenant_email = models.EmailField(blank=True)
    tenant_phone = models.CharField(max_length=30, blank=True)

    source_room = models.ForeignKey(
        Room, on_delete=models.DO_NOTHING, db_constraint=False,
        null=True, blank=True, related_name='outgoing_requests'
    )
    target_room = models.ForeignKey(
        Room, on_delete=models.DO_NOTHING, db_constraint=False,
        null=True, blank=True, related_name='incoming_requests'
    )
    move_in_date = models.DateField(null=True, blank=True)
    planned_move_out_date = models.DateField(null=True, blank=True)

    reason = models.TextField(blank=True)
    notes = models.TextField(blank=True)
    requested_at = models.DateTimeField(default=timezone.now)

    # Administrator response, set only on the terminal transition
    admin_id = models.CharField(max_length=64, blank=True)
    admin_message = models.TextField(blank=True)
    responded_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ['-requested_at', '-id']
        verbose_name = "Room Request"
        verbose_name_plural = "Room Requests"
        constraints = [
            models.CheckConstraint(
                condition=NEW_ASSIGNMENT_SHAPE | TRANSFER_SHAPE | MOVE_OUT_SHAPE,
                name='room_request_variant_shape',
            ),
            models.CheckConstraint(
                condition=(
                    Q(status=RequestStatus.PENDING, responded_at__isnull=True)
                    | (~Q(status=RequestStatus.PENDING) & Q(responded_at__isnull=False))
                ),
                name='room_request_response_iff_terminal',
            ),
            models.UniqueConstraint(
                fields=['tenant_id', 'request_type'],
                condition=Q(status=RequestStatus.PENDING),
                name='room_request_one_pending_per_family',
            ),
        ]
        indexes = [
            models.Index(fields=['status'], name='roomreq_status_idx'),
            models.Index(fields=['request_type', 'status'], name='roomreq_type_status_idx'),
            models.Index(fields=['tenant_id', 'status'], name='roomreq_tenant_status_idx'),
            models.Index(fields=['-requested_at'], name='roomreq_requested_idx'),
        ]

    def __str__(self):
        return f"{self.get_request_type_display()} #{self.pk} - {self.tenant_name} ({self.get_status_display()})"

    @property
    def is_pending(self):
        return self.status == RequestStatus.PENDING

    @property
    def admin_response(self):
        """``{message, respondedAt}``-style sub-record, present only once terminal"""
        if self.responded_at is None:
            return None
        return {
            'admin_id': self.admin_id,
            'message': self.admin_message,
            'responded_at': self.responded_at,
        }

    @property
    def tenant(self):
        return TenantSnapshot(
            tenant_id=self.tenant_id,
            name=self.tenant_name,
            email=self.tenant_email,
            phone=self.tenant_phone,
        )

    def as_variant(self):
        """The typed request this row stores"""
        if self.request_type == RequestType.NEW_ASSIGNMENT:
            return NewAssignment(
                tenant=self.tenant,
                target_room_id=self.target_room_id,
                move_in_date=self.move_in_date,
            )
        if self.request_type == RequestType.TRANSFER:
            return Transfer(
                tenant=self.tenant,
                source_room_id=self.source_room_id,
                target_room_id=self.target_room_id,
                move_in_date=self.move_in_date,
            )
        if self.request_type == RequestType.MOVE_OUT:
            return MoveOut(
                tenant=self.tenant,
                source_room_id=self.source_room_id,
                planned_move_out_date=self.planned_move_out_date,
            )
        raise ValueError(f"Unknown request type: {self.request_type}")

    @classmethod
    def from_variant(cls, variant, reason="", notes=""):
        """Unsaved row for a typed request"""
        tenant = variant.tenant
        return cls(
            request_type=variant.request_type,
            tenant_id=tenant.tenant_id,
            tenant_name=tenant.name,
            tenant_email=tenant.email,
            tenant_phone=tenant.phone,
            source_room_id=getattr(variant, 'source_room_id', None),
            target_room_id=getattr(variant, 'target_room_id', None),
            move_in_date=getattr(variant, 'move_in_date', None),
            planned_move_out_date=getattr(variant, 'planned_move_out_date', None),
            reason=reason,
            notes=notes,
        )
