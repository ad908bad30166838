"""
Audit Logging Helper Functions

Provides a centralized way to log all system actions.
"""

from audit.models import AuditLog
from core.constants import RequestStatus
import logging

logger = logging.getLogger(__name__)


def log_action(action, resource_type, resource_id, description, user=None, actor='',
               request=None, metadata=None):
    """
    Log an action to the audit log.

    Args:
        action: Action type (CREATE, APPROVE_REQUEST, etc.)
        resource_type: Type of resource (Room, RoomRequest, etc.)
        resource_id: ID of the resource
        description: Human-readable description
        user: Django user who performed the action (optional)
        actor: Free-form actor id when there is no user (optional)
        request: HTTP request object (optional)
        metadata: Additional context data (optional)

    Returns:
        AuditLog instance, or None if writing the log failed

    Example:
        log_action(
            action=AuditLog.ACTION_CREATE,
            resource_type=AuditLog.RESOURCE_ROOM,
            resource_id=room.id,
            description=f"Created room: {room.room_code}",
            user=request.user,
            request=request
        )
    """
    try:
        ip_address = None
        user_agent = None
        if request is not None:
            ip_address = get_client_ip(request)
            user_agent = request.META.get('HTTP_USER_AGENT', '')[:500]

        if user is not None and not getattr(user, 'is_authenticated', False):
            user = None

        audit_log = AuditLog.objects.create(
            user=user,
            actor=actor or (user.username if user else ''),
            action=action,
            resource_type=resource_type,
            resource_id='' if resource_id is None else str(resource_id),
            description=description,
            ip_address=ip_address,
            user_agent=user_agent,
            metadata=metadata or {}
        )

        logger.info(f"Audit: {audit_log.actor_display} - {action} - {resource_type} #{resource_id}")
        return audit_log

    except Exception as e:
        # Audit failures never undo the action being audited
        logger.error(f"Failed to create audit log: {e}", exc_info=True)
        return None


def get_client_ip(request):
    """
    Extract client IP address from request.
    Handles proxies and load balancers.
    """
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        return x_forwarded_for.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR')


def log_room_create(user, room, request=None):
    return log_action(
        action=AuditLog.ACTION_CREATE,
        resource_type=AuditLog.RESOURCE_ROOM,
        resource_id=room.id,
        description=f"Created room: {room.room_code}",
        user=user,
        request=request,
        metadata={
            'property_id': room.boarding_property_id,
            'capacity': room.capacity,
        }
    )


def log_room_delete(user, room_id, request=None):
    return log_action(
        action=AuditLog.ACTION_DELETE,
        resource_type=AuditLog.RESOURCE_ROOM,
        resource_id=room_id,
        description=f"Deleted room #{room_id}",
        user=user,
        request=request,
    )


def log_maintenance(user, room, request=None):
    state = "on" if room.maintenance else "off"
    return log_action(
        action=AuditLog.ACTION_MAINTENANCE,
        resource_type=AuditLog.RESOURCE_ROOM,
        resource_id=room.id,
        description=f"Maintenance {state} for room {room.room_code}",
        user=user,
        request=request,
        metadata={'maintenance': room.maintenance}
    )


def log_direct_assignment(user, room, tenant_id, request=None):
    """Administrator placed a tenant without going through a request"""
    return log_action(
        action=AuditLog.ACTION_ASSIGN_TENANT,
        resource_type=AuditLog.RESOURCE_OCCUPANT,
        resource_id=tenant_id,
        description=f"Assigned tenant {tenant_id} to room {room.room_code}",
        user=user,
        request=request,
        metadata={'tenant_id': tenant_id, 'room_id': room.id}
    )


def log_direct_vacate(user, room, tenant_id, request=None):
    return log_action(
        action=AuditLog.ACTION_VACATE,
        resource_type=AuditLog.RESOURCE_OCCUPANT,
        resource_id=tenant_id,
        description=f"Removed tenant {tenant_id} from room {room.room_code}",
        user=user,
        request=request,
        metadata={'tenant_id': tenant_id, 'room_id': room.id}
    )


def log_request_submitted(room_request, user=None, request=None):
    return log_action(
        action=AuditLog.ACTION_SUBMIT_REQUEST,
        resource_type=AuditLog.RESOURCE_REQUEST,
        resource_id=room_request.id,
        description=f"{room_request.get_request_type_display()} request submitted by {room_request.tenant_name}",
        user=user,
        actor=room_request.tenant_id,
        request=request,
        metadata=_request_metadata(room_request)
    )


def log_request_response(room_request):
    """Approval or rejection of a request"""
    approved = room_request.status == RequestStatus.APPROVED
    return log_action(
        action=AuditLog.ACTION_APPROVE_REQUEST if approved else AuditLog.ACTION_REJECT_REQUEST,
        resource_type=AuditLog.RESOURCE_REQUEST,
        resource_id=room_request.id,
        description=(
            f"{room_request.get_request_type_display()} request for {room_request.tenant_name} "
            f"{'approved' if approved else 'rejected'}: {room_request.admin_message}"
        ),
        actor=room_request.admin_id,
        metadata=_request_metadata(room_request)
    )


def log_occupancy_change(room_request, tenant_id, room_ids):
    return log_action(
        action=AuditLog.ACTION_OCCUPANCY_CHANGED,
        resource_type=AuditLog.RESOURCE_OCCUPANT,
        resource_id=tenant_id,
        description=f"Occupancy changed for tenant {tenant_id} in rooms {', '.join(map(str, room_ids))}",
        actor=room_request.admin_id,
        metadata={
            'tenant_id': tenant_id,
            'room_ids': list(room_ids),
            'request_id': room_request.id,
            'request_type': room_request.request_type,
        }
    )


def _request_metadata(room_request):
    return {
        'tenant_id': room_request.tenant_id,
        'request_type': room_request.request_type,
        'status': room_request.status,
        'source_room_id': room_request.source_room_id,
        'target_room_id': room_request.target_room_id,
    }

