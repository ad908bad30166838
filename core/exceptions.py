"""
Custom exceptions for the application.
Following domain-driven design principles with specific exception types.

Every exception carries a stable ``code`` and a ``details`` dict naming the
room / tenant / request involved, so callers can decide on a remedial action.
"""


class BaseApplicationException(Exception):
    """Base exception for all application-specific exceptions"""
    default_message = "An application error occurred"
    default_code = "APPLICATION_ERROR"

    def __init__(self, message=None, code=None, details=None):
        self.message = message or self.default_message
        self.code = code or self.default_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self):
        return {'detail': self.message, 'code': self.code, 'details': self.details}


class ValidationError(BaseApplicationException):
    """Raised when validation fails"""
    default_message = "Validation failed"
    default_code = "VALIDATION_ERROR"


class NotFoundError(BaseApplicationException):
    """Raised when a resource is not found"""
    default_message = "Resource not found"
    default_code = "NOT_FOUND"

    def __init__(self, resource_type=None, resource_id=None, **kwargs):
        self.resource_type = resource_type
        self.resource_id = resource_id
        if 'message' not in kwargs and resource_type:
            kwargs['message'] = f"{resource_type} {resource_id} not found"
        details = kwargs.pop('details', None) or {}
        if resource_type:
            details.setdefault('resource_type', resource_type)
            details.setdefault('resource_id', resource_id)
        super().__init__(details=details, **kwargs)


class BusinessLogicError(BaseApplicationException):
    """Raised when business rule is violated"""
    default_message = "Business rule violation"
    default_code = "BUSINESS_RULE_VIOLATION"


class ConcurrentModificationError(BusinessLogicError):
    """Raised when concurrent modification is detected"""
    default_message = "Resource is being modified by another user"
    default_code = "CONCURRENT_MODIFICATION"


# ============================================================================
# ROOM REGISTRY
# ============================================================================

class InvalidCapacity(ValidationError):
    """Capacity below 1, or below the number of current occupants"""
    default_message = "Room capacity must be at least 1"
    default_code = "INVALID_CAPACITY"


class RoomNotFound(NotFoundError):
    default_code = "ROOM_NOT_FOUND"

    def __init__(self, room_id, **kwargs):
        super().__init__(resource_type="Room", resource_id=room_id, **kwargs)


class PropertyNotFound(NotFoundError):
    default_code = "PROPERTY_NOT_FOUND"

    def __init__(self, property_id, **kwargs):
        super().__init__(resource_type="Property", resource_id=property_id, **kwargs)


class OccupantNotFound(NotFoundError):
    """Tenant is not currently in the given room"""
    default_code = "OCCUPANT_NOT_FOUND"

    def __init__(self, room_id, tenant_id, **kwargs):
        self.room_id = room_id
        self.tenant_id = tenant_id
        kwargs.setdefault('message', f"Tenant {tenant_id} is not an occupant of room {room_id}")
        super().__init__(
            resource_type="Occupant",
            resource_id=tenant_id,
            details={'room_id': room_id, 'tenant_id': tenant_id},
            **kwargs
        )


class RoomFull(BusinessLogicError):
    default_code = "ROOM_FULL"

    def __init__(self, room_id, capacity=None, **kwargs):
        self.room_id = room_id
        kwargs.setdefault('message', f"Room {room_id} is already at full capacity")
        super().__init__(details={'room_id': room_id, 'capacity': capacity}, **kwargs)


class DuplicateOccupant(BusinessLogicError):
    """Tenant already occupies a room (any room, not just the target)"""
    default_code = "DUPLICATE_OCCUPANT"

    def __init__(self, tenant_id, room_id=None, **kwargs):
        self.tenant_id = tenant_id
        self.room_id = room_id
        kwargs.setdefault('message', f"Tenant {tenant_id} already occupies room {room_id}")
        super().__init__(details={'tenant_id': tenant_id, 'room_id': room_id}, **kwargs)


class RoomNotEmpty(BusinessLogicError):
    default_code = "ROOM_NOT_EMPTY"

    def __init__(self, room_id, occupant_count=None, **kwargs):
        self.room_id = room_id
        kwargs.setdefault('message', "Cannot delete room with occupants. Please remove occupants first.")
        super().__init__(details={'room_id': room_id, 'occupants': occupant_count}, **kwargs)


class PropertyNotEmpty(BusinessLogicError):
    default_code = "PROPERTY_NOT_EMPTY"

    def __init__(self, property_id, room_count=None, **kwargs):
        kwargs.setdefault('message', "Cannot delete a property that still has rooms")
        super().__init__(details={'property_id': property_id, 'rooms': room_count}, **kwargs)


# ============================================================================
# REQUEST STORE
# ============================================================================

class InvalidRequest(ValidationError):
    """Variant-specific submission precondition failed"""
    default_message = "Request is not valid"
    default_code = "INVALID_REQUEST"


class RequestNotFound(NotFoundError):
    default_code = "REQUEST_NOT_FOUND"

    def __init__(self, request_id, **kwargs):
        super().__init__(resource_type="Request", resource_id=request_id, **kwargs)


class DuplicatePendingRequest(BusinessLogicError):
    default_code = "DUPLICATE_PENDING_REQUEST"

    def __init__(self, tenant_id, request_type, existing_id=None, **kwargs):
        kwargs.setdefault(
            'message',
            f"Tenant {tenant_id} already has a pending {request_type} request"
        )
        super().__init__(
            details={'tenant_id': tenant_id, 'request_type': request_type, 'existing_request_id': existing_id},
            **kwargs
        )


class InvalidStateTransition(BusinessLogicError):
    default_code = "INVALID_STATE_TRANSITION"

    def __init__(self, request_id, current_status, **kwargs):
        self.current_status = current_status
        kwargs.setdefault('message', f"This request is already {current_status.lower()}")
        super().__init__(details={'request_id': request_id, 'status': current_status}, **kwargs)


# ============================================================================
# OCCUPANCY MUTATOR
# ============================================================================

class CapacityExceededAtApproval(ConcurrentModificationError):
    """
    Target room filled up between submission and approval.
    The request stays PENDING; the administrator picks another room or rejects.
    """
    default_code = "CAPACITY_EXCEEDED_AT_APPROVAL"

    def __init__(self, room_id, request_id=None, **kwargs):
        self.room_id = room_id
        self.request_id = request_id
        kwargs.setdefault('message', f"Room {room_id} is now full, cannot approve request {request_id}")
        super().__init__(details={'room_id': room_id, 'request_id': request_id}, **kwargs)
