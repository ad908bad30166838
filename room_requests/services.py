"""
Request store - submission, de-duplication and terminal-state bookkeeping
for room requests.

Lock order everywhere is: rooms (ascending id) first, then request rows.
"""
from typing import List, Optional, Tuple

from django.db import IntegrityError, transaction
from django.utils import timezone

from core.services import BaseService
from core.constants import Decision, Defaults, RequestStatus, RequestType
from core.dto import RequestVariant
from core.exceptions import (
    DuplicateOccupant,
    DuplicatePendingRequest,
    InvalidStateTransition,
    OccupantNotFound,
    RequestNotFound,
    RoomFull,
    RoomNotFound,
    ValidationError,
)
from core.validators import RequestValidator
from common.utils import get_boarding_setting
from occupancy.services import OccupancyMutator
from occupancy.signals import emit_on_commit
from rooms.repositories import OccupantRepository, RoomRepository
from .models import RoomRequest
from .repositories import RoomRequestRepository


class RequestStore(BaseService):
    """Lifecycle of new-assignment, transfer and move-out requests"""

    def __init__(self, mutator: OccupancyMutator = None):
        super().__init__()
        self.request_repo = RoomRequestRepository()
        self.room_repo = RoomRepository()
        self.occupant_repo = OccupantRepository()
        self.mutator = mutator or OccupancyMutator()

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def submit(self, variant: RequestVariant, reason: str = "", notes: str = "") -> RoomRequest:
        """
        Validate and store a request as PENDING. Rooms are never mutated here.

        Raises:
            InvalidRequest: Same-room transfer, move-out date not in the future
            RoomNotFound: A referenced room doesn't exist
            DuplicatePendingRequest: Tenant already has a pending request of this kind
            DuplicateOccupant: New assignment for a tenant who is already housed
            RoomFull: New assignment into a room that is already full
            OccupantNotFound: Transfer / move-out for a tenant not in the source room
        """
        tenant_id = variant.tenant.tenant_id
        RequestValidator.validate_tenant_id(tenant_id)
        if variant.request_type == RequestType.TRANSFER:
            RequestValidator.validate_transfer_rooms(variant.source_room_id, variant.target_room_id)
        if variant.request_type == RequestType.MOVE_OUT:
            RequestValidator.validate_move_out_date(variant.planned_move_out_date, timezone.localdate())

        with transaction.atomic():
            rooms = self._lock_rooms(variant.room_ids)

            existing = self.request_repo.lock_pending(tenant_id, variant.request_type)
            if existing:
                raise DuplicatePendingRequest(tenant_id, variant.request_type, existing_id=existing.id)

            if variant.request_type == RequestType.NEW_ASSIGNMENT:
                self._check_new_assignment(variant, rooms[variant.target_room_id])
            else:
                if not self.occupant_repo.get_in_room(variant.source_room_id, tenant_id):
                    raise OccupantNotFound(variant.source_room_id, tenant_id)

            request = RoomRequest.from_variant(variant, reason=reason, notes=notes)
            try:
                with transaction.atomic():
                    request.save()
            except IntegrityError as e:
                raise DuplicatePendingRequest(tenant_id, variant.request_type) from e

        self.log_info(
            "Request submitted",
            request_id=request.id, request_type=request.request_type, tenant_id=tenant_id
        )
        return request

    def _check_new_assignment(self, variant, target_room):
        placement = self.occupant_repo.find_by_tenant(variant.tenant.tenant_id)
        if placement:
            raise DuplicateOccupant(variant.tenant.tenant_id, room_id=placement.room_id)
        # Soft check only; capacity is enforced again at approval
        if self.occupant_repo.count_in_room(target_room.id) >= target_room.capacity:
            raise RoomFull(target_room.id, capacity=target_room.capacity)

    # ------------------------------------------------------------------
    # Administrator response
    # ------------------------------------------------------------------

    def respond(self, request_id: int, decision: str, message: str = None,
                admin_id: str = None) -> RoomRequest:
        """
        Approve or reject a pending request.

        On APPROVE the occupancy change is applied first; if it fails the
        whole call rolls back, the request stays PENDING and the error is
        raised to the caller.

        Raises:
            RequestNotFound: Unknown request
            InvalidStateTransition: Request is already APPROVED or REJECTED
            CapacityExceededAtApproval, OccupantNotFound, DuplicateOccupant,
            RoomNotFound: Approval could not be applied
        """
        if decision not in (Decision.APPROVE, Decision.REJECT):
            raise ValidationError(
                message=f"Decision must be one of {Decision.APPROVE}, {Decision.REJECT}",
                code="INVALID_DECISION",
                details={'request_id': request_id, 'decision': decision}
            )

        snapshot = self.request_repo.get_by_id(request_id)
        if not snapshot:
            raise RequestNotFound(request_id)

        with transaction.atomic():
            # Rooms first so the lock order matches submit()
            if decision == Decision.APPROVE:
                self.room_repo.lock_many(snapshot.as_variant().room_ids)
            request = self.request_repo.lock(request_id)
            if not request:
                raise RequestNotFound(request_id)
            if not request.is_pending:
                raise InvalidStateTransition(request_id, request.status)

            changed_rooms = []
            if decision == Decision.APPROVE:
                changed_rooms = self.mutator.apply(request)
                request.status = RequestStatus.APPROVED
                request.admin_message = message or get_boarding_setting('DEFAULT_APPROVAL_MESSAGE')
            else:
                request.status = RequestStatus.REJECTED
                request.admin_message = message or get_boarding_setting('DEFAULT_REJECTION_MESSAGE')

            request.admin_id = admin_id or ''
            request.responded_at = timezone.now()
            request.save(update_fields=['status', 'admin_message', 'admin_id', 'responded_at'])
            emit_on_commit(request, changed_rooms)

        self.log_info(
            f"Request {request.status.lower()}",
            request_id=request.id, request_type=request.request_type,
            tenant_id=request.tenant_id, rooms=changed_rooms
        )
        return request

    def approve(self, request_id: int, message: str = None, admin_id: str = None) -> RoomRequest:
        return self.respond(request_id, Decision.APPROVE, message, admin_id)

    def reject(self, request_id: int, message: str = None, admin_id: str = None) -> RoomRequest:
        return self.respond(request_id, Decision.REJECT, message, admin_id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, request_id: int) -> RoomRequest:
        request = self.request_repo.get_by_id(request_id)
        if not request:
            raise RequestNotFound(request_id)
        return request

    def list(self, status: str = None, request_type: str = None, tenant_id: str = None,
             room_id: int = None) -> List[RoomRequest]:
        return list(self.request_repo.search(
            status=status, request_type=request_type, tenant_id=tenant_id, room_id=room_id
        ))

    def find_stale_pending(self) -> List[Tuple[RoomRequest, str]]:
        """
        Pending requests that can no longer be approved as filed, with the reason.
        Nothing is changed; the administrator (or the consistency command)
        decides what to do with them.
        """
        stale = []
        for request in self.request_repo.search(status=RequestStatus.PENDING):
            reason = self._staleness(request)
            if reason:
                stale.append((request, reason))
        return stale

    def _staleness(self, request) -> Optional[str]:
        variant = request.as_variant()
        existing_rooms = set(
            self.room_repo.get_all(id__in=variant.room_ids).values_list('id', flat=True)
        )
        missing = [room_id for room_id in variant.room_ids if room_id not in existing_rooms]
        if missing:
            return f"room {missing[0]} no longer exists"

        if request.request_type == RequestType.NEW_ASSIGNMENT:
            placement = self.occupant_repo.find_by_tenant(request.tenant_id)
            if placement:
                return f"tenant already occupies room {placement.room_id}"
            return None

        if not self.occupant_repo.get_in_room(request.source_room_id, request.tenant_id):
            return f"tenant is no longer in room {request.source_room_id}"
        return None

    def reject_stale(self, message_prefix: str = "Automatically rejected") -> List[RoomRequest]:
        """Reject every stale pending request with a system message"""
        rejected = []
        for request, reason in self.find_stale_pending():
            rejected.append(self.respond(
                request.id,
                Decision.REJECT,
                message=f"{message_prefix}: {reason}",
                admin_id=Defaults.SYSTEM_ADMIN_ID,
            ))
        return rejected

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _lock_rooms(self, room_ids):
        rooms = {room.id: room for room in self.room_repo.lock_many(room_ids)}
        for room_id in room_ids:
            if room_id not in rooms:
                raise RoomNotFound(room_id)
        return rooms
