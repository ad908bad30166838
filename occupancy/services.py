"""
Occupancy mutator - turns an approved request into room registry writes.

Capacity is re-validated here, at approval time, not at submission: other
approvals may have consumed the space in between. Each variant runs as one
atomic unit; a transfer either changes both rooms or neither.
"""
from typing import List

from django.db import transaction
from django.utils import timezone

from core.services import BaseService
from core.constants import RequestType
from core.dto import OccupantDTO
from core.exceptions import CapacityExceededAtApproval, RoomFull, RoomNotFound
from rooms.services import RoomRegistry


class OccupancyMutator(BaseService):
    """Applies approved requests to the room registry"""

    def __init__(self, registry: RoomRegistry = None):
        super().__init__()
        self.registry = registry or RoomRegistry()

    def apply(self, request) -> List[int]:
        """
        Perform the occupancy change a request describes.

        Returns:
            Ids of the rooms whose occupant lists changed

        Raises:
            CapacityExceededAtApproval: Target room filled up since submission
            OccupantNotFound: Tenant left the source room by some other path
            DuplicateOccupant: Tenant got housed elsewhere since submission
            RoomNotFound: A referenced room was deleted
        """
        handlers = {
            RequestType.NEW_ASSIGNMENT: self._assign,
            RequestType.TRANSFER: self._transfer,
            RequestType.MOVE_OUT: self._move_out,
        }
        variant = request.as_variant()
        with transaction.atomic():
            return handlers[request.request_type](request, variant)

    def _assign(self, request, variant) -> List[int]:
        occupant = variant.tenant.to_occupant(
            move_in_date=variant.move_in_date or timezone.localdate(),
            notes=request.notes,
        )
        try:
            self.registry.add_occupant(variant.target_room_id, occupant, approving_request_id=request.id)
        except RoomFull as e:
            raise CapacityExceededAtApproval(variant.target_room_id, request_id=request.id) from e

        self.log_info(
            "Tenant assigned",
            request_id=request.id, tenant_id=variant.tenant.tenant_id, room_id=variant.target_room_id
        )
        return [variant.target_room_id]

    def _transfer(self, request, variant) -> List[int]:
        source_id, target_id = variant.source_room_id, variant.target_room_id
        tenant_id = variant.tenant.tenant_id

        # Both rooms locked up front, ascending id
        locked = {room.id: room for room in self.registry.room_repo.lock_many([source_id, target_id])}
        for room_id in (source_id, target_id):
            if room_id not in locked:
                raise RoomNotFound(room_id)
        source, target = locked[source_id], locked[target_id]

        if self.registry.occupant_repo.count_in_room(target_id) >= target.capacity:
            raise CapacityExceededAtApproval(target_id, request_id=request.id)

        current = self.registry.get_occupant(source_id, tenant_id)
        self.registry.remove_occupant(source_id, tenant_id)

        moved = OccupantDTO(
            tenant_id=current.tenant_id,
            name=current.name,
            email=current.email,
            phone=current.phone,
            move_in_date=variant.move_in_date or timezone.localdate(),
            contract_end_date=current.contract_end_date,
            notes=self._transfer_note(current.notes, source),
        )
        try:
            self.registry.add_occupant(target_id, moved)
        except Exception as e:
            self.log_error(
                "Transfer insert failed, restoring tenant to source room",
                error=e, request_id=request.id, tenant_id=tenant_id,
                source_room_id=source_id, target_room_id=target_id,
            )
            self.registry.restore_occupant(current)
            if isinstance(e, RoomFull):
                raise CapacityExceededAtApproval(target_id, request_id=request.id) from e
            raise

        self.log_info(
            "Tenant transferred",
            request_id=request.id, tenant_id=tenant_id, source_room_id=source_id, target_room_id=target_id
        )
        return [source_id, target_id]

    def _move_out(self, request, variant) -> List[int]:
        self.registry.remove_occupant(variant.source_room_id, variant.tenant.tenant_id)
        self.log_info(
            "Tenant moved out",
            request_id=request.id, tenant_id=variant.tenant.tenant_id, room_id=variant.source_room_id
        )
        return [variant.source_room_id]

    @staticmethod
    def _transfer_note(notes, source_room):
        line = f"Transferred from {source_room.display_name} on {timezone.localdate():%Y-%m-%d}"
        if notes:
            return f"{notes}\n\n{line}"
        return line
