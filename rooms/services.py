"""
Room registry - sole authority for room capacity and occupant membership.

Every occupant write happens inside ``transaction.atomic`` with the room row
locked (``select_for_update``), so two concurrent writers cannot both pass the
capacity check and then both insert.
"""
from dataclasses import asdict
from typing import Dict, Iterable, List, Optional

from django.db import IntegrityError, transaction

from core.services import BaseService
from core.constants import RequestType
from core.dto import OccupantDTO, RoomDTO
from core.exceptions import (
    DuplicateOccupant,
    DuplicatePendingRequest,
    OccupantNotFound,
    PropertyNotFound,
    RoomFull,
    RoomNotEmpty,
    RoomNotFound,
    ValidationError,
)
from core.validators import CapacityValidator
from .models import Room, Occupant
from room_requests.repositories import RoomRequestRepository
from .repositories import RoomRepository, OccupantRepository
from .status import room_status


ROOM_METADATA_FIELDS = {
    'room_number', 'room_code', 'description', 'facilities', 'price_amount',
    'price_currency', 'price_period', 'size_area', 'size_unit', 'capacity',
}
OCCUPANT_SNAPSHOT_FIELDS = {'name', 'email', 'phone', 'move_in_date', 'contract_end_date', 'notes'}


class RoomRegistry(BaseService):
    """Capacity-checked room and occupant management"""

    def __init__(self):
        super().__init__()
        self.room_repo = RoomRepository()
        self.occupant_repo = OccupantRepository()
        self.request_repo = RoomRequestRepository()

    # ------------------------------------------------------------------
    # Rooms
    # ------------------------------------------------------------------

    def create_room(self, property_id: int, capacity: int, metadata: RoomDTO = None) -> Room:
        """
        Create a room in a property.

        Raises:
            InvalidCapacity: If capacity < 1
            PropertyNotFound: If the property doesn't exist
            ValidationError: If the room number or code is already taken
        """
        from properties.models import Property

        CapacityValidator.validate_capacity(capacity)
        metadata = metadata or RoomDTO()

        if not Property.objects.filter(id=property_id).exists():
            raise PropertyNotFound(property_id)

        fields = asdict(metadata)
        if not fields['room_code']:
            fields['room_code'] = f"{property_id}-{fields['room_number']}"

        try:
            with transaction.atomic():
                room = self.room_repo.create(
                    boarding_property_id=property_id,
                    capacity=capacity,
                    **fields
                )
        except IntegrityError as e:
            raise ValidationError(
                message="A room with this number or code already exists",
                code="DUPLICATE_ROOM",
                details={'property_id': property_id, 'room_code': fields['room_code']}
            ) from e

        self.log_info(f"Room created: {room.room_code}", room_id=room.id, property_id=property_id)
        return room

    def get_room(self, room_id: int) -> Room:
        room = self.room_repo.get_with_occupants(room_id)
        if not room:
            raise RoomNotFound(room_id)
        return room

    def update_room(self, room_id: int, changes: Dict) -> Room:
        """
        Update descriptive metadata. Capacity may change but never below the
        current occupant count. The owning property is immutable.
        """
        if 'boarding_property' in changes or 'boarding_property_id' in changes:
            raise ValidationError(
                message="A room cannot be moved to another property",
                code="IMMUTABLE_FIELD",
                details={'room_id': room_id, 'field': 'property'}
            )
        unknown = set(changes) - ROOM_METADATA_FIELDS
        if unknown:
            raise ValidationError(
                message=f"Unknown room fields: {', '.join(sorted(unknown))}",
                details={'room_id': room_id}
            )

        with transaction.atomic():
            room = self._lock_room(room_id)
            if 'capacity' in changes:
                CapacityValidator.validate_capacity(
                    changes['capacity'],
                    occupant_count=self.occupant_repo.count_in_room(room_id),
                    room_id=room_id
                )
            try:
                with transaction.atomic():
                    self.room_repo.update(room, **changes)
            except IntegrityError as e:
                raise ValidationError(
                    message="A room with this number or code already exists",
                    code="DUPLICATE_ROOM",
                    details={'room_id': room_id}
                ) from e

        self.log_info(f"Room updated: {room.room_code}", room_id=room_id, fields=sorted(changes))
        return self.get_room(room_id)

    def set_maintenance(self, room_id: int, flag: bool) -> Room:
        """Toggle the maintenance override. No capacity implication."""
        with transaction.atomic():
            room = self._lock_room(room_id)
            self.room_repo.update(room, maintenance=bool(flag))
        self.log_info("Room maintenance flag set", room_id=room_id, maintenance=bool(flag))
        return self.get_room(room_id)

    def delete_room(self, room_id: int) -> None:
        """
        Raises:
            RoomNotEmpty: If the room still has occupants
        """
        with transaction.atomic():
            room = self._lock_room(room_id)
            count = self.occupant_repo.count_in_room(room_id)
            if count:
                raise RoomNotEmpty(room_id, occupant_count=count)
            self.room_repo.delete(room)
        self.log_info("Room deleted", room_id=room_id)

    def list_rooms(self, property_id: int = None, statuses: Iterable[str] = None,
                   min_capacity: int = None) -> List[Room]:
        """
        Rooms filtered by property, minimum capacity and derived status.
        Status filtering goes through the status deriver, one room at a time.
        """
        rooms = list(self.room_repo.search(property_id=property_id, min_capacity=min_capacity))
        if statuses:
            wanted = {s.upper() for s in statuses}
            rooms = [room for room in rooms if room_status(room) in wanted]
        return rooms

    # ------------------------------------------------------------------
    # Occupants
    # ------------------------------------------------------------------

    def add_occupant(self, room_id: int, occupant: OccupantDTO,
                     approving_request_id: int = None) -> Room:
        """
        Add a tenant to a room.

        A tenant with a pending new-assignment request can only be placed by
        approving that request (``approving_request_id``).

        Raises:
            RoomNotFound: If the room doesn't exist
            RoomFull: If the room is at capacity
            DuplicateOccupant: If the tenant already occupies any room
            DuplicatePendingRequest: If another new-assignment request is pending
        """
        with transaction.atomic():
            room = self._lock_room(room_id)
            pending = self.request_repo.lock_pending(occupant.tenant_id, RequestType.NEW_ASSIGNMENT)
            if pending and pending.id != approving_request_id:
                raise DuplicatePendingRequest(
                    occupant.tenant_id, RequestType.NEW_ASSIGNMENT, existing_id=pending.id
                )
            self._insert_occupant(room, occupant)

        self.log_info("Occupant added", room_id=room_id, tenant_id=occupant.tenant_id)
        return self.get_room(room_id)

    def remove_occupant(self, room_id: int, tenant_id: str) -> Room:
        """
        Raises:
            OccupantNotFound: If the tenant is not in that room
        """
        with transaction.atomic():
            self._lock_room(room_id)
            occupant = self.occupant_repo.get_in_room(room_id, tenant_id)
            if not occupant:
                raise OccupantNotFound(room_id, tenant_id)
            self.occupant_repo.delete(occupant)

        self.log_info("Occupant removed", room_id=room_id, tenant_id=tenant_id)
        return self.get_room(room_id)

    def restore_occupant(self, occupant: Occupant) -> Room:
        """
        Put a previously removed occupant row back exactly as it was
        (same primary key, same position in the room's move-in order).
        """
        with transaction.atomic():
            room = self._lock_room(occupant.room_id)
            self._check_capacity(room)
            restored = Occupant(
                id=occupant.id,
                room_id=occupant.room_id,
                tenant_id=occupant.tenant_id,
                name=occupant.name,
                email=occupant.email,
                phone=occupant.phone,
                move_in_date=occupant.move_in_date,
                contract_end_date=occupant.contract_end_date,
                notes=occupant.notes,
                added_at=occupant.added_at,
            )
            restored.save(force_insert=True)

        self.log_warning("Occupant restored", room_id=occupant.room_id, tenant_id=occupant.tenant_id)
        return self.get_room(occupant.room_id)

    def update_occupant(self, room_id: int, tenant_id: str, changes: Dict) -> Occupant:
        """Update snapshot fields of an occupant. Membership is not touched."""
        unknown = set(changes) - OCCUPANT_SNAPSHOT_FIELDS
        if unknown:
            raise ValidationError(
                message=f"Cannot update occupant fields: {', '.join(sorted(unknown))}",
                details={'room_id': room_id, 'tenant_id': tenant_id}
            )
        with transaction.atomic():
            self._lock_room(room_id)
            occupant = self.occupant_repo.get_in_room(room_id, tenant_id)
            if not occupant:
                raise OccupantNotFound(room_id, tenant_id)
            self.occupant_repo.update(occupant, **changes)
        self.log_info("Occupant updated", room_id=room_id, tenant_id=tenant_id, fields=sorted(changes))
        return occupant

    def get_occupant(self, room_id: int, tenant_id: str) -> Occupant:
        occupant = self.occupant_repo.get_in_room(room_id, tenant_id)
        if not occupant:
            raise OccupantNotFound(room_id, tenant_id)
        return occupant

    def find_room_for_tenant(self, tenant_id: str) -> Optional[Room]:
        """The room a tenant currently lives in, or None"""
        occupant = self.occupant_repo.find_by_tenant(tenant_id)
        if not occupant:
            return None
        return self.get_room(occupant.room_id)

    def list_occupants(self) -> List[Occupant]:
        """Every housed tenant across all rooms"""
        return list(self.occupant_repo.all_with_rooms())

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _lock_room(self, room_id: int) -> Room:
        room = self.room_repo.lock(room_id)
        if not room:
            raise RoomNotFound(room_id)
        return room

    def _check_capacity(self, room: Room):
        if self.occupant_repo.count_in_room(room.id) >= room.capacity:
            raise RoomFull(room.id, capacity=room.capacity)

    def _insert_occupant(self, room: Room, occupant: OccupantDTO) -> Occupant:
        self._check_capacity(room)

        existing = self.occupant_repo.find_by_tenant(occupant.tenant_id)
        if existing:
            raise DuplicateOccupant(occupant.tenant_id, room_id=existing.room_id)

        fields = {k: v for k, v in asdict(occupant).items() if v is not None}
        try:
            with transaction.atomic():
                return self.occupant_repo.create(room=room, **fields)
        except IntegrityError as e:
            # Lost a race with another placement of the same tenant
            raise DuplicateOccupant(occupant.tenant_id) from e
