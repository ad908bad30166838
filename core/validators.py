"""
Validation utilities and validators.
Centralized validation logic following single responsibility principle.
"""
from datetime import date

from core.exceptions import InvalidCapacity, InvalidRequest


class CapacityValidator:
    """Validates room capacity"""

    @staticmethod
    def validate_capacity(capacity, occupant_count: int = 0, room_id=None):
        """Capacity must be a positive integer and not below the current headcount"""
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 1:
            raise InvalidCapacity(
                message="Capacity must be at least 1",
                details={'room_id': room_id, 'capacity': capacity}
            )
        if capacity < occupant_count:
            raise InvalidCapacity(
                message=f"Capacity {capacity} is below the current {occupant_count} occupants",
                details={'room_id': room_id, 'capacity': capacity, 'occupants': occupant_count}
            )


class RequestValidator:
    """Validates request fields that do not depend on occupancy"""

    @staticmethod
    def validate_transfer_rooms(source_room_id, target_room_id):
        if source_room_id == target_room_id:
            raise InvalidRequest(
                message="Source and target room must be different",
                code="SAME_ROOM_TRANSFER",
                details={'room_id': source_room_id}
            )

    @staticmethod
    def validate_move_out_date(planned_move_out_date: date, submitted_on: date):
        """Planned move-out must fall strictly after the submission date"""
        if planned_move_out_date is None:
            raise InvalidRequest(
                message="Planned move-out date is required",
                code="MISSING_MOVE_OUT_DATE"
            )
        if planned_move_out_date <= submitted_on:
            raise InvalidRequest(
                message="Planned move-out date must be after the submission date",
                code="INVALID_MOVE_OUT_DATE",
                details={
                    'planned_move_out_date': planned_move_out_date.isoformat(),
                    'submitted_on': submitted_on.isoformat(),
                }
            )

    @staticmethod
    def validate_tenant_id(tenant_id):
        if not tenant_id or not str(tenant_id).strip():
            raise InvalidRequest(message="Tenant ID is required", code="MISSING_TENANT_ID")
