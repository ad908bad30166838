"""
Data Transfer Objects (DTOs).
Used for passing data between layers without exposing domain models.

Room requests are modelled as a tagged variant: ``NewAssignment``,
``Transfer`` and ``MoveOut`` each carry exactly the fields their kind needs,
so a transfer without a source room cannot be constructed.
"""
from dataclasses import dataclass, field
from typing import ClassVar, List, Optional, Union
from decimal import Decimal
from datetime import date

from core.constants import Defaults, PricePeriod, RequestType, SizeUnit


@dataclass
class PropertyDTO:
    """Data Transfer Object for Property"""
    id: Optional[int] = None
    name: str = ""
    street: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: str = Defaults.COUNTRY
    description: str = ""
    amenities: List[str] = field(default_factory=list)
    contact_phone: str = ""
    contact_email: str = ""
    is_active: bool = True


@dataclass
class RoomDTO:
    """Descriptive room metadata. Not part of the occupancy invariants."""
    room_number: str = ""
    room_code: str = ""
    description: str = ""
    facilities: List[str] = field(default_factory=list)
    price_amount: Decimal = Decimal('0')
    price_currency: str = Defaults.CURRENCY
    price_period: str = PricePeriod.MONTHLY
    size_area: str = ""
    size_unit: str = SizeUnit.SQM


@dataclass
class OccupantDTO:
    """Snapshot of an externally owned tenant record, taken at assignment time"""
    tenant_id: str = ""
    name: str = ""
    email: str = ""
    phone: str = ""
    move_in_date: Optional[date] = None
    contract_end_date: Optional[date] = None
    notes: str = ""


@dataclass(frozen=True)
class TenantSnapshot:
    """Identity fields supplied by the directory collaborator"""
    tenant_id: str
    name: str = ""
    email: str = ""
    phone: str = ""

    def to_occupant(self, move_in_date=None, notes=""):
        return OccupantDTO(
            tenant_id=self.tenant_id,
            name=self.name,
            email=self.email,
            phone=self.phone,
            move_in_date=move_in_date,
            notes=notes,
        )


@dataclass(frozen=True)
class NewAssignment:
    tenant: TenantSnapshot
    target_room_id: int
    move_in_date: Optional[date] = None

    request_type: ClassVar[str] = RequestType.NEW_ASSIGNMENT

    @property
    def room_ids(self):
        return [self.target_room_id]


@dataclass(frozen=True)
class Transfer:
    tenant: TenantSnapshot
    source_room_id: int
    target_room_id: int
    move_in_date: Optional[date] = None

    request_type: ClassVar[str] = RequestType.TRANSFER

    @property
    def room_ids(self):
        return [self.source_room_id, self.target_room_id]


@dataclass(frozen=True)
class MoveOut:
    tenant: TenantSnapshot
    source_room_id: int
    planned_move_out_date: date

    request_type: ClassVar[str] = RequestType.MOVE_OUT

    @property
    def room_ids(self):
        return [self.source_room_id]


RequestVariant = Union[NewAssignment, Transfer, MoveOut]
