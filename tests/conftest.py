"""
Shared fixtures: a property, a room factory, the services, and API clients.
"""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APIClient

from core.dto import MoveOut, NewAssignment, OccupantDTO, PropertyDTO, RoomDTO, TenantSnapshot, Transfer
from occupancy.services import OccupancyMutator
from properties.services import PropertyService
from room_requests.services import RequestStore
from rooms.services import RoomRegistry


@pytest.fixture
def registry():
    return RoomRegistry()


@pytest.fixture
def mutator(registry):
    return OccupancyMutator(registry=registry)


@pytest.fixture
def store(mutator):
    return RequestStore(mutator=mutator)


@pytest.fixture
def boarding_property(db):
    return PropertyService().create_property(PropertyDTO(
        name="Sunrise Boarding House",
        street="12 Mabini St",
        city="Quezon City",
        state="Metro Manila",
        zip_code="1100",
    ))


@pytest.fixture
def make_room(registry, boarding_property):
    counter = {'n': 0}

    def _make(capacity=1, room_number=None, maintenance=False):
        counter['n'] += 1
        room = registry.create_room(
            boarding_property.id,
            capacity,
            RoomDTO(room_number=room_number or f"{100 + counter['n']}", price_amount=Decimal('3500.00')),
        )
        if maintenance:
            room = registry.set_maintenance(room.id, True)
        return room

    return _make


@pytest.fixture
def place(registry):
    """Put a tenant straight into a room, bypassing requests"""

    def _place(room, tenant_id, name=None):
        return registry.add_occupant(room.id, OccupantDTO(tenant_id=tenant_id, name=name or f"Tenant {tenant_id}"))

    return _place


def tenant(tenant_id, name=None):
    return TenantSnapshot(tenant_id=tenant_id, name=name or f"Tenant {tenant_id}", email=f"{tenant_id.lower()}@example.com")


def new_assignment(tenant_id, room):
    return NewAssignment(tenant=tenant(tenant_id), target_room_id=room.id)


def transfer(tenant_id, source, target):
    return Transfer(tenant=tenant(tenant_id), source_room_id=source.id, target_room_id=target.id)


def move_out(tenant_id, source, days_ahead=30):
    return MoveOut(
        tenant=tenant(tenant_id),
        source_room_id=source.id,
        planned_move_out_date=timezone.localdate() + timedelta(days=days_ahead),
    )


def occupant_ids(registry, room):
    return [o.tenant_id for o in registry.get_room(room.id).occupants.all()]


@pytest.fixture
def admin_user(db):
    return get_user_model().objects.create_user(
        username="admin", password="admin-pass-123", is_staff=True
    )


@pytest.fixture
def regular_user(db):
    return get_user_model().objects.create_user(username="tenant-portal", password="portal-pass-123")


@pytest.fixture
def admin_client(admin_user):
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


@pytest.fixture
def user_client(regular_user):
    client = APIClient()
    client.force_authenticate(user=regular_user)
    return client
