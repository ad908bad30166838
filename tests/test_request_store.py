"""
Tests for RequestStore: submission preconditions, de-duplication and the
terminal-state lifecycle.
"""

from __future__ import annotations

from datetime import timedelta

import pytest
from django.db import IntegrityError, transaction
from django.utils import timezone

from core.constants import Decision, RequestStatus, RequestType
from core.dto import MoveOut, Transfer
from core.exceptions import (
    DuplicateOccupant,
    DuplicatePendingRequest,
    InvalidRequest,
    InvalidStateTransition,
    OccupantNotFound,
    RequestNotFound,
    RoomFull,
    RoomNotFound,
    ValidationError,
)
from room_requests.models import RoomRequest

from .conftest import move_out, new_assignment, occupant_ids, tenant, transfer

pytestmark = pytest.mark.django_db


class TestSubmitNewAssignment:
    """NewAssignment preconditions."""

    def test_stored_pending(self, store, make_room):
        room = make_room(capacity=2)
        request = store.submit(new_assignment("T1", room), reason="Starting work nearby")
        assert request.status == RequestStatus.PENDING
        assert request.request_type == RequestType.NEW_ASSIGNMENT
        assert request.target_room_id == room.id
        assert request.admin_response is None

    def test_does_not_touch_rooms(self, store, registry, make_room):
        room = make_room(capacity=2)
        store.submit(new_assignment("T1", room))
        assert occupant_ids(registry, room) == []

    def test_tenant_already_housed(self, store, make_room, place):
        a = make_room(capacity=2)
        b = make_room(capacity=2)
        place(a, "T1")
        with pytest.raises(DuplicateOccupant):
            store.submit(new_assignment("T1", b))

    def test_target_full(self, store, make_room, place):
        room = make_room(capacity=1)
        place(room, "T1")
        with pytest.raises(RoomFull):
            store.submit(new_assignment("T2", room))

    def test_target_missing(self, store):
        from core.dto import NewAssignment

        with pytest.raises(RoomNotFound):
            store.submit(NewAssignment(tenant=tenant("T1"), target_room_id=9999))

    def test_blank_tenant_id(self, store, make_room):
        room = make_room()
        with pytest.raises(InvalidRequest):
            store.submit(new_assignment(" ", room))


class TestSubmitTransfer:
    """Transfer preconditions."""

    def test_same_room(self, store, make_room, place):
        room = make_room(capacity=2)
        place(room, "T1")
        with pytest.raises(InvalidRequest) as exc:
            store.submit(Transfer(tenant=tenant("T1"), source_room_id=room.id, target_room_id=room.id))
        assert exc.value.code == "SAME_ROOM_TRANSFER"

    def test_tenant_not_in_source(self, store, make_room, place):
        a = make_room()
        b = make_room()
        with pytest.raises(OccupantNotFound):
            store.submit(transfer("T1", a, b))

    def test_full_target_is_accepted_at_submission(self, store, make_room, place):
        """Capacity for transfers is only enforced at approval."""
        a = make_room()
        b = make_room()
        place(a, "T1")
        place(b, "T2")
        assert store.submit(transfer("T1", a, b)).is_pending


class TestSubmitMoveOut:
    """MoveOut preconditions."""

    @pytest.mark.parametrize("days_ahead", [0, -3])
    def test_date_must_be_after_submission(self, store, make_room, place, days_ahead):
        room = make_room()
        place(room, "T1")
        with pytest.raises(InvalidRequest):
            store.submit(move_out("T1", room, days_ahead=days_ahead))

    def test_tomorrow_is_fine(self, store, make_room, place):
        room = make_room()
        place(room, "T1")
        request = store.submit(move_out("T1", room, days_ahead=1))
        assert request.planned_move_out_date == timezone.localdate() + timedelta(days=1)

    def test_tenant_not_in_room(self, store, make_room):
        room = make_room()
        with pytest.raises(OccupantNotFound):
            store.submit(MoveOut(
                tenant=tenant("T1"),
                source_room_id=room.id,
                planned_move_out_date=timezone.localdate() + timedelta(days=5),
            ))


class TestDeduplication:
    """One pending request per tenant and variant."""

    def test_second_pending_transfer(self, store, make_room, place):
        a = make_room()
        b = make_room()
        c = make_room()
        place(a, "T1")
        first = store.submit(transfer("T1", a, b))
        with pytest.raises(DuplicatePendingRequest) as exc:
            store.submit(transfer("T1", a, c))
        assert exc.value.details['existing_request_id'] == first.id

    def test_other_family_is_allowed(self, store, make_room, place):
        a = make_room()
        b = make_room()
        place(a, "T1")
        store.submit(transfer("T1", a, b))
        assert store.submit(move_out("T1", a)).is_pending

    def test_allowed_again_after_terminal(self, store, make_room, place):
        a = make_room()
        b = make_room()
        place(a, "T1")
        first = store.submit(transfer("T1", a, b))
        store.reject(first.id)
        assert store.submit(transfer("T1", a, b)).is_pending

    def test_database_enforces_one_pending(self, store, make_room, place):
        a = make_room()
        b = make_room()
        place(a, "T1")
        first = store.submit(transfer("T1", a, b))
        duplicate = RoomRequest.from_variant(first.as_variant())
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                duplicate.save()


class TestRespond:
    """Administrator decisions."""

    def test_unknown_request(self, store):
        with pytest.raises(RequestNotFound):
            store.approve(9999)

    def test_invalid_decision(self, store, make_room):
        request = store.submit(new_assignment("T1", make_room()))
        with pytest.raises(ValidationError):
            store.respond(request.id, "MAYBE")

    def test_reject_has_no_occupancy_effect(self, store, registry, make_room):
        room = make_room(capacity=2)
        request = store.submit(new_assignment("T1", room))
        rejected = store.reject(request.id, message="No vacancy for your dates", admin_id="admin")

        assert rejected.status == RequestStatus.REJECTED
        assert rejected.admin_response['message'] == "No vacancy for your dates"
        assert rejected.admin_response['admin_id'] == "admin"
        assert rejected.responded_at is not None
        assert occupant_ids(registry, room) == []

    def test_default_messages(self, store, make_room, settings):
        settings.BOARDING_HOUSE = {'DEFAULT_APPROVAL_MESSAGE': 'Welcome aboard'}
        room = make_room(capacity=2)
        approved = store.approve(store.submit(new_assignment("T1", room)).id)
        rejected = store.reject(store.submit(new_assignment("T2", room)).id)
        assert approved.admin_message == 'Welcome aboard'
        assert rejected.admin_message == 'Your request has been rejected'

    @pytest.mark.parametrize("second", [Decision.APPROVE, Decision.REJECT])
    def test_terminal_state_is_final(self, store, registry, make_room, second):
        room = make_room(capacity=2)
        request = store.submit(new_assignment("T1", room))
        store.approve(request.id)

        with pytest.raises(InvalidStateTransition):
            store.respond(request.id, second)

        assert occupant_ids(registry, room) == ["T1"]
        assert store.get(request.id).status == RequestStatus.APPROVED

    def test_rejected_cannot_be_approved(self, store, registry, make_room):
        room = make_room(capacity=2)
        request = store.submit(new_assignment("T1", room))
        store.reject(request.id)
        with pytest.raises(InvalidStateTransition):
            store.approve(request.id)
        assert occupant_ids(registry, room) == []


class TestQueries:
    """Listing and staleness checks."""

    def test_list_filters(self, store, make_room, place):
        a = make_room(capacity=2)
        b = make_room(capacity=2)
        place(a, "T1")
        t = store.submit(transfer("T1", a, b))
        n = store.submit(new_assignment("T2", b))
        store.reject(n.id)

        assert [r.id for r in store.list(status="pending")] == [t.id]
        assert [r.id for r in store.list(request_type="NEW_ASSIGNMENT")] == [n.id]
        assert {r.id for r in store.list(room_id=b.id)} == {t.id, n.id}
        assert [r.id for r in store.list(tenant_id="T1")] == [t.id]

    def test_stale_pending(self, store, registry, make_room, place):
        a = make_room(capacity=2)
        place(a, "T1")
        request = store.submit(move_out("T1", a))
        assert store.find_stale_pending() == []

        registry.remove_occupant(a.id, "T1")
        stale = store.find_stale_pending()
        assert [(r.id, reason) for r, reason in stale] == [(request.id, f"tenant is no longer in room {a.id}")]

        rejected = store.reject_stale()
        assert [r.id for r in rejected] == [request.id]
        assert store.get(request.id).admin_id == "system"

    def test_request_survives_room_deletion(self, store, registry, make_room):
        room = make_room()
        request = store.submit(new_assignment("T1", room))
        registry.delete_room(room.id)

        assert store.get(request.id).target_room_id == room.id
        with pytest.raises(RoomNotFound):
            store.approve(request.id)
        assert store.get(request.id).is_pending
        assert [r.id for r, _ in store.find_stale_pending()] == [request.id]
