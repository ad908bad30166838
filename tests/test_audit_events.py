"""
Domain events fire after commit and are recorded in the audit log.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from django.core.exceptions import PermissionDenied
from django.core.management import call_command

from audit.models import AuditLog
from core.exceptions import CapacityExceededAtApproval
from occupancy.signals import occupancy_changed, request_approved, request_rejected

from .conftest import move_out, new_assignment, transfer

pytestmark = pytest.mark.django_db


@pytest.fixture
def receivers():
    handlers = {
        'approved': MagicMock(),
        'rejected': MagicMock(),
        'changed': MagicMock(),
    }
    request_approved.connect(handlers['approved'], weak=False, dispatch_uid='test_approved')
    request_rejected.connect(handlers['rejected'], weak=False, dispatch_uid='test_rejected')
    occupancy_changed.connect(handlers['changed'], weak=False, dispatch_uid='test_changed')
    yield handlers
    request_approved.disconnect(dispatch_uid='test_approved')
    request_rejected.disconnect(dispatch_uid='test_rejected')
    occupancy_changed.disconnect(dispatch_uid='test_changed')


class TestEvents:
    """Signals sent on terminal transitions."""

    def test_nothing_before_commit(self, store, make_room, receivers, django_capture_on_commit_callbacks):
        room = make_room(capacity=2)
        request = store.submit(new_assignment("T1", room))

        with django_capture_on_commit_callbacks() as callbacks:
            store.approve(request.id)

        assert len(callbacks) == 1
        receivers['approved'].assert_not_called()

    def test_approval_events(self, store, make_room, place, receivers, django_capture_on_commit_callbacks):
        a = make_room(capacity=1)
        b = make_room(capacity=1)
        place(a, "T1")
        request = store.submit(transfer("T1", a, b))

        with django_capture_on_commit_callbacks(execute=True):
            store.approve(request.id)

        receivers['approved'].assert_called_once()
        assert receivers['approved'].call_args.kwargs['request'].id == request.id
        receivers['changed'].assert_called_once()
        assert receivers['changed'].call_args.kwargs['room_ids'] == [a.id, b.id]
        assert receivers['changed'].call_args.kwargs['tenant_id'] == "T1"
        receivers['rejected'].assert_not_called()

    def test_rejection_events(self, store, make_room, receivers, django_capture_on_commit_callbacks):
        request = store.submit(new_assignment("T1", make_room()))

        with django_capture_on_commit_callbacks(execute=True):
            store.reject(request.id)

        receivers['rejected'].assert_called_once()
        receivers['approved'].assert_not_called()
        receivers['changed'].assert_not_called()

    def test_failed_approval_sends_nothing(self, store, make_room, place, receivers,
                                           django_capture_on_commit_callbacks):
        room = make_room(capacity=1)
        request = store.submit(new_assignment("T1", room))
        place(room, "T2")

        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            with pytest.raises(CapacityExceededAtApproval):
                store.approve(request.id)

        assert callbacks == []
        receivers['approved'].assert_not_called()


class TestAuditLog:
    """Audit rows written by the event receivers."""

    def test_approval_is_audited(self, store, make_room, place, django_capture_on_commit_callbacks):
        room = make_room(capacity=2)
        place(room, "T1")
        request = store.submit(move_out("T1", room))

        with django_capture_on_commit_callbacks(execute=True):
            store.approve(request.id, admin_id="warden")

        approval = AuditLog.objects.for_action(AuditLog.ACTION_APPROVE_REQUEST).get()
        assert approval.resource_id == str(request.id)
        assert approval.actor == "warden"

        change = AuditLog.objects.for_action(AuditLog.ACTION_OCCUPANCY_CHANGED).get()
        assert change.metadata['room_ids'] == [room.id]
        assert AuditLog.objects.for_tenant("T1").count() == 2

    def test_rows_are_immutable(self, store, make_room, django_capture_on_commit_callbacks):
        request = store.submit(new_assignment("T1", make_room()))
        with django_capture_on_commit_callbacks(execute=True):
            store.reject(request.id)

        log = AuditLog.objects.get()
        log.description = "edited"
        with pytest.raises(PermissionDenied):
            log.save()
        with pytest.raises(PermissionDenied):
            log.delete()

    def test_api_actions_are_audited(self, admin_client, make_room):
        room = make_room(capacity=1)
        admin_client.post(f'/api/rooms/{room.id}/occupants/', {'tenant_id': 'T1', 'name': 'Ana'}, format='json')

        log = AuditLog.objects.for_action(AuditLog.ACTION_ASSIGN_TENANT).get()
        assert log.user.username == 'admin'
        assert log.metadata == {'tenant_id': 'T1', 'room_id': room.id}

        response = admin_client.get('/api/audit/logs/', {'action': 'assign_tenant'})
        assert response.status_code == 200
        assert response.data['count'] == 1


class TestConsistencyCommand:
    """check_request_consistency management command."""

    def test_reports_and_rejects(self, store, registry, make_room, place, capsys):
        room = make_room()
        place(room, "T1")
        request = store.submit(move_out("T1", room))
        registry.remove_occupant(room.id, "T1")

        call_command('check_request_consistency')
        assert f"#{request.id}" in capsys.readouterr().out
        assert store.get(request.id).is_pending

        call_command('check_request_consistency', '--reject')
        assert "Rejected 1" in capsys.readouterr().out
        assert store.get(request.id).admin_message.startswith("Automatically rejected")
