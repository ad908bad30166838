"""
Smoke tests for the HTTP surface and the error mapping.
"""

from __future__ import annotations

from datetime import timedelta

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from core.constants import RequestStatus, RoomStatus
from room_requests.models import RoomRequest

pytestmark = pytest.mark.django_db


def create_room(client, property_id, capacity=2, room_number="101"):
    return client.post('/api/rooms/', {
        'property_id': property_id,
        'capacity': capacity,
        'room_number': room_number,
        'price_amount': '3500.00',
    }, format='json')


class TestAuth:
    """Authentication and administrator checks."""

    def test_anonymous_rejected(self):
        assert APIClient().get('/api/rooms/').status_code == 401

    def test_login_returns_tokens(self, admin_user):
        response = APIClient().post(
            '/api/auth/login/', {'username': 'admin', 'password': 'admin-pass-123'}, format='json'
        )
        assert response.status_code == 200
        assert 'access' in response.data and 'refresh' in response.data

    def test_non_admin_cannot_create_room(self, user_client, boarding_property):
        assert create_room(user_client, boarding_property.id).status_code == 403

    def test_non_admin_cannot_approve(self, user_client, store, make_room):
        from .conftest import new_assignment

        request = store.submit(new_assignment("T1", make_room()))
        response = user_client.post(f'/api/requests/{request.id}/approve/', {}, format='json')
        assert response.status_code == 403


class TestProperties:
    """Property endpoints."""

    def test_create_and_stats(self, admin_client):
        response = admin_client.post('/api/properties/', {
            'name': 'Bayview Dorm', 'street': '1 Roxas Blvd', 'city': 'Pasay',
            'state': 'Metro Manila', 'zip_code': '1300', 'amenities': ['WiFi'],
        }, format='json')
        assert response.status_code == 201
        property_id = response.data['id']

        create_room(admin_client, property_id, capacity=1)
        stats = admin_client.get(f'/api/properties/{property_id}/stats/').data
        assert stats['total'] == 1
        assert stats['vacant'] == 1

    def test_delete_with_rooms_conflicts(self, admin_client, boarding_property, make_room):
        make_room()
        response = admin_client.delete(f'/api/properties/{boarding_property.id}/')
        assert response.status_code == 409
        assert response.data['code'] == 'PROPERTY_NOT_EMPTY'


class TestRooms:
    """Room endpoints and error mapping."""

    def test_create_invalid_capacity(self, admin_client, boarding_property):
        response = create_room(admin_client, boarding_property.id, capacity=0)
        assert response.status_code == 400
        assert response.data['code'] == 'INVALID_CAPACITY'

    def test_missing_room(self, admin_client):
        response = admin_client.get('/api/rooms/9999/')
        assert response.status_code == 404
        assert response.data['code'] == 'ROOM_NOT_FOUND'
        assert response.data['details']['resource_id'] == 9999

    def test_occupant_lifecycle(self, admin_client, boarding_property):
        room_id = create_room(admin_client, boarding_property.id, capacity=1).data['id']

        response = admin_client.post(
            f'/api/rooms/{room_id}/occupants/', {'tenant_id': 'T1', 'name': 'Ana Cruz'}, format='json'
        )
        assert response.status_code == 201
        assert response.data['status'] == RoomStatus.FULL

        response = admin_client.post(
            f'/api/rooms/{room_id}/occupants/', {'tenant_id': 'T2', 'name': 'Ben Reyes'}, format='json'
        )
        assert response.status_code == 409
        assert response.data['code'] == 'ROOM_FULL'

        assert admin_client.get('/api/rooms/tenant/T1/').data['id'] == room_id
        assert [o['tenant_id'] for o in admin_client.get('/api/rooms/occupants/').data] == ['T1']

        response = admin_client.patch(f'/api/rooms/{room_id}/occupants/T1/', {'phone': '0917'}, format='json')
        assert response.data['phone'] == '0917'

        response = admin_client.delete(f'/api/rooms/{room_id}/occupants/T1/')
        assert response.status_code == 200
        assert response.data['status'] == RoomStatus.VACANT
        assert admin_client.get('/api/rooms/tenant/T1/').status_code == 404

    def test_direct_placement_with_pending_new_assignment(self, admin_client, store, make_room):
        from .conftest import new_assignment

        a, b = make_room(), make_room()
        request = store.submit(new_assignment("T1", a))

        response = admin_client.post(
            f'/api/rooms/{b.id}/occupants/', {'tenant_id': 'T1', 'name': 'Ana Cruz'}, format='json'
        )
        assert response.status_code == 409
        assert response.data['code'] == 'DUPLICATE_PENDING_REQUEST'
        assert response.data['details']['existing_request_id'] == request.id
        assert admin_client.get('/api/rooms/tenant/T1/').status_code == 404

    def test_status_filter(self, admin_client, make_room, place):
        vacant = make_room(capacity=2)
        full = make_room(capacity=1)
        place(full, "T1")

        response = admin_client.get('/api/rooms/', {'status': 'vacant'})
        assert [r['id'] for r in response.data] == [vacant.id]

        assert admin_client.get('/api/rooms/', {'status': 'bogus'}).status_code == 400

    def test_maintenance(self, admin_client, make_room):
        room = make_room()
        response = admin_client.post(f'/api/rooms/{room.id}/maintenance/', {'maintenance': True}, format='json')
        assert response.data['status'] == RoomStatus.MAINTENANCE

    def test_property_change_rejected(self, admin_client, make_room):
        room = make_room()
        response = admin_client.patch(f'/api/rooms/{room.id}/', {'property_id': 77}, format='json')
        assert response.status_code == 400
        assert response.data['code'] == 'IMMUTABLE_FIELD'


class TestRequests:
    """Request submission and decisions over HTTP."""

    def test_submit_and_approve(self, admin_client, user_client, make_room):
        room = make_room(capacity=2)
        response = user_client.post('/api/requests/', {
            'request_type': 'NEW_ASSIGNMENT',
            'tenant_id': 'T1',
            'tenant_name': 'Ana Cruz',
            'target_room_id': room.id,
        }, format='json')
        assert response.status_code == 201
        request_id = response.data['id']
        assert response.data['admin_response'] is None

        response = admin_client.post(f'/api/requests/{request_id}/approve/', {'message': 'See you Monday'}, format='json')
        assert response.status_code == 200
        assert response.data['status'] == RequestStatus.APPROVED
        assert response.data['admin_response']['message'] == 'See you Monday'
        assert response.data['admin_response']['admin_id'] == 'admin'

        response = admin_client.post(f'/api/requests/{request_id}/reject/', {}, format='json')
        assert response.status_code == 409
        assert response.data['code'] == 'INVALID_STATE_TRANSITION'

    def test_missing_variant_fields(self, user_client):
        response = user_client.post('/api/requests/', {
            'request_type': 'MOVE_OUT', 'tenant_id': 'T1', 'tenant_name': 'Ana Cruz',
        }, format='json')
        assert response.status_code == 400
        assert 'source_room_id' in response.data
        assert 'planned_move_out_date' in response.data

    def test_move_out_date_in_past(self, user_client, make_room, place):
        room = make_room()
        place(room, "T1")
        response = user_client.post('/api/requests/', {
            'request_type': 'MOVE_OUT', 'tenant_id': 'T1', 'tenant_name': 'Ana Cruz',
            'source_room_id': room.id,
            'planned_move_out_date': (timezone.localdate() - timedelta(days=1)).isoformat(),
        }, format='json')
        assert response.status_code == 400
        assert response.data['code'] == 'INVALID_MOVE_OUT_DATE'

    def test_capacity_exceeded_keeps_pending(self, admin_client, store, make_room, place):
        from .conftest import new_assignment

        room = make_room(capacity=1)
        request = store.submit(new_assignment("T1", room))
        place(room, "T2")

        response = admin_client.post(f'/api/requests/{request.id}/approve/', {}, format='json')
        assert response.status_code == 409
        assert response.data['code'] == 'CAPACITY_EXCEEDED_AT_APPROVAL'
        assert response.data['details']['room_id'] == room.id
        assert RoomRequest.objects.get(id=request.id).status == RequestStatus.PENDING

    def test_requests_cannot_be_deleted(self, admin_client, store, make_room):
        from .conftest import new_assignment

        request = store.submit(new_assignment("T1", make_room()))
        assert admin_client.delete(f'/api/requests/{request.id}/').status_code == 405

    def test_list_filters(self, admin_client, store, make_room):
        from .conftest import new_assignment

        room = make_room(capacity=3)
        first = store.submit(new_assignment("T1", room))
        store.submit(new_assignment("T2", room))
        store.reject(first.id)

        response = admin_client.get('/api/requests/', {'status': 'rejected'})
        assert [r['id'] for r in response.data] == [first.id]


def test_health(client, db):
    assert client.get('/health/').status_code == 200
    response = client.get('/health/ready/')
    assert response.status_code == 200
    assert response.json()['status'] == 'ready'
