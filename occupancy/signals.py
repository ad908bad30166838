"""
Domain events emitted after a request reaches a terminal state.

Delivery (e-mail, chat, push) belongs to receivers outside this project; the
audit app records every event. Events are sent from ``transaction.on_commit``
so receivers only ever see committed state.
"""
from functools import partial

from django.db import transaction
from django.dispatch import Signal

from core.constants import RequestStatus

# kwargs: request
request_approved = Signal()

# kwargs: request
request_rejected = Signal()

# kwargs: request, tenant_id, room_ids
occupancy_changed = Signal()


def _send_terminal_events(request, room_ids):
    sender = request.__class__
    if request.status == RequestStatus.APPROVED:
        request_approved.send(sender=sender, request=request)
        if room_ids:
            occupancy_changed.send(
                sender=sender,
                request=request,
                tenant_id=request.tenant_id,
                room_ids=list(room_ids),
            )
    elif request.status == RequestStatus.REJECTED:
        request_rejected.send(sender=sender, request=request)


def emit_on_commit(request, room_ids=()):
    """Queue the events for a terminal transition until the transaction commits"""
    transaction.on_commit(partial(_send_terminal_events, request, tuple(room_ids)))
