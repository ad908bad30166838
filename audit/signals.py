"""
Audit Logging Signals

Record every occupancy domain event. Receivers run after commit
(see occupancy.signals.emit_on_commit).
"""

from django.dispatch import receiver

from occupancy.signals import request_approved, request_rejected, occupancy_changed
from audit.helpers import log_request_response, log_occupancy_change


@receiver(request_approved, dispatch_uid='audit_request_approved')
def log_request_approved(sender, request, **kwargs):
    log_request_response(request)


@receiver(request_rejected, dispatch_uid='audit_request_rejected')
def log_request_rejected(sender, request, **kwargs):
    log_request_response(request)


@receiver(occupancy_changed, dispatch_uid='audit_occupancy_changed')
def log_occupancy_changed(sender, request, tenant_id, room_ids, **kwargs):
    log_occupancy_change(request, tenant_id, room_ids)
