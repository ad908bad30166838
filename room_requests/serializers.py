from rest_framework import serializers

from core.constants import RequestType
from core.dto import MoveOut, NewAssignment, TenantSnapshot, Transfer
from .models import RoomRequest


class RoomRequestSerializer(serializers.ModelSerializer):
    """Serializer for RoomRequest"""
    request_type_display = serializers.CharField(source='get_request_type_display', read_only=True)
    status_display = serializers.CharField(source='get_status_display', read_only=True)
    source_room_id = serializers.IntegerField(read_only=True, allow_null=True)
    target_room_id = serializers.IntegerField(read_only=True, allow_null=True)
    admin_response = serializers.SerializerMethodField()

    class Meta:
        model = RoomRequest
        fields = [
            'id', 'request_type', 'request_type_display', 'status', 'status_display',
            'tenant_id', 'tenant_name', 'tenant_email', 'tenant_phone',
            'source_room_id', 'target_room_id', 'move_in_date', 'planned_move_out_date',
            'reason', 'notes', 'requested_at', 'admin_response'
        ]
        read_only_fields = fields

    def get_admin_response(self, obj):
        response = obj.admin_response
        if response is None:
            return None
        return {
            'admin_id': response['admin_id'],
            'message': response['message'],
            'responded_at': response['responded_at'].isoformat(),
        }


class RoomRequestSubmitSerializer(serializers.Serializer):
    """
    Submission payload. ``validated_data['variant']`` is the typed request;
    which room and date fields are required depends on ``request_type``.
    """
    request_type = serializers.ChoiceField(choices=RequestType.CHOICES)
    tenant_id = serializers.CharField(max_length=64)
    tenant_name = serializers.CharField(max_length=255)
    tenant_email = serializers.EmailField(required=False, allow_blank=True, default='')
    tenant_phone = serializers.CharField(max_length=30, required=False, allow_blank=True, default='')
    source_room_id = serializers.IntegerField(required=False, allow_null=True, default=None)
    target_room_id = serializers.IntegerField(required=False, allow_null=True, default=None)
    move_in_date = serializers.DateField(required=False, allow_null=True, default=None)
    planned_move_out_date = serializers.DateField(required=False, allow_null=True, default=None)
    reason = serializers.CharField(required=False, allow_blank=True, default='')
    notes = serializers.CharField(required=False, allow_blank=True, default='')

    REQUIRED_BY_TYPE = {
        RequestType.NEW_ASSIGNMENT: ['target_room_id'],
        RequestType.TRANSFER: ['source_room_id', 'target_room_id'],
        RequestType.MOVE_OUT: ['source_room_id', 'planned_move_out_date'],
    }

    def validate(self, attrs):
        request_type = attrs['request_type']
        missing = [f for f in self.REQUIRED_BY_TYPE[request_type] if attrs.get(f) is None]
        if missing:
            raise serializers.ValidationError(
                {f: f'This field is required for {request_type} requests.' for f in missing}
            )

        tenant = TenantSnapshot(
            tenant_id=attrs['tenant_id'],
            name=attrs['tenant_name'],
            email=attrs['tenant_email'],
            phone=attrs['tenant_phone'],
        )
        if request_type == RequestType.NEW_ASSIGNMENT:
            variant = NewAssignment(
                tenant=tenant,
                target_room_id=attrs['target_room_id'],
                move_in_date=attrs['move_in_date'],
            )
        elif request_type == RequestType.TRANSFER:
            variant = Transfer(
                tenant=tenant,
                source_room_id=attrs['source_room_id'],
                target_room_id=attrs['target_room_id'],
                move_in_date=attrs['move_in_date'],
            )
        else:
            variant = MoveOut(
                tenant=tenant,
                source_room_id=attrs['source_room_id'],
                planned_move_out_date=attrs['planned_move_out_date'],
            )
        return {'variant': variant, 'reason': attrs['reason'], 'notes': attrs['notes']}


class RoomRequestResponseSerializer(serializers.Serializer):
    """Body for approve / reject. An empty message falls back to the configured default."""
    message = serializers.CharField(required=False, allow_blank=True, default='')
