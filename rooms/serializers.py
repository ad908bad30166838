from rest_framework import serializers

from core.constants import PricePeriod, RoomStatus, SizeUnit
from .models import Room, Occupant


class OccupantSerializer(serializers.ModelSerializer):
    """Serializer for an occupant snapshot"""
    room_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Occupant
        fields = [
            'tenant_id', 'room_id', 'name', 'email', 'phone',
            'move_in_date', 'contract_end_date', 'notes', 'added_at'
        ]
        read_only_fields = ['room_id', 'added_at']


class OccupantCreateSerializer(serializers.Serializer):
    """Direct placement by an administrator"""
    tenant_id = serializers.CharField(max_length=64)
    name = serializers.CharField(max_length=255)
    email = serializers.EmailField(required=False, allow_blank=True, default='')
    phone = serializers.CharField(max_length=30, required=False, allow_blank=True, default='')
    move_in_date = serializers.DateField(required=False, allow_null=True, default=None)
    contract_end_date = serializers.DateField(required=False, allow_null=True, default=None)
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class OccupantUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False)
    email = serializers.EmailField(required=False, allow_blank=True)
    phone = serializers.CharField(max_length=30, required=False, allow_blank=True)
    move_in_date = serializers.DateField(required=False)
    contract_end_date = serializers.DateField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True)


class RoomSerializer(serializers.ModelSerializer):
    """Room with derived status and its occupants in move-in order"""
    property_id = serializers.IntegerField(source='boarding_property_id', read_only=True)
    property_name = serializers.CharField(source='boarding_property.name', read_only=True)
    status = serializers.ReadOnlyField()
    occupant_count = serializers.ReadOnlyField()
    occupants = OccupantSerializer(many=True, read_only=True)

    class Meta:
        model = Room
        fields = [
            'id', 'property_id', 'property_name', 'room_code', 'room_number', 'description',
            'capacity', 'maintenance', 'status', 'occupant_count', 'occupants',
            'facilities', 'price_amount', 'price_currency', 'price_period',
            'size_area', 'size_unit', 'created_at', 'updated_at'
        ]
        read_only_fields = fields


class RoomListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list view"""
    property_id = serializers.IntegerField(source='boarding_property_id', read_only=True)
    status = serializers.ReadOnlyField()
    occupant_count = serializers.ReadOnlyField()

    class Meta:
        model = Room
        fields = [
            'id', 'property_id', 'room_code', 'room_number', 'capacity',
            'occupant_count', 'status', 'price_amount', 'price_currency', 'price_period'
        ]
        read_only_fields = fields


class RoomWriteSerializer(serializers.Serializer):
    """
    Input for create and update. ``property_id`` is accepted on create only;
    RoomRegistry rejects any attempt to change it afterwards.
    """
    property_id = serializers.IntegerField(required=False)
    capacity = serializers.IntegerField(required=False)
    room_number = serializers.CharField(max_length=20, required=False)
    room_code = serializers.CharField(max_length=50, required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True)
    facilities = serializers.ListField(child=serializers.CharField(), required=False)
    price_amount = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, required=False)
    price_currency = serializers.CharField(max_length=3, required=False)
    price_period = serializers.ChoiceField(choices=PricePeriod.CHOICES, required=False)
    size_area = serializers.CharField(max_length=20, required=False, allow_blank=True)
    size_unit = serializers.ChoiceField(choices=SizeUnit.CHOICES, required=False)

    def validate(self, attrs):
        if not self.partial:
            missing = [f for f in ('property_id', 'capacity', 'room_number') if f not in attrs]
            if missing:
                raise serializers.ValidationError({f: 'This field is required.' for f in missing})
        return attrs


class MaintenanceSerializer(serializers.Serializer):
    maintenance = serializers.BooleanField()


def parse_statuses(raw):
    """'full,available' -> ['FULL', 'AVAILABLE']; unknown names are rejected"""
    if not raw:
        return None
    statuses = [part.strip().upper() for part in raw.split(',') if part.strip()]
    unknown = [s for s in statuses if s not in RoomStatus.ALL]
    if unknown:
        raise serializers.ValidationError({'status': f"Unknown status: {', '.join(unknown)}"})
    return statuses
