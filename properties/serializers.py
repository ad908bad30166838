from rest_framework import serializers

from core.constants import Amenity
from .models import Property


class PropertySerializer(serializers.ModelSerializer):
    """Serializer for Property"""
    address = serializers.ReadOnlyField()
    room_count = serializers.SerializerMethodField()
    amenities = serializers.ListField(
        child=serializers.ChoiceField(choices=Amenity.CHOICES), required=False
    )

    class Meta:
        model = Property
        fields = [
            'id', 'name', 'street', 'city', 'state', 'zip_code', 'country',
            'address', 'description', 'amenities', 'contact_phone', 'contact_email',
            'is_active', 'room_count', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def get_room_count(self, obj):
        return obj.rooms.count()


class PropertyListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list view"""

    class Meta:
        model = Property
        fields = ['id', 'name', 'city', 'country', 'is_active']
