from django.db import models
from django.core.validators import MinValueValidator
from django.utils import timezone

from core.constants import Defaults, PricePeriod, SizeUnit
from properties.models import Property


class Room(models.Model):
    """
    Capacity-bounded room within a property.

    There is no status column: ``status`` is always derived from
    the live occupant count (see rooms.status).
    """
    boarding_property = models.ForeignKey(Property, on_delete=models.PROTECT, related_name='rooms')
    room_code = models.CharField(max_length=50, unique=True, help_text="e.g. 'BH1-101'")
    room_number = models.CharField(max_length=20, help_text="e.g. '101', 'A'")
    description = models.TextField(blank=True)

    capacity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    maintenance = models.BooleanField(
        default=False,
        help_text="Administrator override. Reported as MAINTENANCE regardless of occupancy."
    )

    facilities = models.JSONField(default=list, blank=True)
    price_amount = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    price_currency = models.CharField(max_length=3, default=Defaults.CURRENCY)
    price_period = models.CharField(max_length=10, choices=PricePeriod.CHOICES, default=PricePeriod.MONTHLY)
    size_area = models.CharField(max_length=20, blank=True)
    size_unit = models.CharField(max_length=4, choices=SizeUnit.CHOICES, default=SizeUnit.SQM)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['room_number']
        unique_together = ['boarding_property', 'room_number']
        verbose_name = "Room"
        verbose_name_plural = "Rooms"
        constraints = [
            models.CheckConstraint(condition=models.Q(capacity__gte=1), name='room_capacity_at_least_one'),
        ]
        indexes = [
            models.Index(fields=['boarding_property', 'room_number'], name='room_property_number_idx'),
            models.Index(fields=['capacity'], name='room_capacity_idx'),
        ]

    def __str__(self):
        return f"{self.room_code} ({self.capacity} capacity)"

    @property
    def occupant_count(self):
        # Uses the prefetch cache when present
        return len(self.occupants.all())

    @property
    def status(self):
        from rooms.status import room_status
        return room_status(self)

    @property
    def display_name(self):
        return self.room_code or f"Room {self.room_number}"


class Occupant(models.Model):
    """
    Tenant currently living in a room.

    The tenant record itself lives with the directory collaborator; name and
    contact fields are a snapshot taken at assignment time. ``tenant_id`` is
    unique table-wide, so a tenant can be in at most one room.
    """
    room = models.ForeignKey(Room, on_delete=models.CASCADE, related_name='occupants')
    tenant_id = models.CharField(max_length=64, unique=True)
    name = models.CharField(max_length=255)
    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=30, blank=True)
    move_in_date = models.DateField(default=timezone.localdate)
    contract_end_date = models.DateField(null=True, blank=True)
    notes = models.TextField(blank=True)
    added_at = models.DateTimeField(default=timezone.now, help_text="Insertion order within the room")

    class Meta:
        ordering = ['added_at', 'id']
        verbose_name = "Occupant"
        verbose_name_plural = "Occupants"
        indexes = [
            models.Index(fields=['room', 'added_at'], name='occupant_room_added_idx'),
        ]

    def __str__(self):
        return f"{self.name} - {self.room.room_code}"
