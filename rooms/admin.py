from django.contrib import admin
from .models import Room, Occupant


class OccupantInline(admin.TabularInline):
    model = Occupant
    extra = 0
    can_delete = False
    fields = ['tenant_id', 'name', 'move_in_date', 'added_at']
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ['room_code', 'boarding_property', 'capacity', 'occupant_count', 'status', 'maintenance']
    list_filter = ['maintenance', 'boarding_property']
    search_fields = ['room_code', 'room_number', 'boarding_property__name']
    readonly_fields = ['capacity', 'occupant_count', 'status']
    inlines = [OccupantInline]

    fieldsets = (
        ('Basic Information', {
            'fields': ('boarding_property', 'room_code', 'room_number', 'description', 'facilities')
        }),
        ('Occupancy', {
            'fields': ('capacity', 'maintenance', 'occupant_count', 'status')
        }),
        ('Price and Size', {
            'fields': ('price_amount', 'price_currency', 'price_period', 'size_area', 'size_unit')
        }),
    )

    def has_add_permission(self, request):
        # Rooms are created through the API so capacity rules apply
        return False


@admin.register(Occupant)
class OccupantAdmin(admin.ModelAdmin):
    list_display = ['tenant_id', 'name', 'room', 'move_in_date', 'added_at']
    search_fields = ['tenant_id', 'name', 'email', 'room__room_code']
    list_filter = ['room__boarding_property']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
