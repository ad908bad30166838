from django.contrib import admin
from .models import RoomRequest


@admin.register(RoomRequest)
class RoomRequestAdmin(admin.ModelAdmin):
    """Read-only: responses go through the API so occupancy is updated with them"""
    list_display = ['id', 'request_type', 'status', 'tenant_id', 'tenant_name',
                    'source_room_id', 'target_room_id', 'requested_at']
    list_filter = ['request_type', 'status']
    search_fields = ['tenant_id', 'tenant_name', 'tenant_email']
    date_hierarchy = 'requested_at'

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
