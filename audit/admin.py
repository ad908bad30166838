"""
Audit Log Admin - READ ONLY

Audit logs are immutable and cannot be edited or deleted via admin.
"""

import json

from django.contrib import admin
from django.utils.html import format_html
from audit.models import AuditLog


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = [
        'id',
        'timestamp',
        'actor_display',
        'action',
        'resource_type',
        'resource_id',
        'description_short',
    ]
    list_filter = ['action', 'resource_type', 'timestamp']
    search_fields = ['description', 'actor', 'user__username', 'resource_id']
    readonly_fields = [
        'user',
        'actor',
        'action',
        'resource_type',
        'resource_id',
        'description',
        'ip_address',
        'user_agent',
        'metadata_display',
        'timestamp'
    ]
    fieldsets = (
        ('Action Details', {
            'fields': ('action', 'resource_type', 'resource_id', 'description')
        }),
        ('Actor', {
            'fields': ('user', 'actor', 'ip_address', 'user_agent')
        }),
        ('Additional Context', {
            'fields': ('metadata_display', 'timestamp'),
            'classes': ('collapse',)
        }),
    )
    date_hierarchy = 'timestamp'
    ordering = ['-timestamp']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    @admin.display(description='Description')
    def description_short(self, obj):
        max_length = 80
        if len(obj.description) > max_length:
            return f"{obj.description[:max_length]}..."
        return obj.description

    @admin.display(description='Metadata')
    def metadata_display(self, obj):
        if obj.metadata:
            return format_html('<pre>{}</pre>', json.dumps(obj.metadata, indent=2, default=str))
        return "No metadata"
