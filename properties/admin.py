from django.contrib import admin
from .models import Property


@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    list_display = ['name', 'city', 'country', 'is_active', 'created_at']
    list_filter = ['is_active', 'city', 'country']
    search_fields = ['name', 'street', 'city']

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'description', 'amenities', 'is_active')
        }),
        ('Address', {
            'fields': ('street', 'city', 'state', 'zip_code', 'country')
        }),
        ('Contact', {
            'fields': ('contact_phone', 'contact_email')
        }),
    )
