from django.db import models

from core.constants import Defaults


class Property(models.Model):
    """Boarding house property. Owns rooms."""
    name = models.CharField(max_length=255)
    street = models.CharField(max_length=255)
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=100)
    zip_code = models.CharField(max_length=20)
    country = models.CharField(max_length=100, default=Defaults.COUNTRY)
    description = models.TextField(blank=True)
    amenities = models.JSONField(default=list, blank=True, help_text="e.g. ['WiFi', 'Laundry']")
    contact_phone = models.CharField(max_length=30, blank=True)
    contact_email = models.EmailField(blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']
        verbose_name = "Property"
        verbose_name_plural = "Properties"
        indexes = [
            models.Index(fields=['name'], name='property_name_idx'),
            models.Index(fields=['is_active', 'created_at'], name='property_active_created_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.city})"

    @property
    def address(self):
        """Single-line address for display"""
        parts = [self.street, self.city, self.state, self.zip_code, self.country]
        return ", ".join(part for part in parts if part)
