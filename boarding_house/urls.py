"""
URL configuration for the boarding_house project.
"""
from django.contrib import admin
from django.urls import path, include

from common.health import get_health_urls

admin.site.site_header = "Boarding House - Admin Panel"
admin.site.site_title = "Boarding House Admin"
admin.site.index_title = "Rooms, occupants and requests"

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include('api.urls')),
]

# Add health check endpoints (for load balancers, monitoring)
urlpatterns += get_health_urls()
