"""
API URLs for the boarding house service
"""
from django.urls import path, include
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from properties.views import PropertyViewSet
from rooms.views import RoomViewSet
from room_requests.views import RoomRequestViewSet

# Create router
router = DefaultRouter()
router.register(r'properties', PropertyViewSet, basename='property')
router.register(r'rooms', RoomViewSet, basename='room')
router.register(r'requests', RoomRequestViewSet, basename='request')

urlpatterns = [
    # JWT Authentication
    path('auth/login/', TokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('auth/refresh/', TokenRefreshView.as_view(), name='token_refresh'),

    # Audit logs
    path('audit/', include('audit.urls')),

    # API routes
    path('', include(router.urls)),
]
