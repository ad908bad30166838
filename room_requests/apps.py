from django.apps import AppConfig


class RoomRequestsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'room_requests'
    verbose_name = 'Room Requests'
