from django.urls import path
from . import consumers

websocket_urlpatterns = [
    # Notifications WebSocket for user
    path(
        'ws/notifications/',
        consumers.NotificationConsumer.as_asgi()
    ),
]
