# rooms/routing.py

# Import path from django.urls because it's used to define WebSocket URL patterns.
from django.urls import path
# Import consumers from . because 'websocket_urlpatterns' needs the NotificationConsumer.
from . import consumers

"""
Author:
This list defines the WebSocket address for personal
notifications, queue updates and crisis alerts.
RT: This configures the routing for the notification socket.
"""
websocket_urlpatterns = [
    path("ws/notifications/", consumers.NotificationConsumer.as_asgi()),
]
