# rooms/apps.py

# Import AppConfig from django.apps because it's the base class for a Django app configuration.
from django.apps import AppConfig

"""
Author:
This class tells Django that an app named "rooms" exists.
It owns private support rooms: creating them, the supporter
queue and the WAITING -> ACTIVE -> RESOLVED/CLOSED lifecycle.
RT: It also holds the per-user notification WebSocket.
"""
class RoomsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'rooms'
