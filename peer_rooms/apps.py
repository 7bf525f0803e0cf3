# peer_rooms/apps.py

# Import AppConfig from django.apps because it's the base class for a Django app configuration.
from django.apps import AppConfig

"""
Author:
This class tells Django that an app named "peer_rooms" exists.
Peer rooms are the open, topic-based group chats any student can
join directly, next to the private one-to-one support rooms.
"""
class PeerRoomsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'peer_rooms'
