# messaging/apps.py

# Import AppConfig from django.apps because it's the base class for a Django app configuration.
from django.apps import AppConfig

"""
Author:
This class tells Django that an app named "messaging" exists.
This app stores the messages of private support rooms and
serves them over HTTP and WebSockets.
RT: This app contains the WebSocket consumer for the support chat.
"""
class MessagingConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'messaging'
