# messaging/routing.py

# Import re_path from django.urls because it's used to define URL patterns with regular expressions for WebSockets.
from django.urls import re_path
# Import consumers from . because 'websocket_urlpatterns' needs the SupportChatConsumer.
from . import consumers

"""
Author:
This list defines the WebSocket address for a private support
room (like '/ws/support/123/') and connects it to the
'SupportChatConsumer'.
RT: This is the routing configuration for the real-time support chat.
"""
websocket_urlpatterns = [
    re_path(r'ws/support/(?P<room_id>\d+)/$', consumers.SupportChatConsumer.as_asgi()),
]
