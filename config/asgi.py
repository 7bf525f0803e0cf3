# config/asgi.py

import os
from django.core.asgi import get_asgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

# Django has to be set up before the consumers (and their models) are imported
django_asgi_app = get_asgi_application()

from channels.routing import ProtocolTypeRouter, URLRouter
from channels.auth import AuthMiddlewareStack
from rooms import routing as rooms_routing
from messaging import routing as messaging_routing

"""
Author:
This is the server's entry-point under daphne. Plain HTTP goes to
the Django JSON API; WebSocket connections are authenticated from
the session cookie and routed to either the personal notification
stream or a support room's live chat.
RT: Everything real-time (queue updates, crisis alerts, room chat)
comes in through here.
"""
application = ProtocolTypeRouter({
    "http": django_asgi_app,
    "websocket": AuthMiddlewareStack(
        URLRouter(
            rooms_routing.websocket_urlpatterns +
            messaging_routing.websocket_urlpatterns
        )
    ),
})
