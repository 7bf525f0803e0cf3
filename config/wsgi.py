# config/wsgi.py

import os
from django.core.wsgi import get_wsgi_application

"""
Author:
WSGI entry-point. Only the HTTP API is served this way; the live
chat and notification sockets need the ASGI app in 'asgi.py'.
"""
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

application = get_wsgi_application()
