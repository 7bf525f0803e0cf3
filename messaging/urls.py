# messaging/urls.py

# Import path from django.urls because it's needed to define URL routes.
from django.urls import path
# Import views from .views because we need to map URLs to these functions.
from .views import room_messages_view, mark_read_view, message_detail_view

"""
Author:
This file defines the web addresses (URLs) for support room
messages. They are mounted under '/api/support/' next to the
room endpoints.
"""
urlpatterns = [
    path('rooms/<int:room_id>/messages/', room_messages_view, name='room_messages'),
    path('rooms/<int:room_id>/messages/read/', mark_read_view, name='mark_messages_read'),
    path('messages/<int:message_id>/', message_detail_view, name='message_detail'),
]
