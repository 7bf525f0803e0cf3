# rooms/urls.py

# Import path from django.urls because it's needed to define each URL route.
from django.urls import path
# Import views from .views because all the functions that handle room requests are here.
from .views import (
    request_support_view, queue_view, my_rooms_view, room_detail_view,
    claim_room_view, resolve_room_view, close_room_view, archive_room_view,
)

"""
Author:
This file is the "address book" for private support rooms. It
maps each room action (request, queue, claim, resolve, close,
archive) to the view that handles it. Message URLs live in the
'messaging' app and are mounted under the same '/api/support/'
prefix.
"""
urlpatterns = [
    # Student endpoints
    path('request/', request_support_view, name='request_support'),
    path('my-rooms/', my_rooms_view, name='my_rooms'),

    # Supporter endpoints
    path('queue/', queue_view, name='support_queue'),

    # Room-specific endpoints
    path('rooms/<int:pk>/', room_detail_view, name='room_detail'),
    path('rooms/<int:pk>/claim/', claim_room_view, name='claim_room'),
    path('rooms/<int:pk>/resolve/', resolve_room_view, name='resolve_room'),
    path('rooms/<int:pk>/close/', close_room_view, name='close_room'),
    path('rooms/<int:pk>/archive/', archive_room_view, name='archive_room'),
]
