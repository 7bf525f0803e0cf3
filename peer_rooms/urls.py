# peer_rooms/urls.py

from django.urls import path
from .views import peer_rooms_view, peer_room_detail_view, peer_room_messages_view

urlpatterns = [
    path('', peer_rooms_view, name='peer_rooms'),
    path('<slug:slug>/', peer_room_detail_view, name='peer_room_detail'),
    path('<slug:slug>/messages/', peer_room_messages_view, name='peer_room_messages'),
]
