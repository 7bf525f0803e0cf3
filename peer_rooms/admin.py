# peer_rooms/admin.py

from django.contrib import admin
from .models import PeerMessage, PeerRoom


@admin.register(PeerRoom)
class PeerRoomAdmin(admin.ModelAdmin):
    list_display = ('title', 'slug', 'topic', 'is_minor_safe', 'created_at')
    list_filter = ('is_minor_safe',)
    prepopulated_fields = {'slug': ('title',)}


@admin.register(PeerMessage)
class PeerMessageAdmin(admin.ModelAdmin):
    list_display = ('created_at', 'room', 'author', 'flagged', 'flags')
    list_filter = ('flagged', 'room')
    search_fields = ('body',)
