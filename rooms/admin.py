# rooms/admin.py

# Import admin from django.contrib because this file configures the admin site.
from django.contrib import admin
# Import SupportRoom from .models because it needs to be registered.
from .models import SupportRoom

"""
Author:
This block makes support rooms visible in the Django admin
control panel. The supporter and status columns are read-only
here: they only change through the claim/resolve/close services,
which keep the room's state machine intact.
"""
@admin.register(SupportRoom)
class SupportRoomAdmin(admin.ModelAdmin):
    list_display = ('id', 'student', 'supporter', 'status', 'topic', 'urgency', 'routed_to', 'created_at')
    list_filter = ('status', 'urgency', 'routed_to')
    search_fields = ('topic', 'student__email', 'supporter__email')
    readonly_fields = ('status', 'supporter', 'claimed_at', 'closed_at', 'closed_by')
