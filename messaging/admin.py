# messaging/admin.py

# Import admin from django.contrib because this file configures the admin site.
from django.contrib import admin
# Import SupportMessage from .models because it needs to be registered.
from .models import SupportMessage

"""
Author:
This block of code makes support messages visible in the Django
admin control panel. Flagged messages can be filtered so a
moderator can review them.
"""
@admin.register(SupportMessage)
class SupportMessageAdmin(admin.ModelAdmin):
    list_display = ('created_at', 'room', 'sender', 'kind', 'flags', 'is_deleted')
    list_filter = ('kind', 'is_deleted')
    search_fields = ('content', 'flags')
