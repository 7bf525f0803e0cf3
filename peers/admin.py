# peers/admin.py

from django.contrib import admin
from .models import PeerApplication


@admin.register(PeerApplication)
class PeerApplicationAdmin(admin.ModelAdmin):
    list_display = ('full_name', 'email', 'school', 'status', 'created_at', 'reviewed_at')
    list_filter = ('status', 'school')
    search_fields = ('full_name', 'email')
    readonly_fields = ('status', 'reviewed_by', 'reviewed_at')
