# triage/admin.py

from django.contrib import admin
from .models import TriageForm


@admin.register(TriageForm)
class TriageFormAdmin(admin.ModelAdmin):
    list_display = ('created_at', 'student', 'topic', 'mood_score', 'urgency', 'route', 'risk_flag')
    list_filter = ('route', 'urgency', 'risk_flag')

    # Intake history is read-only
    def has_change_permission(self, request, obj=None):
        return False
