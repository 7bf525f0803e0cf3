# safety/admin.py

# Import admin from django.contrib because this file configures the admin site.
from django.contrib import admin
from .models import AuditLog, CrisisAlert


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ('created_at', 'action', 'actor', 'entity', 'entity_id')
    list_filter = ('action',)

    # Audit rows are append-only, even from the admin
    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(CrisisAlert)
class CrisisAlertAdmin(admin.ModelAdmin):
    list_display = ('created_at', 'user', 'status', 'source')
    list_filter = ('status', 'source')
