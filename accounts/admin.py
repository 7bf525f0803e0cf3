# accounts/admin.py

# Import admin from django.contrib because this file configures the admin site.
from django.contrib import admin
# Import User from .models because it needs to be registered.
from .models import User

"""
Author:
This block of code makes the user table visible in the Django
admin control panel, with the role and age columns up front so
an administrator can find counselors and minors quickly.
"""
@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('email', 'display_name', 'role', 'age_bracket', 'consent_minor_ok', 'is_active')
    list_filter = ('role', 'age_bracket', 'is_active')
    search_fields = ('email', 'display_name', 'first_name', 'last_name')
    ordering = ('email',)
