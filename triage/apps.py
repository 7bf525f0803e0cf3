# triage/apps.py

# Import AppConfig from django.apps because it's the base class for a Django app configuration.
from django.apps import AppConfig

"""
Author:
This class tells Django that an app named "triage" exists.
It handles the intake form a student fills in before being
routed to a crisis line, a counselor or a peer supporter.
"""
class TriageConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'triage'
