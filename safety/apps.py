# safety/apps.py

# Import AppConfig from django.apps because it's the base class for a Django app configuration.
from django.apps import AppConfig

"""
Author:
This class tells Django that an app named "safety" exists.
It owns the append-only audit log, crisis alerts and the
keyword moderation used on triage and chat messages.
RT: Crisis alerts are pushed live to every connected supporter.
"""
class SafetyConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'safety'
