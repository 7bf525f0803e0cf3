# peers/apps.py

# Import AppConfig from django.apps because it's the base class for a Django app configuration.
from django.apps import AppConfig

"""
Author:
This class tells Django that an app named "peers" exists.
Students apply here to become peer supporters; an admin
approves (which creates their moderator account) or rejects.
"""
class PeersConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'peers'
