# bookings/apps.py

# Import AppConfig from django.apps because it's the base class for a Django app configuration.
from django.apps import AppConfig

"""
Author:
This class tells Django that an app named "bookings" exists.
Students book sessions with counselors here. Bookings are their
own thing: they never touch the support room state machine.
"""
class BookingsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'bookings'
