# accounts/signals.py

# Import post_save from django.db.models.signals because we need to listen for when a model is saved.
from django.db.models.signals import post_save
# Import receiver from django.dispatch because it's the decorator used to connect a function to a signal.
from django.dispatch import receiver
# Import User from .models because 'User' is the sender of the signal.
from .models import User
# Import audit from safety because new accounts are written to the audit log.
from safety import audit

"""
Author:
This function is a "signal receiver." It automatically runs
every time a new 'User' account is created (saved for the
first time) and writes a 'USER_REGISTERED' entry to the
append-only audit log.
"""
@receiver(post_save, sender=User)
def record_user_registration(sender, instance, created, **kwargs):
    if created:
        audit.record(
            actor=instance,
            action='USER_REGISTERED',
            entity='User',
            entity_id=instance.pk,
            metadata={'role': instance.role},
        )
