# safety/models.py

# Import models from django.db because this file defines database models.
from django.db import models
# Import settings from django.conf because both models link to the User model.
from django.conf import settings

"""
Author:
This class is one line in the append-only audit log. Rows are
only ever added through 'safety.audit.record'; nothing updates
or deletes them. 'actor' is kept nullable so the log survives
an account deletion.
"""
class AuditLog(models.Model):
    actor = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='audit_entries')
    action = models.CharField(max_length=64)
    entity = models.CharField(max_length=64, blank=True)
    entity_id = models.CharField(max_length=64, blank=True)
    metadata = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f'{self.action} by {self.actor_id}'

    def as_dict(self):
        return {
            'id': self.pk,
            'action': self.action,
            'entity': self.entity,
            'entity_id': self.entity_id,
            'metadata': self.metadata,
            'created_at': self.created_at.isoformat(),
            'actor': {
                'id': self.actor_id,
                'email': self.actor.email,
                'role': self.actor.role,
            } if self.actor_id else None,
        }


"""
Author:
This class represents a crisis alert raised for a student,
either from a high-risk triage form, a chat message that hits
the self-harm keywords, or the student pressing the panic
button. Supporters move it from PENDING to ACKNOWLEDGED and
finally RESOLVED.
"""
class CrisisAlert(models.Model):

    class Status(models.TextChoices):
        PENDING = 'PENDING', 'Pending'
        ACKNOWLEDGED = 'ACKNOWLEDGED', 'Acknowledged'
        RESOLVED = 'RESOLVED', 'Resolved'

    class Source(models.TextChoices):
        TRIAGE = 'triage', 'Triage'
        MESSAGE = 'message', 'Message'
        MANUAL = 'manual', 'Manual'

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='crisis_alerts')
    message = models.TextField()
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.PENDING)
    source = models.CharField(max_length=16, choices=Source.choices, default=Source.MANUAL)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f'Crisis alert {self.pk} ({self.status})'

    def as_dict(self):
        return {
            'id': self.pk,
            'user': {
                'id': self.user_id,
                'display_name': self.user.public_name,
                'age_bracket': self.user.age_bracket,
            },
            'message': self.message,
            'status': self.status,
            'source': self.source,
            'created_at': self.created_at.isoformat(),
        }
