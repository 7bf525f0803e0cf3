# triage/models.py

# Import models from django.db because this file defines database models.
from django.db import models
# Import settings from django.conf because 'TriageForm' links to the User model.
from django.conf import settings
from rooms.models import Urgency

"""
Author:
This class stores one intake form a student submitted: what the
concern is about, how they feel (1-10), how urgent they think it
is and, optionally, a free-text message. The system adds the risk
flag and the route it chose. Forms are never edited afterwards;
they are the student's read-only history.
"""
class TriageForm(models.Model):

    class Route(models.TextChoices):
        CRISIS = 'CRISIS', 'Crisis'
        BOOK = 'BOOK', 'Book a counselor'
        PEER = 'PEER', 'Peer support'

    student = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='triage_forms')
    topic = models.CharField(max_length=100)
    mood_score = models.PositiveSmallIntegerField()
    urgency = models.CharField(max_length=16, choices=Urgency.choices)
    message = models.TextField(blank=True)
    risk_flag = models.BooleanField(default=False)
    route = models.CharField(max_length=8, choices=Route.choices)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f'Triage {self.pk} ({self.route})'

    def save(self, *args, **kwargs):
        # Intake history is read-only
        if self.pk is not None and not kwargs.get('force_insert'):
            raise ValueError('Triage forms cannot be changed after submission')
        super().save(*args, **kwargs)

    def as_dict(self):
        return {
            'id': self.pk,
            'topic': self.topic,
            'mood_score': self.mood_score,
            'urgency': self.urgency,
            'message': self.message,
            'risk_flag': self.risk_flag,
            'route': self.route,
            'created_at': self.created_at.isoformat(),
        }
