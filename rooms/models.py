# rooms/models.py

# Import models from django.db because this file defines database models.
from django.db import models
# Import settings from django.conf because 'SupportRoom' links to the User model twice.
from django.conf import settings


class Urgency(models.TextChoices):
    LOW = 'low', 'Low'
    MEDIUM = 'medium', 'Medium'
    HIGH = 'high', 'High'
    CRISIS = 'crisis', 'Crisis'


# Queue order: crisis first, low last
URGENCY_RANK = {
    Urgency.CRISIS: 0,
    Urgency.HIGH: 1,
    Urgency.MEDIUM: 2,
    Urgency.LOW: 3,
}


class RoutedTo(models.TextChoices):
    COUNSELOR = 'counselor', 'Counselor'
    PEER_SUPPORTER = 'peer_supporter', 'Peer supporter'


"""
Author:
This class represents one private support conversation between
a student and at most one supporter. A room starts out WAITING
with no supporter, becomes ACTIVE when a supporter claims it,
and ends as RESOLVED or CLOSED. The check constraint keeps the
'supporter' column empty exactly while the room is WAITING, and
the services never change it once it is set.
RT: Each room has its own WebSocket group ('support_<id>') for live chat.
"""
class SupportRoom(models.Model):

    class Status(models.TextChoices):
        WAITING = 'WAITING', 'Waiting'
        ACTIVE = 'ACTIVE', 'Active'
        RESOLVED = 'RESOLVED', 'Resolved'
        CLOSED = 'CLOSED', 'Closed'

    student = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='support_rooms')
    # A claimed room keeps its supporter, so supporters with rooms cannot be deleted
    supporter = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, null=True, blank=True, related_name='supported_rooms')
    triage = models.ForeignKey('triage.TriageForm', on_delete=models.SET_NULL, null=True, blank=True, related_name='rooms')
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.WAITING)
    topic = models.CharField(max_length=100)
    urgency = models.CharField(max_length=16, choices=Urgency.choices, default=Urgency.LOW)
    routed_to = models.CharField(max_length=20, choices=RoutedTo.choices, default=RoutedTo.PEER_SUPPORTER)
    initial_message = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    claimed_at = models.DateTimeField(null=True, blank=True)
    closed_at = models.DateTimeField(null=True, blank=True)
    closed_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+')

    last_message_at = models.DateTimeField(null=True, blank=True)
    last_message_preview = models.CharField(max_length=100, blank=True)

    is_archived_for_student = models.BooleanField(default=False)
    is_archived_for_supporter = models.BooleanField(default=False)

    class Meta:
        ordering = ['-created_at', '-id']
        constraints = [
            models.CheckConstraint(
                condition=(
                    models.Q(status='WAITING', supporter__isnull=True)
                    | (~models.Q(status='WAITING') & models.Q(supporter__isnull=False))
                ),
                name='supportroom_supporter_iff_claimed',
            ),
        ]
        indexes = [
            models.Index(fields=['status', 'routed_to']),
        ]

    def __str__(self):
        return f'Support room {self.pk} ({self.status})'

    @property
    def is_terminal(self):
        return self.status in (self.Status.RESOLVED, self.Status.CLOSED)

    def participant_ids(self):
        return [pk for pk in (self.student_id, self.supporter_id) if pk is not None]

    def as_dict(self, viewer=None):
        data = {
            'id': self.pk,
            'status': self.status,
            'topic': self.topic,
            'urgency': self.urgency,
            'routed_to': self.routed_to,
            'student_id': self.student_id,
            'supporter_id': self.supporter_id,
            'initial_message': self.initial_message,
            'created_at': self.created_at.isoformat(),
            'claimed_at': self.claimed_at.isoformat() if self.claimed_at else None,
            'closed_at': self.closed_at.isoformat() if self.closed_at else None,
            'last_message_at': self.last_message_at.isoformat() if self.last_message_at else None,
            'last_message_preview': self.last_message_preview,
            'student': {
                'id': self.student_id,
                'display_name': self.student.public_name,
                'age_bracket': self.student.age_bracket,
            },
            'supporter': self.supporter.as_participant() if self.supporter_id else None,
        }
        if viewer is not None:
            if viewer.pk == self.student_id:
                data['is_archived'] = self.is_archived_for_student
            elif viewer.pk == self.supporter_id:
                data['is_archived'] = self.is_archived_for_supporter
        return data
