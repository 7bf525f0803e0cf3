# messaging/models.py

# Import models from django.db because this file defines database models.
from django.db import models
# Import settings from django.conf because 'SupportMessage' needs to link to the User model.
from django.conf import settings
# Import SupportRoom from rooms.models because every message belongs to one room.
from rooms.models import SupportRoom

DELETED_PLACEHOLDER = '[Message deleted]'

"""
Author:
This class represents a single message inside a support room.
It stores the text, who sent it ('sender') and exactly when
('created_at'). Messages are read back ordered by 'created_at'
(ties broken by id). Deleting a message only blanks it out; the
row stays so the conversation history keeps its shape.
RT: New messages are pushed to the room's WebSocket group as soon
as they are saved.
"""
class SupportMessage(models.Model):

    class Kind(models.TextChoices):
        TEXT = 'text', 'Text'
        EMOJI = 'emoji', 'Emoji'

    room = models.ForeignKey(SupportRoom, on_delete=models.CASCADE, related_name='messages')
    sender = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='support_messages')
    content = models.TextField()
    kind = models.CharField(max_length=8, choices=Kind.choices, default=Kind.TEXT)
    # Comma separated moderation flags (e.g. "self-harm,violence")
    flags = models.CharField(max_length=100, blank=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    is_read = models.BooleanField(default=False)
    read_at = models.DateTimeField(null=True, blank=True)
    is_edited = models.BooleanField(default=False)
    edited_at = models.DateTimeField(null=True, blank=True)
    is_deleted = models.BooleanField(default=False)
    deleted_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ['created_at', 'id']
        indexes = [
            models.Index(fields=['room', 'created_at']),
        ]

    def __str__(self):
        return f"Message from {self.sender_id} in room {self.room_id}"

    @property
    def flag_list(self):
        return [flag for flag in self.flags.split(',') if flag]

    def as_dict(self):
        return {
            'id': self.pk,
            'room_id': self.room_id,
            'sender_id': self.sender_id,
            'sender_name': self.sender.public_name,
            'sender_role': self.sender.role,
            'content': self.content,
            'kind': self.kind,
            'created_at': self.created_at.isoformat(),
            'is_read': self.is_read,
            'read_at': self.read_at.isoformat() if self.read_at else None,
            'is_edited': self.is_edited,
            'is_deleted': self.is_deleted,
            'flags': self.flag_list,
        }
