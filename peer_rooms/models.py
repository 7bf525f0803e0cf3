# peer_rooms/models.py

# Import models from django.db because this file defines database models.
from django.db import models
# Import settings from django.conf because 'PeerMessage' links to the User model.
from django.conf import settings

"""
Author:
This class represents one open group room (for example "Exam
Stress"). Rooms marked 'is_minor_safe' are the only ones students
under 18 can see, and their messages are also checked for
profanity.
"""
class PeerRoom(models.Model):
    slug = models.SlugField(max_length=100, unique=True)
    title = models.CharField(max_length=200)
    topic = models.CharField(max_length=200, blank=True)
    is_minor_safe = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['created_at', 'id']

    def __str__(self):
        return self.title

    def as_dict(self, message_count=None):
        data = {
            'id': self.pk,
            'slug': self.slug,
            'title': self.title,
            'topic': self.topic,
            'is_minor_safe': self.is_minor_safe,
            'created_at': self.created_at.isoformat(),
        }
        if message_count is not None:
            data['message_count'] = message_count
        return data


"""
Author:
This class is one message posted in a peer room. Messages that
hit the moderation keywords are saved with 'flagged' set and wait
in the moderators' review queue.
"""
class PeerMessage(models.Model):
    room = models.ForeignKey(PeerRoom, on_delete=models.CASCADE, related_name='messages')
    author = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='peer_messages')
    body = models.TextField()
    flagged = models.BooleanField(default=False)
    # Comma separated moderation flags
    flags = models.CharField(max_length=100, blank=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ['created_at', 'id']
        indexes = [
            models.Index(fields=['room', 'created_at']),
        ]

    def __str__(self):
        return f'Message from {self.author_id} in {self.room_id}'

    @property
    def flag_list(self):
        return [flag for flag in self.flags.split(',') if flag]

    def as_dict(self):
        return {
            'id': self.pk,
            'room': self.room.slug,
            'body': self.body,
            'created_at': self.created_at.isoformat(),
            'flagged': self.flagged,
            'flags': self.flag_list,
            'author': {
                'id': self.author_id,
                'display_name': self.author.public_name,
            },
        }
