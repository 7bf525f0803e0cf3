# peer_rooms/services.py

import logging

from django.conf import settings
from django.db.models import Count
from django.utils.text import slugify

from core.exceptions import Conflict, NotFound, ValidationFailed
from core.permissions import authorize, can
from safety import audit, moderation
from .models import PeerMessage, PeerRoom

logger = logging.getLogger(__name__)


def _get_peer_room(slug):
    try:
        return PeerRoom.objects.get(slug=slug)
    except PeerRoom.DoesNotExist:
        raise NotFound('Room not found')


def list_peer_rooms(actor):
    # Rooms the actor cannot enter (adult-only rooms for minors) are left out
    rooms = PeerRoom.objects.annotate(message_count=Count('messages')).order_by('created_at', 'id')
    return [room for room in rooms if can(actor, room, 'peer_room.view')]


def get_peer_room(actor, slug):
    room = _get_peer_room(slug)
    authorize(actor, room, 'peer_room.view')
    return room


def create_peer_room(actor, title, topic='', is_minor_safe=False, slug=''):
    authorize(actor, None, 'peer_room.create')
    slug = slug or slugify(title)
    if not slug:
        raise ValidationFailed(details={'slug': ['Could not build a slug from this title.']})
    if PeerRoom.objects.filter(slug=slug).exists():
        raise Conflict('A room with this slug already exists')
    room = PeerRoom.objects.create(slug=slug, title=title, topic=topic, is_minor_safe=is_minor_safe)
    logger.info('Peer room %s created by %s', room.slug, actor.pk)
    return room


"""
Author:
Returns messages of a peer room in chat order (oldest first).
'cursor' is the id of the last message the client already has,
'since' limits the page to messages at or after a timestamp.
The extra row fetched past 'limit' tells whether more exist.
"""
def fetch_peer_messages(actor, slug, limit=None, cursor=None, since=None):
    room = get_peer_room(actor, slug)
    limit = min(limit or settings.SUPPORT_MESSAGES_PAGE_SIZE, settings.SUPPORT_MESSAGES_MAX_PAGE_SIZE)

    messages = room.messages.select_related('author', 'room').order_by('created_at', 'id')
    if cursor:
        messages = messages.filter(pk__gt=cursor)
    if since:
        messages = messages.filter(created_at__gte=since)

    rows = list(messages[:limit + 1])
    has_more = len(rows) > limit
    page = rows[:limit]
    next_cursor = page[-1].pk if has_more else None
    return page, next_cursor, has_more


def post_peer_message(actor, slug, body):
    room = _get_peer_room(slug)
    authorize(actor, room, 'peer_room.post')
    if not isinstance(body, str) or not body.strip():
        raise ValidationFailed('Message body is required')
    body = body.strip()
    max_length = settings.PEER_ROOM_MESSAGE_MAX_LENGTH
    if len(body) > max_length:
        raise ValidationFailed(f'Message too long (max {max_length} characters)')

    flags = moderation.moderate_content(body, minor_safe=room.is_minor_safe)
    message = PeerMessage.objects.create(
        room=room,
        author=actor,
        body=body,
        flagged=bool(flags),
        flags=','.join(flags),
    )
    if flags:
        audit.record(
            actor=actor,
            action='MESSAGE_FLAGGED',
            entity='PeerMessage',
            entity_id=message.pk,
            metadata={'room': room.slug, 'flags': flags, 'preview': body[:100]},
        )
        logger.warning('Message %s flagged in peer room %s: %s', message.pk, room.slug, ', '.join(flags))
    return message
