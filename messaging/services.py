# messaging/services.py

import logging
from datetime import timedelta

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from accounts.models import AgeBracket
from core.exceptions import Conflict, Forbidden, NotFound, ValidationFailed
from core.permissions import authorize
from core.utils import send_to_group, support_room_group
from rooms.models import SupportRoom
from rooms.utils import get_room
from safety import audit, moderation
from safety.models import CrisisAlert
from safety.services import raise_alert
from .constants import (
    PREVIEW_LENGTH, EVENT_CHAT_MESSAGE, EVENT_MESSAGE_EDITED, EVENT_MESSAGE_DELETED, EVENT_MESSAGES_READ,
)
from .models import SupportMessage, DELETED_PLACEHOLDER

logger = logging.getLogger(__name__)


def _clean_content(content):
    if content is not None and not isinstance(content, str):
        raise ValidationFailed(details={'content': ['Message must be text.']})
    content = (content or '').strip()
    if not content:
        raise ValidationFailed(details={'content': ['This field is required.']})
    max_length = settings.SUPPORT_MESSAGE_MAX_LENGTH
    if len(content) > max_length:
        raise ValidationFailed(details={'content': [f'Ensure this value has at most {max_length} characters.']})
    return content


"""
Author:
Saves a message row and keeps the room's last-message columns in
step. Content is run through keyword moderation first; a student
writing about self-harm raises a crisis alert for the supporters.
No permission checks happen here, callers do those.
"""
def record_message(room, sender, content, kind=SupportMessage.Kind.TEXT):
    minor_safe = room.student.age_bracket == AgeBracket.UNDER18
    flags = moderation.moderate_content(content, minor_safe=minor_safe)

    with transaction.atomic():
        message = SupportMessage.objects.create(
            room=room,
            sender=sender,
            content=content,
            kind=kind,
            flags=','.join(flags),
        )
        SupportRoom.objects.filter(pk=room.pk).update(
            last_message_at=message.created_at,
            last_message_preview=content[:PREVIEW_LENGTH],
        )
        if flags:
            audit.record(
                actor=sender,
                action='MESSAGE_FLAGGED',
                entity='SupportMessage',
                entity_id=message.pk,
                metadata={'room_id': room.pk, 'flags': flags, 'preview': content[:PREVIEW_LENGTH]},
            )
    room.last_message_at = message.created_at
    room.last_message_preview = content[:PREVIEW_LENGTH]
    if flags:
        logger.warning('Message %s flagged in room %s: %s', message.pk, room.pk, ', '.join(flags))

    if moderation.SELF_HARM in flags and sender.pk == room.student_id:
        raise_alert(sender, content, source=CrisisAlert.Source.MESSAGE)
    return message


def append_message(actor, room_id, content, kind=SupportMessage.Kind.TEXT):
    room = get_room(room_id)
    authorize(actor, room, 'room.post')
    if room.status == SupportRoom.Status.CLOSED:
        raise Conflict('This support session has been closed')
    content = _clean_content(content)

    message = record_message(room, actor, content, kind)
    logger.debug('Message %s saved in room %s', message.pk, room.pk)

    # RT: Push the new message to everyone connected to the room
    send_to_group(support_room_group(room.pk), {'type': EVENT_CHAT_MESSAGE, 'message': message.as_dict()})
    return message


def _page_bounds(offset, limit):
    try:
        offset = max(int(offset or 0), 0)
        limit = int(limit) if limit not in (None, '') else settings.SUPPORT_MESSAGES_PAGE_SIZE
    except (TypeError, ValueError):
        raise ValidationFailed('offset and limit must be integers')
    if limit < 1:
        raise ValidationFailed('limit must be at least 1')
    return offset, min(limit, settings.SUPPORT_MESSAGES_MAX_PAGE_SIZE)


"""
Author:
Returns one page of a room's messages, oldest first, together
with the total number of messages in the room. Reading the room
marks the other participant's messages as read.
"""
def fetch_messages(actor, room_id, offset=0, limit=None):
    room = get_room(room_id)
    authorize(actor, room, 'room.view')
    offset, limit = _page_bounds(offset, limit)

    messages = room.messages.select_related('sender').order_by('created_at', 'id')
    total = messages.count()
    page = list(messages[offset:offset + limit])

    _mark_read(actor, room)
    return page, total


def _mark_read(actor, room, message_ids=None):
    unread = SupportMessage.objects.filter(room=room, is_read=False).exclude(sender=actor)
    if message_ids:
        unread = unread.filter(pk__in=message_ids)
    return unread.update(is_read=True, read_at=timezone.now())


def mark_read(actor, room_id, message_ids=None):
    room = get_room(room_id)
    authorize(actor, room, 'room.view')
    count = _mark_read(actor, room, message_ids)
    if count:
        send_to_group(support_room_group(room.pk), {
            'type': EVENT_MESSAGES_READ,
            'reader_id': actor.pk,
            'message_ids': message_ids or [],
        })
    return count


def _get_message(message_id):
    try:
        return SupportMessage.objects.select_related('sender', 'room').get(pk=message_id)
    except (SupportMessage.DoesNotExist, ValueError, TypeError):
        raise NotFound('Message not found')


def edit_message(actor, message_id, content):
    message = _get_message(message_id)
    authorize(actor, message, 'message.edit')
    if message.is_deleted:
        raise Conflict('Cannot edit deleted messages')
    window = timedelta(minutes=settings.SUPPORT_MESSAGE_EDIT_WINDOW_MINUTES)
    if timezone.now() - message.created_at > window:
        raise Forbidden(f'Cannot edit messages older than {settings.SUPPORT_MESSAGE_EDIT_WINDOW_MINUTES} minutes')

    message.content = _clean_content(content)
    message.is_edited = True
    message.edited_at = timezone.now()
    message.save(update_fields=['content', 'is_edited', 'edited_at'])
    send_to_group(support_room_group(message.room_id), {'type': EVENT_MESSAGE_EDITED, 'message': message.as_dict()})
    return message


def delete_message(actor, message_id):
    message = _get_message(message_id)
    authorize(actor, message, 'message.edit')
    window = timedelta(hours=settings.SUPPORT_MESSAGE_DELETE_WINDOW_HOURS)
    if timezone.now() - message.created_at > window:
        raise Forbidden(f'Cannot delete messages older than {settings.SUPPORT_MESSAGE_DELETE_WINDOW_HOURS} hours')

    message.is_deleted = True
    message.deleted_at = timezone.now()
    message.content = DELETED_PLACEHOLDER
    message.save(update_fields=['is_deleted', 'deleted_at', 'content'])
    send_to_group(support_room_group(message.room_id), {
        'type': EVENT_MESSAGE_DELETED,
        'message_id': message.pk,
        'room_id': message.room_id,
    })
    return message
