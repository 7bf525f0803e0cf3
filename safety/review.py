# safety/review.py

"""
Author:
The moderators' review queue. Messages that hit the moderation
keywords are saved as usual but carry their flags; this file lists
them across both kinds of chat ("peer" group rooms and private
"support" rooms) and lets a moderator approve (clear the flags) or
remove them. Every decision lands in the audit log.
"""

import logging

from django.conf import settings
from django.utils import timezone

from core.exceptions import NotFound, ValidationFailed
from core.permissions import authorize
from core.utils import send_to_group, support_room_group
from messaging.constants import EVENT_MESSAGE_DELETED
from messaging.models import SupportMessage, DELETED_PLACEHOLDER
from peer_rooms.models import PeerMessage

from . import audit

logger = logging.getLogger(__name__)

PEER = 'peer'
SUPPORT = 'support'
APPROVE = 'approve'
REMOVE = 'remove'


def _peer_entry(message):
    return {
        'kind': PEER,
        'id': message.pk,
        'room': message.room.slug,
        'body': message.body,
        'flags': message.flag_list,
        'created_at': message.created_at.isoformat(),
        'author': {'id': message.author_id, 'display_name': message.author.public_name},
    }


def _support_entry(message):
    return {
        'kind': SUPPORT,
        'id': message.pk,
        'room': message.room_id,
        'body': message.content,
        'flags': message.flag_list,
        'created_at': message.created_at.isoformat(),
        'author': {'id': message.sender_id, 'display_name': message.sender.public_name},
    }


def list_flagged_messages(actor, limit=None):
    authorize(actor, None, 'message.review')
    limit = limit or settings.REVIEW_QUEUE_PAGE_SIZE

    peer = PeerMessage.objects.filter(flagged=True).select_related('author', 'room').order_by('-created_at', '-id')
    support = (
        SupportMessage.objects.exclude(flags='').filter(is_deleted=False)
        .select_related('sender').order_by('-created_at', '-id')
    )
    flagged = list(peer[:limit]) + list(support[:limit])
    # Newest first across both kinds
    flagged.sort(key=lambda message: message.created_at, reverse=True)
    return [
        _peer_entry(m) if isinstance(m, PeerMessage) else _support_entry(m)
        for m in flagged[:limit]
    ]


def _get_flagged(kind, message_id):
    model = {PEER: PeerMessage, SUPPORT: SupportMessage}.get(kind)
    if model is None:
        raise ValidationFailed('Unknown message kind')
    try:
        return model.objects.get(pk=message_id)
    except model.DoesNotExist:
        raise NotFound('Message not found')


"""
Author:
Applies a moderator's decision to one flagged message. "approve"
keeps the message and clears its flags. "remove" deletes a peer
message outright, while a support message is blanked like a
normal delete so the private conversation keeps its shape.
RT: Removing a support message tells the room's open sockets.
"""
def review_flagged_message(actor, kind, message_id, action):
    authorize(actor, None, 'message.review')
    if action not in (APPROVE, REMOVE):
        raise ValidationFailed('Invalid action')
    message = _get_flagged(kind, message_id)
    flags = message.flag_list

    if action == APPROVE:
        message.flags = ''
        if kind == PEER:
            message.flagged = False
            message.save(update_fields=['flagged', 'flags'])
        else:
            message.save(update_fields=['flags'])
    elif kind == PEER:
        message.delete()
    else:
        message.is_deleted = True
        message.deleted_at = timezone.now()
        message.content = DELETED_PLACEHOLDER
        message.flags = ''
        message.save(update_fields=['is_deleted', 'deleted_at', 'content', 'flags'])
        send_to_group(support_room_group(message.room_id), {
            'type': EVENT_MESSAGE_DELETED,
            'message_id': message.pk,
            'room_id': message.room_id,
        })

    audit.record(
        actor=actor,
        action='MESSAGE_APPROVED' if action == APPROVE else 'MESSAGE_REMOVED',
        entity='PeerMessage' if kind == PEER else 'SupportMessage',
        entity_id=message_id,
        metadata={'flags': flags},
    )
    logger.info('Moderator %s chose %s for %s message %s', actor.pk, action, kind, message_id)
    return {'kind': kind, 'id': message_id, 'action': action}
