# core/permissions.py

"""
Author:
This file holds the one authorization check used by every
service: authorize(actor, resource, action). Each action maps
to a rule that looks at the actor's role and, when there is
one, at the resource (a room, a message, a booking). Anything
without a rule is denied.
"""

from accounts.models import AgeBracket, Role

from .exceptions import Forbidden

SUPPORTER_ROLES = (Role.COUNSELOR, Role.INTERN, Role.MODERATOR, Role.ADMIN)
COUNSELOR_ROLES = (Role.COUNSELOR, Role.ADMIN)
OVERSIGHT_ROLES = (Role.MODERATOR, Role.ADMIN)
PEER_ROOM_POSTER_ROLES = (Role.STUDENT, Role.COUNSELOR)


def _is_participant(actor, room):
    if actor.pk == room.student_id:
        return True
    return room.supporter_id is not None and actor.pk == room.supporter_id


def _can_claim(actor, room):
    if actor.role not in SUPPORTER_ROLES:
        return 'Only counselors and peer supporters can claim rooms'
    if room.student_id == actor.pk:
        return 'You cannot claim your own support room'
    if room.routed_to == 'counselor' and actor.role not in COUNSELOR_ROLES:
        return 'This room requires a professional counselor'
    return None


def _role_rule(roles, message):
    def rule(actor, resource):
        return None if actor.role in roles else message
    return rule


def _participant_rule(message):
    def rule(actor, room):
        return None if _is_participant(actor, room) else message
    return rule


def _needs_consent(actor):
    return actor.age_bracket == AgeBracket.UNDER18 and not actor.consent_minor_ok


def _post_rule(actor, room):
    if not _is_participant(actor, room):
        return 'Access denied to this support room'
    if _needs_consent(actor):
        return 'Parental consent required for minors to post messages'
    return None


def _close_rule(actor, room):
    if _is_participant(actor, room) or actor.role in OVERSIGHT_ROLES:
        return None
    return 'Only participants or moderators can close this room'


def _resolve_rule(actor, room):
    if room.supporter_id is not None and room.supporter_id == actor.pk:
        return None
    return 'Only the assigned supporter can resolve this room'


def _sender_rule(actor, message):
    return None if message.sender_id == actor.pk else 'You can only change your own messages'


def _booking_rule(actor, booking):
    if actor.pk in (booking.student_id, booking.counselor_id) or actor.role == Role.ADMIN:
        return None
    return 'Forbidden'


def _confirm_rule(actor, booking):
    if actor.pk == booking.counselor_id or actor.role == Role.ADMIN:
        return None
    return 'Only the counselor can confirm or complete a booking'


def _peer_room_view_rule(actor, peer_room):
    # Supporters see every group room; minors only the minor-safe ones
    if actor.role in SUPPORTER_ROLES:
        return None
    if actor.age_bracket == AgeBracket.UNDER18 and not peer_room.is_minor_safe:
        return 'This room is not available for users under 18.'
    return None


def _peer_room_post_rule(actor, peer_room):
    if actor.role not in PEER_ROOM_POSTER_ROLES:
        return 'Only students and counselors can post messages'
    denied = _peer_room_view_rule(actor, peer_room)
    if denied:
        return denied
    if _needs_consent(actor):
        return 'Parental consent required for minors to post messages'
    return None


RULES = {
    'support.request': _role_rule((Role.STUDENT,), 'Only students can request support'),
    'triage.submit': _role_rule((Role.STUDENT,), 'Only students can submit a triage form'),
    'queue.view': _role_rule(SUPPORTER_ROLES, 'Only supporters can view the queue'),
    'room.view': _participant_rule('Access denied to this support room'),
    'room.post': _post_rule,
    'room.archive': _participant_rule('Access denied to this support room'),
    'room.claim': _can_claim,
    'room.resolve': _resolve_rule,
    'room.close': _close_rule,
    'message.edit': _sender_rule,
    'booking.create': _role_rule((Role.STUDENT,), 'Only students can book sessions'),
    'booking.update': _booking_rule,
    'booking.confirm': _confirm_rule,
    'alert.manage': _role_rule(SUPPORTER_ROLES, 'Only supporters can manage crisis alerts'),
    'application.review': _role_rule((Role.ADMIN,), 'Admin access required'),
    'audit.view': _role_rule((Role.ADMIN,), 'Admin access required'),
    'message.review': _role_rule(OVERSIGHT_ROLES, 'Moderator access required'),
    'peer_room.view': _peer_room_view_rule,
    'peer_room.post': _peer_room_post_rule,
    'peer_room.create': _role_rule((Role.ADMIN,), 'Admin access required'),
}


def authorize(actor, resource, action):
    rule = RULES.get(action)
    if rule is None or actor is None or not actor.is_authenticated:
        raise Forbidden()
    denied = rule(actor, resource)
    if denied:
        raise Forbidden(denied)


def can(actor, resource, action):
    try:
        authorize(actor, resource, action)
    except Forbidden:
        return False
    return True
