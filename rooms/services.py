# rooms/services.py

import logging

from django.db import transaction
from django.db.models import Case, Count, IntegerField, Value, When
from django.utils import timezone

from accounts.models import Role
from core.exceptions import Conflict
from core.permissions import COUNSELOR_ROLES, authorize
from core.utils import SUPPORTERS_GROUP_NAME, send_to_group, support_room_group, user_group
from messaging.services import record_message
from safety import audit
from .models import RoutedTo, SupportRoom, Urgency, URGENCY_RANK
from .utils import get_room

logger = logging.getLogger(__name__)

# Topics that always go to a professional counselor
COUNSELOR_TOPICS = ('anxiety', 'health', 'family')

OPEN_STATUSES = (SupportRoom.Status.WAITING, SupportRoom.Status.ACTIVE)


def determine_routing(urgency, topic):
    # Crisis and high urgency always go to a professional counselor
    if urgency in (Urgency.CRISIS, Urgency.HIGH):
        return RoutedTo.COUNSELOR
    if (topic or '').strip().lower() in COUNSELOR_TOPICS:
        return RoutedTo.COUNSELOR
    return RoutedTo.PEER_SUPPORTER


"""
Author:
Creates a new WAITING room for a student. This is the single
place rooms are born, whether the student came through the
triage form or asked for support directly. The initial message
(if any) is stored as the first chat message of the room.
RT: Tells every connected supporter that the queue has a new room.
"""
def open_room(student, topic, urgency=Urgency.LOW, initial_message='', triage=None):
    topic = topic.strip().lower()
    routed_to = determine_routing(urgency, topic)
    initial_message = (initial_message or '').strip()

    with transaction.atomic():
        room = SupportRoom.objects.create(
            student=student,
            topic=topic,
            urgency=urgency,
            routed_to=routed_to,
            initial_message=initial_message,
            triage=triage,
            status=SupportRoom.Status.WAITING,
        )
        if initial_message:
            record_message(room, student, initial_message)
        audit.record(
            actor=student,
            action='SUPPORT_ROOM_REQUESTED',
            entity='SupportRoom',
            entity_id=room.pk,
            metadata={'topic': topic, 'urgency': urgency, 'routed_to': routed_to},
        )

    logger.info('Support room %s created for student %s, routed to %s', room.pk, student.pk, routed_to)
    send_to_group(SUPPORTERS_GROUP_NAME, {
        'type': 'queue_update',
        'action': 'created',
        'room_id': room.pk,
        'routed_to': routed_to,
        'urgency': urgency,
    })
    return room


def request_support(actor, topic, urgency, initial_message=''):
    authorize(actor, None, 'support.request')
    existing = SupportRoom.objects.filter(student=actor, status__in=OPEN_STATUSES).first()
    if existing is not None:
        raise Conflict('You already have an active support session', details={'room_id': existing.pk})
    return open_room(actor, topic, urgency, initial_message)


"""
Author:
A supporter takes ownership of a WAITING room. The status check
and the supporter assignment happen in one conditional UPDATE
(WHERE status = 'WAITING'), so when two supporters claim the
same room at once the database lets exactly one of them through
and the other gets a 'Conflict'.
RT: The student and the room's socket are told the room is now ACTIVE.
"""
def claim_room(actor, room_id):
    room = get_room(room_id)
    authorize(actor, room, 'room.claim')

    now = timezone.now()
    claimed = SupportRoom.objects.filter(
        pk=room.pk, status=SupportRoom.Status.WAITING,
    ).update(supporter=actor, status=SupportRoom.Status.ACTIVE, claimed_at=now)

    if not claimed:
        logger.info('Claim on room %s by %s rejected: already claimed', room.pk, actor.pk)
        raise Conflict('This support room has already been claimed')

    room = get_room(room.pk)
    audit.record(
        actor=actor,
        action='SUPPORT_ROOM_CLAIMED',
        entity='SupportRoom',
        entity_id=room.pk,
        metadata={
            'student_id': room.student_id,
            'supporter_id': actor.pk,
            'topic': room.topic,
            'urgency': room.urgency,
        },
    )
    logger.info('Room %s claimed by %s', room.pk, actor.pk)

    _announce_status(room)
    send_to_group(SUPPORTERS_GROUP_NAME, {'type': 'queue_update', 'action': 'claimed', 'room_id': room.pk})
    send_to_group(user_group(room.student_id), {
        'type': 'send_notification',
        'message': {'text': f'{actor.public_name} has joined your support room.', 'room_id': room.pk},
    })
    return room


def resolve_room(actor, room_id, notes=''):
    room = get_room(room_id)
    authorize(actor, room, 'room.resolve')
    room = _finish(room, actor, SupportRoom.Status.RESOLVED)
    audit.record(
        actor=actor,
        action='SUPPORT_ROOM_RESOLVED',
        entity='SupportRoom',
        entity_id=room.pk,
        metadata={'notes': notes} if notes else {},
    )
    logger.info('Room %s resolved by supporter %s', room.pk, actor.pk)
    return room


def close_room(actor, room_id, reason=''):
    room = get_room(room_id)
    authorize(actor, room, 'room.close')
    room = _finish(room, actor, SupportRoom.Status.CLOSED)
    audit.record(
        actor=actor,
        action='SUPPORT_ROOM_CLOSED',
        entity='SupportRoom',
        entity_id=room.pk,
        metadata={'reason': reason, 'role': actor.role} if reason else {'role': actor.role},
    )
    logger.info('Room %s closed by %s (%s)', room.pk, actor.pk, actor.role)
    return room


def _finish(room, actor, status):
    # ACTIVE -> RESOLVED/CLOSED as one conditional update; terminal states never change again
    finished = SupportRoom.objects.filter(
        pk=room.pk, status=SupportRoom.Status.ACTIVE,
    ).update(status=status, closed_at=timezone.now(), closed_by=actor)

    if not finished:
        current = SupportRoom.objects.filter(pk=room.pk).values_list('status', flat=True).first()
        if current == SupportRoom.Status.WAITING:
            raise Conflict('This room has not been claimed yet')
        raise Conflict('This support session has already ended')

    room = get_room(room.pk)
    _announce_status(room)
    return room


def _announce_status(room):
    # RT: Pushes the new status to everyone connected to the room
    send_to_group(support_room_group(room.pk), {
        'type': 'room_status',
        'room_id': room.pk,
        'status': room.status,
        'supporter_id': room.supporter_id,
    })


def get_queue(actor):
    authorize(actor, None, 'queue.view')
    if actor.role in COUNSELOR_ROLES:
        routes = [RoutedTo.COUNSELOR, RoutedTo.PEER_SUPPORTER]
    else:
        routes = [RoutedTo.PEER_SUPPORTER]

    urgency_rank = Case(
        *[When(urgency=urgency, then=Value(rank)) for urgency, rank in URGENCY_RANK.items()],
        default=Value(len(URGENCY_RANK)),
        output_field=IntegerField(),
    )
    return list(
        SupportRoom.objects.filter(status=SupportRoom.Status.WAITING, routed_to__in=routes)
        .exclude(student=actor)
        .select_related('student')
        .annotate(urgency_rank=urgency_rank)
        .order_by('urgency_rank', 'created_at', 'id')
    )


def list_my_rooms(actor, include_archived=False):
    rooms = SupportRoom.objects.select_related('student', 'supporter').annotate(message_count=Count('messages'))
    if actor.role == Role.STUDENT:
        rooms = rooms.filter(student=actor)
        if not include_archived:
            rooms = rooms.filter(is_archived_for_student=False)
    else:
        rooms = rooms.filter(supporter=actor)
        if not include_archived:
            rooms = rooms.filter(is_archived_for_supporter=False)
    return list(rooms.order_by('-created_at', '-id'))


def get_room_details(actor, room_id):
    room = get_room(room_id)
    authorize(actor, room, 'room.view')
    return room


def archive_room(actor, room_id, archive):
    room = get_room(room_id)
    authorize(actor, room, 'room.archive')
    if actor.pk == room.student_id:
        room.is_archived_for_student = archive
        room.save(update_fields=['is_archived_for_student'])
    else:
        room.is_archived_for_supporter = archive
        room.save(update_fields=['is_archived_for_supporter'])
    return room
