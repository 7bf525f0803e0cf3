import threading

import pytest
from django.db import IntegrityError, connections, transaction

from core.exceptions import Conflict, Forbidden, NotFound
from rooms import services
from rooms.models import RoutedTo, SupportRoom, Urgency
from safety.models import AuditLog


def test_open_room_starts_waiting_without_supporter(room, student):
    assert room.status == SupportRoom.Status.WAITING
    assert room.supporter_id is None
    assert room.student_id == student.pk
    assert AuditLog.objects.filter(action='SUPPORT_ROOM_REQUESTED', entity_id=str(room.pk)).exists()


def test_routing_sends_sensitive_topics_and_urgent_rooms_to_counselors():
    assert services.determine_routing(Urgency.LOW, 'Anxiety') == RoutedTo.COUNSELOR
    assert services.determine_routing(Urgency.HIGH, 'stress') == RoutedTo.COUNSELOR
    assert services.determine_routing(Urgency.CRISIS, 'sleep') == RoutedTo.COUNSELOR
    assert services.determine_routing(Urgency.MEDIUM, 'academic') == RoutedTo.PEER_SUPPORTER


def test_claim_sets_supporter_and_activates(room, counselor):
    claimed = services.claim_room(counselor, room.pk)
    assert claimed.status == SupportRoom.Status.ACTIVE
    assert claimed.supporter_id == counselor.pk
    assert claimed.claimed_at is not None
    assert AuditLog.objects.filter(action='SUPPORT_ROOM_CLAIMED', actor=counselor).exists()


def test_second_claim_conflicts(room, counselor, second_counselor):
    services.claim_room(counselor, room.pk)
    with pytest.raises(Conflict):
        services.claim_room(second_counselor, room.pk)
    room.refresh_from_db()
    assert room.supporter_id == counselor.pk


def test_claim_with_stale_read_still_has_one_winner(room, counselor, second_counselor, monkeypatch):
    # Both supporters loaded the room while it was WAITING
    stale = SupportRoom.objects.get(pk=room.pk)
    services.claim_room(counselor, room.pk)

    monkeypatch.setattr(services, 'get_room', lambda room_id: stale)
    with pytest.raises(Conflict):
        services.claim_room(second_counselor, room.pk)

    room.refresh_from_db()
    assert room.status == SupportRoom.Status.ACTIVE
    assert room.supporter_id == counselor.pk


def test_claim_missing_room(counselor):
    with pytest.raises(NotFound):
        services.claim_room(counselor, 999999)


def test_intern_cannot_claim_counselor_room(student, intern):
    room = services.open_room(student, 'anxiety')
    with pytest.raises(Forbidden):
        services.claim_room(intern, room.pk)


def test_intern_can_claim_peer_room(room, intern):
    assert services.claim_room(intern, room.pk).supporter_id == intern.pk


def test_student_cannot_claim(room, other_student):
    with pytest.raises(Forbidden):
        services.claim_room(other_student, room.pk)


def test_supporter_iff_claimed_is_enforced_by_database(student, counselor):
    with pytest.raises(IntegrityError), transaction.atomic():
        SupportRoom.objects.create(student=student, topic='stress', status=SupportRoom.Status.ACTIVE)
    with pytest.raises(IntegrityError), transaction.atomic():
        SupportRoom.objects.create(student=student, topic='stress', supporter=counselor)


def test_resolve_only_by_assigned_supporter(active_room, second_counselor, counselor):
    with pytest.raises(Forbidden):
        services.resolve_room(second_counselor, active_room.pk)
    resolved = services.resolve_room(counselor, active_room.pk, 'Student feels better')
    assert resolved.status == SupportRoom.Status.RESOLVED
    assert resolved.supporter_id == counselor.pk
    assert resolved.closed_at is not None


def test_terminal_rooms_do_not_change(active_room, counselor, student):
    services.close_room(student, active_room.pk)
    with pytest.raises(Conflict):
        services.resolve_room(counselor, active_room.pk)
    with pytest.raises(Conflict):
        services.close_room(counselor, active_room.pk)
    active_room.refresh_from_db()
    assert active_room.status == SupportRoom.Status.CLOSED


def test_waiting_room_cannot_be_closed(room, student):
    with pytest.raises(Conflict):
        services.close_room(student, room.pk)


def test_moderator_can_close_room_they_are_not_in(active_room, moderator):
    closed = services.close_room(moderator, active_room.pk, 'Inappropriate content')
    assert closed.status == SupportRoom.Status.CLOSED
    assert closed.closed_by_id == moderator.pk


def test_outsider_cannot_close(active_room, other_student):
    with pytest.raises(Forbidden):
        services.close_room(other_student, active_room.pk)


def test_request_support_blocks_second_open_room(student):
    first = services.request_support(student, 'stress', Urgency.LOW)
    with pytest.raises(Conflict) as excinfo:
        services.request_support(student, 'sleep', Urgency.LOW)
    assert excinfo.value.details == {'room_id': first.pk}


def test_request_support_stores_initial_message(student):
    room = services.request_support(student, 'sleep', Urgency.MEDIUM, "I can't sleep")
    assert room.initial_message == "I can't sleep"
    assert list(room.messages.values_list('content', flat=True)) == ["I can't sleep"]


def test_queue_orders_by_urgency_and_filters_by_role(student, other_student, counselor, intern):
    low = services.open_room(student, 'stress', Urgency.LOW)
    crisis = services.open_room(other_student, 'sleep', Urgency.CRISIS)
    medium = services.open_room(student, 'academic', Urgency.MEDIUM)

    assert [r.pk for r in services.get_queue(counselor)] == [crisis.pk, medium.pk, low.pk]
    # The crisis room is routed to counselors only
    assert [r.pk for r in services.get_queue(intern)] == [medium.pk, low.pk]


def test_queue_hides_claimed_rooms(room, counselor, second_counselor):
    services.claim_room(counselor, room.pk)
    assert services.get_queue(second_counselor) == []


def test_students_cannot_see_queue(student):
    with pytest.raises(Forbidden):
        services.get_queue(student)


def test_archive_is_per_participant(active_room, student, counselor):
    services.archive_room(student, active_room.pk, True)
    assert services.list_my_rooms(student) == []
    assert [r.pk for r in services.list_my_rooms(student, include_archived=True)] == [active_room.pk]
    assert [r.pk for r in services.list_my_rooms(counselor)] == [active_room.pk]


@pytest.mark.django_db(transaction=True)
def test_concurrent_claims_have_exactly_one_winner(room, counselor, second_counselor):
    barrier = threading.Barrier(2)
    results = []

    def claim(supporter):
        try:
            barrier.wait(timeout=5)
            services.claim_room(supporter, room.pk)
            results.append('claimed')
        except Conflict:
            results.append('conflict')
        finally:
            # Each thread opened its own connection
            connections.close_all()

    threads = [threading.Thread(target=claim, args=(s,)) for s in (counselor, second_counselor)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=10)

    assert sorted(results) == ['claimed', 'conflict']
    room.refresh_from_db()
    assert room.status == SupportRoom.Status.ACTIVE
    assert room.supporter_id in (counselor.pk, second_counselor.pk)
    assert AuditLog.objects.filter(action='SUPPORT_ROOM_CLAIMED').count() == 1
