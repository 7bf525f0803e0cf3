from datetime import timedelta

import pytest
from django.utils import timezone

from core.exceptions import Conflict, Forbidden, ValidationFailed
from messaging import services
from messaging.models import DELETED_PLACEHOLDER, SupportMessage
from rooms.services import claim_room, close_room, open_room, resolve_room
from accounts.services import update_consent
from safety.models import AuditLog, CrisisAlert


def test_messages_come_back_in_order(active_room, student, counselor):
    services.append_message(student, active_room.pk, 'Hello')
    services.append_message(counselor, active_room.pk, 'Hi')

    page, total = services.fetch_messages(student, active_room.pk)
    assert [m.content for m in page] == ['Hello', 'Hi']
    assert total == 2
    stamps = [m.created_at for m in page]
    assert stamps == sorted(stamps)


def test_append_updates_room_preview(active_room, student):
    services.append_message(student, active_room.pk, 'x' * 150)
    active_room.refresh_from_db()
    assert active_room.last_message_preview == 'x' * 100
    assert active_room.last_message_at is not None


def test_student_can_write_while_waiting(room, student):
    services.append_message(student, room.pk, 'Is anyone there?')
    assert room.messages.count() == 1


def test_non_participant_cannot_append_or_fetch(active_room, other_student, second_counselor):
    for outsider in (other_student, second_counselor):
        with pytest.raises(Forbidden):
            services.append_message(outsider, active_room.pk, 'hi')
        with pytest.raises(Forbidden):
            services.fetch_messages(outsider, active_room.pk)


def test_moderator_close_blocks_further_messages(active_room, moderator, student, counselor):
    close_room(moderator, active_room.pk)
    with pytest.raises(Conflict):
        services.append_message(student, active_room.pk, 'Hello?')
    with pytest.raises(Conflict):
        services.append_message(counselor, active_room.pk, 'Hello?')


def test_moderator_cannot_read_room(active_room, moderator):
    with pytest.raises(Forbidden):
        services.fetch_messages(moderator, active_room.pk)


def test_resolved_room_still_accepts_messages(active_room, counselor, student):
    resolve_room(counselor, active_room.pk)
    services.append_message(student, active_room.pk, 'Thank you!')
    assert active_room.messages.count() == 1


def test_blank_and_oversized_messages_are_rejected(active_room, student, settings):
    with pytest.raises(ValidationFailed):
        services.append_message(student, active_room.pk, '   ')
    settings.SUPPORT_MESSAGE_MAX_LENGTH = 10
    with pytest.raises(ValidationFailed):
        services.append_message(student, active_room.pk, 'x' * 11)


def test_fetch_pages_and_marks_read(active_room, student, counselor):
    for i in range(5):
        services.append_message(student, active_room.pk, f'message {i}')

    page, total = services.fetch_messages(counselor, active_room.pk, offset=1, limit=2)
    assert [m.content for m in page] == ['message 1', 'message 2']
    assert total == 5
    assert not SupportMessage.objects.filter(room=active_room, is_read=False).exists()


def test_fetch_rejects_bad_paging(active_room, student):
    with pytest.raises(ValidationFailed):
        services.fetch_messages(student, active_room.pk, limit='abc')
    with pytest.raises(ValidationFailed):
        services.fetch_messages(student, active_room.pk, limit=0)


def test_mark_read_only_touches_other_side(active_room, student, counselor):
    mine = services.append_message(student, active_room.pk, 'mine')
    theirs = services.append_message(counselor, active_room.pk, 'theirs')

    assert services.mark_read(student, active_room.pk) == 1
    mine.refresh_from_db()
    theirs.refresh_from_db()
    assert not mine.is_read
    assert theirs.is_read


def test_edit_own_message(active_room, student, counselor):
    message = services.append_message(student, active_room.pk, 'helo')
    with pytest.raises(Forbidden):
        services.edit_message(counselor, message.pk, 'changed')

    edited = services.edit_message(student, message.pk, 'hello')
    assert edited.content == 'hello'
    assert edited.is_edited


def test_edit_window(active_room, student):
    message = services.append_message(student, active_room.pk, 'old')
    SupportMessage.objects.filter(pk=message.pk).update(created_at=timezone.now() - timedelta(hours=2))
    with pytest.raises(Forbidden):
        services.edit_message(student, message.pk, 'new')


def test_delete_is_soft(active_room, student):
    message = services.append_message(student, active_room.pk, 'oops')
    services.delete_message(student, message.pk)

    message.refresh_from_db()
    assert message.is_deleted
    assert message.content == DELETED_PLACEHOLDER
    with pytest.raises(Conflict):
        services.edit_message(student, message.pk, 'back')


def test_self_harm_message_from_student_raises_alert(active_room, student, counselor):
    message = services.append_message(student, active_room.pk, 'Some days I want to die')
    assert 'self-harm' in message.flag_list
    alert = CrisisAlert.objects.get(user=student)
    assert alert.source == CrisisAlert.Source.MESSAGE

    services.append_message(counselor, active_room.pk, 'Are you thinking about suicide?')
    assert CrisisAlert.objects.count() == 1


def test_content_must_be_text(active_room, student):
    for content in (5, ['hi'], {'text': 'hi'}):
        with pytest.raises(ValidationFailed) as excinfo:
            services.append_message(student, active_room.pk, content)
        assert 'content' in excinfo.value.details
    assert active_room.messages.count() == 0


def test_minor_needs_consent_to_post(minor, counselor):
    room = claim_room(counselor, open_room(minor, 'stress').pk)
    with pytest.raises(Forbidden):
        services.append_message(minor, room.pk, 'Hello')
    assert room.messages.count() == 0

    update_consent(minor, True)
    minor.refresh_from_db()
    services.append_message(minor, room.pk, 'Hello')
    assert room.messages.count() == 1


def test_flagged_message_is_audited(active_room, student):
    message = services.append_message(student, active_room.pk, 'My roommate keeps doing drugs')
    assert message.flag_list == ['substance']
    entry = AuditLog.objects.get(action='MESSAGE_FLAGGED', entity_id=str(message.pk))
    assert entry.actor_id == student.pk
    assert entry.metadata['room_id'] == active_room.pk
    assert entry.metadata['flags'] == ['substance']


def test_clean_message_is_not_audited(active_room, student):
    services.append_message(student, active_room.pk, 'Exams are going fine')
    assert not AuditLog.objects.filter(action='MESSAGE_FLAGGED').exists()
