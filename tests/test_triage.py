import pytest

from core.exceptions import Forbidden
from rooms.models import RoutedTo, SupportRoom, Urgency
from safety.models import CrisisAlert
from triage import services
from triage.models import TriageForm


def test_anxiety_triage_opens_waiting_room(student):
    form, room = services.submit_triage(student, 'Anxiety', 6, Urgency.LOW, 'Exams are coming up')

    assert form.route == TriageForm.Route.PEER
    assert not form.risk_flag
    assert room.status == SupportRoom.Status.WAITING
    assert room.student_id == student.pk
    assert room.supporter_id is None
    assert room.triage_id == form.pk
    assert room.routed_to == RoutedTo.COUNSELOR
    assert [m.content for m in room.messages.all()] == ['Exams are coming up']


def test_high_urgency_routes_to_booking(student):
    form, room = services.submit_triage(student, 'academic', 5, Urgency.HIGH)
    assert form.route == TriageForm.Route.BOOK
    assert room.routed_to == RoutedTo.COUNSELOR


@pytest.mark.parametrize('mood, urgency, message', [
    (6, Urgency.LOW, 'I want to kill myself'),
    (2, Urgency.LOW, ''),
    (7, Urgency.CRISIS, ''),
])
def test_high_risk_triage_raises_alert_instead_of_room(student, mood, urgency, message):
    form, room = services.submit_triage(student, 'other', mood, urgency, message)

    assert form.route == TriageForm.Route.CRISIS
    assert form.risk_flag
    assert form.urgency == Urgency.CRISIS
    assert room is None
    assert not SupportRoom.objects.filter(student=student).exists()
    assert CrisisAlert.objects.get(user=student).source == CrisisAlert.Source.TRIAGE


def test_each_submission_opens_its_own_room(student):
    services.submit_triage(student, 'stress', 5, Urgency.LOW)
    services.submit_triage(student, 'stress', 5, Urgency.LOW)
    assert SupportRoom.objects.filter(student=student, status=SupportRoom.Status.WAITING).count() == 2


def test_triage_is_read_only(student):
    form, _ = services.submit_triage(student, 'sleep', 5, Urgency.LOW)
    form.mood_score = 9
    with pytest.raises(ValueError):
        form.save()


def test_only_students_submit_triage(counselor):
    with pytest.raises(Forbidden):
        services.submit_triage(counselor, 'stress', 5, Urgency.LOW)


def test_list_my_triages_newest_first(student, other_student):
    first, _ = services.submit_triage(student, 'stress', 5, Urgency.LOW)
    second, _ = services.submit_triage(student, 'sleep', 5, Urgency.LOW)
    services.submit_triage(other_student, 'sleep', 5, Urgency.LOW)
    assert [t.pk for t in services.list_my_triages(student)] == [second.pk, first.pk]
