from accounts.models import User
from peer_rooms.models import PeerRoom
from rooms.models import SupportRoom
from tests.conftest import PASSWORD


def post(client, url, data=None, **kwargs):
    return client.post(url, data or {}, content_type='application/json', **kwargs)


def test_healthz(client, db):
    response = client.get('/healthz/')
    assert response.status_code == 200
    assert response.json() == {'status': 'ok'}


def test_anonymous_requests_get_401(client, db):
    assert client.get('/api/support/queue/').status_code == 401
    assert client.get('/api/accounts/me/').status_code == 401


def test_wrong_method_gets_405(client, student):
    client.force_login(student)
    assert client.get('/api/support/rooms/1/claim/').status_code == 405


def test_register_login_and_me(client, db):
    response = post(client, '/api/accounts/register/', {
        'email': 'fresh@aui.ma', 'password': PASSWORD, 'display_name': 'Fresh',
    })
    assert response.status_code == 201
    assert response.json()['user']['role'] == 'student'

    post(client, '/api/accounts/logout/')
    assert client.get('/api/accounts/me/').status_code == 401

    response = post(client, '/api/accounts/login/', {'email': 'FRESH@aui.ma', 'password': PASSWORD})
    assert response.status_code == 200
    assert client.get('/api/accounts/me/').json()['user']['email'] == 'fresh@aui.ma'


def test_bad_login(client, student):
    response = post(client, '/api/accounts/login/', {'email': 'student@aui.ma', 'password': 'nope'})
    assert response.status_code == 400


def test_invalid_json_body(client, student):
    client.force_login(student)
    response = client.post('/api/support/request/', 'not json', content_type='application/json')
    assert response.status_code == 400


def test_support_flow_over_http(client, student, counselor, second_counselor):
    client.force_login(student)
    response = post(client, '/api/support/request/', {'topic': 'stress', 'urgency': 'low'})
    assert response.status_code == 201
    room_id = response.json()['room']['id']
    assert response.json()['room']['status'] == 'WAITING'

    assert post(client, '/api/support/request/', {'topic': 'sleep', 'urgency': 'low'}).status_code == 409

    client.force_login(counselor)
    queue = client.get('/api/support/queue/').json()['queue']
    assert [r['id'] for r in queue] == [room_id]
    response = post(client, f'/api/support/rooms/{room_id}/claim/')
    assert response.status_code == 200
    assert response.json()['room']['supporter_id'] == counselor.pk

    client.force_login(second_counselor)
    response = post(client, f'/api/support/rooms/{room_id}/claim/')
    assert response.status_code == 409
    assert response.json()['error'] == 'This support room has already been claimed'

    client.force_login(student)
    assert post(client, f'/api/support/rooms/{room_id}/messages/', {'content': 'Hello'}).status_code == 201
    client.force_login(counselor)
    assert post(client, f'/api/support/rooms/{room_id}/messages/', {'content': 'Hi'}).status_code == 201

    data = client.get(f'/api/support/rooms/{room_id}/messages/').json()
    assert [m['content'] for m in data['messages']] == ['Hello', 'Hi']
    assert data['total'] == 2

    client.force_login(second_counselor)
    assert client.get(f'/api/support/rooms/{room_id}/messages/').status_code == 403


def test_moderator_close_over_http(client, active_room, moderator, student):
    client.force_login(moderator)
    response = post(client, f'/api/support/rooms/{active_room.pk}/close/', {'reason': 'Policy'})
    assert response.status_code == 200
    assert SupportRoom.objects.get(pk=active_room.pk).status == SupportRoom.Status.CLOSED

    client.force_login(student)
    response = post(client, f'/api/support/rooms/{active_room.pk}/messages/', {'content': 'Hello?'})
    assert response.status_code == 409


def test_missing_room_is_404(client, counselor):
    client.force_login(counselor)
    assert post(client, '/api/support/rooms/4242/claim/').status_code == 404


def test_triage_crisis_response(client, student):
    client.force_login(student)
    response = post(client, '/api/triage/', {'topic': 'other', 'mood_score': 1, 'urgency': 'low'})
    assert response.status_code == 201
    data = response.json()
    assert data['route'] == 'CRISIS'
    assert data['numbers'] == ['141', '112']
    assert 'support_room' not in data


def test_triage_validation_errors(client, student):
    client.force_login(student)
    response = post(client, '/api/triage/', {'topic': 'stress', 'mood_score': 11, 'urgency': 'low'})
    assert response.status_code == 400
    assert 'mood_score' in response.json()['details']


def test_triage_opens_room(client, student):
    client.force_login(student)
    response = post(client, '/api/triage/', {'topic': 'Anxiety', 'mood_score': 6, 'urgency': 'low'})
    room = response.json()['support_room']
    assert room['status'] == 'WAITING'
    assert room['routed_to'] == 'counselor'


def test_booking_over_http(client, student, other_student, counselor):
    client.force_login(student)
    counselors = client.get('/api/bookings/counselors/').json()['counselors']
    assert [c['id'] for c in counselors] == [counselor.pk]

    slot = {'counselor_id': counselor.pk, 'start_at': '2030-01-10T10:00:00Z', 'end_at': '2030-01-10T11:00:00Z'}
    assert post(client, '/api/bookings/', slot).status_code == 201

    client.force_login(other_student)
    assert post(client, '/api/bookings/', slot).status_code == 409


def test_peer_application_over_http(client, admin_user, mailoutbox):
    response = post(client, '/api/peers/applications/', {
        'full_name': 'Omar B', 'email': 'o.b@aui.ma', 'school': 'SHSS', 'major': 'Psychology',
        'year_of_study': 'Senior', 'phone_number': '0600000000', 'motivation': 'Help',
        'experience': 'Tutoring', 'availability': 'Weekends', 'communication_style': 'Direct',
        'agreed_to_terms': True,
    })
    assert response.status_code == 201
    application_id = response.json()['application_id']

    assert client.get('/api/peers/applications/').status_code == 401

    client.force_login(admin_user)
    response = post(client, f'/api/peers/applications/{application_id}/approve/')
    assert response.status_code == 200
    assert response.json()['user']['role'] == 'moderator'
    assert response.json()['email_sent'] is True


def test_crisis_button_over_http(client, student, counselor):
    client.force_login(student)
    response = post(client, '/api/crisis/alerts/', {'message': 'Please call me'})
    assert response.status_code == 201
    assert client.get('/api/crisis/alerts/').status_code == 403

    client.force_login(counselor)
    alerts = client.get('/api/crisis/alerts/').json()['alerts']
    assert [a['message'] for a in alerts] == ['Please call me']


def test_triage_risk_flag_is_the_keyword_match(client, student):
    client.force_login(student)
    # Low mood alone routes to crisis without a keyword hit
    data = post(client, '/api/triage/', {'topic': 'sleep', 'mood_score': 2, 'urgency': 'low'}).json()
    assert data['route'] == 'CRISIS'
    assert data['risk_flag'] is False

    data = post(client, '/api/triage/', {
        'topic': 'sleep', 'mood_score': 7, 'urgency': 'low', 'message': 'I feel suicidal lately',
    }).json()
    assert data['route'] == 'CRISIS'
    assert data['risk_flag'] is True


def test_delete_account_over_http(client, student):
    client.force_login(student)
    response = client.delete('/api/accounts/me/', content_type='application/json')
    assert response.status_code == 400
    assert 'password' in response.json()['details']

    response = client.delete('/api/accounts/me/', {'password': 'guess'}, content_type='application/json')
    assert response.status_code == 403
    assert User.objects.filter(pk=student.pk).exists()

    response = client.delete('/api/accounts/me/', {'password': PASSWORD}, content_type='application/json')
    assert response.status_code == 200
    assert not User.objects.filter(pk=student.pk).exists()
    assert client.get('/api/accounts/me/').status_code == 401


def test_counselor_with_rooms_cannot_delete_over_http(client, active_room, counselor):
    client.force_login(counselor)
    response = client.delete('/api/accounts/me/', {'password': PASSWORD}, content_type='application/json')
    assert response.status_code == 409


def test_profile_and_password_over_http(client, student):
    client.force_login(student)
    response = client.patch('/api/accounts/me/', {'display_name': 'Sami'}, content_type='application/json')
    assert response.status_code == 200
    assert response.json()['user']['display_name'] == 'Sami'

    response = post(client, '/api/accounts/me/password/', {
        'current_password': PASSWORD, 'new_password': 'Another-Sturdy-Pass-7',
    })
    assert response.status_code == 200
    # The session survives the password change
    assert client.get('/api/accounts/me/').status_code == 200

    response = post(client, '/api/accounts/me/password/', {
        'current_password': PASSWORD, 'new_password': 'Yet-Another-Pass-9',
    })
    assert response.status_code == 403


def test_peer_rooms_over_http(client, student, minor, admin_user):
    client.force_login(admin_user)
    response = post(client, '/api/peer-rooms/', {'title': 'Exam Stress', 'topic': 'exams'})
    assert response.status_code == 201
    assert response.json()['room']['slug'] == 'exam-stress'

    client.force_login(student)
    assert post(client, '/api/peer-rooms/', {'title': 'Mine'}).status_code == 403
    response = post(client, '/api/peer-rooms/exam-stress/messages/', {'body': 'Anyone else panicking?'})
    assert response.status_code == 201
    assert response.json()['message']['author']['display_name'] == 'Sam'

    data = client.get('/api/peer-rooms/exam-stress/messages/?limit=10').json()
    assert [m['body'] for m in data['messages']] == ['Anyone else panicking?']
    assert data['has_more'] is False
    assert client.get('/api/peer-rooms/').json()['rooms'][0]['message_count'] == 1

    client.force_login(minor)
    assert client.get('/api/peer-rooms/').json()['rooms'] == []
    assert client.get('/api/peer-rooms/exam-stress/').status_code == 403
    assert client.get('/api/peer-rooms/nowhere/').status_code == 404


def test_moderation_queue_over_http(client, student, moderator):
    PeerRoom.objects.create(slug='exam-stress', title='Exam Stress')
    client.force_login(student)
    message_id = post(client, '/api/peer-rooms/exam-stress/messages/', {
        'body': 'who can sell drugs to me',
    }).json()['message']['id']

    assert client.get('/api/mod/flagged/').status_code == 403

    client.force_login(moderator)
    flagged = client.get('/api/mod/flagged/').json()['messages']
    assert [(m['kind'], m['id']) for m in flagged] == [('peer', message_id)]

    assert post(client, f'/api/mod/messages/peer/{message_id}/', {'action': 'ban'}).status_code == 400
    response = post(client, f'/api/mod/messages/peer/{message_id}/', {'action': 'remove'})
    assert response.status_code == 200
    assert client.get('/api/mod/flagged/').json()['messages'] == []


def test_audit_log_over_http(client, student, admin_user):
    client.force_login(student)
    post(client, '/api/crisis/alerts/', {'message': 'Please call me'})
    assert client.get('/api/audit/').status_code == 403

    client.force_login(admin_user)
    data = client.get('/api/audit/', {'action': 'CRISIS_ALERT_RAISED'}).json()
    assert data['total'] == 1
    assert data['logs'][0]['actor']['id'] == student.pk
    assert client.get('/api/audit/', {'page': 0}).status_code == 400
