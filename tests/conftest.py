import pytest

from accounts.models import AgeBracket, Role, User
from rooms.services import claim_room, open_room

PASSWORD = 'Sturdy-Password-42'


def make_user(email, role=Role.STUDENT, **extra):
    return User.objects.create_user(email=email, password=PASSWORD, role=role, **extra)


@pytest.fixture
def student(db):
    return make_user('student@aui.ma', display_name='Sam')


@pytest.fixture
def other_student(db):
    return make_user('other@aui.ma')


@pytest.fixture
def minor(db):
    return make_user('minor@aui.ma', age_bracket=AgeBracket.UNDER18)


@pytest.fixture
def counselor(db):
    return make_user('counselor@aui.ma', role=Role.COUNSELOR, display_name='Dr. Amal')


@pytest.fixture
def second_counselor(db):
    return make_user('counselor2@aui.ma', role=Role.COUNSELOR)


@pytest.fixture
def intern(db):
    return make_user('intern@aui.ma', role=Role.INTERN)


@pytest.fixture
def moderator(db):
    return make_user('moderator@aui.ma', role=Role.MODERATOR)


@pytest.fixture
def admin_user(db):
    return make_user('admin@aui.ma', role=Role.ADMIN)


@pytest.fixture
def room(student):
    return open_room(student, 'stress')


@pytest.fixture
def active_room(room, counselor):
    return claim_room(counselor, room.pk)
