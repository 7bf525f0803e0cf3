from datetime import timedelta

import pytest
from django.utils import timezone

from bookings import services
from bookings.models import Booking
from core.exceptions import Conflict, Forbidden, ValidationFailed


@pytest.fixture
def slot():
    start = (timezone.now() + timedelta(days=2)).replace(hour=10, minute=0, second=0, microsecond=0)
    return start, start + timedelta(hours=1)


def test_create_booking(student, counselor, slot):
    booking = services.create_booking(student, counselor.pk, *slot, notes='First session')
    assert booking.status == Booking.Status.PENDING
    assert booking.counselor_id == counselor.pk


def test_overlapping_booking_conflicts(student, other_student, counselor, slot):
    start, end = slot
    services.create_booking(student, counselor.pk, start, end)
    with pytest.raises(Conflict):
        services.create_booking(other_student, counselor.pk, start + timedelta(minutes=30), end + timedelta(minutes=30))
    with pytest.raises(Conflict):
        services.create_booking(other_student, counselor.pk, start - timedelta(minutes=10), end + timedelta(minutes=10))


def test_back_to_back_bookings_are_fine(student, other_student, counselor, slot):
    start, end = slot
    services.create_booking(student, counselor.pk, start, end)
    services.create_booking(other_student, counselor.pk, end, end + timedelta(hours=1))
    assert Booking.objects.filter(counselor=counselor).count() == 2


def test_other_counselor_is_free(student, other_student, counselor, second_counselor, slot):
    services.create_booking(student, counselor.pk, *slot)
    assert services.create_booking(other_student, second_counselor.pk, *slot).counselor_id == second_counselor.pk


def test_cancelled_booking_frees_slot(student, other_student, counselor, slot):
    booking = services.create_booking(student, counselor.pk, *slot)
    services.update_booking(student, booking.pk, status=Booking.Status.CANCELLED)
    services.create_booking(other_student, counselor.pk, *slot)

    # Putting the cancelled booking back would double-book the counselor
    with pytest.raises(Conflict):
        services.update_booking(counselor, booking.pk, status=Booking.Status.CONFIRMED)


def test_minimum_duration(student, counselor, slot):
    start, _ = slot
    with pytest.raises(ValidationFailed):
        services.create_booking(student, counselor.pk, start, start + timedelta(minutes=15))
    with pytest.raises(ValidationFailed):
        services.create_booking(student, counselor.pk, start, start - timedelta(minutes=60))


def test_invalid_counselor(student, intern, slot):
    with pytest.raises(ValidationFailed):
        services.create_booking(student, intern.pk, *slot)


def test_only_students_book(counselor, second_counselor, slot):
    with pytest.raises(Forbidden):
        services.create_booking(counselor, second_counselor.pk, *slot)


def test_only_counselor_confirms(student, counselor, other_student, slot):
    booking = services.create_booking(student, counselor.pk, *slot)
    with pytest.raises(Forbidden):
        services.update_booking(student, booking.pk, status=Booking.Status.CONFIRMED)
    with pytest.raises(Forbidden):
        services.update_booking(other_student, booking.pk, notes='hi')

    confirmed = services.update_booking(counselor, booking.pk, status=Booking.Status.CONFIRMED)
    assert confirmed.status == Booking.Status.CONFIRMED


def test_list_my_bookings(student, other_student, counselor, slot):
    start, end = slot
    mine = services.create_booking(student, counselor.pk, start, end)
    theirs = services.create_booking(other_student, counselor.pk, end, end + timedelta(hours=1))

    assert [b.pk for b in services.list_my_bookings(student)] == [mine.pk]
    assert [b.pk for b in services.list_my_bookings(counselor)] == [theirs.pk, mine.pk]
