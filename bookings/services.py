# bookings/services.py

import logging
from datetime import timedelta

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Q

from accounts.models import Role
from core.exceptions import Conflict, NotFound, ValidationFailed
from core.permissions import authorize
from .models import Booking

User = get_user_model()
logger = logging.getLogger(__name__)


def _check_duration(start_at, end_at):
    if end_at <= start_at:
        raise ValidationFailed('Booking must end after it starts')
    minimum = timedelta(minutes=settings.BOOKING_MIN_DURATION_MINUTES)
    if end_at - start_at < minimum:
        raise ValidationFailed(f'Booking must be at least {settings.BOOKING_MIN_DURATION_MINUTES} minutes long')


def _check_slot_free(counselor, start_at, end_at, exclude_pk=None):
    # Two slots overlap when each one starts before the other ends
    clashes = Booking.objects.filter(
        counselor=counselor,
        status__in=Booking.HOLDING_STATUSES,
        start_at__lt=end_at,
        end_at__gt=start_at,
    )
    if exclude_pk is not None:
        clashes = clashes.exclude(pk=exclude_pk)
    if clashes.exists():
        raise Conflict('Time slot not available')


def _lock_counselor(counselor_id):
    # Locking the counselor row serialises bookings for the same counselor
    try:
        return User.objects.select_for_update().get(pk=counselor_id, role=Role.COUNSELOR, is_active=True)
    except User.DoesNotExist:
        raise ValidationFailed('Invalid counselor')


"""
Author:
Books a session for a student with a counselor. The overlap check
and the insert run in one transaction while the counselor's row
is locked, so two students racing for the same slot cannot both
get it.
"""
def create_booking(actor, counselor_id, start_at, end_at, notes=''):
    authorize(actor, None, 'booking.create')
    _check_duration(start_at, end_at)

    with transaction.atomic():
        counselor = _lock_counselor(counselor_id)
        _check_slot_free(counselor, start_at, end_at)
        booking = Booking.objects.create(
            student=actor,
            counselor=counselor,
            start_at=start_at,
            end_at=end_at,
            notes=notes or '',
        )

    logger.info('Booking %s created: student %s with counselor %s', booking.pk, actor.pk, counselor.pk)
    return booking


def list_my_bookings(actor):
    bookings = Booking.objects.select_related('student', 'counselor')
    if actor.role == Role.STUDENT:
        bookings = bookings.filter(student=actor)
    elif actor.role == Role.COUNSELOR:
        bookings = bookings.filter(counselor=actor)
    else:
        bookings = bookings.filter(Q(student=actor) | Q(counselor=actor))
    return list(bookings.order_by('-start_at', '-id'))


def update_booking(actor, booking_id, status=None, notes=None):
    with transaction.atomic():
        try:
            booking = Booking.objects.select_for_update().select_related('student', 'counselor').get(pk=booking_id)
        except Booking.DoesNotExist:
            raise NotFound('Booking not found')
        authorize(actor, booking, 'booking.update')

        if status and status != booking.status:
            if status in (Booking.Status.CONFIRMED, Booking.Status.COMPLETED):
                authorize(actor, booking, 'booking.confirm')
            if status in Booking.HOLDING_STATUSES and booking.status not in Booking.HOLDING_STATUSES:
                _lock_counselor(booking.counselor_id)
                _check_slot_free(booking.counselor, booking.start_at, booking.end_at, exclude_pk=booking.pk)
            booking.status = status
        if notes is not None:
            booking.notes = notes
        booking.save()

    logger.info('Booking %s updated by %s (status %s)', booking.pk, actor.pk, booking.status)
    return booking
