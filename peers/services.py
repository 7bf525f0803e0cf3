# peers/services.py

import logging
from smtplib import SMTPException

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.mail import send_mail
from django.db import transaction
from django.utils import timezone
from django.utils.crypto import get_random_string

from accounts.models import AgeBracket, Role
from core.exceptions import Conflict, NotFound, ValidationFailed
from core.permissions import authorize
from safety import audit
from .models import PeerApplication

User = get_user_model()
logger = logging.getLogger(__name__)

GENERATED_PASSWORD_LENGTH = 12
DEFAULT_REJECTION_REASON = 'Application does not meet current requirements'


def submit_application(data):
    # Public: anyone with a university email may apply once
    email = data['email']
    existing = PeerApplication.objects.filter(email__iexact=email).first()
    if existing is not None:
        raise Conflict('An application with this email already exists', details={'status': existing.status})
    application = PeerApplication.objects.create(**data)
    logger.info('Peer application %s submitted', application.pk)
    return application


def list_applications(actor, status=None):
    authorize(actor, None, 'application.review')
    applications = PeerApplication.objects.all()
    if status:
        status = status.upper()
        if status not in PeerApplication.Status.values:
            raise ValidationFailed('Invalid status filter')
        applications = applications.filter(status=status)
    return list(applications.order_by('-created_at', '-id'))


def get_application(actor, application_id):
    authorize(actor, None, 'application.review')
    try:
        return PeerApplication.objects.get(pk=application_id)
    except PeerApplication.DoesNotExist:
        raise NotFound('Application not found')


def _mark_reviewed(application, actor, status, **fields):
    # PENDING -> APPROVED/REJECTED happens once; a second reviewer gets a conflict
    now = timezone.now()
    updated = PeerApplication.objects.filter(
        pk=application.pk, status=PeerApplication.Status.PENDING,
    ).update(status=status, reviewed_by=actor, reviewed_at=now, **fields)
    if not updated:
        application.refresh_from_db()
        raise Conflict(f'Application already {application.status.lower()}')
    application.refresh_from_db()
    return application


def _send(subject, body, to_email):
    try:
        send_mail(subject, body, settings.DEFAULT_FROM_EMAIL, [to_email])
    except (SMTPException, OSError) as e:
        logger.warning('Failed to send "%s" email to %s: %s', subject, to_email, e)
        return False
    return True


"""
Author:
Approves a pending application: creates the applicant's account
with the 'moderator' role (peer supporters are moderators) and a
generated password, then emails them their credentials. The email
is sent after the transaction commits; if it fails the approval
still stands and 'email_sent' comes back False.
"""
def approve_application(actor, application_id):
    application = get_application(actor, application_id)
    if application.status != PeerApplication.Status.PENDING:
        raise Conflict(f'Application already {application.status.lower()}')
    if User.objects.filter(email__iexact=application.email).exists():
        raise Conflict('User account already exists with this email. Cannot approve application.')

    password = get_random_string(GENERATED_PASSWORD_LENGTH)
    with transaction.atomic():
        application = _mark_reviewed(application, actor, PeerApplication.Status.APPROVED)
        user = User.objects.create_user(
            email=application.email,
            password=password,
            first_name=application.full_name,
            display_name=application.full_name,
            role=Role.MODERATOR,
            age_bracket=AgeBracket.ADULT,
        )
        audit.record(
            actor=actor,
            action='APPROVE_APPLICATION',
            entity='PeerApplication',
            entity_id=application.pk,
            metadata={'applicant_email': application.email, 'user_id': user.pk},
        )

    email_sent = _send(
        'Your peer supporter application was approved',
        f'Hi {application.full_name},\n\n'
        f'Your application has been approved. You can now log in as a peer supporter.\n\n'
        f'Email: {application.email}\nTemporary password: {password}\n\n'
        f'Please change your password after your first login.',
        application.email,
    )
    logger.info('Peer application %s approved by %s', application.pk, actor.pk)
    return application, user, email_sent


def reject_application(actor, application_id, reason=''):
    application = get_application(actor, application_id)
    reason = reason or DEFAULT_REJECTION_REASON
    with transaction.atomic():
        application = _mark_reviewed(application, actor, PeerApplication.Status.REJECTED, rejection_reason=reason)
        audit.record(
            actor=actor,
            action='REJECT_APPLICATION',
            entity='PeerApplication',
            entity_id=application.pk,
            metadata={'applicant_email': application.email, 'reason': reason},
        )

    email_sent = _send(
        'Your peer supporter application',
        f'Hi {application.full_name},\n\n'
        f'Thank you for applying. Unfortunately your application was not accepted.\n\n'
        f'Reason: {reason}',
        application.email,
    )
    logger.info('Peer application %s rejected by %s', application.pk, actor.pk)
    return application, email_sent
