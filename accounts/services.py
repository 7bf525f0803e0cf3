# accounts/services.py

import logging

from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from core.exceptions import Conflict, Forbidden, ValidationFailed
from safety import audit
from .models import AgeBracket, Role

User = get_user_model()
logger = logging.getLogger(__name__)


def register_user(email, password, first_name='', last_name='', display_name='', age_bracket=AgeBracket.ADULT):
    # Every self-registered account is a student; other roles come from admins or peer approval
    if User.objects.filter(email__iexact=email).exists():
        raise Conflict('An account with this email already exists')
    try:
        validate_password(password, User(email=email, first_name=first_name, last_name=last_name))
    except ValidationError as e:
        raise ValidationFailed(details={'password': list(e.messages)})
    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=email,
                password=password,
                first_name=first_name,
                last_name=last_name,
                display_name=display_name,
                age_bracket=age_bracket,
                role=Role.STUDENT,
            )
    except IntegrityError:
        raise Conflict('An account with this email already exists')
    logger.info('Registered student account %s', user.pk)
    return user


def update_consent(actor, consent):
    if actor.age_bracket != AgeBracket.UNDER18:
        raise ValidationFailed('Consent is only recorded for users under 18')
    actor.consent_minor_ok = bool(consent)
    actor.save(update_fields=['consent_minor_ok'])
    audit.record(
        actor=actor,
        action='CONSENT_UPDATED',
        entity='User',
        entity_id=actor.pk,
        metadata={'consent': actor.consent_minor_ok},
    )
    return actor


def update_profile(actor, display_name=None, first_name=None, last_name=None):
    changes = {
        field: value for field, value in (
            ('display_name', display_name), ('first_name', first_name), ('last_name', last_name),
        ) if value
    }
    if not changes:
        raise ValidationFailed('No fields to update')
    for field, value in changes.items():
        setattr(actor, field, value)
    actor.save(update_fields=list(changes))
    audit.record(
        actor=actor,
        action='PROFILE_UPDATED',
        entity='User',
        entity_id=actor.pk,
        metadata={'fields': list(changes)},
    )
    return actor


def change_password(actor, current_password, new_password):
    if not actor.check_password(current_password):
        raise Forbidden('Current password is incorrect')
    try:
        validate_password(new_password, actor)
    except ValidationError as e:
        raise ValidationFailed(details={'new_password': list(e.messages)})
    actor.set_password(new_password)
    actor.save(update_fields=['password'])
    audit.record(actor=actor, action='PASSWORD_CHANGED', entity='User', entity_id=actor.pk)
    logger.info('Password changed for user %s', actor.pk)
    return actor


"""
Author:
Deletes the caller's own account after checking their password.
A student's rooms, messages, triage forms and bookings go with it.
Supporters who have claimed rooms and counselors with bookings are
refused instead, since those rows belong to other students too.
"""
def delete_account(actor, password):
    if not actor.check_password(password):
        raise Forbidden('Incorrect password')
    if actor.supported_rooms.exists():
        raise Conflict('Accounts that have supported students cannot be deleted; ask an administrator to deactivate it')
    if actor.counselor_bookings.exists():
        raise Conflict('Counselors with bookings cannot be deleted; ask an administrator to deactivate it')

    user_id = actor.pk
    with transaction.atomic():
        audit.record(action='ACCOUNT_DELETED', entity='User', entity_id=user_id)
        actor.delete()
    logger.info('Deleted account %s', user_id)


def list_counselors():
    return list(User.objects.filter(role=Role.COUNSELOR, is_active=True).order_by('display_name', 'email'))
