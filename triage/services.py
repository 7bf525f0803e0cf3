# triage/services.py

import logging

from django.db import transaction

from core.permissions import authorize
from rooms.models import Urgency
from rooms.services import open_room
from safety.models import CrisisAlert
from safety.moderation import detect_risk
from safety.services import raise_alert
from .models import TriageForm

logger = logging.getLogger(__name__)

MY_TRIAGES_LIMIT = 20

# Mood scores below this count as high risk
LOW_MOOD_THRESHOLD = 3


def route_for(urgency, high_risk):
    """Returns (route, urgency) for an intake; high risk always becomes a crisis."""
    if high_risk:
        return TriageForm.Route.CRISIS, Urgency.CRISIS
    if urgency == Urgency.HIGH:
        return TriageForm.Route.BOOK, Urgency.HIGH
    if urgency == Urgency.MEDIUM:
        return TriageForm.Route.PEER, Urgency.MEDIUM
    return TriageForm.Route.PEER, Urgency.LOW


"""
Author:
Handles a submitted intake form. Risk comes from the message
text (self-harm keywords), a very low mood score or the student
choosing 'crisis'. High-risk intakes raise a crisis alert and get
the hotline numbers instead of a room. Everything else opens a
WAITING support room linked to the form. There is no dedup: a
second submission opens a second room.
"""
def submit_triage(actor, topic, mood_score, urgency, message=''):
    authorize(actor, None, 'triage.submit')
    message = (message or '').strip()

    keyword_risk = detect_risk(message) if message else False
    high_risk = keyword_risk or mood_score < LOW_MOOD_THRESHOLD or urgency == Urgency.CRISIS
    route, urgency_level = route_for(urgency, high_risk)

    room = None
    with transaction.atomic():
        form = TriageForm.objects.create(
            student=actor,
            topic=topic.strip(),
            mood_score=mood_score,
            urgency=urgency_level,
            message=message,
            risk_flag=high_risk,
            route=route,
        )
        if high_risk:
            raise_alert(
                actor,
                message or f'High-risk triage detected: {form.topic}',
                source=CrisisAlert.Source.TRIAGE,
            )
        else:
            room = open_room(actor, form.topic, urgency_level, message, triage=form)

    logger.info('Triage %s submitted by %s routed to %s', form.pk, actor.pk, route)
    return form, room


def list_my_triages(actor):
    return list(TriageForm.objects.filter(student=actor).order_by('-created_at', '-id')[:MY_TRIAGES_LIMIT])
