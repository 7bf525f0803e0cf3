# safety/services.py

import logging

from django.conf import settings

from core.exceptions import NotFound, ValidationFailed
from core.permissions import authorize
from core.utils import SUPPORTERS_GROUP_NAME, send_to_group

from . import audit
from .models import AuditLog, CrisisAlert

logger = logging.getLogger(__name__)

OPEN_ALERT_LIMIT = 50

"""
Author:
Creates a crisis alert for a student and pushes it straight to
every connected supporter.
RT: Supporters get a 'crisis_alert' event on their notification socket.
"""
def raise_alert(user, message, source=CrisisAlert.Source.MANUAL):
    alert = CrisisAlert.objects.create(user=user, message=message, source=source)
    audit.record(
        actor=user,
        action='CRISIS_ALERT_RAISED',
        entity='CrisisAlert',
        entity_id=alert.pk,
        metadata={'source': source},
    )
    logger.warning('Crisis alert %s raised for user %s (source: %s)', alert.pk, user.pk, source)
    send_to_group(SUPPORTERS_GROUP_NAME, {'type': 'crisis_alert', 'alert': alert.as_dict()})
    return alert


def create_manual_alert(actor, message):
    message = (message or '').strip()
    if not message:
        raise ValidationFailed(details={'message': ['This field is required.']})
    return raise_alert(actor, message, source=CrisisAlert.Source.MANUAL)


def list_open_alerts(actor):
    authorize(actor, None, 'alert.manage')
    open_statuses = [CrisisAlert.Status.PENDING, CrisisAlert.Status.ACKNOWLEDGED]
    return list(
        CrisisAlert.objects.filter(status__in=open_statuses)
        .select_related('user')[:OPEN_ALERT_LIMIT]
    )


def update_alert(actor, alert_id, status):
    authorize(actor, None, 'alert.manage')
    if status not in CrisisAlert.Status.values:
        raise ValidationFailed('Invalid status')
    try:
        alert = CrisisAlert.objects.select_related('user').get(pk=alert_id)
    except CrisisAlert.DoesNotExist:
        raise NotFound('Crisis alert not found')
    alert.status = status
    alert.save(update_fields=['status', 'updated_at'])
    audit.record(
        actor=actor,
        action='CRISIS_ALERT_UPDATED',
        entity='CrisisAlert',
        entity_id=alert.pk,
        metadata={'status': status},
    )
    return alert


"""
Author:
Reads the audit log for administrators, newest first. Every
filter is optional; 'start' and 'end' bound 'created_at'.
Returns the page of entries and the total matching count.
"""
def list_audit_log(actor, page=1, limit=None, user_id=None, action=None, entity=None, start=None, end=None):
    authorize(actor, None, 'audit.view')
    page = page or 1
    limit = limit or settings.AUDIT_LOG_PAGE_SIZE

    entries = AuditLog.objects.select_related('actor').order_by('-created_at', '-id')
    if user_id:
        entries = entries.filter(actor_id=user_id)
    if action:
        entries = entries.filter(action=action)
    if entity:
        entries = entries.filter(entity=entity)
    if start:
        entries = entries.filter(created_at__gte=start)
    if end:
        entries = entries.filter(created_at__lte=end)

    total = entries.count()
    offset = (page - 1) * limit
    return list(entries[offset:offset + limit]), total
