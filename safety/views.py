# safety/views.py

from django.http import JsonResponse

from core.utils import json_view, read_json, validate
from . import review, services
from .forms import CrisisAlertForm, CrisisAlertUpdateForm, ReviewMessageForm, AuditLogFilterForm


# Student panic button, or supporters listing what is still open
@json_view(methods=('GET', 'POST'))
def alerts_view(request):
    if request.method == 'POST':
        data = validate(CrisisAlertForm, read_json(request))
        alert = services.create_manual_alert(request.user, data['message'])
        return JsonResponse({
            'alert': {
                'id': alert.pk,
                'status': alert.status,
                'message': 'Crisis alert received. Help is on the way.',
            },
        }, status=201)

    alerts = services.list_open_alerts(request.user)
    return JsonResponse({'alerts': [alert.as_dict() for alert in alerts]})


@json_view(methods=('PATCH', 'POST'))
def update_alert_view(request, pk):
    data = validate(CrisisAlertUpdateForm, read_json(request))
    alert = services.update_alert(request.user, pk, data['status'])
    return JsonResponse({'alert': alert.as_dict()})


@json_view(methods=('GET',))
def flagged_messages_view(request):
    return JsonResponse({'messages': review.list_flagged_messages(request.user)})


@json_view(methods=('POST',))
def review_message_view(request, kind, pk):
    data = validate(ReviewMessageForm, read_json(request))
    result = review.review_flagged_message(request.user, kind, pk, data['action'])
    return JsonResponse({'success': True, **result})


@json_view(methods=('GET',))
def audit_log_view(request):
    filters = validate(AuditLogFilterForm, request.GET)
    page = filters.pop('page') or 1
    limit = filters.pop('limit')
    entries, total = services.list_audit_log(request.user, page=page, limit=limit, **filters)
    return JsonResponse({
        'logs': [entry.as_dict() for entry in entries],
        'total': total,
        'page': page,
    })
