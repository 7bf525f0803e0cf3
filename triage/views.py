# triage/views.py

from django.conf import settings
from django.http import JsonResponse

from core.utils import json_view, read_json, validate
from safety.moderation import detect_risk
from . import services
from .forms import TriageSubmissionForm
from .models import TriageForm


# Submit an intake form, or list the student's previous ones
@json_view(methods=('GET', 'POST'))
def triage_view(request):
    if request.method == 'GET':
        triages = services.list_my_triages(request.user)
        return JsonResponse({'triages': [t.as_dict() for t in triages]})

    data = validate(TriageSubmissionForm, read_json(request))
    form, room = services.submit_triage(
        request.user, data['topic'], data['mood_score'], data['urgency'], data['message'],
    )

    response = {
        'id': form.pk,
        'route': form.route,
        # Only the keyword match; the stored flag also covers low mood and a crisis pick
        'risk_flag': detect_risk(form.message) if form.message else False,
    }
    if form.route == TriageForm.Route.CRISIS:
        response['numbers'] = settings.CRISIS_HOTLINE_NUMBERS
        response['banner_text'] = settings.CRISIS_BANNER_TEXT
    elif room is not None:
        response['support_room'] = {
            'id': room.pk,
            'topic': room.topic,
            'urgency': room.urgency,
            'routed_to': room.routed_to,
            'status': room.status,
        }
        if form.route == TriageForm.Route.BOOK:
            response['counselor_filters'] = {'topic': form.topic}
        response['message'] = f"Connecting you with a {room.get_routed_to_display().lower()}..."
    return JsonResponse(response, status=201)
