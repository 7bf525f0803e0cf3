# peers/views.py

from django.http import JsonResponse

from core.utils import json_view, read_json, validate
from . import services
from .forms import PeerApplicationForm, RejectApplicationForm


# Public form submission; admins list applications
@json_view(methods=('GET', 'POST'), login_required=False)
def applications_view(request):
    if request.method == 'POST':
        data = validate(PeerApplicationForm, read_json(request))
        application = services.submit_application(data)
        return JsonResponse({
            'message': 'Application submitted successfully',
            'application_id': application.pk,
        }, status=201)

    if not request.user.is_authenticated:
        return JsonResponse({'error': 'Authentication required'}, status=401)
    applications = services.list_applications(request.user, request.GET.get('status'))
    return JsonResponse({'applications': [a.as_dict() for a in applications]})


@json_view(methods=('GET',))
def application_detail_view(request, pk):
    application = services.get_application(request.user, pk)
    return JsonResponse({'application': application.as_dict()})


@json_view(methods=('POST',))
def approve_application_view(request, pk):
    application, user, email_sent = services.approve_application(request.user, pk)
    return JsonResponse({
        'message': 'Application approved',
        'application': application.as_dict(),
        'user': user.as_dict(),
        'email_sent': email_sent,
    })


@json_view(methods=('POST',))
def reject_application_view(request, pk):
    data = validate(RejectApplicationForm, read_json(request))
    application, email_sent = services.reject_application(request.user, pk, data['reason'])
    return JsonResponse({
        'message': 'Application rejected',
        'application': application.as_dict(),
        'email_sent': email_sent,
    })
