# rooms/views.py

from django.http import JsonResponse
from django.utils import timezone

from core.utils import json_view, read_json, validate
from . import services
from .forms import SupportRequestForm, ResolveRoomForm, CloseRoomForm, ArchiveRoomForm


# Student asks for private support - creates a new WAITING room
@json_view(methods=('POST',))
def request_support_view(request):
    data = validate(SupportRequestForm, read_json(request))
    room = services.request_support(request.user, data['topic'], data['urgency'], data['initial_message'])
    return JsonResponse({
        'room': room.as_dict(viewer=request.user),
        'message': f"Connecting you with a {room.get_routed_to_display().lower()}...",
    }, status=201)


# Waiting rooms this supporter may claim, most urgent first
@json_view(methods=('GET',))
def queue_view(request):
    now = timezone.now()
    queue = []
    for room in services.get_queue(request.user):
        queue.append({
            'id': room.pk,
            'student': {
                'display_name': room.student.public_name,
                'age_bracket': room.student.age_bracket,
            },
            'topic': room.topic,
            'urgency': room.urgency,
            'routed_to': room.routed_to,
            'initial_message': room.initial_message,
            'waiting_seconds': int((now - room.created_at).total_seconds()),
            'created_at': room.created_at.isoformat(),
        })
    return JsonResponse({'queue': queue})


@json_view(methods=('GET',))
def my_rooms_view(request):
    include_archived = request.GET.get('archived') in ('1', 'true', 'yes')
    rooms = services.list_my_rooms(request.user, include_archived=include_archived)
    payload = []
    for room in rooms:
        data = room.as_dict(viewer=request.user)
        data['message_count'] = room.message_count
        payload.append(data)
    return JsonResponse({'rooms': payload})


@json_view(methods=('GET',))
def room_detail_view(request, pk):
    room = services.get_room_details(request.user, pk)
    return JsonResponse({'room': room.as_dict(viewer=request.user)})


@json_view(methods=('POST',))
def claim_room_view(request, pk):
    room = services.claim_room(request.user, pk)
    return JsonResponse({'room': room.as_dict(viewer=request.user), 'message': 'Support room claimed successfully'})


@json_view(methods=('POST',))
def resolve_room_view(request, pk):
    data = validate(ResolveRoomForm, read_json(request))
    room = services.resolve_room(request.user, pk, data['notes'])
    return JsonResponse({'room': room.as_dict(viewer=request.user), 'message': 'Support room resolved successfully'})


@json_view(methods=('POST',))
def close_room_view(request, pk):
    data = validate(CloseRoomForm, read_json(request))
    room = services.close_room(request.user, pk, data['reason'])
    return JsonResponse({'room': room.as_dict(viewer=request.user), 'message': 'Support room closed'})


@json_view(methods=('PATCH', 'POST'))
def archive_room_view(request, pk):
    data = validate(ArchiveRoomForm, read_json(request))
    room = services.archive_room(request.user, pk, data['archive'])
    return JsonResponse({
        'success': True,
        'room': room.as_dict(viewer=request.user),
        'message': 'Room archived successfully' if data['archive'] else 'Room unarchived successfully',
    })
