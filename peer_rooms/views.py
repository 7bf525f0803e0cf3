# peer_rooms/views.py

from django.http import JsonResponse

from core.utils import json_view, read_json, validate
from . import services
from .forms import PeerRoomForm, PeerMessageForm, PeerMessagePageForm


# List the group rooms, or (admins) open a new one
@json_view(methods=('GET', 'POST'))
def peer_rooms_view(request):
    if request.method == 'POST':
        data = validate(PeerRoomForm, read_json(request))
        room = services.create_peer_room(
            request.user, data['title'], data['topic'], data['is_minor_safe'], data['slug'],
        )
        return JsonResponse({'room': room.as_dict()}, status=201)

    rooms = services.list_peer_rooms(request.user)
    return JsonResponse({'rooms': [room.as_dict(message_count=room.message_count) for room in rooms]})


@json_view(methods=('GET',))
def peer_room_detail_view(request, slug):
    room = services.get_peer_room(request.user, slug)
    return JsonResponse({'room': room.as_dict(message_count=room.messages.count())})


@json_view(methods=('GET', 'POST'))
def peer_room_messages_view(request, slug):
    if request.method == 'POST':
        data = validate(PeerMessageForm, read_json(request))
        message = services.post_peer_message(request.user, slug, data['body'])
        return JsonResponse({'message': message.as_dict()}, status=201)

    data = validate(PeerMessagePageForm, request.GET)
    messages, next_cursor, has_more = services.fetch_peer_messages(
        request.user, slug, limit=data['limit'], cursor=data['cursor'], since=data['since'],
    )
    return JsonResponse({
        'messages': [m.as_dict() for m in messages],
        'next_cursor': next_cursor,
        'has_more': has_more,
    })
