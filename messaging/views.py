# messaging/views.py

from django.http import JsonResponse

from core.utils import json_view, read_json, validate
from . import services
from .forms import MessageForm, EditMessageForm, MarkReadForm


# Reads a page of the room's messages, or posts a new one
@json_view(methods=('GET', 'POST'))
def room_messages_view(request, room_id):
    if request.method == 'POST':
        data = validate(MessageForm, read_json(request))
        message = services.append_message(request.user, room_id, data['content'], data['kind'])
        return JsonResponse({'message': message.as_dict()}, status=201)

    offset = request.GET.get('offset', 0)
    limit = request.GET.get('limit')
    messages, total = services.fetch_messages(request.user, room_id, offset=offset, limit=limit)
    return JsonResponse({
        'messages': [m.as_dict() for m in messages],
        'total': total,
    })


@json_view(methods=('PATCH', 'POST'))
def mark_read_view(request, room_id):
    data = validate(MarkReadForm, read_json(request))
    count = services.mark_read(request.user, room_id, data['message_ids'])
    return JsonResponse({'success': True, 'marked_count': count})


@json_view(methods=('PATCH', 'DELETE'))
def message_detail_view(request, message_id):
    if request.method == 'DELETE':
        message = services.delete_message(request.user, message_id)
        return JsonResponse({
            'success': True,
            'message_id': message.pk,
            'room_id': message.room_id,
        })

    data = validate(EditMessageForm, read_json(request))
    message = services.edit_message(request.user, message_id, data['content'])
    return JsonResponse({'success': True, 'message': message.as_dict(), 'room_id': message.room_id})
