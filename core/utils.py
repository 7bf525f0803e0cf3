# core/utils.py

import json
from functools import partial, wraps

# Import JsonResponse from django.http because every API view answers with JSON.
from django.http import JsonResponse
# Import transaction from django.db because pushes wait for the write they announce to commit.
from django.db import transaction
# Import async_to_sync from asgiref.sync because 'send_to_group' is called from normal (sync) code.
from asgiref.sync import async_to_sync
# Import get_channel_layer from channels.layers because real-time pushes go through the channel layer.
from channels.layers import get_channel_layer

from .exceptions import SupportError, ValidationFailed

# Group every connected supporter joins for queue updates and crisis alerts.
SUPPORTERS_GROUP_NAME = 'supporters'


def support_room_group(room_id):
    return f'support_{room_id}'


def user_group(user_id):
    return f'notifications_for_user_{user_id}'


"""
Author:
This is the wrapper every JSON endpoint goes through. It turns
anonymous requests into a 401, wrong HTTP methods into a 405,
and any 'SupportError' raised by a service into a JSON error
with the matching status code. Other exceptions are left for
Django to handle.
"""
def json_view(methods=('GET',), login_required=True):
    allowed = [m.upper() for m in methods]

    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            if request.method not in allowed:
                return JsonResponse({'error': 'Method not allowed'}, status=405)
            if login_required and not request.user.is_authenticated:
                return JsonResponse({'error': 'Authentication required'}, status=401)
            try:
                return view_func(request, *args, **kwargs)
            except SupportError as e:
                return JsonResponse(e.as_dict(), status=e.status_code)
        return wrapper
    return decorator


def read_json(request):
    # Empty bodies are treated as an empty object
    if not request.body:
        return {}
    try:
        data = json.loads(request.body)
    except (ValueError, UnicodeDecodeError):
        raise ValidationFailed('Request body must be valid JSON')
    if not isinstance(data, dict):
        raise ValidationFailed('Request body must be a JSON object')
    return data


def validate(form_class, data, **kwargs):
    """
    Runs a Django form over plain data and returns its cleaned_data,
    raising 'ValidationFailed' with the field errors when it is invalid.
    """
    form = form_class(data, **kwargs)
    if not form.is_valid():
        details = {field: [str(e) for e in errors] for field, errors in form.errors.items()}
        raise ValidationFailed(details=details)
    return form.cleaned_data


def _push(group_name, payload):
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return
    async_to_sync(channel_layer.group_send)(group_name, payload)


def send_to_group(group_name, payload):
    # RT: Pushes an event to everyone listening on a channel layer group,
    # once the surrounding transaction commits (right away outside one)
    transaction.on_commit(partial(_push, group_name, payload))
