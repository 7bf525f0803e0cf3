# rooms/utils.py

from core.exceptions import NotFound
from .models import SupportRoom

"""
Author:
A small helper used by both the rooms and messaging services to
load a support room (with both participants) or fail with the
'NotFound' error the API turns into a 404.
"""
def get_room(room_id):
    try:
        return SupportRoom.objects.select_related('student', 'supporter').get(pk=room_id)
    except (SupportRoom.DoesNotExist, ValueError, TypeError):
        raise NotFound('Support room not found')
