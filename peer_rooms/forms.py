# peer_rooms/forms.py

from django import forms
from django.conf import settings


class PeerRoomForm(forms.Form):
    title = forms.CharField(max_length=200)
    topic = forms.CharField(max_length=200, required=False)
    slug = forms.SlugField(max_length=100, required=False)
    is_minor_safe = forms.BooleanField(required=False)


class PeerMessageForm(forms.Form):
    body = forms.CharField(
        max_length=settings.PEER_ROOM_MESSAGE_MAX_LENGTH,
        error_messages={'required': 'Message body is required'},
    )


class PeerMessagePageForm(forms.Form):
    limit = forms.IntegerField(min_value=1, max_value=settings.SUPPORT_MESSAGES_MAX_PAGE_SIZE, required=False)
    cursor = forms.IntegerField(min_value=1, required=False)
    since = forms.DateTimeField(required=False)
