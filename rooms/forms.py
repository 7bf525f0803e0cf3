# rooms/forms.py

# Import forms from django because this file defines the input forms for the room endpoints.
from django import forms
from django.conf import settings
from .models import Urgency

# Topics a student can pick when asking for support directly
SUPPORT_TOPICS = (
    ('stress', 'Stress'),
    ('sleep', 'Sleep'),
    ('anxiety', 'Anxiety'),
    ('academic', 'Academic'),
    ('relationship', 'Relationship'),
    ('family', 'Family'),
    ('health', 'Health'),
    ('other', 'Other'),
)

"""
Author:
This class defines the form a student fills in to ask for a
private support room without going through triage.
"""
class SupportRequestForm(forms.Form):
    topic = forms.ChoiceField(choices=SUPPORT_TOPICS)
    urgency = forms.ChoiceField(choices=Urgency.choices)
    initial_message = forms.CharField(max_length=settings.SUPPORT_INITIAL_MESSAGE_MAX_LENGTH, required=False)


class ResolveRoomForm(forms.Form):
    notes = forms.CharField(max_length=2000, required=False)


class CloseRoomForm(forms.Form):
    reason = forms.CharField(max_length=2000, required=False)


class ArchiveRoomForm(forms.Form):
    archive = forms.BooleanField(required=False)
