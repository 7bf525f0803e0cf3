# triage/forms.py

# Import forms from django because this file defines the intake form.
from django import forms
from django.conf import settings
from rooms.models import Urgency


class TriageSubmissionForm(forms.Form):
    topic = forms.CharField(max_length=100)
    mood_score = forms.IntegerField(min_value=1, max_value=10)
    urgency = forms.ChoiceField(choices=Urgency.choices)
    message = forms.CharField(max_length=settings.SUPPORT_INITIAL_MESSAGE_MAX_LENGTH, required=False)
