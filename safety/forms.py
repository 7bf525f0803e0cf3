# safety/forms.py

# Import forms from django because this file defines the input forms for the crisis endpoints.
from django import forms
from .models import CrisisAlert


class CrisisAlertForm(forms.Form):
    message = forms.CharField(max_length=2000)


class CrisisAlertUpdateForm(forms.Form):
    status = forms.ChoiceField(choices=CrisisAlert.Status.choices)


class ReviewMessageForm(forms.Form):
    action = forms.ChoiceField(choices=[('approve', 'Approve'), ('remove', 'Remove')])


class AuditLogFilterForm(forms.Form):
    page = forms.IntegerField(min_value=1, required=False)
    limit = forms.IntegerField(min_value=1, max_value=200, required=False)
    user_id = forms.IntegerField(min_value=1, required=False)
    action = forms.CharField(max_length=64, required=False)
    entity = forms.CharField(max_length=64, required=False)
    start = forms.DateTimeField(required=False)
    end = forms.DateTimeField(required=False)
