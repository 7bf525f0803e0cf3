# messaging/forms.py

# Import forms from django because this file defines the input forms for the message endpoints.
from django import forms
from django.conf import settings
from .models import SupportMessage


class MessageForm(forms.Form):
    content = forms.CharField(max_length=settings.SUPPORT_MESSAGE_MAX_LENGTH)
    kind = forms.ChoiceField(choices=SupportMessage.Kind.choices, required=False)

    def clean_kind(self):
        return self.cleaned_data.get('kind') or SupportMessage.Kind.TEXT


class EditMessageForm(forms.Form):
    content = forms.CharField(max_length=settings.SUPPORT_MESSAGE_MAX_LENGTH)


class MarkReadForm(forms.Form):
    # Plain JSON lists are checked in 'clean_message_ids' since forms have no list field
    message_ids = forms.Field(required=False)

    def clean_message_ids(self):
        ids = self.cleaned_data.get('message_ids')
        if ids in (None, ''):
            return None
        if not isinstance(ids, list):
            raise forms.ValidationError('message_ids must be a list')
        try:
            return [int(pk) for pk in ids]
        except (TypeError, ValueError):
            raise forms.ValidationError('message_ids must contain ids')
