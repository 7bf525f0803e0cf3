# peers/forms.py

# Import forms from django because this file defines the application forms.
from django import forms
from django.conf import settings
from .models import PeerApplication

"""
Author:
This class defines the public peer supporter application. It is
based on the 'PeerApplication' model and only accepts emails
from the university's domain.
"""
class PeerApplicationForm(forms.ModelForm):
    agreed_to_terms = forms.BooleanField(required=True)

    class Meta:
        model = PeerApplication
        fields = [
            'full_name', 'email', 'school', 'major', 'year_of_study', 'phone_number',
            'motivation', 'experience', 'availability', 'communication_style', 'agreed_to_terms',
        ]

    def clean_email(self):
        email = self.cleaned_data.get('email').lower()
        domain = settings.PEER_APPLICATION_EMAIL_DOMAIN
        if not email.endswith(domain):
            raise forms.ValidationError(f"Please use your university email address ({domain}).")
        return email

    def validate_unique(self):
        # Duplicate emails are reported as a conflict by the service, not as a form error
        pass


class RejectApplicationForm(forms.Form):
    reason = forms.CharField(max_length=2000, required=False)
