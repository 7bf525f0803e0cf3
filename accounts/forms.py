# accounts/forms.py

from django import forms
from .models import AgeBracket


class RegistrationForm(forms.Form):
    email = forms.EmailField()
    password = forms.CharField(min_length=8, max_length=128)
    first_name = forms.CharField(max_length=150, required=False)
    last_name = forms.CharField(max_length=150, required=False)
    display_name = forms.CharField(max_length=150, required=False)
    age_bracket = forms.ChoiceField(choices=AgeBracket.choices, required=False)

    def clean_email(self):
        return self.cleaned_data.get('email').lower()

    def clean_age_bracket(self):
        return self.cleaned_data.get('age_bracket') or AgeBracket.ADULT


class LoginForm(forms.Form):
    email = forms.EmailField()
    password = forms.CharField(max_length=128)

    def clean_email(self):
        return self.cleaned_data.get('email').lower()


class ConsentForm(forms.Form):
    # Unticked/false means consent withdrawn
    consent = forms.BooleanField(required=False)


class ProfileForm(forms.Form):
    display_name = forms.CharField(max_length=150, required=False)
    first_name = forms.CharField(max_length=150, required=False)
    last_name = forms.CharField(max_length=150, required=False)


class ChangePasswordForm(forms.Form):
    current_password = forms.CharField(max_length=128)
    new_password = forms.CharField(min_length=8, max_length=128)


class DeleteAccountForm(forms.Form):
    password = forms.CharField(max_length=128, error_messages={'required': 'Password is required to delete account'})
