# bookings/forms.py

# Import forms from django because this file defines the booking input forms.
from django import forms
from .models import Booking


class BookingForm(forms.Form):
    counselor_id = forms.IntegerField()
    start_at = forms.DateTimeField()
    end_at = forms.DateTimeField()
    notes = forms.CharField(max_length=2000, required=False)

    def clean(self):
        cleaned_data = super().clean()
        start_at = cleaned_data.get('start_at')
        end_at = cleaned_data.get('end_at')
        if start_at and end_at and end_at <= start_at:
            raise forms.ValidationError('end_at must be after start_at')
        return cleaned_data


class BookingUpdateForm(forms.Form):
    status = forms.ChoiceField(choices=Booking.Status.choices, required=False)
    notes = forms.CharField(max_length=2000, required=False)
