# bookings/views.py

from django.http import JsonResponse

from accounts.services import list_counselors
from core.utils import json_view, read_json, validate
from . import services
from .forms import BookingForm, BookingUpdateForm


# Book a counselor, or list the user's bookings
@json_view(methods=('GET', 'POST'))
def bookings_view(request):
    if request.method == 'GET':
        bookings = services.list_my_bookings(request.user)
        return JsonResponse({'bookings': [b.as_dict() for b in bookings]})

    data = validate(BookingForm, read_json(request))
    booking = services.create_booking(
        request.user, data['counselor_id'], data['start_at'], data['end_at'], data['notes'],
    )
    return JsonResponse({'booking': booking.as_dict()}, status=201)


@json_view(methods=('PATCH', 'POST'))
def update_booking_view(request, pk):
    body = read_json(request)
    data = validate(BookingUpdateForm, body)
    booking = services.update_booking(
        request.user,
        pk,
        status=data['status'] or None,
        # Only touch the notes when the client sent them
        notes=data['notes'] if 'notes' in body else None,
    )
    return JsonResponse({'booking': booking.as_dict()})


@json_view(methods=('GET',))
def counselors_view(request):
    return JsonResponse({'counselors': [c.as_participant() for c in list_counselors()]})
