# bookings/urls.py

from django.urls import path
from .views import bookings_view, update_booking_view, counselors_view

urlpatterns = [
    path('', bookings_view, name='bookings'),
    path('counselors/', counselors_view, name='booking_counselors'),
    path('<int:pk>/', update_booking_view, name='update_booking'),
]
