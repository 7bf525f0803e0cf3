# bookings/admin.py

from django.contrib import admin
from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ('start_at', 'end_at', 'student', 'counselor', 'status')
    list_filter = ('status',)
    date_hierarchy = 'start_at'
