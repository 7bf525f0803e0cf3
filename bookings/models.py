# bookings/models.py

# Import models from django.db because this file defines database models.
from django.db import models
# Import settings from django.conf because 'Booking' links to the User model twice.
from django.conf import settings

"""
Author:
This class represents one scheduled session between a student
and a counselor. PENDING and CONFIRMED bookings hold the
counselor's time; the services refuse any new booking that would
overlap one of them.
"""
class Booking(models.Model):

    class Status(models.TextChoices):
        PENDING = 'PENDING', 'Pending'
        CONFIRMED = 'CONFIRMED', 'Confirmed'
        CANCELLED = 'CANCELLED', 'Cancelled'
        COMPLETED = 'COMPLETED', 'Completed'

    # Statuses that block the counselor's calendar
    HOLDING_STATUSES = (Status.PENDING, Status.CONFIRMED)

    student = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='bookings')
    # Counselors with bookings cannot be deleted
    counselor = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name='counselor_bookings')
    start_at = models.DateTimeField()
    end_at = models.DateTimeField()
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.PENDING)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-start_at', '-id']
        constraints = [
            models.CheckConstraint(condition=models.Q(end_at__gt=models.F('start_at')), name='booking_ends_after_start'),
        ]
        indexes = [
            models.Index(fields=['counselor', 'start_at']),
        ]

    def __str__(self):
        return f'Booking {self.pk} {self.start_at:%Y-%m-%d %H:%M} ({self.status})'

    def as_dict(self):
        return {
            'id': self.pk,
            'student': self.student.as_participant(),
            'counselor': self.counselor.as_participant(),
            'start_at': self.start_at.isoformat(),
            'end_at': self.end_at.isoformat(),
            'status': self.status,
            'notes': self.notes,
            'created_at': self.created_at.isoformat(),
        }
