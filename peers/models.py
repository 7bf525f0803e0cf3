# peers/models.py

# Import models from django.db because this file defines database models.
from django.db import models
# Import settings from django.conf because 'reviewed_by' links to the User model.
from django.conf import settings

"""
Author:
This class stores one application to become a peer supporter.
It moves from PENDING to APPROVED or REJECTED exactly once, and
only through an admin's review.
"""
class PeerApplication(models.Model):

    class Status(models.TextChoices):
        PENDING = 'PENDING', 'Pending'
        APPROVED = 'APPROVED', 'Approved'
        REJECTED = 'REJECTED', 'Rejected'

    full_name = models.CharField(max_length=200)
    email = models.EmailField(unique=True)
    school = models.CharField(max_length=200)
    major = models.CharField(max_length=200)
    year_of_study = models.CharField(max_length=50)
    phone_number = models.CharField(max_length=50)
    motivation = models.TextField()
    experience = models.TextField()
    availability = models.TextField()
    communication_style = models.TextField()
    agreed_to_terms = models.BooleanField(default=False)

    status = models.CharField(max_length=16, choices=Status.choices, default=Status.PENDING)
    rejection_reason = models.TextField(blank=True)
    reviewed_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='reviewed_applications')
    reviewed_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f'{self.full_name} ({self.status})'

    def as_dict(self):
        return {
            'id': self.pk,
            'full_name': self.full_name,
            'email': self.email,
            'school': self.school,
            'major': self.major,
            'year_of_study': self.year_of_study,
            'phone_number': self.phone_number,
            'motivation': self.motivation,
            'experience': self.experience,
            'availability': self.availability,
            'communication_style': self.communication_style,
            'status': self.status,
            'rejection_reason': self.rejection_reason,
            'reviewed_by': self.reviewed_by_id,
            'reviewed_at': self.reviewed_at.isoformat() if self.reviewed_at else None,
            'created_at': self.created_at.isoformat(),
        }
