# accounts/models.py

from django.db import models
from django.contrib.auth.models import AbstractUser
from .managers import CustomUserManager


class Role(models.TextChoices):
    STUDENT = 'student', 'Student'
    COUNSELOR = 'counselor', 'Counselor'
    INTERN = 'intern', 'Intern'
    MODERATOR = 'moderator', 'Moderator'
    ADMIN = 'admin', 'Admin'


class AgeBracket(models.TextChoices):
    UNDER18 = 'UNDER18', 'Under 18'
    ADULT = 'ADULT', 'Adult'


"""
Author:
This class is the account every person in the system logs in
with. Email is the login identifier. 'role' decides what the
person can do (students ask for support; counselors, interns
and moderators give it; admins review peer applications).
'age_bracket' and 'consent_minor_ok' are kept for minors who
need consent before they can post.
"""
class User(AbstractUser):
    username = None
    email = models.EmailField(unique=True)
    first_name = models.CharField(max_length=150, blank=True)
    last_name = models.CharField(max_length=150, blank=True)

    display_name = models.CharField(max_length=150, blank=True)
    role = models.CharField(max_length=16, choices=Role.choices, default=Role.STUDENT)
    age_bracket = models.CharField(max_length=8, choices=AgeBracket.choices, default=AgeBracket.ADULT)
    consent_minor_ok = models.BooleanField(default=False)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    objects = CustomUserManager()

    def __str__(self):
        return self.email

    @property
    def is_supporter(self):
        return self.role in (Role.COUNSELOR, Role.INTERN, Role.MODERATOR, Role.ADMIN)

    @property
    def public_name(self):
        return self.display_name or 'Anonymous'

    def as_dict(self):
        return {
            'id': self.pk,
            'email': self.email,
            'display_name': self.public_name,
            'role': self.role,
            'age_bracket': self.age_bracket,
            'consent_minor_ok': self.consent_minor_ok,
        }

    def as_participant(self):
        # What the other side of a support room gets to see
        return {
            'id': self.pk,
            'display_name': self.public_name,
            'role': self.role,
        }
