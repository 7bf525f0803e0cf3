# accounts/urls.py

from django.urls import path
from .views import (
    register_view, login_view, logout_view, me_view, change_password_view, consent_view,
)

urlpatterns = [
    # Auth
    path('register/', register_view, name='register'),
    path('login/', login_view, name='login'),
    path('logout/', logout_view, name='logout'),

    # Current account
    path('me/', me_view, name='me'),
    path('me/password/', change_password_view, name='change_password'),
    path('me/consent/', consent_view, name='consent'),
]
