# peers/urls.py

from django.urls import path
from .views import (
    applications_view, application_detail_view, approve_application_view, reject_application_view,
)

urlpatterns = [
    path('applications/', applications_view, name='peer_applications'),
    path('applications/<int:pk>/', application_detail_view, name='peer_application_detail'),
    path('applications/<int:pk>/approve/', approve_application_view, name='approve_peer_application'),
    path('applications/<int:pk>/reject/', reject_application_view, name='reject_peer_application'),
]
