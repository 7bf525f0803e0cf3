# safety/urls.py

# Import path from django.urls because it's needed to define URL routes.
from django.urls import path
from .views import alerts_view, update_alert_view, flagged_messages_view, review_message_view, audit_log_view

urlpatterns = [
    path('crisis/alerts/', alerts_view, name='crisis_alerts'),
    path('crisis/alerts/<int:pk>/', update_alert_view, name='update_crisis_alert'),
    path('mod/flagged/', flagged_messages_view, name='flagged_messages'),
    path('mod/messages/<str:kind>/<int:pk>/', review_message_view, name='review_message'),
    path('audit/', audit_log_view, name='audit_log'),
]
