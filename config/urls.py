# config/urls.py

from django.contrib import admin
from django.urls import path, include
from .views import healthz_view

urlpatterns = [
    path('admin/', admin.site.urls),
    path('healthz/', healthz_view, name='healthz'),

    # API
    path('api/accounts/', include('accounts.urls')),
    path('api/support/', include('rooms.urls')),
    path('api/support/', include('messaging.urls')),
    path('api/triage/', include('triage.urls')),
    path('api/bookings/', include('bookings.urls')),
    path('api/peers/', include('peers.urls')),
    path('api/peer-rooms/', include('peer_rooms.urls')),
    # Crisis alerts, the moderation queue and the audit log
    path('api/', include('safety.urls')),
]
