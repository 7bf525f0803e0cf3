# config/views.py

import logging

# Import connection from django.db because 'healthz_view' checks the database is reachable.
from django.db import connection, DatabaseError
from django.http import JsonResponse

logger = logging.getLogger(__name__)

"""
Author:
This function answers the load balancer's health check. It runs
a trivial query so a dead database shows up as a 503 rather than
a healthy-looking "ok".
"""
def healthz_view(request):
    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
    except DatabaseError as e:
        logger.error('Health check failed: %s', e)
        return JsonResponse({'status': 'unavailable'}, status=503)
    return JsonResponse({'status': 'ok'})
