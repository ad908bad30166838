"""
Health Check Endpoints

- Liveness: is the app running?
- Readiness: can the app reach its database and see its tables?
"""

import time
import logging
from django.http import JsonResponse
from django.db import connection
from django.views.decorators.http import require_GET
from django.views.decorators.csrf import csrf_exempt

from core.constants import RequestStatus

logger = logging.getLogger(__name__)


@csrf_exempt
@require_GET
def health_check(request):
    """
    Basic health check - returns 200 if app is running.
    Used by load balancers and container orchestration.
    """
    return JsonResponse({
        'status': 'healthy',
        'timestamp': time.time(),
    })


@csrf_exempt
@require_GET
def readiness_check(request):
    """
    Readiness check - verifies the database answers and the schema is in place.
    """
    from rooms.models import Room
    from room_requests.models import RoomRequest

    checks = {
        'database': {'status': False, 'latency_ms': None},
        'models': {'status': False, 'details': {}},
    }
    errors = []

    try:
        start = time.time()
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
            cursor.fetchone()
        latency = (time.time() - start) * 1000
        checks['database'] = {'status': True, 'latency_ms': round(latency, 2)}
    except Exception as e:
        errors.append(f'Database: {str(e)}')
        logger.error(f'Health check - Database error: {e}')

    try:
        checks['models'] = {
            'status': True,
            'details': {
                'rooms': Room.objects.count(),
                'pending_requests': RoomRequest.objects.filter(status=RequestStatus.PENDING).count(),
            },
        }
    except Exception as e:
        errors.append(f'Models: {str(e)}')
        logger.error(f'Health check - Model error: {e}')

    all_healthy = checks['database']['status'] and checks['models']['status']
    status_code = 200 if all_healthy else 503

    return JsonResponse({
        'status': 'ready' if all_healthy else 'not_ready',
        'timestamp': time.time(),
        'checks': checks,
        'errors': errors if errors else None,
    }, status=status_code)


def get_health_urls():
    """
    Returns URL patterns for health endpoints.
    """
    from django.urls import path

    return [
        path('health/', health_check, name='health_check'),
        path('health/ready/', readiness_check, name='readiness_check'),
    ]
