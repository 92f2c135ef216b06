"""
Liveness / readiness probes.

/health/        process is up (no I/O)
/health/ready/  database and cache answer
/health/deep/   as ready, plus latencies and row counts of the main tables
"""
import logging
import time

from django.core.cache import cache
from django.db import DatabaseError, connection
from django.http import JsonResponse
from django.urls import path
from django.views.decorators.http import require_GET

logger = logging.getLogger(__name__)

VERSION = '1.0.0'
CACHE_PROBE_KEY = 'staydesk:health-probe'


def _timed(probe):
    """Run probe(), returning (result, elapsed milliseconds)"""
    started = time.perf_counter()
    result = probe()
    return result, round((time.perf_counter() - started) * 1000, 2)


def _ping_database():
    with connection.cursor() as cursor:
        cursor.execute('SELECT 1')
        cursor.fetchone()
    return True


def _ping_cache():
    cache.set(CACHE_PROBE_KEY, 'ok', 10)
    alive = cache.get(CACHE_PROBE_KEY) == 'ok'
    cache.delete(CACHE_PROBE_KEY)
    return alive


def _probe_backends():
    """Database and cache status with latencies, and any errors met on the way"""
    checks, errors = {}, []
    try:
        _, latency = _timed(_ping_database)
        checks['database'] = {'status': True, 'latency_ms': latency}
    except DatabaseError as exc:
        logger.error(f"Health probe: database unavailable: {exc}")
        checks['database'] = {'status': False, 'latency_ms': None}
        errors.append(f"Database: {exc}")

    alive, latency = _timed(_ping_cache)
    checks['cache'] = {'status': alive, 'latency_ms': latency if alive else None}
    if not alive:
        errors.append("Cache: read/write failed")
    return checks, errors


def _row_counts():
    from django.contrib.auth import get_user_model
    from bookings.models import Booking
    from rooms.models import Room

    return {
        'users': get_user_model().objects.count(),
        'rooms': Room.objects.count(),
        'bookings': Booking.objects.alive().count(),
    }


@require_GET
def health_check(request):
    return JsonResponse({'status': 'healthy', 'timestamp': time.time()})


@require_GET
def readiness_check(request):
    checks, errors = _probe_backends()
    ready = all(check['status'] for check in checks.values())
    return JsonResponse({
        'status': 'ready' if ready else 'not_ready',
        'timestamp': time.time(),
        'checks': {name: check['status'] for name, check in checks.items()},
        'errors': errors or None,
    }, status=200 if ready else 503)


@require_GET
def deep_health_check(request):
    """Counts rows in the main tables, so keep it off high-frequency probes"""
    checks, errors = _probe_backends()
    healthy = all(check['status'] for check in checks.values())
    if checks['database']['status']:
        try:
            checks['models'] = {'status': True, 'details': _row_counts()}
        except DatabaseError as exc:
            logger.error(f"Health probe: row counts failed: {exc}")
            checks['models'] = {'status': False, 'details': {}}
            errors.append(f"Models: {exc}")
    return JsonResponse({
        'status': 'healthy' if healthy else 'unhealthy',
        'timestamp': time.time(),
        'version': VERSION,
        'checks': checks,
        'errors': errors or None,
    }, status=200 if healthy else 503)


def get_health_urls():
    return [
        path('health/', health_check, name='health_check'),
        path('health/ready/', readiness_check, name='readiness_check'),
        path('health/deep/', deep_health_check, name='deep_health_check'),
    ]
