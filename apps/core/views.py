# apps/core/views.py

import logging

from django.core.cache import cache
from django.db import DatabaseError, connection
from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.http import require_GET

from apps import __version__
from apps.billing.limits import get_quota_status
from apps.board.aggregate import get_organization_boards

from .permissions import org_required

logger = logging.getLogger(__name__)


@require_GET
@org_required
def organization_boards(request):
    """
    Boards of the active organization with the free-board quota
    """
    org_id = request.tenant.org_id

    return JsonResponse({
        'data': {
            'org_id': org_id,
            'boards': get_organization_boards(org_id),
            'quota': get_quota_status(org_id),
        }
    })


@require_GET
def health_check(request):
    """
    Health check for monitoring
    """
    try:
        # Database connection
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')

        # Cache round trip
        cache.set('health_check', 'ok', 60)
        cache.get('health_check')

        return JsonResponse({
            'status': 'healthy',
            'database': 'ok',
            'cache': 'ok',
            'timestamp': timezone.now().isoformat(),
            'version': __version__,
        })

    except DatabaseError as e:
        logger.exception("Health check failed")
        return JsonResponse({
            'status': 'unhealthy',
            'error': str(e),
            'timestamp': timezone.now().isoformat(),
            'version': __version__,
        }, status=500)
