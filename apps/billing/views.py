# apps/billing/views.py

from django.http import JsonResponse
from django.views.decorators.http import require_GET

from apps.core.permissions import org_required

from .limits import get_quota_status


@require_GET
@org_required
def limits_status(request):
    """Quota status of the active organization"""
    return JsonResponse({'data': get_quota_status(request.tenant.org_id)})
