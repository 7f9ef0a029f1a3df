# apps/audit/views.py

from django.conf import settings
from django.core.paginator import Paginator
from django.http import JsonResponse
from django.views.decorators.http import require_GET

from apps.core.permissions import org_required

from .models import AuditLog
from .services import serialize_log


@require_GET
@org_required
def card_logs(request, card_id):
    """
    Latest changes of a card in the active organization
    """
    logs = AuditLog.objects.filter(
        org_id=request.tenant.org_id,
        entity_id=str(card_id),
        entity_type=AuditLog.EntityType.CARD,
    ).order_by('-created_at', '-id')[:settings.PLANIFY_CARD_LOG_LIMIT]

    return JsonResponse({'data': [serialize_log(log) for log in logs]})


@require_GET
@org_required
def activity(request):
    """
    Activity feed of the organization, newest first, paginated
    """
    logs = AuditLog.objects.filter(
        org_id=request.tenant.org_id
    ).order_by('-created_at', '-id')

    paginator = Paginator(logs, settings.PLANIFY_ACTIVITY_PAGE_SIZE)
    page = paginator.get_page(request.GET.get('page'))

    return JsonResponse({
        'data': [serialize_log(log) for log in page],
        'page': page.number,
        'num_pages': paginator.num_pages,
        'has_next': page.has_next(),
    })
