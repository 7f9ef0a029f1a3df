# apps/billing/limits.py

"""
Quota ledger

Counts the boards of each organization against PLANIFY_MAX_FREE_BOARDS.
Board commands call these around create, copy and delete unless the
organization holds an active subscription.
"""

import logging

from django.conf import settings
from django.db.models import F
from django.db.models.functions import Greatest

from .models import OrgLimit
from .subscription import check_subscription

logger = logging.getLogger(__name__)


def increment_available_count(org_id):
    """Count one more board for the organization"""
    updated = OrgLimit.objects.filter(org_id=org_id).update(count=F('count') + 1)
    if not updated:
        OrgLimit.objects.create(org_id=org_id, count=1)


def decrease_available_count(org_id):
    """Count one board less, never going below zero"""
    updated = OrgLimit.objects.filter(org_id=org_id).update(
        count=Greatest(F('count') - 1, 0)
    )
    if not updated:
        OrgLimit.objects.create(org_id=org_id, count=0)


def has_available_count(org_id):
    """True when the organization may create another free board"""
    org_limit = OrgLimit.objects.filter(org_id=org_id).first()
    return org_limit is None or org_limit.count < settings.PLANIFY_MAX_FREE_BOARDS


def get_available_count(org_id):
    """Boards currently counted for the organization (0 when untracked)"""
    org_limit = OrgLimit.objects.filter(org_id=org_id).first()
    return org_limit.count if org_limit else 0


def get_quota_status(org_id):
    """
    Quota summary for the organization

    Returns a dict with the counted boards, the free-tier maximum and
    whether a subscription lifts the limit.
    """
    is_pro = check_subscription(org_id)
    count = get_available_count(org_id)
    max_free = settings.PLANIFY_MAX_FREE_BOARDS

    return {
        'count': count,
        'max_free_boards': max_free,
        'remaining': None if is_pro else max(max_free - count, 0),
        'is_pro': is_pro,
    }
