# apps/billing/subscription.py

from datetime import timedelta

from django.conf import settings
from django.utils import timezone

from .models import OrgSubscription


def check_subscription(org_id):
    """
    True when the organization holds a paid plan that has not expired

    The plan stays valid for PLANIFY_SUBSCRIPTION_GRACE_DAYS after the
    current period ends.
    """
    if not org_id:
        return False

    subscription = OrgSubscription.objects.filter(org_id=org_id).first()
    if subscription is None:
        return False

    if not subscription.stripe_price_id or not subscription.stripe_current_period_end:
        return False

    grace = timedelta(days=settings.PLANIFY_SUBSCRIPTION_GRACE_DAYS)
    return subscription.stripe_current_period_end + grace > timezone.now()
