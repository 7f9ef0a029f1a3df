# apps/billing/models.py

from django.db import models


class OrgLimit(models.Model):
    """
    Number of boards an organization holds on the free tier

    One row per organization, created lazily on the first board.
    """

    org_id = models.CharField(max_length=100, unique=True)
    count = models.PositiveIntegerField(default=0)

    # === METADATA ===
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'org_limit'
        verbose_name = 'Organization limit'
        verbose_name_plural = 'Organization limits'

    def __str__(self):
        return f"{self.org_id}: {self.count}"


class OrgSubscription(models.Model):
    """
    Paid subscription of an organization

    Written by the payments integration; the application only reads it.
    """

    org_id = models.CharField(max_length=100, unique=True)

    stripe_customer_id = models.CharField(max_length=255, unique=True, null=True, blank=True)
    stripe_subscription_id = models.CharField(max_length=255, unique=True, null=True, blank=True)
    stripe_price_id = models.CharField(max_length=255, blank=True)
    stripe_current_period_end = models.DateTimeField(null=True, blank=True)

    # === METADATA ===
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'org_subscription'
        verbose_name = 'Organization subscription'
        verbose_name_plural = 'Organization subscriptions'

    def __str__(self):
        return f"{self.org_id} ({self.stripe_price_id or 'no plan'})"
