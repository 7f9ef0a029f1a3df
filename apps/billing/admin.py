# apps/billing/admin.py

from django.conf import settings
from django.contrib import admin
from django.utils.html import format_html

from .models import OrgLimit, OrgSubscription
from .subscription import check_subscription


@admin.register(OrgLimit)
class OrgLimitAdmin(admin.ModelAdmin):
    """Admin for the free-board counters"""

    list_display = ['org_id', 'usage', 'updated_at']
    search_fields = ['org_id']
    readonly_fields = ['created_at', 'updated_at']

    def usage(self, obj):
        """Counter against the free-tier maximum"""
        max_free = settings.PLANIFY_MAX_FREE_BOARDS
        if obj.count >= max_free:
            return format_html(
                '<span style="color: red; font-weight: bold;">{}/{}</span>',
                obj.count, max_free
            )
        return f"{obj.count}/{max_free}"

    usage.short_description = 'Boards'


@admin.register(OrgSubscription)
class OrgSubscriptionAdmin(admin.ModelAdmin):
    """Admin for subscriptions synced from the payments provider"""

    list_display = [
        'org_id', 'stripe_price_id', 'stripe_current_period_end', 'active'
    ]
    search_fields = ['org_id', 'stripe_customer_id', 'stripe_subscription_id']
    readonly_fields = ['created_at', 'updated_at']

    def active(self, obj):
        return check_subscription(obj.org_id)

    active.boolean = True
