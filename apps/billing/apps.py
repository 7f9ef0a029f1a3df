# apps/billing/apps.py

from django.apps import AppConfig


class BillingConfig(AppConfig):
    """Billing app: board quota ledger and subscriptions"""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.billing'
    verbose_name = 'Billing'
