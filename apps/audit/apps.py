# apps/audit/apps.py

from django.apps import AppConfig


class AuditConfig(AppConfig):
    """Audit app: activity log"""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.audit'
    verbose_name = 'Audit'
