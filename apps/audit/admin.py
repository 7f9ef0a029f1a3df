# apps/audit/admin.py

from django.contrib import admin

from .models import AuditLog
from .services import generate_log_message


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    """Read-only admin for the activity log"""

    list_display = ['created_at', 'org_id', 'user_name', 'message']
    list_filter = ['action', 'entity_type', 'created_at']
    search_fields = ['org_id', 'entity_title', 'user_name', 'entity_id']
    date_hierarchy = 'created_at'

    def message(self, obj):
        return generate_log_message(obj)

    message.short_description = 'Change'

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
