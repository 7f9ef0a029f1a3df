# apps/core/admin.py

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin for users with their active organization"""

    list_display = [
        'username', 'email', 'get_full_name', 'org_id',
        'is_active', 'date_joined'
    ]
    list_filter = ['is_staff', 'is_active', 'date_joined']
    search_fields = ['username', 'first_name', 'last_name', 'email', 'org_id']
    ordering = ['-date_joined']

    fieldsets = BaseUserAdmin.fieldsets + (
        ('Organization', {
            'fields': ('org_id', 'image_url')
        }),
    )

    add_fieldsets = BaseUserAdmin.add_fieldsets + (
        ('Organization', {
            'fields': ('org_id',)
        }),
    )
