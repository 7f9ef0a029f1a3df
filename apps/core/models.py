# apps/core/models.py

from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """
    Custom user with multi-tenant support

    Every user acts inside one organization (tenant) at a time and only
    ever sees that organization's boards.
    """

    # === PROFILE ===
    image_url = models.URLField(max_length=500, blank=True)

    # === MULTI-TENANCY: KEY FIELD ===
    org_id = models.CharField(
        max_length=100,
        blank=True,
        help_text="Identifier of the organization this user is acting in",
        db_index=True
    )

    # === METADATA ===
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'user'

    @property
    def display_name(self):
        """Full name, falling back to the username"""
        return self.get_full_name() or self.username

    def __str__(self):
        if self.org_id:
            return f"{self.display_name} ({self.org_id})"
        return self.display_name
