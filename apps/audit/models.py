# apps/audit/models.py

from django.db import models


class AuditLog(models.Model):
    """
    One change made by a user to a board, list or card

    Rows are written once by the audit recorder and never updated. The
    entity title and the actor details are snapshots taken at write time
    so the log survives the entity being deleted.
    """

    class Action(models.TextChoices):
        CREATE = 'CREATE', 'Create'
        UPDATE = 'UPDATE', 'Update'
        DELETE = 'DELETE', 'Delete'

    class EntityType(models.TextChoices):
        BOARD = 'BOARD', 'Board'
        LIST = 'LIST', 'List'
        CARD = 'CARD', 'Card'

    org_id = models.CharField(max_length=100)
    action = models.CharField(max_length=10, choices=Action.choices)

    # === ENTITY SNAPSHOT ===
    entity_id = models.CharField(max_length=100)
    entity_type = models.CharField(max_length=10, choices=EntityType.choices)
    entity_title = models.CharField(max_length=255)

    # === ACTOR SNAPSHOT ===
    user_id = models.CharField(max_length=100)
    user_image = models.URLField(max_length=500, blank=True)
    user_name = models.CharField(max_length=255, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'audit_log'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['org_id', '-created_at'], name='audit_log_org_created_idx'),
            models.Index(fields=['org_id', 'entity_type', 'entity_id'], name='audit_log_org_entity_idx'),
        ]

    def __str__(self):
        return f"{self.user_name or self.user_id} {self.action} {self.entity_type} {self.entity_id}"
