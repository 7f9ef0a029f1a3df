# apps/board/models.py

from django.db import models


class Board(models.Model):
    """
    Kanban board owned by an organization

    The background image is stored as the reference picked by the client
    (image id, thumbnail and full URLs, attribution link and author).
    """

    title = models.CharField(max_length=255)

    # === MULTI-TENANCY ===
    org_id = models.CharField(max_length=100, db_index=True)

    # === BACKGROUND IMAGE ===
    image_id = models.CharField(max_length=255)
    image_thumb_url = models.TextField()
    image_full_url = models.TextField()
    image_user_name = models.TextField()
    image_link_html = models.TextField()

    # === METADATA ===
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'board'
        ordering = ['-created_at']

    def __str__(self):
        return self.title


class List(models.Model):
    """
    Column of a board

    ``position`` is unique among the lists of a board after every
    committed write.
    """

    title = models.CharField(max_length=255)
    position = models.PositiveIntegerField(default=0)

    board = models.ForeignKey(
        Board,
        on_delete=models.CASCADE,
        related_name='lists'
    )

    # === METADATA ===
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'list'
        ordering = ['position']
        constraints = [
            models.UniqueConstraint(
                fields=['board', 'position'],
                name='unique_list_position_per_board',
                deferrable=models.Deferrable.DEFERRED,
            ),
        ]

    def __str__(self):
        return f"{self.board.title} - {self.title}"


class Card(models.Model):
    """
    Card inside a list

    ``position`` is unique among the cards of a list after every
    committed write.
    """

    title = models.CharField(max_length=255)
    description = models.TextField(null=True, blank=True)
    position = models.PositiveIntegerField(default=0)

    list = models.ForeignKey(
        List,
        on_delete=models.CASCADE,
        related_name='cards'
    )

    # === METADATA ===
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'card'
        ordering = ['position']
        constraints = [
            models.UniqueConstraint(
                fields=['list', 'position'],
                name='unique_card_position_per_list',
                deferrable=models.Deferrable.DEFERRED,
            ),
        ]

    def __str__(self):
        return self.title
