# apps/board/admin.py

from django.contrib import admin

from .models import Board, Card, List


class ListInline(admin.TabularInline):
    model = List
    extra = 0
    fields = ['title', 'position']
    ordering = ['position']


class CardInline(admin.TabularInline):
    model = Card
    extra = 0
    fields = ['title', 'position']
    ordering = ['position']


@admin.register(Board)
class BoardAdmin(admin.ModelAdmin):
    """Admin for kanban boards"""

    list_display = ['title', 'org_id', 'lists_count', 'created_at']
    list_filter = ['created_at']
    search_fields = ['title', 'org_id']
    readonly_fields = ['created_at', 'updated_at']

    inlines = [ListInline]

    def lists_count(self, obj):
        """Number of lists on the board"""
        return obj.lists.count()

    lists_count.short_description = 'Lists'


@admin.register(List)
class ListAdmin(admin.ModelAdmin):
    """Admin for board lists"""

    list_display = ['title', 'board', 'position', 'cards_count']
    list_filter = ['board__org_id']
    search_fields = ['title', 'board__title']
    ordering = ['board', 'position']

    inlines = [CardInline]

    def cards_count(self, obj):
        return obj.cards.count()

    cards_count.short_description = 'Cards'


@admin.register(Card)
class CardAdmin(admin.ModelAdmin):
    """Admin for cards"""

    list_display = ['id', 'title', 'list', 'position', 'updated_at']
    list_filter = ['list__board__org_id']
    search_fields = ['title', 'description']
    readonly_fields = ['created_at', 'updated_at']
