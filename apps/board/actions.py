# apps/board/actions.py

"""
Board, list and card commands

Every command takes ``(context, data)`` and returns an ActionResult (see
apps.core.actions). Handlers scope every read and write by the caller's
organization through the board; an id from another organization is
reported exactly like a missing one.

Create, update, delete and copy write an audit record after the main
write. Reorders are not audited. All commands invalidate the cached
board view and broadcast a refresh once their write has committed.
"""

import logging

from django.db import connection, transaction
from django.utils import timezone

from apps.audit.models import AuditLog
from apps.audit.services import create_audit_log
from apps.billing.limits import (
    decrease_available_count,
    has_available_count,
    increment_available_count,
)
from apps.billing.subscription import check_subscription
from apps.core.actions import ActionError, NotFound, QuotaExceeded, safe_action

from . import forms
from .aggregate import (
    build_board_aggregate,
    card_order_is_consistent,
    list_order_is_consistent,
    serialize_board,
    serialize_card,
    serialize_list,
)
from .cache import revalidate_board, revalidate_organization
from .models import Board, Card, List
from .ordering import close_gap, next_position_for

logger = logging.getLogger(__name__)

Action = AuditLog.Action
EntityType = AuditLog.EntityType

COPY_SUFFIX = ' - Copy'
QUOTA_MESSAGE = 'You have reached your limit of free boards. Please upgrade to create more.'
REORDER_FAILED = 'Failed to reorder'


# === LOOKUPS (tenant scoped) ===

def get_board(context, board_id):
    board = Board.objects.filter(id=board_id, org_id=context.org_id).first()
    if board is None:
        raise NotFound('Board not found')
    return board


def get_list(context, board_id, list_id):
    board_list = List.objects.filter(
        id=list_id,
        board_id=board_id,
        board__org_id=context.org_id,
    ).first()
    if board_list is None:
        raise NotFound('List not found')
    return board_list


def get_card(context, board_id, card_id):
    card = Card.objects.select_related('list').filter(
        id=card_id,
        list__board_id=board_id,
        list__board__org_id=context.org_id,
    ).first()
    if card is None:
        raise NotFound('Card not found')
    return card


def copy_title(title):
    return f'{title}{COPY_SUFFIX}'[:255]


def _ensure_board_quota(org_id):
    """
    Refuse a new board when the free quota is used up

    Returns True when the board must be counted (no subscription).
    """
    if check_subscription(org_id):
        return False
    if not has_available_count(org_id):
        raise QuotaExceeded(QUOTA_MESSAGE)
    return True


# === BOARD ===

@safe_action(forms.CreateBoardForm, 'Failed to create')
def create_board(context, data):
    """New board with the picked background image"""
    counted = _ensure_board_quota(context.org_id)

    with transaction.atomic():
        board = Board.objects.create(
            title=data['title'],
            org_id=context.org_id,
            **data['image']
        )
        if counted:
            increment_available_count(context.org_id)

    create_audit_log(context, board.id, EntityType.BOARD, board.title, Action.CREATE)
    revalidate_organization(context.org_id)

    logger.info("Board %s created in org %s", board.id, context.org_id)
    return serialize_board(board)


@safe_action(forms.UpdateBoardForm, 'Failed to update')
def update_board(context, data):
    board = get_board(context, data['id'])

    board.title = data['title']
    board.save(update_fields=['title', 'updated_at'])

    create_audit_log(context, board.id, EntityType.BOARD, board.title, Action.UPDATE)
    revalidate_board(context.org_id, board.id, 'board_updated')
    revalidate_organization(context.org_id)

    return serialize_board(board)


@safe_action(forms.BoardIdForm, 'Failed to delete')
def delete_board(context, data):
    """Delete a board with its lists and cards, releasing one quota slot"""
    board = get_board(context, data['id'])
    deleted = serialize_board(board)
    counted = not check_subscription(context.org_id)

    with transaction.atomic():
        board.delete()
        if counted:
            decrease_available_count(context.org_id)

    create_audit_log(context, deleted['id'], EntityType.BOARD, deleted['title'], Action.DELETE)
    revalidate_board(context.org_id, deleted['id'], 'board_deleted')
    revalidate_organization(context.org_id)

    logger.info("Board %s deleted in org %s", deleted['id'], context.org_id)
    return deleted


@safe_action(forms.BoardIdForm, 'Failed to copy')
def copy_board(context, data):
    """
    Duplicate a board with its lists and cards

    Lists and cards keep their positions. Counts against the free quota
    like a new board.
    """
    source = get_board(context, data['id'])
    counted = _ensure_board_quota(context.org_id)

    with transaction.atomic():
        board = Board.objects.create(
            title=copy_title(source.title),
            org_id=context.org_id,
            image_id=source.image_id,
            image_thumb_url=source.image_thumb_url,
            image_full_url=source.image_full_url,
            image_user_name=source.image_user_name,
            image_link_html=source.image_link_html,
        )

        for source_list in source.lists.prefetch_related('cards'):
            board_list = List.objects.create(
                board=board,
                title=source_list.title,
                position=source_list.position,
            )
            _copy_cards(source_list.cards.all(), board_list)

        if counted:
            increment_available_count(context.org_id)

    create_audit_log(context, board.id, EntityType.BOARD, board.title, Action.CREATE)
    revalidate_organization(context.org_id)

    return serialize_board(board)


# === LIST ===

@safe_action(forms.CreateListForm, 'Failed to create')
def create_list(context, data):
    """New list at the end of the board"""
    board = get_board(context, data['board_id'])

    with transaction.atomic():
        board_list = List.objects.create(
            board=board,
            title=data['title'],
            position=next_position_for(board.lists.all()),
        )

    create_audit_log(context, board_list.id, EntityType.LIST, board_list.title, Action.CREATE)
    revalidate_board(context.org_id, board.id, 'list_created')

    return serialize_list(board_list)


@safe_action(forms.UpdateListForm, 'Failed to update')
def update_list(context, data):
    board_list = get_list(context, data['board_id'], data['id'])

    board_list.title = data['title']
    board_list.save(update_fields=['title', 'updated_at'])

    create_audit_log(context, board_list.id, EntityType.LIST, board_list.title, Action.UPDATE)
    revalidate_board(context.org_id, board_list.board_id, 'list_updated')

    return serialize_list(board_list)


@safe_action(forms.ListIdForm, 'Failed to delete')
def delete_list(context, data):
    """Delete a list with its cards and close the gap it leaves"""
    board_list = get_list(context, data['board_id'], data['id'])
    deleted = serialize_list(board_list)

    with transaction.atomic():
        board_list.delete()
        close_gap(List.objects.filter(board_id=deleted['board_id']), deleted['position'])

    create_audit_log(context, deleted['id'], EntityType.LIST, deleted['title'], Action.DELETE)
    revalidate_board(context.org_id, deleted['board_id'], 'list_deleted')

    return deleted


@safe_action(forms.ListIdForm, 'Failed to copy')
def copy_list(context, data):
    """
    Duplicate a list at the end of the board

    The copied cards keep their original positions under the new list.
    """
    source = get_list(context, data['board_id'], data['id'])

    with transaction.atomic():
        board_list = List.objects.create(
            board_id=source.board_id,
            title=copy_title(source.title),
            position=next_position_for(List.objects.filter(board_id=source.board_id)),
        )
        cards = _copy_cards(source.cards.all(), board_list)

    create_audit_log(context, board_list.id, EntityType.LIST, board_list.title, Action.CREATE)
    revalidate_board(context.org_id, board_list.board_id, 'list_copied')

    return serialize_list(board_list, cards)


def _copy_cards(cards, board_list):
    """Bulk copy ``cards`` under ``board_list`` keeping their positions"""
    copies = [
        Card(
            list=board_list,
            title=card.title,
            description=card.description,
            position=card.position,
        )
        for card in cards
    ]
    Card.objects.bulk_create(copies)
    return sorted(copies, key=lambda card: card.position)


@safe_action(forms.UpdateListOrderForm, REORDER_FAILED)
def update_list_order(context, data):
    """
    Persist a reordered set of lists

    The whole batch commits or nothing does.
    """
    board_id = data['board_id']
    items = data['items']

    aggregate = build_board_aggregate(context.org_id, board_id)
    if aggregate is None:
        raise NotFound('Board not found')
    if not list_order_is_consistent(aggregate, items):
        logger.warning("Rejected list reorder on board %s: inconsistent snapshot", board_id)
        raise ActionError(REORDER_FAILED)

    now = timezone.now()
    with transaction.atomic():
        for item in items:
            updated = List.objects.filter(
                id=item['id'],
                board_id=board_id,
                board__org_id=context.org_id,
            ).update(position=item['position'], updated_at=now)

            if updated != 1:
                raise ActionError(REORDER_FAILED)

        connection.check_constraints(table_names=[List._meta.db_table])

    revalidate_board(context.org_id, board_id, 'lists_reordered')

    lists = List.objects.filter(id__in=[item['id'] for item in items]).order_by('position')
    return [serialize_list(board_list) for board_list in lists]


# === CARD ===

@safe_action(forms.CreateCardForm, 'Failed to create')
def create_card(context, data):
    """New card at the end of a list"""
    board_list = get_list(context, data['board_id'], data['list_id'])

    with transaction.atomic():
        card = Card.objects.create(
            list=board_list,
            title=data['title'],
            position=next_position_for(board_list.cards.all()),
        )

    create_audit_log(context, card.id, EntityType.CARD, card.title, Action.CREATE)
    revalidate_board(context.org_id, board_list.board_id, 'card_created')

    return serialize_card(card)


@safe_action(forms.UpdateCardForm, 'Failed to update')
def update_card(context, data):
    """Change the title and/or the description of a card"""
    card = get_card(context, data['board_id'], data['id'])

    changes = data['changes']
    for name, value in changes.items():
        setattr(card, name, value)
    card.save(update_fields=list(changes) + ['updated_at'])

    create_audit_log(context, card.id, EntityType.CARD, card.title, Action.UPDATE)
    revalidate_board(context.org_id, card.list.board_id, 'card_updated')

    return serialize_card(card)


@safe_action(forms.CardIdForm, 'Failed to delete')
def delete_card(context, data):
    card = get_card(context, data['board_id'], data['id'])
    deleted = serialize_card(card)
    board_id = card.list.board_id

    with transaction.atomic():
        card.delete()
        close_gap(Card.objects.filter(list_id=deleted['list_id']), deleted['position'])

    create_audit_log(context, deleted['id'], EntityType.CARD, deleted['title'], Action.DELETE)
    revalidate_board(context.org_id, board_id, 'card_deleted')

    return deleted


@safe_action(forms.CardIdForm, 'Failed to copy')
def copy_card(context, data):
    """Duplicate a card at the end of its list"""
    source = get_card(context, data['board_id'], data['id'])

    with transaction.atomic():
        card = Card.objects.create(
            list_id=source.list_id,
            title=copy_title(source.title),
            description=source.description,
            position=next_position_for(Card.objects.filter(list_id=source.list_id)),
        )

    create_audit_log(context, card.id, EntityType.CARD, card.title, Action.CREATE)
    revalidate_board(context.org_id, source.list.board_id, 'card_copied')

    return serialize_card(card)


@safe_action(forms.UpdateCardOrderForm, REORDER_FAILED)
def update_card_order(context, data):
    """
    Persist a reordered set of cards, possibly across lists

    An item without ``list_id`` stays in its current list. The whole
    batch commits or nothing does.
    """
    board_id = data['board_id']
    items = data['items']

    aggregate = build_board_aggregate(context.org_id, board_id)
    if aggregate is None:
        raise NotFound('Board not found')
    if not card_order_is_consistent(aggregate, items):
        logger.warning("Rejected card reorder on board %s: inconsistent snapshot", board_id)
        raise ActionError(REORDER_FAILED)

    now = timezone.now()
    with transaction.atomic():
        for item in items:
            values = {'position': item['position'], 'updated_at': now}
            if item.get('list_id') is not None:
                values['list_id'] = item['list_id']

            updated = Card.objects.filter(
                id=item['id'],
                list__board_id=board_id,
                list__board__org_id=context.org_id,
            ).update(**values)

            if updated != 1:
                raise ActionError(REORDER_FAILED)

        connection.check_constraints(table_names=[Card._meta.db_table])

    revalidate_board(context.org_id, board_id, 'cards_reordered')

    cards = Card.objects.filter(
        id__in=[item['id'] for item in items]
    ).select_related('list').order_by('list__position', 'position')
    return [serialize_card(card) for card in cards]
