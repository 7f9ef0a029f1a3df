# apps/board/aggregate.py

"""
Board aggregate view

Read side of the board: a board with its lists ordered by position and
each list's cards ordered by position, as plain dicts. The aggregate is
cached per organization and board; commands drop the cache entry after
every committed write (see apps.board.cache).

The reorder commands also check submitted snapshots against a fresh,
uncached aggregate here.
"""

from collections import Counter, defaultdict

from django.conf import settings
from django.core.cache import cache
from django.db.models import Prefetch

from .models import Board, Card, List


def board_cache_key(org_id, board_id):
    return f'planify:board:{org_id}:{board_id}'


def organization_cache_key(org_id):
    return f'planify:org-boards:{org_id}'


# === SERIALIZERS ===

def serialize_board(board):
    return {
        'id': board.id,
        'title': board.title,
        'org_id': board.org_id,
        'image_id': board.image_id,
        'image_thumb_url': board.image_thumb_url,
        'image_full_url': board.image_full_url,
        'image_user_name': board.image_user_name,
        'image_link_html': board.image_link_html,
        'created_at': board.created_at.isoformat(),
        'updated_at': board.updated_at.isoformat(),
    }


def serialize_card(card):
    return {
        'id': card.id,
        'title': card.title,
        'description': card.description,
        'position': card.position,
        'list_id': card.list_id,
        'created_at': card.created_at.isoformat(),
        'updated_at': card.updated_at.isoformat(),
    }


def serialize_list(board_list, cards=None):
    data = {
        'id': board_list.id,
        'title': board_list.title,
        'position': board_list.position,
        'board_id': board_list.board_id,
        'created_at': board_list.created_at.isoformat(),
        'updated_at': board_list.updated_at.isoformat(),
    }
    if cards is not None:
        data['cards'] = [serialize_card(card) for card in cards]
    return data


# === AGGREGATE ===

def build_board_aggregate(org_id, board_id):
    """
    Board with ordered lists and cards, straight from the database

    Returns None when the board does not exist in the organization.
    """
    cards = Card.objects.order_by('position', 'id')
    lists = List.objects.order_by('position', 'id').prefetch_related(
        Prefetch('cards', queryset=cards)
    )

    board = Board.objects.filter(id=board_id, org_id=org_id).prefetch_related(
        Prefetch('lists', queryset=lists)
    ).first()

    if board is None:
        return None

    data = serialize_board(board)
    data['lists'] = [
        serialize_list(board_list, board_list.cards.all())
        for board_list in board.lists.all()
    ]
    return data


def get_board_aggregate(org_id, board_id):
    """Cached board aggregate (None when not found)"""
    key = board_cache_key(org_id, board_id)

    data = cache.get(key)
    if data is None:
        data = build_board_aggregate(org_id, board_id)
        if data is not None:
            cache.set(key, data, settings.PLANIFY_BOARD_CACHE_TIMEOUT)

    return data


def get_organization_boards(org_id):
    """Cached list of the organization's boards, newest first"""
    key = organization_cache_key(org_id)

    boards = cache.get(key)
    if boards is None:
        boards = [
            serialize_board(board)
            for board in Board.objects.filter(org_id=org_id).order_by('-created_at', '-id')
        ]
        cache.set(key, boards, settings.PLANIFY_BOARD_CACHE_TIMEOUT)

    return boards


# === SNAPSHOT CHECKS ===

def _duplicate_positions(positions_by_container):
    for positions in positions_by_container.values():
        if any(total > 1 for total in Counter(positions).values()):
            return True
    return False


def list_order_is_consistent(aggregate, items):
    """
    True when ``items`` is a valid list reorder for the board

    Every id must be a list of the board, and once applied no two lists
    may share a position.
    """
    current = {board_list['id']: board_list['position'] for board_list in aggregate['lists']}

    submitted = {item['id']: item['position'] for item in items}
    if any(list_id not in current for list_id in submitted):
        return False

    final = {**current, **submitted}
    return not _duplicate_positions({aggregate['id']: list(final.values())})


def card_order_is_consistent(aggregate, items):
    """
    True when ``items`` is a valid card reorder for the board

    Every card and every destination list must belong to the board, and
    once applied no two cards of a list may share a position.
    """
    list_ids = {board_list['id'] for board_list in aggregate['lists']}
    current = {
        card['id']: (card['list_id'], card['position'])
        for board_list in aggregate['lists']
        for card in board_list['cards']
    }

    final = dict(current)
    for item in items:
        if item['id'] not in current:
            return False

        list_id = item.get('list_id') or current[item['id']][0]
        if list_id not in list_ids:
            return False

        final[item['id']] = (list_id, item['position'])

    positions_by_list = defaultdict(list)
    for list_id, position in final.values():
        positions_by_list[list_id].append(position)

    return not _duplicate_positions(positions_by_list)
