# apps/board/cache.py

"""
Cache invalidation hooks

Called by commands after a write. Drops the cached read views once the
transaction commits and tells every socket on the board group to refresh.
"""

import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.core.cache import cache
from django.db import transaction
from django.utils import timezone

from .aggregate import board_cache_key, organization_cache_key

logger = logging.getLogger(__name__)


def board_group_name(board_id):
    return f'board_{board_id}'


def broadcast_board_refresh(board_id, reason=''):
    """
    Send a board_refresh event to the board group

    The write has already committed, so a failing channel layer is
    logged and otherwise ignored.
    """
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return

    try:
        async_to_sync(channel_layer.group_send)(
            board_group_name(board_id),
            {
                'type': 'board_refresh',
                'message': {
                    'board_id': board_id,
                    'reason': reason,
                    'timestamp': timezone.now().isoformat(),
                }
            }
        )
    except Exception:
        logger.exception("Board refresh broadcast failed for board %s", board_id)


def revalidate_board(org_id, board_id, reason=''):
    """
    Invalidate one board's aggregate and notify its viewers

    The key is dropped now for reads inside the current transaction and
    again once it commits. The broadcast waits for the commit.
    """
    key = board_cache_key(org_id, board_id)
    cache.delete(key)

    def after_commit():
        cache.delete(key)
        broadcast_board_refresh(board_id, reason)

    transaction.on_commit(after_commit)


def revalidate_organization(org_id):
    """Invalidate the organization's board listing, now and after commit"""
    key = organization_cache_key(org_id)
    cache.delete(key)
    transaction.on_commit(lambda: cache.delete(key))
