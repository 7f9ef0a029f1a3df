# apps/board/sync.py

"""
Two-phase drag and drop

A client applies a drop to its local board, then submits the drop. The
server plans the same move on its own snapshot and runs the matching
reorder command. When the command fails the client receives the
authoritative board to replace its optimistic state.
"""

import logging

from .actions import update_card_order, update_list_order
from .aggregate import build_board_aggregate, get_board_aggregate
from .ordering import LIST_DROP, DropResult, plan_drop

logger = logging.getLogger(__name__)


def handle_drop(context, board_id, drop_data):
    """
    Apply a drop reported by a client

    Returns the message to send back: ``drop_applied`` with the updated
    entities, ``drop_ignored`` for no-op drops, ``board_sync`` with the
    fresh board when the reorder failed, or ``error``.
    """
    snapshot = get_board_aggregate(context.org_id, board_id)
    if snapshot is None:
        return {'type': 'error', 'error': 'Board not found'}

    try:
        drop = DropResult.from_dict(drop_data)
    except (KeyError, TypeError, ValueError):
        return {'type': 'error', 'error': 'Invalid drop'}

    plan = plan_drop(snapshot, drop)
    if plan is None:
        return {'type': 'drop_ignored'}

    kind, payload = plan
    command = update_list_order if kind == LIST_DROP else update_card_order
    result = command(context, payload)

    if result.ok:
        return {'type': 'drop_applied', 'kind': kind, 'data': result.data}

    logger.info("Drop on board %s rejected (%s), resyncing client", board_id, result.error)
    return {
        'type': 'board_sync',
        'error': result.error,
        'board_data': build_board_aggregate(context.org_id, board_id),
    }
