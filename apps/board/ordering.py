# apps/board/ordering.py

"""
Ordering engine

Lists inside a board and cards inside a list are sibling sets kept in
dense integer positions. The helpers here work on plain dicts (the shape
produced by the board aggregate) so the same code plans a drag on the
server and validates what a client submits.

- next_position: insert-at-end, max + 1 or 1 for an empty set
- move_within: splice an item to a new index and reindex 0..n-1
- move_between: move an item across containers, reindexing both sets
- close_gap: shift siblings down after a delete
- plan_drop: turn a drag-and-drop result into a reorder payload
"""

import logging
from dataclasses import dataclass
from typing import Optional

from django.db.models import F, Max

logger = logging.getLogger(__name__)

LIST_DROP = 'list'
CARD_DROP = 'card'


# === PURE SEQUENCE OPERATIONS ===

def next_position(positions):
    """Position for an item appended after ``positions`` (1 when empty)"""
    positions = list(positions)
    return max(positions) + 1 if positions else 1


def reorder(items, start_index, end_index):
    """Copy of ``items`` with the element at start_index moved to end_index"""
    result = list(items)
    removed = result.pop(start_index)
    result.insert(end_index, removed)
    return result


def reindex(items):
    """Copies of ``items`` with ``position`` set to their index"""
    return [dict(item, position=index) for index, item in enumerate(items)]


def move_within(items, from_index, to_index):
    """
    Move one item inside a sibling set

    Returns the reindexed set, or None when nothing moves or an index is
    out of range.
    """
    if from_index == to_index:
        return None
    if not 0 <= from_index < len(items) or not 0 <= to_index < len(items):
        return None

    return reindex(reorder(items, from_index, to_index))


def move_between(source, dest, from_index, to_index, dest_id, container_key='list_id'):
    """
    Move one item from ``source`` into ``dest`` at ``to_index``

    The moved item's container reference is rewritten to ``dest_id`` and
    both sets are reindexed independently. Returns ``(source, dest)`` or
    None when an index is out of range.
    """
    if not 0 <= from_index < len(source) or not 0 <= to_index <= len(dest):
        return None

    source = list(source)
    dest = list(dest)

    moved = dict(source.pop(from_index))
    moved[container_key] = dest_id
    dest.insert(to_index, moved)

    return reindex(source), reindex(dest)


# === DATABASE HELPERS ===

def next_position_for(queryset):
    """Insert-at-end position for the siblings in ``queryset``"""
    last = queryset.aggregate(last=Max('position'))['last']
    return last + 1 if last is not None else 1


def close_gap(queryset, removed_position):
    """
    Shift siblings above a deleted item down by one

    Must run inside the transaction that deleted the item.
    """
    return queryset.filter(position__gt=removed_position).update(
        position=F('position') - 1
    )


# === DRAG AND DROP ===

@dataclass(frozen=True)
class DragLocation:
    """A container id (droppable) and an index inside it"""

    container: str
    index: int

    @classmethod
    def from_dict(cls, data):
        if not data:
            return None
        return cls(container=str(data['container']), index=int(data['index']))


@dataclass(frozen=True)
class DropResult:
    """Outcome of a drag gesture as reported by the client"""

    type: str
    source: DragLocation
    destination: Optional[DragLocation] = None

    @classmethod
    def from_dict(cls, data):
        return cls(
            type=data['type'],
            source=DragLocation.from_dict(data['source']),
            destination=DragLocation.from_dict(data.get('destination')),
        )

    @property
    def is_noop(self):
        if self.destination is None:
            return True
        return (
            self.destination.container == self.source.container
            and self.destination.index == self.source.index
        )


def _find_list(lists, container):
    for board_list in lists:
        if str(board_list['id']) == container:
            return board_list
    return None


def plan_drop(snapshot, drop):
    """
    Reorder payload for a drop applied to a board snapshot

    ``snapshot`` is a board aggregate dict. Returns ``(kind, payload)``
    where kind is 'list' or 'card' and payload is the input of the
    matching reorder command, or None when the drop writes nothing.
    A card moved across lists carries the cards of both lists.
    """
    if drop.is_noop:
        return None

    lists = snapshot.get('lists', [])

    if drop.type == LIST_DROP:
        moved = move_within(lists, drop.source.index, drop.destination.index)
        if moved is None:
            return None

        items = [{'id': item['id'], 'position': item['position']} for item in moved]
        return LIST_DROP, {'board_id': snapshot['id'], 'items': items}

    if drop.type != CARD_DROP:
        logger.warning("Unknown drop type %r on board %s", drop.type, snapshot.get('id'))
        return None

    source_list = _find_list(lists, drop.source.container)
    dest_list = _find_list(lists, drop.destination.container)
    if source_list is None or dest_list is None:
        return None

    if source_list is dest_list:
        moved = move_within(
            source_list.get('cards', []), drop.source.index, drop.destination.index
        )
        if moved is None:
            return None
        cards = moved
    else:
        result = move_between(
            source_list.get('cards', []),
            dest_list.get('cards', []),
            drop.source.index,
            drop.destination.index,
            dest_list['id'],
        )
        if result is None:
            return None
        source_cards, dest_cards = result
        cards = source_cards + dest_cards

    items = [
        {'id': card['id'], 'position': card['position'], 'list_id': card['list_id']}
        for card in cards
    ]
    return CARD_DROP, {'board_id': snapshot['id'], 'items': items}
