"""Tests for the ordering engine: sequence moves, insert-at-end, gaps and drop planning."""

import pytest

from apps.board.aggregate import build_board_aggregate
from apps.board.models import Card, List
from apps.board.ordering import (
    DragLocation,
    DropResult,
    close_gap,
    move_between,
    move_within,
    next_position,
    next_position_for,
    plan_drop,
    reindex,
    reorder,
)
from tests.conftest import ORG_A, positions


def _items(*names, list_id=1):
    return [
        {'id': index + 1, 'title': name, 'position': index * 10, 'list_id': list_id}
        for index, name in enumerate(names)
    ]


def _drop(kind, source, destination):
    return DropResult(
        type=kind,
        source=DragLocation(*source),
        destination=DragLocation(*destination) if destination else None,
    )


# --- next_position ---


def test_next_position_empty_set_starts_at_one():
    assert next_position([]) == 1


def test_next_position_is_max_plus_one():
    assert next_position([0, 4, 2]) == 5


# --- reorder / reindex ---


def test_reorder_moves_item_and_keeps_input():
    items = ['a', 'b', 'c', 'd']

    assert reorder(items, 0, 2) == ['b', 'c', 'a', 'd']
    assert items == ['a', 'b', 'c', 'd']


def test_reindex_assigns_zero_based_positions():
    result = reindex(_items('a', 'b', 'c'))

    assert [item['position'] for item in result] == [0, 1, 2]


# --- move_within ---


@pytest.mark.parametrize('from_index,to_index', [(0, 4), (4, 0), (1, 3), (3, 2)])
def test_move_within_yields_dense_positions(from_index, to_index):
    result = move_within(_items('a', 'b', 'c', 'd', 'e'), from_index, to_index)

    assert [item['position'] for item in result] == [0, 1, 2, 3, 4]


def test_move_within_places_item_at_target_index():
    result = move_within(_items('a', 'b', 'c'), 0, 2)

    assert [item['title'] for item in result] == ['b', 'c', 'a']


def test_move_within_same_index_is_noop():
    assert move_within(_items('a', 'b'), 1, 1) is None


def test_move_within_out_of_range_is_noop():
    assert move_within(_items('a', 'b'), 0, 5) is None


# --- move_between ---


def test_move_between_reindexes_both_sets():
    source = _items('a', 'b', 'c', list_id=1)
    dest = _items('x', 'y', list_id=2)

    new_source, new_dest = move_between(source, dest, 1, 1, 2)

    assert [(c['title'], c['position']) for c in new_source] == [('a', 0), ('c', 1)]
    assert [(c['title'], c['position']) for c in new_dest] == [('x', 0), ('b', 1), ('y', 2)]
    assert new_dest[1]['list_id'] == 2


def test_move_between_into_empty_list():
    new_source, new_dest = move_between(_items('a'), [], 0, 0, 9)

    assert new_source == []
    assert [(c['title'], c['position'], c['list_id']) for c in new_dest] == [('a', 0, 9)]


def test_moved_item_appears_in_exactly_one_set():
    new_source, new_dest = move_between(_items('a', 'b'), _items('x', list_id=2), 0, 0, 2)

    titles = [c['title'] for c in new_source] + [c['title'] for c in new_dest]
    assert titles.count('a') == 1


# --- drop results ---


def test_drop_without_destination_is_noop():
    assert _drop('list', ('lists', 0), None).is_noop


def test_drop_on_same_spot_is_noop():
    assert _drop('card', ('5', 2), ('5', 2)).is_noop


def test_drop_result_from_dict():
    drop = DropResult.from_dict({
        'type': 'card',
        'source': {'container': 3, 'index': '1'},
        'destination': {'container': '4', 'index': 0},
    })

    assert drop.source == DragLocation('3', 1)
    assert drop.destination == DragLocation('4', 0)


# --- database helpers ---


def test_next_position_for_empty_and_filled(board, make_list):
    empty = make_list(board, 'Empty', 5)

    assert next_position_for(empty.cards.all()) == 1
    assert next_position_for(board.lists.all()) == 6


def test_close_gap_shifts_higher_siblings_down(board):
    todo = board.lists.get(title='Todo')
    todo.cards.get(title='a').delete()

    close_gap(Card.objects.filter(list=todo), 0)

    assert positions(todo.cards) == [('b', 0), ('c', 1)]


# --- plan_drop ---


@pytest.fixture
def snapshot(board):
    return build_board_aggregate(ORG_A, board.id)


def test_plan_list_drop(snapshot):
    kind, payload = plan_drop(snapshot, _drop('list', ('lists', 0), ('lists', 1)))

    done, todo = snapshot['lists'][1], snapshot['lists'][0]
    assert kind == 'list'
    assert payload == {
        'board_id': snapshot['id'],
        'items': [
            {'id': done['id'], 'position': 0},
            {'id': todo['id'], 'position': 1},
        ],
    }


def test_plan_card_drop_within_list(snapshot):
    todo = snapshot['lists'][0]
    container = str(todo['id'])

    kind, payload = plan_drop(snapshot, _drop('card', (container, 2), (container, 0)))

    titles = {card['id']: card['title'] for card in todo['cards']}
    assert kind == 'card'
    assert [(titles[i['id']], i['position']) for i in payload['items']] == [
        ('c', 0), ('a', 1), ('b', 2)
    ]


def test_plan_card_drop_across_lists_sends_both_lists(snapshot):
    todo, done = snapshot['lists']

    kind, payload = plan_drop(
        snapshot, _drop('card', (str(todo['id']), 0), (str(done['id']), 1))
    )

    by_list = {}
    for item in payload['items']:
        by_list.setdefault(item['list_id'], []).append(item['position'])

    assert kind == 'card'
    assert by_list == {todo['id']: [0, 1], done['id']: [0, 1]}


def test_plan_card_drop_unknown_list_is_noop(snapshot):
    todo = snapshot['lists'][0]

    assert plan_drop(snapshot, _drop('card', (str(todo['id']), 0), ('999', 0))) is None


def test_plan_drop_outside_container_is_noop(snapshot):
    assert plan_drop(snapshot, _drop('list', ('lists', 0), None)) is None


def test_plan_drop_does_not_touch_database(snapshot):
    todo = snapshot['lists'][0]
    plan_drop(snapshot, _drop('list', ('lists', 0), ('lists', 1)))

    assert List.objects.get(id=todo['id']).position == 0
