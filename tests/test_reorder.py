"""Tests for the list and card reorder commands."""

import pytest

from apps.audit.models import AuditLog
from apps.board.actions import update_card_order, update_list_order
from apps.board.aggregate import list_order_is_consistent
from apps.board.models import Card, List
from apps.core.actions import FAILED, INVALID, NOT_FOUND, UNAUTHORIZED
from tests.conftest import ORG_B, positions

pytestmark = pytest.mark.django_db


@pytest.fixture
def todo(board):
    return board.lists.get(title='Todo')


@pytest.fixture
def done(board):
    return board.lists.get(title='Done')


def _card_items(cards, list_id=None):
    items = []
    for position, card in enumerate(cards):
        item = {'id': card.id, 'position': position}
        if list_id is not None:
            item['list_id'] = list_id
        items.append(item)
    return items


# --- lists ---


def test_list_reorder_persists_positions(context, board, todo, done):
    result = update_list_order(context, {
        'board_id': board.id,
        'items': [{'id': done.id, 'position': 0}, {'id': todo.id, 'position': 1}],
    })

    assert result.ok
    assert [item['title'] for item in result.data] == ['Done', 'Todo']
    assert positions(board.lists) == [('Done', 0), ('Todo', 1)]


def test_list_reorder_is_not_audited(context, board, todo, done):
    update_list_order(context, {
        'board_id': board.id,
        'items': [{'id': done.id, 'position': 0}, {'id': todo.id, 'position': 1}],
    })

    assert not AuditLog.objects.exists()


def test_list_reorder_same_permutation_twice_is_idempotent(context, board, todo, done):
    payload = {
        'board_id': board.id,
        'items': [{'id': done.id, 'position': 0}, {'id': todo.id, 'position': 1}],
    }

    update_list_order(context, payload)
    first = positions(board.lists)
    result = update_list_order(context, payload)

    assert result.ok
    assert positions(board.lists) == first


def test_list_reorder_with_foreign_list_changes_nothing(context, board, todo, make_board, make_list):
    foreign = make_list(make_board(org_id=ORG_B), 'Theirs', 0)

    result = update_list_order(context, {
        'board_id': board.id,
        'items': [{'id': todo.id, 'position': 1}, {'id': foreign.id, 'position': 0}],
    })

    assert result.error == 'Failed to reorder'
    assert result.code == FAILED
    assert List.objects.get(id=todo.id).position == 0
    assert List.objects.get(id=foreign.id).position == 0


def test_list_reorder_rejects_position_collision(context, board, todo):
    # Done keeps position 1
    result = update_list_order(context, {
        'board_id': board.id,
        'items': [{'id': todo.id, 'position': 1}],
    })

    assert result.error == 'Failed to reorder'
    assert List.objects.get(id=todo.id).position == 0


def test_list_reorder_on_other_tenant_board_is_not_found(other_context, board, todo, done):
    result = update_list_order(other_context, {
        'board_id': board.id,
        'items': [{'id': done.id, 'position': 0}, {'id': todo.id, 'position': 1}],
    })

    assert result.code == NOT_FOUND
    assert result.error == 'Board not found'


def test_list_reorder_rolls_back_when_a_row_vanishes(context, board, todo, done, monkeypatch):
    from apps.board import actions

    real_filter = List.objects.filter
    calls = {'count': 0}

    def flaky_filter(*args, **kwargs):
        queryset = real_filter(*args, **kwargs)
        if 'board__org_id' in kwargs:
            calls['count'] += 1
            if calls['count'] == 2:
                return queryset.none()
        return queryset

    monkeypatch.setattr(actions.List.objects, 'filter', flaky_filter)

    result = update_list_order(context, {
        'board_id': board.id,
        'items': [{'id': done.id, 'position': 0}, {'id': todo.id, 'position': 1}],
    })

    assert result.error == 'Failed to reorder'
    monkeypatch.undo()
    assert positions(board.lists) == [('Todo', 0), ('Done', 1)]


def test_reorder_requires_tenant(no_org_context, board, todo):
    result = update_list_order(no_org_context, {
        'board_id': board.id,
        'items': [{'id': todo.id, 'position': 0}],
    })

    assert result.code == UNAUTHORIZED
    assert result.error == 'Unauthorized'


@pytest.mark.parametrize('items', [
    [],
    'not-a-list',
    [{'id': 1}],
    [{'id': 1, 'position': -1}],
    [{'id': 'x', 'position': 0}],
    [{'id': 1, 'position': 0}, {'id': 1, 'position': 1}],
])
def test_reorder_rejects_malformed_items(context, board, items):
    result = update_list_order(context, {'board_id': board.id, 'items': items})

    assert result.code == INVALID
    assert 'items' in result.field_errors


# --- cards ---


def test_card_reorder_within_list(context, board, todo):
    a, b, c = todo.cards.order_by('position')

    result = update_card_order(context, {
        'board_id': board.id,
        'items': _card_items([c, a, b]),
    })

    assert result.ok
    assert positions(todo.cards) == [('c', 0), ('a', 1), ('b', 2)]


def test_card_reorder_across_lists(context, board, todo, done):
    a, b, c = todo.cards.order_by('position')
    d = done.cards.get()

    result = update_card_order(context, {
        'board_id': board.id,
        'items': _card_items([b, c], todo.id) + _card_items([d, a], done.id),
    })

    assert result.ok
    assert positions(todo.cards) == [('b', 0), ('c', 1)]
    assert positions(done.cards) == [('d', 0), ('a', 1)]
    assert Card.objects.get(id=a.id).list_id == done.id


def test_card_reorder_into_foreign_list_fails(context, board, todo, make_board, make_list):
    foreign = make_list(make_board(org_id=ORG_B), 'Theirs', 0)
    a = todo.cards.get(title='a')

    result = update_card_order(context, {
        'board_id': board.id,
        'items': [{'id': a.id, 'position': 0, 'list_id': foreign.id}],
    })

    assert result.error == 'Failed to reorder'
    assert Card.objects.get(id=a.id).list_id == todo.id


def test_card_reorder_with_foreign_card_changes_nothing(context, board, todo, make_board, make_list, make_card):
    theirs = make_card(make_list(make_board(org_id=ORG_B), 'Theirs', 0), 'z', 0)
    a, b, c = todo.cards.order_by('position')

    result = update_card_order(context, {
        'board_id': board.id,
        'items': _card_items([c, b, a]) + [{'id': theirs.id, 'position': 3}],
    })

    assert result.error == 'Failed to reorder'
    assert positions(todo.cards) == [('a', 0), ('b', 1), ('c', 2)]
    assert Card.objects.get(id=theirs.id).position == 0


def test_list_order_check_accepts_integer_ids():
    aggregate = {
        'id': 1,
        'lists': [
            {'id': 10, 'position': 0, 'cards': []},
            {'id': 11, 'position': 1, 'cards': []},
        ],
    }

    assert list_order_is_consistent(aggregate, [{'id': 11, 'position': 0}, {'id': 10, 'position': 1}])
    assert not list_order_is_consistent(aggregate, [{'id': 11, 'position': 0}])
