"""Shared fixtures: two organizations, their users and board builders."""

import pytest
from django.core.cache import cache

from apps.board.models import Board, Card, List
from apps.core.models import User
from apps.core.tenancy import RequestContext, context_for_user

ORG_A = 'org_alpha'
ORG_B = 'org_beta'

IMAGE = 'img-1|https://img.test/thumb.jpg|https://img.test/full.jpg|<a href="https://img.test">Img</a>|Alice'


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def user(db):
    return User.objects.create_user(
        username='alice',
        password='secret',
        first_name='Alice',
        last_name='Smith',
        org_id=ORG_A,
    )


@pytest.fixture
def other_user(db):
    return User.objects.create_user(username='bob', password='secret', org_id=ORG_B)


@pytest.fixture
def context(user):
    return context_for_user(user)


@pytest.fixture
def other_context(other_user):
    return context_for_user(other_user)


@pytest.fixture
def no_org_context():
    return RequestContext(org_id='', user_id='1')


def _make_board(org_id=ORG_A, title='Roadmap'):
    return Board.objects.create(
        title=title,
        org_id=org_id,
        image_id='img-1',
        image_thumb_url='https://img.test/thumb.jpg',
        image_full_url='https://img.test/full.jpg',
        image_link_html='<a href="https://img.test">Img</a>',
        image_user_name='Alice',
    )


def _make_list(board, title, position):
    return List.objects.create(board=board, title=title, position=position)


def _make_card(board_list, title, position, description=None):
    return Card.objects.create(
        list=board_list, title=title, position=position, description=description
    )


@pytest.fixture
def make_board(db):
    return _make_board


@pytest.fixture
def make_list(db):
    return _make_list


@pytest.fixture
def make_card(db):
    return _make_card


@pytest.fixture
def board(make_board, make_list, make_card):
    """Board of ORG_A with lists Todo(0) [a, b, c] and Done(1) [d]."""
    board = make_board()
    todo = make_list(board, 'Todo', 0)
    done = make_list(board, 'Done', 1)
    for position, title in enumerate(['a', 'b', 'c']):
        make_card(todo, title, position)
    make_card(done, 'd', 0)
    return board


def positions(queryset):
    return list(queryset.order_by('position').values_list('title', 'position'))
