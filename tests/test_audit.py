"""Tests for the audit recorder and its read endpoints."""

import logging

import pytest
from django.db import DatabaseError
from django.urls import reverse

from apps.audit.models import AuditLog
from apps.audit.services import create_audit_log, generate_log_message
from apps.board import actions
from tests.conftest import ORG_A, ORG_B

pytestmark = pytest.mark.django_db


def _log(org_id=ORG_A, entity_id='1', entity_type=AuditLog.EntityType.CARD, title='Fix login', action=AuditLog.Action.UPDATE):
    return AuditLog.objects.create(
        org_id=org_id,
        entity_id=entity_id,
        entity_type=entity_type,
        entity_title=title,
        action=action,
        user_id='1',
        user_name='Alice Smith',
    )


@pytest.mark.parametrize('action,expected', [
    (AuditLog.Action.CREATE, 'created list "Todo"'),
    (AuditLog.Action.UPDATE, 'updated list "Todo"'),
    (AuditLog.Action.DELETE, 'deleted list "Todo"'),
    ('ARCHIVE', 'unknown action list "Todo"'),
])
def test_generate_log_message(action, expected):
    log = AuditLog(action=action, entity_type=AuditLog.EntityType.LIST, entity_title='Todo')

    assert generate_log_message(log) == expected


def test_create_audit_log_snapshots_actor(context):
    log = create_audit_log(context, 42, AuditLog.EntityType.BOARD, 'Roadmap', AuditLog.Action.CREATE)

    assert log.entity_id == '42'
    assert log.org_id == ORG_A
    assert log.user_id == context.user_id
    assert log.user_name == 'Alice Smith'


def test_audit_failure_is_logged_and_swallowed(context, monkeypatch, caplog):
    def boom(**kwargs):
        raise DatabaseError('audit table locked')

    monkeypatch.setattr(AuditLog.objects, 'create', boom)

    with caplog.at_level(logging.ERROR, logger='apps.audit.services'):
        result = create_audit_log(context, 1, AuditLog.EntityType.CARD, 'x', AuditLog.Action.CREATE)

    assert result is None
    assert 'Audit log failed' in caplog.text


def test_command_succeeds_when_audit_fails(context, board, monkeypatch):
    def boom(**kwargs):
        raise DatabaseError('audit table locked')

    monkeypatch.setattr(AuditLog.objects, 'create', boom)

    result = actions.create_list(context, {'board_id': board.id, 'title': 'Review'})

    assert result.ok
    assert board.lists.filter(title='Review').exists()


def test_card_logs_returns_latest_three(client, user):
    for index in range(5):
        _log(entity_id='7', title=f'v{index}')
    _log(entity_id='8', title='other card')
    _log(org_id=ORG_B, entity_id='7', title='other tenant')
    client.force_login(user)

    response = client.get(reverse('audit:card_logs', args=[7]))

    data = response.json()['data']
    assert response.status_code == 200
    assert [entry['entity_title'] for entry in data] == ['v4', 'v3', 'v2']
    assert data[0]['message'] == 'updated card "v4"'


def test_card_logs_requires_organization(client, db):
    response = client.get(reverse('audit:card_logs', args=[7]))

    assert response.status_code == 401
    assert response.json() == {'error': 'Unauthorized'}


def test_activity_feed_is_paginated_per_tenant(client, user, settings):
    settings.PLANIFY_ACTIVITY_PAGE_SIZE = 2
    for index in range(3):
        _log(title=f'a{index}')
    _log(org_id=ORG_B, title='hidden')
    client.force_login(user)

    first = client.get(reverse('audit:activity')).json()
    second = client.get(reverse('audit:activity'), {'page': 2}).json()

    assert [entry['entity_title'] for entry in first['data']] == ['a2', 'a1']
    assert first['has_next'] is True
    assert [entry['entity_title'] for entry in second['data']] == ['a0']
    assert second['num_pages'] == 2
