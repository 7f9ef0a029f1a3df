"""Tests for the quota ledger, subscription status and counter repair."""

from datetime import timedelta
from io import StringIO

import pytest
from django.core.management import call_command
from django.utils import timezone

from apps.billing.limits import (
    decrease_available_count,
    get_available_count,
    get_quota_status,
    has_available_count,
    increment_available_count,
)
from apps.billing.models import OrgLimit, OrgSubscription
from apps.billing.subscription import check_subscription
from tests.conftest import ORG_A, ORG_B

pytestmark = pytest.mark.django_db


@pytest.fixture(autouse=True)
def max_five(settings):
    settings.PLANIFY_MAX_FREE_BOARDS = 5


def _subscribe(org_id, period_end, price_id='price_123'):
    return OrgSubscription.objects.create(
        org_id=org_id,
        stripe_price_id=price_id,
        stripe_current_period_end=period_end,
    )


# --- ledger ---


def test_has_available_when_counter_absent():
    assert has_available_count(ORG_A)


@pytest.mark.parametrize('count,expected', [(0, True), (4, True), (5, False), (7, False)])
def test_has_available_against_max(count, expected):
    OrgLimit.objects.create(org_id=ORG_A, count=count)

    assert has_available_count(ORG_A) is expected


def test_increment_creates_then_adds():
    increment_available_count(ORG_A)
    increment_available_count(ORG_A)

    assert get_available_count(ORG_A) == 2


def test_decrement_clamps_at_zero():
    OrgLimit.objects.create(org_id=ORG_A, count=0)

    decrease_available_count(ORG_A)

    assert get_available_count(ORG_A) == 0


def test_decrement_without_counter_stays_at_zero():
    decrease_available_count(ORG_A)

    assert OrgLimit.objects.get(org_id=ORG_A).count == 0


def test_counters_are_per_tenant():
    increment_available_count(ORG_A)

    assert get_available_count(ORG_A) == 1
    assert get_available_count(ORG_B) == 0


def test_quota_status_free_tier():
    OrgLimit.objects.create(org_id=ORG_A, count=3)

    assert get_quota_status(ORG_A) == {
        'count': 3,
        'max_free_boards': 5,
        'remaining': 2,
        'is_pro': False,
    }


# --- subscription ---


def test_no_subscription():
    assert check_subscription(ORG_A) is False


def test_active_subscription():
    _subscribe(ORG_A, timezone.now() + timedelta(days=3))

    assert check_subscription(ORG_A) is True


def test_subscription_inside_grace_day():
    _subscribe(ORG_A, timezone.now() - timedelta(hours=12))

    assert check_subscription(ORG_A) is True


def test_subscription_expired_after_grace_day():
    _subscribe(ORG_A, timezone.now() - timedelta(days=2))

    assert check_subscription(ORG_A) is False


def test_subscription_without_price_is_inactive():
    _subscribe(ORG_A, timezone.now() + timedelta(days=3), price_id='')

    assert check_subscription(ORG_A) is False


def test_quota_status_pro_has_no_remaining():
    _subscribe(ORG_A, timezone.now() + timedelta(days=3))

    status = get_quota_status(ORG_A)

    assert status['is_pro'] is True
    assert status['remaining'] is None


# --- sync_org_limits ---


def test_sync_org_limits_repairs_counters(make_board):
    make_board(org_id=ORG_A)
    make_board(org_id=ORG_A)
    OrgLimit.objects.create(org_id=ORG_A, count=5)
    OrgLimit.objects.create(org_id=ORG_B, count=1)

    out = StringIO()
    call_command('sync_org_limits', stdout=out)

    assert get_available_count(ORG_A) == 2
    assert get_available_count(ORG_B) == 0
    assert '2 counter(s) repaired' in out.getvalue()


def test_sync_org_limits_dry_run_writes_nothing(make_board):
    make_board(org_id=ORG_A)

    out = StringIO()
    call_command('sync_org_limits', '--dry-run', stdout=out)

    assert not OrgLimit.objects.exists()
    assert 'dry run' in out.getvalue()


def test_sync_org_limits_leaves_subscribed_orgs_alone(make_board):
    _subscribe(ORG_A, timezone.now() + timedelta(days=20))
    make_board(org_id=ORG_A)
    make_board(org_id=ORG_A)
    OrgLimit.objects.create(org_id=ORG_A, count=0)

    out = StringIO()
    call_command('sync_org_limits', stdout=out)

    assert get_available_count(ORG_A) == 0
    assert 'skipped (active subscription)' in out.getvalue()
