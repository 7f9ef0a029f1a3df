# apps/billing/management/commands/sync_org_limits.py

from django.core.management.base import BaseCommand
from django.db import transaction
from django.db.models import Count

from apps.billing.models import OrgLimit
from apps.billing.subscription import check_subscription
from apps.board.models import Board


class Command(BaseCommand):
    help = 'Recompute free-tier board counters from the boards that exist'

    def add_arguments(self, parser):
        parser.add_argument(
            '--org',
            type=str,
            help='Only repair this organization',
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Report differences without writing them',
        )

    def handle(self, *args, **options):
        org_filter = options.get('org')
        dry_run = options['dry_run']

        boards = Board.objects.all()
        limits = OrgLimit.objects.all()
        if org_filter:
            boards = boards.filter(org_id=org_filter)
            limits = limits.filter(org_id=org_filter)

        actual = {
            row['org_id']: row['total']
            for row in boards.values('org_id').annotate(total=Count('id'))
        }
        counted = {limit.org_id: limit.count for limit in limits}

        changes = []
        for org_id in sorted(set(actual) | set(counted)):
            # Boards created on a paid plan were never counted
            if check_subscription(org_id):
                self.stdout.write(f'  {org_id}: skipped (active subscription)')
                continue
            expected = actual.get(org_id, 0)
            if counted.get(org_id) != expected:
                changes.append((org_id, counted.get(org_id), expected))

        if not changes:
            self.stdout.write(self.style.SUCCESS('All organization counters are in sync'))
            return

        for org_id, current, expected in changes:
            self.stdout.write(f'  {org_id}: {current} -> {expected}')

        if dry_run:
            self.stdout.write(self.style.WARNING(f'{len(changes)} counter(s) out of sync (dry run)'))
            return

        with transaction.atomic():
            for org_id, _, expected in changes:
                OrgLimit.objects.update_or_create(
                    org_id=org_id, defaults={'count': expected}
                )

        self.stdout.write(self.style.SUCCESS(f'{len(changes)} counter(s) repaired'))
