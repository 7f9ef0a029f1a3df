#!/usr/bin/env python
"""
Django's command-line utility for administrative tasks.

Planify - multi-tenant kanban boards
"""

import os
import sys


def main():
    """Run administrative tasks."""

    # Development settings by default
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.development')

    try:
        from django.core.management import call_command, execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Are you sure it's installed and "
            "available on your PYTHONPATH environment variable? Did you "
            "forget to activate a virtual environment?"
        ) from exc

    # Planify shortcuts
    if len(sys.argv) > 1:
        command = sys.argv[1]

        # First-run setup
        if command == 'setup':
            import django

            django.setup()

            print("Applying migrations...")
            call_command('migrate')

            print("Collecting static files...")
            call_command('collectstatic', interactive=False)

            print("Reconciling organization board quotas...")
            call_command('sync_org_limits')

            print("Setup complete.")
            return

        elif command == 'backup':
            import django
            from datetime import datetime

            django.setup()

            timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
            backup_file = f"backup_planify_{timestamp}.json"
            with open(backup_file, 'w', encoding='utf-8') as fh:
                call_command('dumpdata', 'board', 'audit', 'billing', indent=2, stdout=fh)
            print(f"Backup written: {backup_file}")
            return

    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()
