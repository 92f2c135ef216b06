"""
Remind guests whose stay has reached the reminder threshold (75% by default).

Usage:
    python manage.py send_checkout_reminders [--dry-run]
"""
from django.core.management.base import BaseCommand
from notifications.services import send_checkout_reminders


class Command(BaseCommand):
    help = 'Send checkout reminders to guests near the end of their stay'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Count the reminders that would be sent',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']
        count = send_checkout_reminders(dry_run=dry_run)
        if dry_run:
            self.stdout.write(self.style.WARNING(f"DRY RUN: {count} reminder(s) would be sent"))
        else:
            self.stdout.write(self.style.SUCCESS(f"{count} reminder(s) sent"))
