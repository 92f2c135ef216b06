"""
Permanently delete bookings that have been in the trash longer than the retention period.

Usage:
    python manage.py purge_deleted_bookings [--days 90] [--dry-run]
"""
from django.core.management.base import BaseCommand, CommandError
from audit.helpers import log_action
from core.constants import AuditAction, AuditResource
from bookings.services import BookingService, retention_days
from core.exceptions import ValidationError


class Command(BaseCommand):
    help = 'Purge soft-deleted bookings older than the retention period'

    def add_arguments(self, parser):
        parser.add_argument(
            '--days',
            type=int,
            default=None,
            help='Retention in days (default: SOFT_DELETE_RETENTION_DAYS)',
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Count the bookings that would be purged',
        )

    def handle(self, *args, **options):
        days = options['days'] if options['days'] is not None else retention_days()
        dry_run = options['dry_run']
        try:
            count = BookingService().purge_deleted(days, dry_run=dry_run)
        except ValidationError as e:
            raise CommandError(e.message)

        if dry_run:
            self.stdout.write(self.style.WARNING(
                f"DRY RUN: {count} booking(s) deleted more than {days} day(s) ago would be purged"))
            return
        if count:
            log_action(None, AuditAction.PURGE, AuditResource.BOOKING, None,
                       f"Purged {count} booking(s) deleted more than {days} day(s) ago",
                       metadata={'days': days, 'count': count})
        self.stdout.write(self.style.SUCCESS(f"{count} booking(s) purged"))
