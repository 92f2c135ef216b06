"""
Re-derive room status from bookings for every room not under maintenance.

Usage:
    python manage.py sync_room_statuses [--dry-run]
"""
from django.core.management.base import BaseCommand
from rooms.status import update_all_room_statuses


class Command(BaseCommand):
    help = 'Bring room statuses in line with their current bookings'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Count the rooms that would change without saving',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']
        changed = update_all_room_statuses(dry_run=dry_run)
        if dry_run:
            self.stdout.write(self.style.WARNING(f"DRY RUN: {changed} room(s) would change"))
        else:
            self.stdout.write(self.style.SUCCESS(f"{changed} room(s) updated"))
