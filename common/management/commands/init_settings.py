"""
Management command to initialize default settings
"""
from django.core.management.base import BaseCommand
from common.utils import initialize_default_settings
from rooms.services import seed_room_types


class Command(BaseCommand):
    help = 'Create missing runtime settings and default room types'

    def handle(self, *args, **options):
        self.stdout.write('Initializing default settings...')

        created = initialize_default_settings()
        self.stdout.write(self.style.SUCCESS(f'✓ {created} setting(s) created'))

        created = seed_room_types()
        self.stdout.write(self.style.SUCCESS(f'✓ {created} room type(s) created'))

        self.stdout.write(self.style.SUCCESS('\nDefault settings initialized successfully!'))
