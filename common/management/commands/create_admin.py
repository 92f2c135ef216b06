"""
Create the first administrator account.

Usage:
    python manage.py create_admin [--username admin] [--email admin@example.com]

The password is read from ADMIN_PASSWORD, falling back to a generated one
that is printed once.
"""
import os

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from core.constants import UserRole
from guests.services import generate_temporary_password


class Command(BaseCommand):
    help = 'Create admin superuser if not exists'

    def add_arguments(self, parser):
        parser.add_argument('--username', default='admin')
        parser.add_argument('--email', default='')

    def handle(self, *args, **options):
        User = get_user_model()
        username = options['username']

        if User.objects.filter(username=username).exists():
            self.stdout.write(self.style.WARNING(f'User {username} already exists'))
            return

        password = os.environ.get('ADMIN_PASSWORD') or generate_temporary_password(16)
        user = User(
            username=username,
            email=options['email'] or None,
            first_name='Site',
            last_name='Admin',
            is_staff=True,
            is_superuser=True,
            is_active=True,
            role=UserRole.ADMIN,
        )
        user.set_password(password)
        user.save()

        if os.environ.get('ADMIN_PASSWORD'):
            self.stdout.write(self.style.SUCCESS(f'Superuser created: {username}'))
        else:
            self.stdout.write(self.style.SUCCESS(f'Superuser created: {username} / {password}'))
