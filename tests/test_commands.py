"""
Tests for the management commands and the background scheduler.
"""
from datetime import timedelta
from io import StringIO
from unittest import mock

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError
from django.utils import timezone

from bookings.models import Booking
from common import scheduler
from common.models import Setting
from core.constants import BookingStatus, RoomStatus, UserRole
from rooms.models import RoomType
from users.models import User


def _run(*args, **kwargs):
    out = StringIO()
    call_command(*args, stdout=out, **kwargs)
    return out.getvalue()


@pytest.mark.django_db
class TestCommands:

    def test_sync_room_statuses(self, room, checked_in_booking):
        assert "DRY RUN: 1 room(s) would change" in _run('sync_room_statuses', '--dry-run')
        assert "1 room(s) updated" in _run('sync_room_statuses')
        room.refresh_from_db()
        assert room.status == RoomStatus.OCCUPIED

    def test_send_checkout_reminders(self, guest, room, make_booking):
        make_booking(guest, room, start=timezone.now() - timedelta(days=3, hours=12), nights=4,
                     status=BookingStatus.CHECKED_IN)
        assert "DRY RUN: 1 reminder(s) would be sent" in _run('send_checkout_reminders', '--dry-run')
        assert "1 reminder(s) sent" in _run('send_checkout_reminders')
        assert "0 reminder(s) sent" in _run('send_checkout_reminders')

    def test_purge_deleted_bookings(self, booking):
        booking.deleted_at = timezone.now() - timedelta(days=10)
        booking.status = BookingStatus.CANCELLED
        booking.save()

        assert "0 booking(s) purged" in _run('purge_deleted_bookings')
        assert "DRY RUN: 1 booking(s)" in _run('purge_deleted_bookings', '--days', '7', '--dry-run')
        assert "1 booking(s) purged" in _run('purge_deleted_bookings', '--days', '7')
        assert not Booking.objects.filter(id=booking.id).exists()

    def test_purge_rejects_negative_days(self):
        with pytest.raises(CommandError):
            _run('purge_deleted_bookings', '--days', '-1')

    def test_init_settings_is_idempotent(self):
        _run('init_settings')
        settings_count = Setting.objects.count()
        types_count = RoomType.objects.count()
        assert settings_count > 0
        assert types_count > 0
        _run('init_settings')
        assert Setting.objects.count() == settings_count
        assert RoomType.objects.count() == types_count

    def test_create_admin(self, monkeypatch):
        monkeypatch.setenv('ADMIN_PASSWORD', 'Sup3r-secret')
        assert "Superuser created: admin" in _run('create_admin')
        admin = User.objects.get(username='admin')
        assert admin.role == UserRole.ADMIN
        assert admin.check_password('Sup3r-secret')
        assert "already exists" in _run('create_admin')

    def test_create_sample_data(self):
        _run('create_sample_data')
        assert User.objects.filter(role=UserRole.GUEST).exists()
        assert Booking.objects.exists()


class TestScheduler:

    def test_jobs_are_registered(self):
        sched = scheduler.build_scheduler()
        assert {job.id for job in sched.get_jobs()} == {job_id for job_id, _, _, _ in scheduler.JOBS}

    def test_failing_job_is_logged_not_raised(self):
        with mock.patch.object(scheduler, 'call_command', side_effect=RuntimeError("boom")), \
                mock.patch.object(scheduler.logger, 'error') as log_error:
            scheduler.run_command_job('sync_room_statuses')
        assert "Error in scheduled job sync_room_statuses" in log_error.call_args[0][0]


@pytest.mark.django_db
class TestMigrations:

    def test_models_match_shipped_migrations(self):
        assert "No changes detected" in _run('makemigrations', '--check', '--dry-run')

    def test_initial_migrations_are_applied(self):
        out = _run('showmigrations', 'users', 'bookings', 'audit')
        assert "[X] 0001_initial" in out
        assert "[ ] " not in out
