"""
Tests for the audit trail: recording, immutability and the read-only API.
"""
from datetime import timedelta
from unittest import mock

import pytest
from django.core.exceptions import PermissionDenied
from django.db import DatabaseError
from django.test import RequestFactory
from django.utils import timezone

from audit import helpers
from audit.models import AuditLog
from core.constants import AuditAction, AuditResource


@pytest.mark.django_db
class TestRecording:

    def test_log_action_captures_request(self, staff, booking):
        request = RequestFactory().get('/', HTTP_X_FORWARDED_FOR='203.0.113.7, 10.0.0.1',
                                       HTTP_USER_AGENT='pytest-agent')
        entry = helpers.log_booking_created(staff, booking, request=request)

        assert entry.user == staff
        assert entry.action == AuditAction.CREATE
        assert entry.resource_type == AuditResource.BOOKING
        assert entry.resource_id == booking.id
        assert entry.ip_address == '203.0.113.7'
        assert entry.user_agent == 'pytest-agent'
        assert entry.metadata['room_id'] == booking.room_id
        assert 'Grace Hopper' in entry.description

    def test_scheduled_jobs_are_recorded_as_system(self):
        entry = helpers.log_action(None, AuditAction.PURGE, AuditResource.BOOKING, None, "Purged 3 bookings")
        assert entry.user is None
        assert entry.user_display == "System"

    def test_write_failure_does_not_raise(self, staff):
        with mock.patch.object(AuditLog.objects, 'create', side_effect=DatabaseError("locked")), \
                mock.patch.object(helpers.logger, 'exception') as log_exception:
            entry = helpers.log_action(staff, AuditAction.UPDATE, AuditResource.ROOM, 1, "Edited room")
        assert entry is None
        assert log_exception.called

    def test_deposit_settlement_uses_refund_action(self, staff, booking):
        from payments.models import SecurityDeposit
        deposit = SecurityDeposit.objects.create(booking=booking, amount='100.00')
        assert helpers.log_deposit(staff, deposit).action == AuditAction.DEPOSIT
        assert helpers.log_deposit(staff, deposit, refunded=True).action == AuditAction.REFUND

    def test_login_and_failed_login_signals(self, client, staff):
        from tests.conftest import TEST_PASSWORD
        assert not client.login(username='staff', password='wrong-password')
        assert client.login(username='staff', password=TEST_PASSWORD)

        failed = AuditLog.objects.get(user__isnull=True, action=AuditAction.LOGIN)
        assert failed.metadata == {'success': False, 'username': 'staff'}
        assert AuditLog.objects.filter(user=staff, action=AuditAction.LOGIN).count() == 1


@pytest.mark.django_db
class TestImmutability:

    def test_entries_cannot_be_changed_or_removed(self, staff):
        entry = helpers.log_action(staff, AuditAction.UPDATE, AuditResource.SETTING, 1, "Changed SITE_NAME")
        entry.description = "Something else"
        with pytest.raises(PermissionDenied):
            entry.save()
        with pytest.raises(PermissionDenied):
            entry.delete()
        with pytest.raises(PermissionDenied):
            AuditLog.objects.bulk_update([entry], ['description'])

    def test_deleting_the_actor_keeps_the_entry(self, staff):
        entry = helpers.log_action(staff, AuditAction.UPDATE, AuditResource.ROOM, 4, "Edited room 104")
        staff.delete()
        entry = AuditLog.objects.get(pk=entry.pk)
        assert entry.user is None
        assert entry.user_display == "System"

    def test_trail_is_oldest_first(self, staff):
        first = helpers.log_action(staff, AuditAction.CREATE, AuditResource.ROOM, 9, "Created")
        second = helpers.log_action(staff, AuditAction.UPDATE, AuditResource.ROOM, 9, "Edited")
        helpers.log_action(staff, AuditAction.UPDATE, AuditResource.ROOM, 10, "Other room")
        assert list(AuditLog.objects.trail(AuditResource.ROOM, 9)) == [first, second]


@pytest.mark.django_db
class TestAuditApi:

    def test_staff_cannot_read_the_trail(self, api_as, staff):
        assert api_as(staff).get('/api/audit-logs/').status_code == 403

    def test_filters(self, api_as, manager, staff):
        helpers.log_action(staff, AuditAction.UPDATE, AuditResource.ROOM, 1, "Renamed room")
        helpers.log_action(staff, AuditAction.PAYMENT, AuditResource.PAYMENT, 2, "Cash payment")

        client = api_as(manager)
        response = client.get('/api/audit-logs/', {'action': AuditAction.PAYMENT})
        assert response.status_code == 200
        assert [row['description'] for row in response.data['results']] == ["Cash payment"]
        assert response.data['results'][0]['actor'] == staff.full_name

        tomorrow = (timezone.localdate() + timedelta(days=1)).isoformat()
        assert client.get('/api/audit-logs/', {'date_from': tomorrow}).data['count'] == 0

    def test_trail_requires_resource(self, api_as, manager):
        response = api_as(manager).get('/api/audit-logs/trail/', {'resource_type': 'Booking'})
        assert response.status_code == 400
        assert response.data['code'] == "MISSING_RESOURCE"

    def test_booking_trail(self, api_as, manager, staff, booking):
        helpers.log_booking_status_change(staff, booking, 'PENDING', 'CONFIRMED')
        response = api_as(manager).get('/api/audit-logs/trail/', {
            'resource_type': AuditResource.BOOKING, 'resource_id': booking.id,
        })
        assert response.status_code == 200
        assert response.data['count'] == 1
        assert response.data['entries'][0]['action'] == AuditAction.STATUS_CHANGE

    def test_stats(self, api_as, admin_user, staff):
        helpers.log_action(staff, AuditAction.UPDATE, AuditResource.ROOM, 1, "Edited")
        helpers.log_action(None, AuditAction.PURGE, AuditResource.BOOKING, None, "Purged")
        stats = api_as(admin_user).get('/api/audit-logs/stats/').data
        assert stats['total'] == 2
        assert stats['by_action'] == {AuditAction.UPDATE: 1, AuditAction.PURGE: 1}
        assert stats['top_users'] == [{'user_id': staff.id, 'username': 'staff', 'total': 1}]
