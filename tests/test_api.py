"""
Tests for the REST API: role gating, error mapping and booking actions.
"""
from datetime import timedelta
from decimal import Decimal

import pytest
from django.test import override_settings
from django.utils import timezone

from bookings.models import Booking
from core.constants import BookingStatus, RoomStatus
from payments.models import Payment


def _future(days):
    return (timezone.localdate() + timedelta(days=days)).isoformat()


@pytest.mark.django_db
class TestBookingApi:

    def test_guest_books_for_self(self, api_as, guest, other_guest, room):
        response = api_as(guest).post('/api/bookings/', {
            'guest': other_guest.id, 'room': room.id, 'check_in_date': _future(10), 'periods': 2, 'guests': 1,
        }, format='json')
        assert response.status_code == 201
        assert response.data['guest'] == guest.id
        assert response.data['status'] == BookingStatus.PENDING
        assert Decimal(response.data['total_amount']) == Decimal('200.00')

    def test_staff_books_for_guest(self, api_as, staff, guest, room):
        response = api_as(staff).post('/api/bookings/', {
            'guest': guest.id, 'room': room.id, 'check_in_date': _future(10), 'periods': 1,
        }, format='json')
        assert response.status_code == 201
        assert response.data['guest_name'] == "Grace Hopper"

    def test_overlap_is_conflict(self, api_as, staff, guest, room, booking):
        response = api_as(staff).post('/api/bookings/', {
            'guest': guest.id, 'room': room.id, 'check_in_date': _future(2), 'periods': 1,
        }, format='json')
        assert response.status_code == 409
        assert response.data['code'] == "ROOM_ALREADY_BOOKED"

    def test_capacity_is_validation_error(self, api_as, staff, guest, room):
        response = api_as(staff).post('/api/bookings/', {
            'guest': guest.id, 'room': room.id, 'check_in_date': _future(10), 'periods': 1, 'guests': 3,
        }, format='json')
        assert response.status_code == 400
        assert response.data['code'] == "CAPACITY_EXCEEDED"

    def test_guest_sees_only_own_bookings(self, api_as, guest, other_guest, room, monthly_room, make_booking):
        own = make_booking(guest, room)
        make_booking(other_guest, monthly_room)
        response = api_as(guest).get('/api/bookings/')
        assert response.status_code == 200
        assert [b['id'] for b in response.data['results']] == [own.id]

    def test_guest_cannot_read_other_booking(self, api_as, other_guest, booking):
        response = api_as(other_guest).get(f'/api/bookings/{booking.id}/')
        assert response.status_code == 404

    def test_guest_cannot_change_status(self, api_as, guest, booking):
        response = api_as(guest).post(f'/api/bookings/{booking.id}/update_status/',
                                      {'status': BookingStatus.CONFIRMED}, format='json')
        assert response.status_code == 403

    def test_staff_check_in(self, api_as, staff, booking, room):
        response = api_as(staff).post(f'/api/bookings/{booking.id}/update_status/',
                                      {'status': BookingStatus.CHECKED_IN}, format='json')
        assert response.status_code == 200
        assert response.data['status'] == BookingStatus.CHECKED_IN
        room.refresh_from_db()
        assert room.status == RoomStatus.OCCUPIED

    def test_patch_not_allowed(self, api_as, staff, booking):
        response = api_as(staff).patch(f'/api/bookings/{booking.id}/', {'guests': 2}, format='json')
        assert response.status_code == 405

    def test_extend(self, api_as, staff, guest, room, make_booking):
        confirmed = make_booking(guest, room, status=BookingStatus.CONFIRMED)
        response = api_as(staff).post(f'/api/bookings/{confirmed.id}/extend/', {'periods': 2}, format='json')
        assert response.status_code == 200
        assert response.data['additional_amount'] == '200.00'
        assert response.data['message'].startswith("Stay extended until")

    def test_restore_into_a_taken_window_is_409(self, api_as, staff, other_guest, room, booking, make_booking):
        client = api_as(staff)
        client.post(f'/api/bookings/{booking.id}/soft_delete/')
        make_booking(other_guest, room, start=booking.check_in, nights=3, status=BookingStatus.CONFIRMED)

        response = client.post(f'/api/bookings/{booking.id}/restore/')
        assert response.status_code == 409
        assert response.data['code'] == "ROOM_ALREADY_BOOKED"
        booking.refresh_from_db()
        assert booking.is_deleted

    def test_soft_delete_restore_and_destroy(self, api_as, staff, admin_user, booking):
        client = api_as(staff)
        response = client.post(f'/api/bookings/{booking.id}/soft_delete/')
        assert response.status_code == 200
        assert response.data['is_deleted'] is True

        listed = client.get('/api/bookings/')
        assert listed.data['results'] == []
        listed = client.get('/api/bookings/?include_deleted=true')
        assert len(listed.data['results']) == 1

        response = client.delete(f'/api/bookings/{booking.id}/')
        assert response.status_code == 403

        response = api_as(admin_user).delete(f'/api/bookings/{booking.id}/')
        assert response.status_code == 204
        assert not Booking.objects.filter(id=booking.id).exists()

    def test_purge_requires_management(self, api_as, staff, manager, booking):
        booking.deleted_at = timezone.now() - timedelta(days=120)
        booking.status = BookingStatus.CANCELLED
        booking.save()

        assert api_as(staff).get('/api/bookings/purge/').status_code == 403

        client = api_as(manager)
        stats = client.get('/api/bookings/purge/')
        assert stats.data['eligible_for_purge'] == 1
        response = client.post('/api/bookings/purge/', {'days': 90}, format='json')
        assert response.data == {'purged': 1}

    def test_unauthenticated(self, api_client):
        assert api_client.get('/api/bookings/').status_code == 401


@pytest.mark.django_db
class TestPaymentApi:

    def test_record_then_conflict(self, api_as, staff, booking):
        client = api_as(staff)
        payload = {'booking': booking.id, 'amount': '300.00', 'method': 'CARD'}
        response = client.post('/api/payments/', payload, format='json')
        assert response.status_code == 201
        assert response.data['status'] == 'COMPLETED'

        response = client.post('/api/payments/', payload, format='json')
        assert response.status_code == 409
        assert response.data['code'] == "PAYMENT_EXISTS"
        assert Payment.objects.count() == 1

    def test_guests_are_forbidden(self, api_as, guest, booking):
        response = api_as(guest).post('/api/payments/', {'booking': booking.id, 'amount': '10'}, format='json')
        assert response.status_code == 403

    def test_deposit_refund_mismatch(self, api_as, staff, booking):
        client = api_as(staff)
        deposit = client.post('/api/deposits/', {'booking': booking.id, 'amount': '100.00'}, format='json')
        assert deposit.status_code == 201
        response = client.post(f"/api/deposits/{deposit.data['id']}/refund/",
                               {'refund_amount': '50.00'}, format='json')
        assert response.status_code == 400
        assert response.data['code'] == "REFUND_MISMATCH"


@pytest.mark.django_db
class TestCronAndHealth:

    @override_settings(CRON_SECRET='s3cret')
    def test_cron_rejects_wrong_secret(self, api_client):
        assert api_client.post('/api/cron/checkout-reminders/').status_code == 401
        response = api_client.post('/api/cron/checkout-reminders/', HTTP_X_CRON_SECRET='nope')
        assert response.status_code == 401

    @override_settings(CRON_SECRET='s3cret')
    def test_cron_sends_reminders(self, api_client, guest, room, make_booking):
        make_booking(guest, room, start=timezone.now() - timedelta(days=3, hours=12), nights=4,
                     status=BookingStatus.CHECKED_IN)
        response = api_client.post('/api/cron/checkout-reminders/', HTTP_X_CRON_SECRET='s3cret')
        assert response.status_code == 200
        assert response.data == {'success': True, 'reminders_sent': 1}

        response = api_client.post('/api/cron/checkout-reminders/?secret=s3cret')
        assert response.data['reminders_sent'] == 0

    @override_settings(CRON_SECRET='')
    def test_cron_disabled_without_secret(self, api_client):
        assert api_client.post('/api/cron/checkout-reminders/').status_code == 401

    def test_health(self, client):
        response = client.get('/health/')
        assert response.status_code == 200
        assert response.json()['status'] == 'healthy'

    def test_checkout_status_needs_staff(self, api_as, staff, guest):
        assert api_as(guest).get('/api/checkout-status/').status_code == 403
        response = api_as(staff).get('/api/checkout-status/')
        assert response.status_code == 200
        assert 'overdue' in response.data
