"""
Tests for the server-rendered pages: login, role redirects and page rendering.
"""
from datetime import timedelta

import pytest
from django.urls import reverse
from django.utils import timezone

from core.constants import BookingStatus, RoomStatus
from bookings.models import Booking
from tests.conftest import TEST_PASSWORD


@pytest.mark.django_db
class TestLogin:

    def test_anonymous_is_sent_to_login(self, client):
        response = client.get(reverse('dashboard:home'))
        assert response.status_code == 302
        assert reverse('users:login') in response.url

    def test_staff_lands_on_dashboard(self, client, staff):
        response = client.post(reverse('users:login'), {'username': 'staff', 'password': TEST_PASSWORD})
        assert response.status_code == 302
        assert response.url == reverse('dashboard:home')

    def test_guest_lands_on_own_bookings(self, client, guest):
        response = client.post(reverse('users:login'), {'username': 'guest', 'password': TEST_PASSWORD})
        assert response.url == reverse('bookings:my_bookings')

    def test_bad_password(self, client, staff):
        response = client.post(reverse('users:login'), {'username': 'staff', 'password': 'wrong'})
        assert response.status_code == 200
        assert '_auth_user_id' not in client.session

    def test_root_redirect(self, logged_in, guest):
        response = logged_in(guest).get('/')
        assert response.url == reverse('bookings:my_bookings')


@pytest.mark.django_db
class TestRoleRedirects:

    def test_guest_is_kept_out_of_staff_pages(self, logged_in, guest):
        response = logged_in(guest).get(reverse('rooms:list'))
        assert response.status_code == 302
        assert response.url == reverse('bookings:my_bookings')

    def test_staff_is_kept_out_of_management_pages(self, logged_in, staff):
        response = logged_in(staff).get(reverse('dashboard:analytics'))
        assert response.status_code == 302
        assert response.url == reverse('dashboard:home')

    def test_manager_is_kept_out_of_admin_pages(self, logged_in, manager):
        response = logged_in(manager).get(reverse('users:user_list'))
        assert response.url == reverse('dashboard:home')

    def test_guest_cannot_open_another_guests_booking(self, logged_in, other_guest, booking):
        response = logged_in(other_guest).get(reverse('bookings:detail', args=[booking.id]))
        assert response.status_code in (302, 404)


@pytest.mark.django_db
class TestPagesRender:

    @pytest.mark.parametrize('name', [
        'dashboard:home', 'dashboard:monitoring', 'rooms:list', 'rooms:create', 'rooms:asset_list',
        'bookings:list', 'bookings:create', 'bookings:deleted', 'guests:list', 'guests:create',
        'guests:import', 'payments:list', 'payments:create', 'payments:deposit_list', 'addons:list',
        'maintenance:list', 'maintenance:create', 'notifications:list', 'blocks:list', 'users:profile',
    ])
    def test_staff_pages(self, logged_in, staff, checked_in_booking, name):
        response = logged_in(staff).get(reverse(name))
        assert response.status_code == 200

    @pytest.mark.parametrize('name', ['dashboard:analytics', 'dashboard:reports', 'audit:list'])
    def test_management_pages(self, logged_in, manager, booking, name):
        response = logged_in(manager).get(reverse(name))
        assert response.status_code == 200

    @pytest.mark.parametrize('name', ['users:user_list', 'common:settings'])
    def test_admin_pages(self, logged_in, admin_user, name):
        assert logged_in(admin_user).get(reverse(name)).status_code == 200

    def test_detail_pages(self, logged_in, staff, guest, room, checked_in_booking):
        client = logged_in(staff)
        assert client.get(reverse('bookings:detail', args=[checked_in_booking.id])).status_code == 200
        assert client.get(reverse('rooms:detail', args=[room.id])).status_code == 200
        assert client.get(reverse('guests:detail', args=[guest.id])).status_code == 200
        assert client.get(reverse('blocks:detail', args=[room.block_id])).status_code == 200

    def test_guest_pages(self, logged_in, guest, booking):
        client = logged_in(guest)
        response = client.get(reverse('bookings:my_bookings'))
        assert response.status_code == 200
        assert client.get(reverse('bookings:detail', args=[booking.id])).status_code == 200

    def test_report_export(self, logged_in, manager):
        response = logged_in(manager).get(reverse('dashboard:report_export') + '?period=lastMonth')
        assert response.status_code == 200
        assert response['Content-Type'] == 'text/csv'


@pytest.mark.django_db
class TestBookingPages:

    def test_guest_books_a_room(self, logged_in, guest, room):
        check_in = timezone.localdate() + timedelta(days=7)
        response = logged_in(guest).post(reverse('bookings:create'), {
            'room': room.id, 'check_in_date': check_in.isoformat(), 'periods': 2, 'guests': 1,
            'special_requests': '',
        })
        booking = Booking.objects.get(guest=guest)
        assert response.url == reverse('bookings:detail', args=[booking.id])
        assert booking.status == BookingStatus.PENDING

    def test_staff_checks_guest_in(self, logged_in, staff, booking, room):
        response = logged_in(staff).post(reverse('bookings:update_status', args=[booking.id]),
                                         {'status': BookingStatus.CHECKED_IN})
        assert response.status_code == 302
        booking.refresh_from_db()
        room.refresh_from_db()
        assert booking.status == BookingStatus.CHECKED_IN
        assert room.status == RoomStatus.OCCUPIED
