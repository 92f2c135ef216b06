"""
Pytest configuration and fixtures for StayDesk tests.
"""
from datetime import timedelta
from decimal import Decimal

import pytest
from django.core.cache import cache
from django.utils import timezone
from rest_framework.test import APIClient

from blocks.models import Block
from bookings.models import Booking
from core.constants import UserRole, BookingStatus, PricingPeriod
from rooms.models import Room, RoomType
from users.models import User

TEST_PASSWORD = "testpass123"


@pytest.fixture(autouse=True)
def clear_cache():
    """Settings are cached; start every test from a clean cache"""
    cache.clear()
    yield
    cache.clear()


def _user(username, role, **extra):
    return User.objects.create_user(
        username=username,
        password=TEST_PASSWORD,
        role=role,
        first_name=extra.pop('first_name', username.title()),
        last_name=extra.pop('last_name', 'Tester'),
        email=extra.pop('email', f"{username}@example.com"),
        **extra,
    )


@pytest.fixture
def admin_user(db):
    return _user("admin", UserRole.ADMIN)


@pytest.fixture
def manager(db):
    return _user("manager", UserRole.MANAGER)


@pytest.fixture
def staff(db):
    return _user("staff", UserRole.STAFF)


@pytest.fixture
def guest(db):
    return _user("guest", UserRole.GUEST, first_name="Grace", last_name="Hopper")


@pytest.fixture
def other_guest(db):
    return _user("otherguest", UserRole.GUEST, first_name="Alan", last_name="Turing")


@pytest.fixture
def block(db):
    return Block.objects.create(name="North Wing", floors=3, location="Main street")


@pytest.fixture
def room_types(db):
    return {
        'single': RoomType.objects.create(name="SINGLE", display_name="Single", base_price=Decimal('50'),
                                          max_capacity=1),
        'double': RoomType.objects.create(name="DOUBLE", display_name="Double", base_price=Decimal('80'),
                                          max_capacity=2),
    }


@pytest.fixture
def room(block, room_types):
    return Room.objects.create(
        number="101", room_type=room_types['double'], block=block, floor=1, capacity=2,
        price_per_night=Decimal('100.00'), pricing_period=PricingPeriod.NIGHT,
    )


@pytest.fixture
def monthly_room(block, room_types):
    return Room.objects.create(
        number="201", room_type=room_types['single'], block=block, floor=2, capacity=1,
        price_per_night=Decimal('900.00'), pricing_period=PricingPeriod.MONTH,
    )


@pytest.fixture
def make_booking(db):
    """Insert a booking directly, bypassing the service checks"""
    def _make(guest, room, start=None, nights=3, status=BookingStatus.PENDING, **extra):
        start = start or timezone.now() + timedelta(days=1)
        return Booking.objects.create(
            guest=guest,
            room=room,
            check_in=start,
            check_out=start + timedelta(days=nights),
            guests=extra.pop('guests', 1),
            total_amount=extra.pop('total_amount', room.price_per_night * nights),
            status=status,
            **extra,
        )
    return _make


@pytest.fixture
def booking(guest, room, make_booking):
    return make_booking(guest, room)


@pytest.fixture
def checked_in_booking(guest, room, make_booking):
    return make_booking(guest, room, start=timezone.now() - timedelta(days=2), nights=4,
                        status=BookingStatus.CHECKED_IN)


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def api_as(api_client):
    """APIClient authenticated as the given user"""
    def _as(user):
        api_client.force_authenticate(user=user)
        return api_client
    return _as


@pytest.fixture
def logged_in(client):
    """Django test client logged in as the given user"""
    def _login(user):
        client.force_login(user)
        return client
    return _login
