"""
Tests for deriving and syncing room status from bookings.
"""
from datetime import timedelta

import pytest
from django.utils import timezone

from core.constants import BookingStatus, RoomStatus
from rooms.status import derive_room_status, update_room_status, update_all_room_statuses


@pytest.mark.django_db
class TestDeriveRoomStatus:

    def test_checked_in_booking_occupies(self, checked_in_booking):
        assert derive_room_status([checked_in_booking]) == RoomStatus.OCCUPIED

    def test_future_booking_leaves_room_available(self, booking):
        assert derive_room_status([booking]) == RoomStatus.AVAILABLE

    def test_confirmed_booking_covering_now_occupies(self, guest, room, make_booking):
        current = make_booking(guest, room, start=timezone.now() - timedelta(hours=5),
                               status=BookingStatus.CONFIRMED)
        assert derive_room_status([current]) == RoomStatus.OCCUPIED

    def test_deleted_and_finished_bookings_are_ignored(self, guest, room, make_booking):
        start = timezone.now() - timedelta(days=1)
        finished = make_booking(guest, room, start=start, status=BookingStatus.CHECKED_OUT)
        deleted = make_booking(guest, room, start=start, status=BookingStatus.CONFIRMED,
                               deleted_at=timezone.now())
        assert derive_room_status([finished, deleted]) == RoomStatus.AVAILABLE


@pytest.mark.django_db
class TestUpdateRoomStatus:

    def test_room_follows_bookings(self, room, checked_in_booking):
        assert update_room_status(room) == RoomStatus.OCCUPIED
        room.refresh_from_db()
        assert room.status == RoomStatus.OCCUPIED

        checked_in_booking.status = BookingStatus.CHECKED_OUT
        checked_in_booking.save()
        assert update_room_status(room) == RoomStatus.AVAILABLE

    def test_locked_room_is_untouched(self, room, checked_in_booking):
        room.status = RoomStatus.MAINTENANCE
        room.save()
        assert update_room_status(room) == RoomStatus.MAINTENANCE
        room.refresh_from_db()
        assert room.status == RoomStatus.MAINTENANCE

    def test_sync_all_counts_changes(self, room, monthly_room, checked_in_booking):
        monthly_room.status = RoomStatus.OCCUPIED
        monthly_room.save()

        assert update_all_room_statuses(dry_run=True) == 2
        room.refresh_from_db()
        assert room.status == RoomStatus.AVAILABLE

        assert update_all_room_statuses() == 2
        room.refresh_from_db()
        monthly_room.refresh_from_db()
        assert room.status == RoomStatus.OCCUPIED
        assert monthly_room.status == RoomStatus.AVAILABLE
        assert update_all_room_statuses() == 0
