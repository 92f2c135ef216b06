"""
Tests for BookingService: creation, status changes, extensions and the trash.
"""
from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from bookings.models import Booking
from bookings.services import BookingService
from core.constants import BookingStatus, RoomStatus, PaymentStatus, NotificationType
from core.dto import BookingDTO, ExtensionDTO
from core.exceptions import (
    ValidationError, ConflictError, BusinessLogicError, PermissionDeniedError, NotFoundError
)
from notifications.models import Notification
from payments.models import Payment


def _dto(guest, room, days_ahead=1, periods=3, guests=1):
    return BookingDTO(
        guest_id=guest.id,
        room_id=room.id,
        check_in_date=timezone.localdate() + timedelta(days=days_ahead),
        periods=periods,
        guests=guests,
    )


@pytest.mark.django_db
class TestCreateBooking:

    def test_creates_pending_booking_with_computed_total(self, staff, guest, room):
        booking = BookingService().create_booking(_dto(guest, room), staff)

        assert booking.status == BookingStatus.PENDING
        assert booking.total_amount == Decimal('300.00')
        assert booking.check_out - booking.check_in == timedelta(days=3, hours=-4)
        assert Notification.objects.filter(
            user=guest, booking=booking, type=NotificationType.BOOKING_CONFIRMATION
        ).exists()

    def test_future_booking_leaves_room_available(self, staff, guest, room):
        BookingService().create_booking(_dto(guest, room, days_ahead=5), staff)
        room.refresh_from_db()
        assert room.status == RoomStatus.AVAILABLE

    def test_guest_can_book_for_themselves(self, guest, room):
        booking = BookingService().create_booking(_dto(guest, room), guest)
        assert booking.guest == guest

    def test_guest_cannot_book_for_someone_else(self, guest, other_guest, room):
        with pytest.raises(PermissionDeniedError):
            BookingService().create_booking(_dto(other_guest, room), guest)

    def test_overlapping_booking_is_rejected(self, staff, guest, other_guest, room):
        service = BookingService()
        service.create_booking(_dto(guest, room, days_ahead=1, periods=3), staff)

        with pytest.raises(ConflictError) as exc_info:
            service.create_booking(_dto(other_guest, room, days_ahead=2, periods=1), staff)
        assert exc_info.value.code == "ROOM_ALREADY_BOOKED"
        assert Booking.objects.count() == 1

    def test_back_to_back_bookings_are_allowed(self, staff, guest, other_guest, room):
        service = BookingService()
        first = service.create_booking(_dto(guest, room, days_ahead=1, periods=2), staff)
        second = service.create_booking(_dto(other_guest, room, days_ahead=3, periods=2), staff)
        assert first.check_out < second.check_in

    def test_cancelled_and_deleted_bookings_do_not_block(self, staff, guest, other_guest, room, make_booking):
        start = timezone.now() + timedelta(days=1)
        make_booking(guest, room, start=start, nights=5, status=BookingStatus.CANCELLED)
        make_booking(guest, room, start=start, nights=5, deleted_at=timezone.now())

        booking = BookingService().create_booking(_dto(other_guest, room, days_ahead=2), staff)
        assert booking.pk is not None

    def test_room_under_maintenance_cannot_be_booked(self, staff, guest, room):
        room.status = RoomStatus.MAINTENANCE
        room.save()
        with pytest.raises(BusinessLogicError) as exc_info:
            BookingService().create_booking(_dto(guest, room), staff)
        assert exc_info.value.code == "ROOM_UNAVAILABLE"

    def test_capacity_is_enforced(self, staff, guest, room):
        with pytest.raises(ValidationError) as exc_info:
            BookingService().create_booking(_dto(guest, room, guests=3), staff)
        assert exc_info.value.code == "CAPACITY_EXCEEDED"

    def test_periods_must_be_positive(self, staff, guest, room):
        with pytest.raises(ValidationError):
            BookingService().create_booking(_dto(guest, room, periods=0), staff)

    def test_monthly_room_is_priced_per_month(self, staff, guest, monthly_room):
        booking = BookingService().create_booking(_dto(guest, monthly_room, periods=2), staff)
        assert booking.total_amount == Decimal('1800.00')


@pytest.mark.django_db
class TestGetBooking:

    def test_guest_cannot_see_other_guests_booking(self, other_guest, booking):
        with pytest.raises(NotFoundError):
            BookingService().get_booking(booking.id, user=other_guest)

    def test_staff_sees_any_booking(self, staff, booking):
        assert BookingService().get_booking(booking.id, user=staff) == booking


@pytest.mark.django_db
class TestUpdateStatus:

    def test_check_in_occupies_room_and_check_out_frees_it(self, staff, booking, room):
        service = BookingService()
        service.update_status(booking, BookingStatus.CHECKED_IN, staff)
        room.refresh_from_db()
        assert room.status == RoomStatus.OCCUPIED

        service.update_status(booking, BookingStatus.CHECKED_OUT, staff)
        room.refresh_from_db()
        assert room.status == RoomStatus.AVAILABLE

    def test_room_stays_occupied_when_another_guest_is_checked_in(
            self, staff, other_guest, room, booking, make_booking):
        make_booking(other_guest, room, start=timezone.now() - timedelta(days=1), nights=1,
                     status=BookingStatus.CHECKED_IN)
        BookingService().update_status(booking, BookingStatus.CANCELLED, staff)
        room.refresh_from_db()
        assert room.status == RoomStatus.OCCUPIED

    def test_checked_out_booking_is_final(self, staff, booking):
        service = BookingService()
        service.update_status(booking, BookingStatus.CHECKED_OUT, staff)
        with pytest.raises(BusinessLogicError) as exc_info:
            service.update_status(booking, BookingStatus.CHECKED_IN, staff)
        assert exc_info.value.code == "INVALID_TRANSITION"

    def test_maintenance_room_is_left_alone(self, staff, booking, room):
        room.status = RoomStatus.MAINTENANCE
        room.save()
        BookingService().update_status(booking, BookingStatus.CHECKED_IN, staff)
        room.refresh_from_db()
        assert room.status == RoomStatus.MAINTENANCE

    def test_guests_cannot_change_status(self, guest, booking):
        with pytest.raises(PermissionDeniedError):
            BookingService().update_status(booking, BookingStatus.CONFIRMED, guest)

    def test_unknown_status(self, staff, booking):
        with pytest.raises(ValidationError):
            BookingService().update_status(booking, "LOST", staff)

    def test_deleted_booking_must_be_restored_first(self, staff, booking):
        booking.deleted_at = timezone.now()
        booking.save()
        with pytest.raises(BusinessLogicError) as exc_info:
            BookingService().update_status(booking, BookingStatus.CONFIRMED, staff)
        assert exc_info.value.code == "BOOKING_DELETED"


@pytest.mark.django_db
class TestUpdateBooking:

    def test_window_and_total_are_recomputed(self, staff, booking):
        dto = BookingDTO(
            check_in_date=timezone.localdate() + timedelta(days=10), periods=5, guests=2,
            special_requests="  Late arrival  ",
        )
        booking = BookingService().update_booking(booking, dto, staff)
        assert booking.total_amount == Decimal('500.00')
        assert booking.guests == 2
        assert booking.special_requests == "Late arrival"
        assert timezone.localtime(booking.check_in).date() == timezone.localdate() + timedelta(days=10)

    def test_service_charges_survive_an_edit(self, staff, booking):
        from addons.models import Service
        from addons.services import AddonService
        spa = Service.objects.create(name="Spa", price=Decimal('30.00'))
        AddonService().add_to_booking(booking, spa, 2, staff)
        booking.refresh_from_db()
        assert booking.total_amount == Decimal('360.00')

        dto = BookingDTO(check_in_date=timezone.localtime(booking.check_in).date(), periods=3, guests=2)
        booking = BookingService().update_booking(booking, dto, staff)
        assert booking.guests == 2
        assert booking.total_amount == Decimal('360.00')

    def test_closed_booking_cannot_be_edited(self, staff, booking):
        booking.status = BookingStatus.CHECKED_OUT
        booking.save()
        dto = BookingDTO(check_in_date=timezone.localdate(), periods=1, guests=1)
        with pytest.raises(BusinessLogicError):
            BookingService().update_booking(booking, dto, staff)


@pytest.mark.django_db
class TestExtendBooking:

    def test_extension_moves_checkout_and_creates_pending_payment(self, staff, checked_in_booking):
        old_check_out = checked_in_booking.check_out
        booking, additional = BookingService().extend_booking(
            checked_in_booking, ExtensionDTO(periods=2, reason="Business trip"), staff
        )

        assert additional == Decimal('200.00')
        assert booking.check_out == old_check_out + timedelta(days=2)
        assert booking.total_amount == Decimal('600.00')
        assert "[EXTENSION]" in booking.special_requests
        payment = Payment.objects.get(booking=booking)
        assert payment.status == PaymentStatus.PENDING
        assert payment.amount == Decimal('200.00')

    def test_extension_tops_up_existing_payment(self, staff, checked_in_booking):
        Payment.objects.create(booking=checked_in_booking, amount=Decimal('400.00'),
                               status=PaymentStatus.COMPLETED, paid_at=timezone.now())
        BookingService().extend_booking(checked_in_booking, ExtensionDTO(periods=1), staff)

        payment = Payment.objects.get(booking=checked_in_booking)
        assert payment.amount == Decimal('500.00')
        assert payment.notes.startswith("Extended payment")

    def test_pending_booking_cannot_be_extended(self, staff, booking):
        with pytest.raises(BusinessLogicError) as exc_info:
            BookingService().extend_booking(booking, ExtensionDTO(periods=1), staff)
        assert exc_info.value.code == "NOT_EXTENDABLE"

    def test_extension_into_next_booking_conflicts(self, staff, other_guest, room, checked_in_booking, make_booking):
        make_booking(other_guest, room, start=checked_in_booking.check_out + timedelta(hours=4), nights=2,
                     status=BookingStatus.CONFIRMED)
        with pytest.raises(ConflictError):
            BookingService().extend_booking(checked_in_booking, ExtensionDTO(periods=1), staff)


@pytest.mark.django_db
class TestTrash:

    def test_soft_delete_cancels_and_hides(self, staff, booking):
        booking = BookingService().soft_delete(booking, staff)
        assert booking.is_deleted
        assert booking.status == BookingStatus.CANCELLED
        assert not Booking.objects.alive().filter(id=booking.id).exists()

    def test_only_pending_or_cancelled_bookings_can_be_deleted(self, staff, checked_in_booking):
        with pytest.raises(BusinessLogicError) as exc_info:
            BookingService().soft_delete(checked_in_booking, staff)
        assert exc_info.value.code == "NOT_DELETABLE"

    def test_double_delete(self, staff, booking):
        service = BookingService()
        service.soft_delete(booking, staff)
        with pytest.raises(BusinessLogicError) as exc_info:
            service.soft_delete(booking, staff)
        assert exc_info.value.code == "ALREADY_DELETED"

    def test_restore_returns_booking_as_pending(self, staff, booking):
        service = BookingService()
        service.soft_delete(booking, staff)
        booking = service.restore(booking, staff)
        assert booking.deleted_at is None
        assert booking.status == BookingStatus.PENDING

    def test_restore_into_a_taken_window_conflicts(self, staff, guest, other_guest, room):
        service = BookingService()
        first = service.create_booking(_dto(guest, room), staff)
        service.soft_delete(first, staff)
        second = service.create_booking(_dto(other_guest, room), staff)

        with pytest.raises(ConflictError) as exc_info:
            service.restore(first, staff)
        assert exc_info.value.code == "ROOM_ALREADY_BOOKED"
        assert exc_info.value.details['booking_id'] == second.id
        first.refresh_from_db()
        assert first.is_deleted
        assert list(Booking.objects.overlapping(room, second.check_in, second.check_out)) == [second]

    def test_restore_requires_deleted_booking(self, staff, booking):
        with pytest.raises(BusinessLogicError):
            BookingService().restore(booking, staff)

    def test_hard_delete_is_admin_only(self, staff, admin_user, booking):
        service = BookingService()
        service.soft_delete(booking, staff)
        with pytest.raises(PermissionDeniedError):
            service.hard_delete(booking, staff)
        service.hard_delete(booking, admin_user)
        assert not Booking.objects.filter(id=booking.id).exists()

    def test_hard_delete_requires_trash_first(self, admin_user, booking):
        with pytest.raises(BusinessLogicError) as exc_info:
            BookingService().hard_delete(booking, admin_user)
        assert exc_info.value.code == "NOT_SOFT_DELETED"

    def test_purge_removes_only_old_trash(self, guest, room, make_booking):
        now = timezone.now()
        old = make_booking(guest, room, status=BookingStatus.CANCELLED, deleted_at=now - timedelta(days=100))
        recent = make_booking(guest, room, status=BookingStatus.CANCELLED, deleted_at=now - timedelta(days=5))
        live = make_booking(guest, room, start=now + timedelta(days=30))

        service = BookingService()
        assert service.purge_deleted(dry_run=True) == 1
        assert Booking.objects.filter(id=old.id).exists()

        assert service.purge_deleted() == 1
        remaining = set(Booking.objects.values_list('id', flat=True))
        assert remaining == {recent.id, live.id}

    def test_purge_rejects_negative_days(self):
        with pytest.raises(ValidationError):
            BookingService().purge_deleted(-1)

    def test_soft_delete_stats(self, guest, room, make_booking):
        now = timezone.now()
        make_booking(guest, room, status=BookingStatus.CANCELLED, deleted_at=now - timedelta(days=100))
        make_booking(guest, room, status=BookingStatus.CANCELLED, deleted_at=now - timedelta(days=5))

        stats = BookingService().soft_delete_stats(now)
        assert stats == {
            'total_deleted': 2,
            'deleted_last_30_days': 1,
            'eligible_for_purge': 1,
            'retention_days': 90,
        }
