"""
Booking service - Business logic layer for the booking lifecycle.

All booking writes (create, status change, extension, trash / restore /
permanent delete, purge) go through BookingService so that room status,
payments and notifications stay in step with the booking.
"""
from datetime import timedelta
from decimal import Decimal

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Sum
from django.utils import timezone

from core.constants import (
    BookingStatus, RoomStatus, UserRole, PaymentStatus, NotificationType, PricingPeriod
)
from core.dto import BookingDTO, ExtensionDTO
from core.exceptions import (
    NotFoundError, ValidationError, BusinessLogicError, ConflictError, PermissionDeniedError
)
from core.services import BaseService
from core.validators import BookingValidator, validate_required
from rooms.models import Room
from rooms.status import update_room_status
from notifications.services import notify
from payments.models import Payment
from . import rules
from .models import Booking
from .repositories import BookingRepository

User = get_user_model()


def retention_days():
    return getattr(settings, 'SOFT_DELETE_RETENTION_DAYS', 90)


class BookingService(BaseService):
    """Service for booking-related business logic"""

    def __init__(self):
        super().__init__()
        self.booking_repo = BookingRepository(Booking)

    def get_booking(self, booking_id: int, user=None, include_deleted=True) -> Booking:
        """
        Fetch a booking. Guests can only fetch their own.

        Raises:
            NotFoundError: If missing, or owned by another guest
        """
        queryset = self.booking_repo.get_queryset()
        if not include_deleted:
            queryset = queryset.filter(deleted_at__isnull=True)
        if user is not None and not user.is_staff_member:
            queryset = queryset.filter(guest=user)
        booking = queryset.filter(id=booking_id).first()
        if not booking:
            raise NotFoundError(resource_type="Booking", resource_id=booking_id)
        return booking

    def _lock_room(self, room_id) -> Room:
        room = Room.objects.select_for_update().filter(id=room_id).first()
        if not room:
            raise NotFoundError(resource_type="Room", resource_id=room_id)
        return room

    def _ensure_free(self, room, start, end, exclude_id=None):
        clash = Booking.objects.overlapping(room, start, end, exclude_id=exclude_id).first()
        if clash:
            raise ConflictError(
                f"Room {room.number} is already booked from "
                f"{timezone.localtime(clash.check_in):%Y-%m-%d} to {timezone.localtime(clash.check_out):%Y-%m-%d}",
                code="ROOM_ALREADY_BOOKED",
                details={'room_id': room.id, 'booking_id': clash.id}
            )

    def create_booking(self, dto: BookingDTO, user) -> Booking:
        """
        Create a PENDING booking.

        Staff can book for any guest; a guest can only book for themselves.

        Raises:
            ValidationError: Missing fields, bad periods, capacity exceeded
            BusinessLogicError: Room under maintenance / out of order
            ConflictError: Room already booked for part of the window
        """
        validate_required(
            guest=dto.guest_id, room=dto.room_id, check_in_date=dto.check_in_date,
            periods=dto.periods, guests=dto.guests
        )
        BookingValidator.validate_periods(dto.periods)
        if not user.is_staff_member and dto.guest_id != user.id:
            raise PermissionDeniedError("You can only book for yourself", code="NOT_OWNER")

        guest = User.objects.filter(id=dto.guest_id).first()
        if not guest:
            raise NotFoundError(resource_type="Guest", resource_id=dto.guest_id)

        with transaction.atomic():
            room = self._lock_room(dto.room_id)
            if room.status in RoomStatus.LOCKED:
                raise BusinessLogicError(
                    f"Room {room.number} is {room.get_status_display().lower()} and cannot be booked",
                    code="ROOM_UNAVAILABLE"
                )
            BookingValidator.validate_guests(dto.guests, room.capacity)

            check_in, check_out = rules.stay_window(dto.check_in_date, dto.periods, room.pricing_period)
            self._ensure_free(room, check_in, check_out)

            booking = self.booking_repo.create(
                guest=guest,
                room=room,
                check_in=check_in,
                check_out=check_out,
                guests=dto.guests,
                total_amount=rules.booking_total(room.price_per_night, dto.periods),
                status=BookingStatus.PENDING,
                special_requests=(dto.special_requests or '').strip(),
            )
            update_room_status(room)

            notify(
                guest,
                NotificationType.BOOKING_CONFIRMATION,
                f"Booking received for room {room.number}",
                (
                    f"Your booking #{booking.id} for room {room.number} from "
                    f"{timezone.localtime(check_in):%Y-%m-%d %H:%M} to {timezone.localtime(check_out):%Y-%m-%d %H:%M} "
                    f"has been received. Total: {booking.total_amount}"
                ),
                booking=booking,
            )
            self.log_info("Booking created", booking_id=booking.id, room=room.number, user=user.username)
            return booking

    def update_status(self, booking: Booking, status: str, user) -> Booking:
        """
        Change a booking's status and bring the room along.

        CHECKED_IN marks the room OCCUPIED; any other status re-derives the
        room from its bookings. Rooms under maintenance are left alone.

        Raises:
            ValidationError: Unknown status
            BusinessLogicError: Booking is in the trash, or already checked out / cancelled
        """
        self.require_staff(user, "change booking status")
        if status not in dict(BookingStatus.CHOICES):
            raise ValidationError(f"Unknown booking status: {status}", code="INVALID_STATUS")
        if booking.is_deleted:
            raise BusinessLogicError("Restore the booking before changing its status", code="BOOKING_DELETED")
        if not rules.can_change_status(booking.status, status):
            raise BusinessLogicError(
                f"A {booking.get_status_display().lower()} booking cannot be changed to {status}",
                code="INVALID_TRANSITION",
                details={'from': booking.status, 'to': status}
            )

        with transaction.atomic():
            room = self._lock_room(booking.room_id)
            old_status = booking.status
            booking.status = status
            booking.save(update_fields=['status', 'updated_at'])

            if room.status not in RoomStatus.LOCKED:
                if rules.room_status_for_booking_status(status) == RoomStatus.OCCUPIED:
                    room.status = RoomStatus.OCCUPIED
                    room.save(update_fields=['status', 'updated_at'])
                else:
                    update_room_status(room)

            self.log_info("Booking status changed", booking_id=booking.id, old=old_status, new=status,
                          user=user.username)
            return booking

    def update_booking(self, booking: Booking, dto: BookingDTO, user) -> Booking:
        """
        Edit dates, guest count and requests; the window and total are recomputed.
        Add-on service charges already on the booking stay in the total.
        """
        self.require_staff(user, "edit bookings")
        validate_required(check_in_date=dto.check_in_date, periods=dto.periods, guests=dto.guests)
        BookingValidator.validate_periods(dto.periods)
        if booking.is_deleted or booking.status in BookingStatus.TERMINAL:
            raise BusinessLogicError("This booking can no longer be edited", code="BOOKING_CLOSED")

        with transaction.atomic():
            room = self._lock_room(dto.room_id or booking.room_id)
            if room.id != booking.room_id and room.status in RoomStatus.LOCKED:
                raise BusinessLogicError(f"Room {room.number} cannot be booked", code="ROOM_UNAVAILABLE")
            BookingValidator.validate_guests(dto.guests, room.capacity)
            check_in, check_out = rules.stay_window(dto.check_in_date, dto.periods, room.pricing_period)
            self._ensure_free(room, check_in, check_out, exclude_id=booking.id)

            old_room = booking.room
            booking.room = room
            booking.check_in = check_in
            booking.check_out = check_out
            booking.guests = dto.guests
            booking.special_requests = (dto.special_requests or '').strip()
            extras = booking.booking_services.aggregate(total=Sum('total_price'))['total'] or Decimal('0')
            booking.total_amount = rules.booking_total(room.price_per_night, dto.periods) + extras
            booking.save()

            update_room_status(room)
            if old_room.id != room.id:
                update_room_status(old_room)
            self.log_info("Booking updated", booking_id=booking.id, user=user.username)
            return booking

    def extend_booking(self, booking: Booking, dto: ExtensionDTO, user):
        """
        Extend a CONFIRMED / CHECKED_IN stay by whole pricing periods.

        The payment is topped up by the additional amount, or a PENDING payment
        is created for it when none exists.

        Returns:
            (booking, additional_amount)
        """
        self.require_staff(user, "extend bookings")
        BookingValidator.validate_periods(dto.periods)
        if booking.is_deleted or booking.status not in BookingStatus.EXTENDABLE:
            raise BusinessLogicError(
                "Only confirmed or checked-in bookings can be extended",
                code="NOT_EXTENDABLE",
                details={'status': booking.status}
            )

        with transaction.atomic():
            room = self._lock_room(booking.room_id)
            new_check_out = rules.advance_checkout(booking.check_out, dto.periods, room.pricing_period)
            self._ensure_free(room, booking.check_out, new_check_out, exclude_id=booking.id)

            additional = rules.booking_total(room.price_per_night, dto.periods)
            note = rules.extension_note(timezone.localdate(), dto.periods, dto.reason)
            booking.check_out = new_check_out
            booking.total_amount = booking.total_amount + additional
            booking.special_requests = f"{booking.special_requests}\n\n{note}" if booking.special_requests else note
            booking.save()

            if additional > 0:
                period_label = PricingPeriod.LABELS.get(room.pricing_period, 'night')
                payment = Payment.objects.select_for_update().filter(booking=booking).first()
                if payment:
                    payment.amount = payment.amount + additional
                    payment.method = dto.method or payment.method
                    payment.notes = f"Extended payment: +{additional} for {dto.periods} {period_label}(s)"
                    payment.save()
                else:
                    Payment.objects.create(
                        booking=booking,
                        amount=additional,
                        method=dto.method,
                        status=PaymentStatus.PENDING,
                        notes=f"Extension - {dto.periods} {period_label}(s)",
                    )

            notify(
                booking.guest,
                NotificationType.GENERAL_ANNOUNCEMENT,
                "Stay extended",
                (
                    f"Your stay in room {room.number} has been extended until "
                    f"{timezone.localtime(new_check_out):%b %d, %Y}. Additional amount: {additional}"
                ),
                booking=booking,
            )
            self.log_info("Booking extended", booking_id=booking.id, periods=dto.periods,
                          additional=str(additional), user=user.username)
            return booking, additional

    def soft_delete(self, booking: Booking, user) -> Booking:
        """Move a PENDING / CANCELLED booking to the trash"""
        self.require_staff(user, "delete bookings")
        if booking.is_deleted:
            raise BusinessLogicError("Booking is already in the trash", code="ALREADY_DELETED")
        if booking.status not in BookingStatus.SOFT_DELETABLE:
            raise BusinessLogicError(
                "Only pending or cancelled bookings can be deleted",
                code="NOT_DELETABLE",
                details={'status': booking.status}
            )

        with transaction.atomic():
            booking.deleted_at = timezone.now()
            booking.status = BookingStatus.CANCELLED
            booking.save(update_fields=['deleted_at', 'status', 'updated_at'])
            room = self._lock_room(booking.room_id)
            if room.status == RoomStatus.OCCUPIED:
                update_room_status(room)
            self.log_info("Booking moved to trash", booking_id=booking.id, user=user.username)
            return booking

    def restore(self, booking: Booking, user) -> Booking:
        """Bring a booking back from the trash as PENDING, if its room is still free"""
        self.require_staff(user, "restore bookings")
        if not booking.is_deleted:
            raise BusinessLogicError("Booking is not deleted", code="NOT_DELETED")

        with transaction.atomic():
            room = self._lock_room(booking.room_id)
            self._ensure_free(room, booking.check_in, booking.check_out, exclude_id=booking.id)
            booking.deleted_at = None
            booking.status = BookingStatus.PENDING
            booking.save(update_fields=['deleted_at', 'status', 'updated_at'])
            update_room_status(room)
            self.log_info("Booking restored", booking_id=booking.id, user=user.username)
            return booking

    def hard_delete(self, booking: Booking, user) -> int:
        """Permanently delete a booking that is already in the trash (admins only)"""
        self.require_role(user, [UserRole.ADMIN], "permanently delete bookings")
        if not booking.is_deleted:
            raise BusinessLogicError(
                "Booking must be moved to the trash before it can be permanently deleted",
                code="NOT_SOFT_DELETED"
            )
        booking_id = booking.id
        with transaction.atomic():
            booking.delete()
        self.log_info("Booking permanently deleted", booking_id=booking_id, user=user.username)
        return booking_id

    def soft_delete_stats(self, now=None) -> dict:
        now = now or timezone.now()
        stats = self.booking_repo.soft_delete_counts(now, retention_days())
        stats['retention_days'] = retention_days()
        return stats

    def purge_deleted(self, days: int = None, now=None, dry_run=False) -> int:
        """Permanently delete bookings soft-deleted more than `days` ago. Returns the count."""
        days = retention_days() if days is None else days
        if days < 0:
            raise ValidationError("Days must be zero or more", code="INVALID_DAYS")
        now = now or timezone.now()
        queryset = self.booking_repo.deleted_before(now - timedelta(days=days))
        count = queryset.count()
        if dry_run or count == 0:
            return count
        with transaction.atomic():
            queryset.delete()
        self.log_info("Purged deleted bookings", count=count, days=days)
        return count
