from django.db import models
from django.conf import settings
from django.core.validators import MinValueValidator
from core.constants import BookingStatus, PaymentStatus
from rooms.models import Room


class BookingQuerySet(models.QuerySet):
    """Booking filters shared by services, views and jobs"""

    def alive(self):
        """Not soft-deleted"""
        return self.filter(deleted_at__isnull=True)

    def deleted(self):
        return self.filter(deleted_at__isnull=False)

    def active(self):
        """Live CONFIRMED / CHECKED_IN bookings"""
        return self.alive().filter(status__in=BookingStatus.ACTIVE)

    def overlapping(self, room, start, end, exclude_id=None):
        """Live bookings that hold `room` for any part of [start, end)"""
        queryset = self.alive().filter(
            room=room,
            status__in=BookingStatus.BLOCKING,
            check_in__lt=end,
            check_out__gt=start,
        )
        if exclude_id:
            queryset = queryset.exclude(id=exclude_id)
        return queryset


class Booking(models.Model):
    """A reservation linking a guest to a room for a date range"""
    guest = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='bookings')
    room = models.ForeignKey(Room, on_delete=models.PROTECT, related_name='bookings')
    check_in = models.DateTimeField()
    check_out = models.DateTimeField()
    guests = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    total_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    status = models.CharField(max_length=20, choices=BookingStatus.CHOICES, default=BookingStatus.PENDING)
    special_requests = models.TextField(blank=True)
    deleted_at = models.DateTimeField(null=True, blank=True, help_text="Set when moved to trash")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = BookingQuerySet.as_manager()

    class Meta:
        ordering = ['-created_at']
        verbose_name = "Booking"
        verbose_name_plural = "Bookings"
        indexes = [
            models.Index(fields=['status'], name='booking_status_idx'),
            models.Index(fields=['room', 'check_in', 'check_out'], name='booking_room_window_idx'),
            models.Index(fields=['guest', 'status'], name='booking_guest_status_idx'),
            models.Index(fields=['deleted_at'], name='booking_deleted_at_idx'),
            models.Index(fields=['check_out'], name='booking_check_out_idx'),
        ]

    def __str__(self):
        return f"#{self.id} {self.guest.full_name} - Room {self.room.number} ({self.get_status_display()})"

    @property
    def is_deleted(self):
        return self.deleted_at is not None

    @property
    def nights(self):
        return max((self.check_out.date() - self.check_in.date()).days, 0)

    @property
    def payment_or_none(self):
        """The booking's payment, or None when nothing has been recorded"""
        return getattr(self, 'payment', None)

    @property
    def is_paid(self):
        payment = self.payment_or_none
        return payment is not None and payment.status == PaymentStatus.COMPLETED
