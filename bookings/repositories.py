"""
Booking repository - Data access layer for Booking domain.
"""
from datetime import timedelta
from django.db.models import QuerySet, Q
from core.constants import PaymentStatus
from core.repositories import BaseRepository
from .models import Booking


class BookingRepository(BaseRepository[Booking]):
    """Repository for Booking model"""

    def get_queryset(self) -> QuerySet[Booking]:
        return Booking.objects.select_related('guest', 'room', 'room__room_type', 'room__block')

    def search(self, status=None, payment=None, q=None, include_deleted=False, guest=None) -> QuerySet[Booking]:
        """
        Filters used by the booking list page and API.

        payment: 'paid' (COMPLETED payment), 'unpaid' (no payment or not COMPLETED), anything else = all
        """
        queryset = self.get_queryset().select_related('payment')
        if not include_deleted:
            queryset = queryset.filter(deleted_at__isnull=True)
        if guest is not None:
            queryset = queryset.filter(guest=guest)
        if status:
            queryset = queryset.filter(status=status)
        if payment == 'paid':
            queryset = queryset.filter(payment__status=PaymentStatus.COMPLETED)
        elif payment == 'unpaid':
            queryset = queryset.exclude(payment__status=PaymentStatus.COMPLETED)
        if q:
            queryset = queryset.filter(
                Q(guest__first_name__icontains=q) | Q(guest__last_name__icontains=q) |
                Q(guest__email__icontains=q) | Q(room__number__icontains=q)
            )
        return queryset.order_by('-created_at')

    def deleted_before(self, cutoff) -> QuerySet[Booking]:
        return Booking.objects.deleted().filter(deleted_at__lt=cutoff)

    def soft_delete_counts(self, now, retention_days: int) -> dict:
        deleted = Booking.objects.deleted()
        return {
            'total_deleted': deleted.count(),
            'deleted_last_30_days': deleted.filter(deleted_at__gte=now - timedelta(days=30)).count(),
            'eligible_for_purge': deleted.filter(deleted_at__lt=now - timedelta(days=retention_days)).count(),
        }

    def for_guest(self, guest) -> QuerySet[Booking]:
        return self.get_queryset().filter(guest=guest, deleted_at__isnull=True).order_by('-check_in')
