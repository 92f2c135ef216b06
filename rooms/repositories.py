"""
Room repository - Data access layer for Room domain.
"""
from django.db.models import QuerySet, Q
from core.constants import RoomStatus, BookingStatus
from core.repositories import BaseRepository
from .models import Room


class RoomRepository(BaseRepository[Room]):
    """Repository for Room model"""

    def get_queryset(self) -> QuerySet[Room]:
        return self.model.objects.select_related('room_type', 'block')

    def number_taken(self, number: str, block_id=None, exclude_id: int = None) -> bool:
        queryset = self.model.objects.filter(number__iexact=number.strip(), block_id=block_id)
        if exclude_id:
            queryset = queryset.exclude(id=exclude_id)
        return queryset.exists()

    def search(self, status=None, room_type=None, block=None, q=None) -> QuerySet[Room]:
        queryset = self.get_queryset()
        if status:
            queryset = queryset.filter(status=status)
        if room_type:
            queryset = queryset.filter(room_type_id=room_type)
        if block:
            queryset = queryset.filter(block_id=block)
        if q:
            queryset = queryset.filter(
                Q(number__icontains=q) | Q(description__icontains=q) | Q(amenities__icontains=q)
            )
        return queryset.order_by('block__name', 'floor', 'number')

    def available_between(self, start, end) -> QuerySet[Room]:
        """AVAILABLE rooms with no live blocking booking overlapping [start, end)"""
        busy = Q(
            bookings__deleted_at__isnull=True,
            bookings__status__in=BookingStatus.BLOCKING,
            bookings__check_in__lt=end,
            bookings__check_out__gt=start,
        )
        busy_ids = self.model.objects.filter(busy).values('id')
        return self.get_queryset().filter(status=RoomStatus.AVAILABLE).exclude(id__in=busy_ids)
