"""
Block repository - Data access layer for Block domain.
"""
from django.db.models import QuerySet, Count, Q
from core.constants import RoomStatus
from core.repositories import BaseRepository
from .models import Block


class BlockRepository(BaseRepository[Block]):
    """Repository for Block model"""

    def name_taken(self, name: str, exclude_id: int = None) -> bool:
        """Case-insensitive name check, optionally ignoring one block"""
        queryset = self.model.objects.filter(name__iexact=name.strip())
        if exclude_id:
            queryset = queryset.exclude(id=exclude_id)
        return queryset.exists()

    def get_with_stats(self) -> QuerySet[Block]:
        """Blocks annotated with room counts per status"""
        return self.get_queryset().annotate(
            room_count=Count('rooms'),
            occupied_count=Count('rooms', filter=Q(rooms__status=RoomStatus.OCCUPIED)),
            available_count=Count('rooms', filter=Q(rooms__status=RoomStatus.AVAILABLE)),
            maintenance_count=Count('rooms', filter=Q(rooms__status=RoomStatus.MAINTENANCE)),
        )
