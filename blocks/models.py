from django.db import models
from core.constants import RoomStatus


class Block(models.Model):
    """A named grouping of rooms (building wing, tower, annex)"""
    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True)
    floors = models.PositiveIntegerField(null=True, blank=True, help_text="Number of floors")
    location = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']
        verbose_name = "Block"
        verbose_name_plural = "Blocks"

    def __str__(self):
        return self.name

    @property
    def total_rooms(self):
        """Total rooms in this block - CACHED for performance"""
        if not hasattr(self, '_total_rooms_cache'):
            self._total_rooms_cache = self.rooms.count()
        return self._total_rooms_cache

    @property
    def occupied_rooms(self):
        """Occupied rooms count - CACHED for performance"""
        if not hasattr(self, '_occupied_rooms_cache'):
            self._occupied_rooms_cache = self.rooms.filter(status=RoomStatus.OCCUPIED).count()
        return self._occupied_rooms_cache

    @property
    def available_rooms(self):
        """Available rooms count - CACHED for performance"""
        if not hasattr(self, '_available_rooms_cache'):
            self._available_rooms_cache = self.rooms.filter(status=RoomStatus.AVAILABLE).count()
        return self._available_rooms_cache

    @property
    def occupancy_rate(self):
        total = self.total_rooms
        return round(self.occupied_rooms / total * 100, 1) if total > 0 else 0.0
