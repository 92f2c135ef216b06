from django.db import models
from core.constants import MaintenanceType, MaintenanceStatus, Priority
from rooms.models import Room, Asset


class MaintenanceLog(models.Model):
    """Maintenance work reported against a room (and optionally one of its assets)"""
    room = models.ForeignKey(Room, on_delete=models.CASCADE, related_name='maintenance_logs')
    asset = models.ForeignKey(Asset, on_delete=models.SET_NULL, null=True, blank=True,
                              related_name='maintenance_logs')
    type = models.CharField(max_length=20, choices=MaintenanceType.CHOICES)
    description = models.TextField()
    status = models.CharField(max_length=20, choices=MaintenanceStatus.CHOICES, default=MaintenanceStatus.PENDING)
    priority = models.CharField(max_length=20, choices=Priority.CHOICES, default=Priority.MEDIUM)
    reported_by = models.CharField(max_length=100, blank=True)
    assigned_to = models.CharField(max_length=100, blank=True)
    start_date = models.DateTimeField(null=True, blank=True)
    end_date = models.DateTimeField(null=True, blank=True)
    cost = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name = "Maintenance Log"
        verbose_name_plural = "Maintenance Logs"
        indexes = [
            models.Index(fields=['status'], name='maintenance_status_idx'),
            models.Index(fields=['room', 'status'], name='maintenance_room_status_idx'),
            models.Index(fields=['priority', 'status'], name='maintenance_priority_idx'),
        ]

    def __str__(self):
        return f"{self.get_type_display()} - Room {self.room.number} ({self.get_status_display()})"

    @property
    def is_open(self):
        return self.status in MaintenanceStatus.OPEN
