from django.db import models
from django.conf import settings
from core.constants import NotificationType, NotificationChannel, NotificationStatus


class Notification(models.Model):
    """A message addressed to a user, optionally about a booking"""
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='notifications')
    booking = models.ForeignKey('bookings.Booking', on_delete=models.SET_NULL, null=True, blank=True,
                                related_name='notifications')
    type = models.CharField(max_length=40, choices=NotificationType.CHOICES)
    title = models.CharField(max_length=200)
    message = models.TextField()
    channel = models.CharField(max_length=20, choices=NotificationChannel.CHOICES, default=NotificationChannel.EMAIL)
    status = models.CharField(max_length=20, choices=NotificationStatus.CHOICES, default=NotificationStatus.PENDING)
    sent_at = models.DateTimeField(null=True, blank=True)
    read_at = models.DateTimeField(null=True, blank=True)
    error = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name = "Notification"
        verbose_name_plural = "Notifications"
        indexes = [
            models.Index(fields=['user', 'read_at'], name='notification_unread_idx'),
            models.Index(fields=['booking', 'type'], name='notification_booking_idx'),
        ]

    def __str__(self):
        return f"{self.get_type_display()} → {self.user}"

    @property
    def is_read(self):
        return self.read_at is not None
