"""
Audit trail of front-desk and back-office actions.

Entries are append-only: an existing row can be neither saved again nor deleted.
"""
from django.conf import settings
from django.core.exceptions import PermissionDenied
from django.db import models

from core.constants import AuditAction, AuditResource

IMMUTABLE_MESSAGE = "Audit entries are append-only."


class AuditLogQuerySet(models.QuerySet):

    def by_actor(self, user):
        return self.filter(user=user)

    def trail(self, resource_type, resource_id):
        """Every entry recorded against one object, oldest first"""
        return self.filter(resource_type=resource_type, resource_id=resource_id).order_by('timestamp', 'id')

    def of_kind(self, action):
        return self.filter(action=action)

    def between(self, start=None, end=None):
        queryset = self
        if start:
            queryset = queryset.filter(timestamp__date__gte=start)
        if end:
            queryset = queryset.filter(timestamp__date__lte=end)
        return queryset


class AuditLogManager(models.Manager.from_queryset(AuditLogQuerySet)):

    def bulk_update(self, *args, **kwargs):
        raise PermissionDenied(IMMUTABLE_MESSAGE)


class AuditLog(models.Model):
    """One recorded action. `user` is empty for scheduled jobs."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='audit_logs',
    )
    action = models.CharField(max_length=20, choices=AuditAction.CHOICES, db_index=True)
    resource_type = models.CharField(max_length=50, choices=AuditResource.CHOICES, db_index=True)
    resource_id = models.IntegerField(null=True, blank=True, db_index=True)
    description = models.TextField()

    ip_address = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.TextField(blank=True, default='')
    metadata = models.JSONField(default=dict, blank=True)

    timestamp = models.DateTimeField(auto_now_add=True, db_index=True)

    objects = AuditLogManager()

    class Meta:
        verbose_name = "Audit Entry"
        verbose_name_plural = "Audit Trail"
        ordering = ['-timestamp']
        indexes = [
            models.Index(fields=['resource_type', 'resource_id'], name='audit_resource_idx'),
            models.Index(fields=['action', '-timestamp'], name='audit_action_time_idx'),
        ]

    def __str__(self):
        target = f"{self.resource_type} #{self.resource_id}" if self.resource_id else self.resource_type
        return f"[{self.timestamp:%Y-%m-%d %H:%M}] {self.user_display}: {self.action} {target}"

    def save(self, *args, **kwargs):
        if self.pk is not None:
            raise PermissionDenied(IMMUTABLE_MESSAGE)
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise PermissionDenied(IMMUTABLE_MESSAGE)

    @property
    def user_display(self):
        if self.user is None:
            return "System"
        return self.user.full_name or self.user.username
