from django.db import models
from core.constants import SettingCategory


class Setting(models.Model):
    """
    Runtime key/value settings editable by admins.
    Values fall back to the environment variable of the same name (see common.utils.get_setting).
    """
    key = models.CharField(max_length=100, unique=True)
    value = models.TextField(blank=True, default="")
    is_secret = models.BooleanField(default=False, help_text="Mask the value when listed")
    description = models.CharField(max_length=255, blank=True, default="")
    category = models.CharField(max_length=20, choices=SettingCategory.CHOICES, default=SettingCategory.GENERAL)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['category', 'key']
        verbose_name = "Setting"
        verbose_name_plural = "Settings"
        indexes = [
            models.Index(fields=['category'], name='setting_category_idx'),
        ]

    def __str__(self):
        return f"{self.key} ({self.get_category_display()})"

    @property
    def display_value(self):
        """Value safe to render in lists"""
        if self.is_secret and self.value:
            return f"{'*' * 8}{self.value[-4:]}" if len(self.value) > 8 else '*' * 8
        return self.value
