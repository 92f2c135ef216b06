from django.contrib import admin
from django.core.cache import cache
from .models import Setting
from .utils import SETTING_CACHE_PREFIX


@admin.register(Setting)
class SettingAdmin(admin.ModelAdmin):
    """
    Runtime settings. Values left empty fall back to the environment variable
    of the same name.
    """
    list_display = ['key', 'category', 'display_value', 'description', 'updated_at']
    list_filter = ['category', 'is_secret']
    search_fields = ['key', 'description']
    readonly_fields = ['created_at', 'updated_at']

    def save_model(self, request, obj, form, change):
        super().save_model(request, obj, form, change)
        cache.delete(f"{SETTING_CACHE_PREFIX}{obj.key}")
