"""
Utility functions for accessing runtime settings
"""
import os
import logging
from django.core.cache import cache
from django.db import DatabaseError
from core.constants import SettingCategory
from .models import Setting

logger = logging.getLogger(__name__)

SETTING_CACHE_PREFIX = 'setting:'
SETTING_CACHE_TIMEOUT = 300

# key: (default, is_secret, category, description)
DEFAULT_SETTINGS = {
    'SITE_NAME': ("StayDesk", False, SettingCategory.GENERAL, "Name shown in the page header"),
    'CURRENCY_SYMBOL': ("$", False, SettingCategory.GENERAL, "Currency symbol used in amounts"),
    'APP_URL': ("http://localhost:8000", False, SettingCategory.GENERAL, "Public base URL used in notification links"),
    'EMAIL_NOTIFICATIONS': ("false", False, SettingCategory.EMAIL, "Send notification emails (true/false)"),
    'RESEND_API_KEY': ("", True, SettingCategory.EMAIL, "API key of the transactional email provider"),
    'MNOTIFY_API_KEY': ("", True, SettingCategory.SMS, "API key of the SMS gateway"),
    'MNOTIFY_SENDER_ID': ("", False, SettingCategory.SMS, "Sender ID used for SMS"),
    'JWT_SECRET': ("", True, SettingCategory.SECURITY, "Secret used to sign API tokens"),
    'SESSION_SECRET': ("", True, SettingCategory.SECURITY, "Secret used to sign sessions"),
}


def get_setting(key, default=None):
    """
    Resolve a runtime setting.
    Order: database row (non-empty value), environment variable, DEFAULT_SETTINGS, `default`.
    """
    cache_key = f"{SETTING_CACHE_PREFIX}{key}"
    cached = cache.get(cache_key)
    if cached is not None:
        return cached

    value = None
    try:
        row = Setting.objects.filter(key=key).values_list('value', flat=True).first()
        if row:
            value = row
    except DatabaseError as e:
        # Table may not exist yet (before migrate)
        logger.warning(f"Could not read setting {key} from database: {e}")

    if value is None:
        value = os.environ.get(key) or None
    if value is None:
        value = DEFAULT_SETTINGS.get(key, (default,))[0]
        if value in (None, '') and default is not None:
            value = default

    if value is not None:
        cache.set(cache_key, value, SETTING_CACHE_TIMEOUT)
    return value


def get_bool_setting(key, default=False):
    value = get_setting(key)
    if value is None or value == '':
        return default
    return str(value).strip().lower() in ('1', 'true', 'yes', 'on')


def set_setting(key, value, **fields):
    """Create or update a setting row and drop the cached value"""
    defaults = {'value': value}
    if key in DEFAULT_SETTINGS and 'category' not in fields:
        _, is_secret, category, description = DEFAULT_SETTINGS[key]
        defaults.update(is_secret=is_secret, category=category, description=description)
    defaults.update(fields)
    setting, _ = Setting.objects.update_or_create(key=key, defaults=defaults)
    cache.delete(f"{SETTING_CACHE_PREFIX}{key}")
    logger.info(f"Setting updated: {key}")
    return setting


def initialize_default_settings():
    """Create missing default setting rows. Existing values are left alone. Returns number created."""
    created_count = 0
    for key, (default, is_secret, category, description) in DEFAULT_SETTINGS.items():
        _, created = Setting.objects.get_or_create(
            key=key,
            defaults={
                'value': os.environ.get(key, default),
                'is_secret': is_secret,
                'category': category,
                'description': description,
            }
        )
        if created:
            created_count += 1
    return created_count


def get_site_settings():
    """Settings exposed to every template"""
    return {
        'site_name': get_setting('SITE_NAME'),
        'currency_symbol': get_setting('CURRENCY_SYMBOL'),
        'app_url': get_setting('APP_URL'),
    }
