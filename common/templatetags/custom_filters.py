"""
Custom template filters for the application
"""
from decimal import Decimal, InvalidOperation
from django import template
from common.utils import get_setting

register = template.Library()

STATUS_BADGES = {
    # Rooms
    'AVAILABLE': 'success',
    'OCCUPIED': 'primary',
    'MAINTENANCE': 'warning',
    'OUT_OF_ORDER': 'dark',
    # Bookings
    'PENDING': 'secondary',
    'CONFIRMED': 'info',
    'CHECKED_IN': 'primary',
    'CHECKED_OUT': 'success',
    'CANCELLED': 'danger',
    # Payments / deposits / maintenance
    'COMPLETED': 'success',
    'FAILED': 'danger',
    'REFUNDED': 'info',
    'PAID': 'success',
    'PARTIALLY_REFUNDED': 'warning',
    'FORFEITED': 'danger',
    'IN_PROGRESS': 'primary',
}

URGENCY_BADGES = {
    'critical': 'danger',
    'high': 'warning',
    'medium': 'info',
    'low': 'secondary',
}


@register.filter
def mul(value, arg):
    """
    Multiply the value by the arg
    Usage: {{ value|mul:10 }}
    """
    try:
        return float(value) * float(arg)
    except (ValueError, TypeError):
        return 0


@register.filter
def get_item(mapping, key):
    """
    Dictionary lookup with a variable key
    Usage: {{ counts|get_item:status }}
    """
    if not hasattr(mapping, 'get'):
        return None
    return mapping.get(key)


@register.filter
def currency(value):
    """
    Format an amount with the configured currency symbol
    Usage: {{ booking.total_amount|currency }}
    """
    try:
        amount = Decimal(str(value if value is not None else 0))
    except (InvalidOperation, ValueError):
        return value
    return f"{get_setting('CURRENCY_SYMBOL', '$')}{amount:,.2f}"


@register.filter
def status_badge(value):
    """Bootstrap colour class for a status code"""
    return STATUS_BADGES.get(str(value), 'secondary')


@register.filter
def urgency_badge(value):
    """Bootstrap colour class for a checkout urgency level"""
    return URGENCY_BADGES.get(str(value), 'secondary')


@register.filter
def hours_display(value):
    """
    Render a number of hours as "Xd Yh" / "Yh Zm"
    Usage: {{ item.hours_remaining|hours_display }}
    """
    try:
        hours = float(value)
    except (ValueError, TypeError):
        return ''
    sign = '-' if hours < 0 else ''
    hours = abs(hours)
    if hours >= 24:
        return f"{sign}{int(hours // 24)}d {int(hours % 24)}h"
    return f"{sign}{int(hours)}h {int((hours * 60) % 60)}m"
