"""
Checkout monitoring - who is leaving soon, who is late, who arrives today.
"""
from datetime import timedelta

from django.conf import settings
from django.utils import timezone

from core.constants import BookingStatus, DefaultLimits, Urgency
from bookings import rules
from bookings.models import Booking


def _day_bounds(now):
    local = timezone.localtime(now)
    start = local.replace(hour=0, minute=0, second=0, microsecond=0)
    return start, start + timedelta(days=1)


def _annotate(bookings, now):
    """Attach hours_remaining / urgency / is_overdue to each booking"""
    result = []
    for booking in bookings:
        info = rules.checkout_info(booking, now)
        booking.hours_remaining = info.hours_remaining
        booking.urgency = info.urgency
        booking.is_overdue = info.is_overdue
        result.append(booking)
    return result


def _live():
    return Booking.objects.alive().select_related('guest', 'room', 'room__block')


def upcoming_checkouts(now=None, hours=None):
    """CHECKED_IN bookings leaving within the next `hours`"""
    now = now or timezone.now()
    hours = hours if hours is not None else getattr(settings, 'UPCOMING_CHECKOUT_WINDOW_HOURS', 48)
    bookings = _live().filter(
        status=BookingStatus.CHECKED_IN,
        check_out__gte=now,
        check_out__lte=now + timedelta(hours=hours),
    ).order_by('check_out')
    return _annotate(bookings, now)


def todays_checkins(now=None):
    now = now or timezone.now()
    start, end = _day_bounds(now)
    return list(
        _live().filter(
            status__in=[BookingStatus.CONFIRMED, BookingStatus.CHECKED_IN],
            check_in__gte=start,
            check_in__lt=end,
        ).order_by('check_in')
    )


def overdue_checkouts(now=None):
    """Checked-in guests past their check-out time"""
    now = now or timezone.now()
    bookings = _live().filter(status=BookingStatus.CHECKED_IN, check_out__lt=now).order_by('check_out')
    return _annotate(bookings, now)


def checkout_status(now=None) -> dict:
    """
    Counters for the checkout alert badge.

    overdue counts CONFIRMED and CHECKED_IN bookings past check-out,
    upcoming those leaving within URGENT_CHECKOUT_HOURS.
    """
    now = now or timezone.now()
    start, end = _day_bounds(now)
    active = Booking.objects.active()
    overdue = active.filter(check_out__lt=now).count()
    upcoming = active.filter(
        check_out__gte=now,
        check_out__lte=now + timedelta(hours=DefaultLimits.URGENT_CHECKOUT_HOURS),
    ).count()
    today = active.filter(check_out__gte=start, check_out__lt=end).count()
    return {
        'overdue': overdue,
        'upcoming': upcoming,
        'today': today,
        'total_critical': overdue + upcoming,
        'timestamp': now.isoformat(),
    }


def monitoring_snapshot(now=None) -> dict:
    now = now or timezone.now()
    upcoming = upcoming_checkouts(now)
    return {
        'upcoming_checkouts': upcoming,
        'critical_checkouts': [b for b in upcoming if b.urgency == Urgency.CRITICAL],
        'overdue_checkouts': overdue_checkouts(now),
        'todays_checkins': todays_checkins(now),
        'status': checkout_status(now),
    }
