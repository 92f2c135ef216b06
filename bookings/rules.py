"""
Booking rules - pure functions over dates, amounts and statuses.

Nothing in here touches the database; callers pass model instances or plain
values and get plain values back. Datetimes are expected to be timezone aware.
"""
import calendar
from datetime import datetime, date, time, timedelta
from decimal import Decimal

from django.conf import settings
from django.utils import timezone

from core.constants import BookingStatus, PricingPeriod, RoomStatus, Urgency
from core.dto import CheckoutInfo


def _check_in_hour():
    return getattr(settings, 'CHECK_IN_HOUR', 15)


def _check_out_hour():
    return getattr(settings, 'CHECK_OUT_HOUR', 11)


def add_months(value, months: int):
    """Calendar month arithmetic; the day is clamped to the end of the target month"""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def advance(value, periods: int, pricing_period: str):
    """Move a date or datetime forward by `periods` pricing periods"""
    if pricing_period == PricingPeriod.WEEK:
        return value + timedelta(weeks=periods)
    if pricing_period == PricingPeriod.MONTH:
        return add_months(value, periods)
    if pricing_period == PricingPeriod.YEAR:
        return add_months(value, periods * 12)
    # NIGHT and DAY
    return value + timedelta(days=periods)


def stay_window(check_in_date: date, periods: int, pricing_period: str):
    """
    Check-in / check-out datetimes for a stay.

    Check-in is at CHECK_IN_HOUR on the given date, check-out at CHECK_OUT_HOUR
    after `periods` pricing periods.
    """
    tz = timezone.get_current_timezone()
    check_in = timezone.make_aware(datetime.combine(check_in_date, time(_check_in_hour())), tz)
    check_out_date = advance(check_in_date, periods, pricing_period)
    check_out = timezone.make_aware(datetime.combine(check_out_date, time(_check_out_hour())), tz)
    return check_in, check_out


def advance_checkout(check_out: datetime, periods: int, pricing_period: str) -> datetime:
    """New check-out after extending a stay by `periods`; the time of day is kept"""
    return advance(check_out, periods, pricing_period)


def booking_total(price, periods: int) -> Decimal:
    return (Decimal(str(price)) * periods).quantize(Decimal('0.01'))


def hours_until_checkout(check_out: datetime, now: datetime) -> float:
    """Negative once the check-out time has passed"""
    return (check_out - now).total_seconds() / 3600


def is_overdue(booking, now: datetime) -> bool:
    """A checked-in guest past their check-out time"""
    return booking.status == BookingStatus.CHECKED_IN and booking.check_out < now


def is_due_soon(booking, now: datetime, hours: float) -> bool:
    return (
        booking.status == BookingStatus.CHECKED_IN
        and now <= booking.check_out <= now + timedelta(hours=hours)
    )


def checkout_urgency(hours: float) -> str:
    for limit, level in Urgency.THRESHOLDS:
        if hours <= limit:
            return level
    return Urgency.LOW


def stay_progress(check_in: datetime, check_out: datetime, now: datetime) -> float:
    """Share of the stay already elapsed, clamped to [0, 1]"""
    total = (check_out - check_in).total_seconds()
    if total <= 0:
        return 1.0
    elapsed = (now - check_in).total_seconds()
    return max(0.0, min(1.0, elapsed / total))


def checkout_info(booking, now: datetime) -> CheckoutInfo:
    hours = hours_until_checkout(booking.check_out, now)
    window = getattr(settings, 'UPCOMING_CHECKOUT_WINDOW_HOURS', 48)
    return CheckoutInfo(
        booking_id=booking.id,
        check_out=booking.check_out,
        hours_remaining=round(hours, 1),
        is_overdue=is_overdue(booking, now),
        due_soon=is_due_soon(booking, now, window),
        urgency=checkout_urgency(hours),
    )


def room_status_for_booking_status(status: str) -> str:
    if status == BookingStatus.CHECKED_IN:
        return RoomStatus.OCCUPIED
    return RoomStatus.AVAILABLE


def holds_room(booking, now: datetime) -> bool:
    """Whether a booking makes its room OCCUPIED at `now`"""
    if booking.deleted_at is not None:
        return False
    if booking.status == BookingStatus.CHECKED_IN:
        return True
    if booking.status in (BookingStatus.PENDING, BookingStatus.CONFIRMED):
        return booking.check_in <= now < booking.check_out
    return False


def can_change_status(old_status: str, new_status: str) -> bool:
    """Bookings that are checked out or cancelled stay that way"""
    if old_status == new_status:
        return True
    return old_status not in BookingStatus.TERMINAL


def extension_note(today: date, periods: int, reason: str) -> str:
    return f"[EXTENSION] {today:%Y-%m-%d}: Extended by {periods} period(s). Reason: {reason or 'Not specified'}"


def windows_overlap(start_a, end_a, start_b, end_b) -> bool:
    return start_a < end_b and start_b < end_a


def periods_between(check_in_date: date, check_out_date: date, pricing_period: str) -> int:
    """Whole pricing periods needed to cover a stay (at least 1)"""
    periods = 1
    while advance(check_in_date, periods, pricing_period) < check_out_date:
        periods += 1
    return periods
