"""
Financial reports over named periods, with CSV export.
"""
import csv
from collections import OrderedDict
from datetime import date, datetime, time, timedelta
from decimal import Decimal

from django.http import HttpResponse
from django.utils import timezone

from core.constants import BookingStatus, PaymentStatus
from core.exceptions import ValidationError
from bookings.models import Booking
from bookings.rules import add_months
from payments.models import Payment, SecurityDeposit

PERIODS = OrderedDict([
    ('today', 'Today'),
    ('yesterday', 'Yesterday'),
    ('thisWeek', 'This Week'),
    ('lastWeek', 'Last Week'),
    ('thisMonth', 'This Month'),
    ('lastMonth', 'Last Month'),
    ('thisQuarter', 'This Quarter'),
    ('lastQuarter', 'Last Quarter'),
    ('thisYear', 'This Year'),
    ('lastYear', 'Last Year'),
])

DEFAULT_PERIOD = 'thisMonth'


def _week_start(day: date) -> date:
    # Weeks start on Sunday
    return day - timedelta(days=(day.weekday() + 1) % 7)


def _quarter_start(day: date) -> date:
    return date(day.year, 3 * ((day.month - 1) // 3) + 1, 1)


def report_period(name: str, today: date = None):
    """
    First and last day (inclusive) of a named period.

    Raises:
        ValidationError: Unknown period name
    """
    today = today or timezone.localdate()
    if name == 'today':
        return today, today
    if name == 'yesterday':
        day = today - timedelta(days=1)
        return day, day
    if name in ('thisWeek', 'lastWeek'):
        start = _week_start(today)
        if name == 'lastWeek':
            start -= timedelta(weeks=1)
        return start, start + timedelta(days=6)
    if name in ('thisMonth', 'lastMonth'):
        start = today.replace(day=1)
        if name == 'lastMonth':
            start = add_months(start, -1)
        return start, add_months(start, 1) - timedelta(days=1)
    if name in ('thisQuarter', 'lastQuarter'):
        start = _quarter_start(today)
        if name == 'lastQuarter':
            start = add_months(start, -3)
        return start, add_months(start, 3) - timedelta(days=1)
    if name in ('thisYear', 'lastYear'):
        year = today.year if name == 'thisYear' else today.year - 1
        return date(year, 1, 1), date(year, 12, 31)
    raise ValidationError(f"Unknown report period: {name}", code="INVALID_PERIOD",
                          details={'allowed': list(PERIODS)})


def _bounds(start: date, end: date):
    tz = timezone.get_current_timezone()
    return (
        timezone.make_aware(datetime.combine(start, time.min), tz),
        timezone.make_aware(datetime.combine(end + timedelta(days=1), time.min), tz),
    )


def build_report(period: str = DEFAULT_PERIOD, today: date = None) -> dict:
    """Payments, deposits and bookings of a period with their totals"""
    start, end = report_period(period, today)
    start_at, end_at = _bounds(start, end)

    payments = list(
        Payment.objects.filter(status=PaymentStatus.COMPLETED, paid_at__gte=start_at, paid_at__lt=end_at)
        .select_related('booking__guest', 'booking__room__room_type')
        .order_by('-paid_at')
    )
    deposits = list(
        SecurityDeposit.objects.filter(paid_at__gte=start_at, paid_at__lt=end_at)
        .select_related('booking__guest', 'booking__room__room_type')
        .order_by('-paid_at')
    )
    bookings = list(
        Booking.objects.alive().filter(created_at__gte=start_at, created_at__lt=end_at)
        .exclude(status=BookingStatus.CANCELLED)
        .select_related('guest', 'room__room_type')
        .order_by('-created_at')
    )

    return {
        'period': period,
        'period_label': PERIODS[period],
        'start': start,
        'end': end,
        'payments': payments,
        'deposits': deposits,
        'bookings': bookings,
        'summary': {
            'total_payments': len(payments),
            'payment_amount': sum((p.amount for p in payments), Decimal('0')),
            'total_deposits': len(deposits),
            'deposit_amount': sum((d.amount for d in deposits), Decimal('0')),
            'total_bookings': len(bookings),
            'booking_revenue': sum((b.total_amount for b in bookings), Decimal('0')),
        },
    }


def _fmt(value):
    return timezone.localtime(value).strftime('%Y-%m-%d %H:%M') if value else ''


def export_report_csv(period: str = DEFAULT_PERIOD, today: date = None):
    """
    Export a period report to CSV

    Returns:
        HttpResponse with file
    """
    report = build_report(period, today)
    summary = report['summary']
    filename = f"property_report_{period}_{timezone.localdate():%Y-%m-%d}.csv"

    response = HttpResponse(content_type='text/csv')
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    writer = csv.writer(response)
    writer.writerow(['Type', 'Reference', 'Date', 'Guest', 'Room', 'Amount', 'Status'])

    writer.writerow(['Summary', 'Report Period', report['period_label'], '', '', '', ''])
    writer.writerow(['Summary', 'Start Date', f"{report['start']:%Y-%m-%d}", '', '', '', ''])
    writer.writerow(['Summary', 'End Date', f"{report['end']:%Y-%m-%d}", '', '', '', ''])
    writer.writerow(['Summary', 'Total Payments', summary['total_payments'], '', '', summary['payment_amount'], ''])
    writer.writerow(['Summary', 'Total Security Deposits', summary['total_deposits'], '', '',
                     summary['deposit_amount'], ''])
    writer.writerow(['Summary', 'Total Bookings', summary['total_bookings'], '', '', summary['booking_revenue'], ''])
    writer.writerow(['Summary', 'Generated On', timezone.localtime().strftime('%Y-%m-%d %H:%M:%S'), '', '', '', ''])

    for payment in report['payments']:
        booking = payment.booking
        writer.writerow(['Payment', payment.id, _fmt(payment.paid_at), booking.guest.full_name,
                         booking.room.number, payment.amount, payment.get_status_display()])
    for deposit in report['deposits']:
        booking = deposit.booking
        writer.writerow(['Security Deposit', deposit.id, _fmt(deposit.paid_at), booking.guest.full_name,
                         booking.room.number, deposit.amount, deposit.get_status_display()])
    for booking in report['bookings']:
        writer.writerow(['Booking', booking.id, _fmt(booking.created_at), booking.guest.full_name,
                         booking.room.number, booking.total_amount, booking.get_status_display()])

    return response
