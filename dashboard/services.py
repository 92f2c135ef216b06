"""
Analytics service - occupancy, revenue and booking figures for dashboards.
"""
from datetime import date, datetime, time, timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.db.models import Count, Sum, Avg, Q
from django.utils import timezone

from core.constants import (
    RoomStatus, BookingStatus, PaymentStatus, MaintenanceStatus, UserRole, DefaultLimits
)
from core.services import BaseService
from blocks.repositories import BlockRepository
from blocks.models import Block
from bookings.models import Booking
from bookings.rules import add_months
from maintenance.models import MaintenanceLog
from payments.models import Payment
from rooms.models import Room
from .models import Review

User = get_user_model()


def occupancy_rate(occupied: int, total: int) -> float:
    return round(occupied / total * 100, 1) if total > 0 else 0.0


def percent_change(current, previous) -> float:
    """% change from previous to current; 100 when starting from zero"""
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return round(float(current - previous) / float(previous) * 100, 1)


def _aware(day: date):
    return timezone.make_aware(datetime.combine(day, time.min), timezone.get_current_timezone())


def month_bounds(day: date):
    """[first day of month, first day of next month) as aware datetimes"""
    first = day.replace(day=1)
    return _aware(first), _aware(add_months(first, 1))


class AnalyticsService(BaseService):
    """Dashboard figures"""

    def overview(self, now=None) -> dict:
        now = now or timezone.now()
        room_stats = Room.objects.aggregate(
            total=Count('id'),
            available=Count('id', filter=Q(status=RoomStatus.AVAILABLE)),
            occupied=Count('id', filter=Q(status=RoomStatus.OCCUPIED)),
            maintenance=Count('id', filter=Q(status=RoomStatus.MAINTENANCE)),
            out_of_order=Count('id', filter=Q(status=RoomStatus.OUT_OF_ORDER)),
        )
        local = timezone.localtime(now)
        day_start = _aware(local.date())
        day_end = day_start + timedelta(days=1)
        live = Booking.objects.alive()

        return {
            'total_rooms': room_stats['total'],
            'available_rooms': room_stats['available'],
            'occupied_rooms': room_stats['occupied'],
            'maintenance_rooms': room_stats['maintenance'],
            'out_of_order_rooms': room_stats['out_of_order'],
            'occupancy_rate': occupancy_rate(room_stats['occupied'], room_stats['total']),
            'total_bookings': live.count(),
            'active_bookings': live.filter(status__in=BookingStatus.ACTIVE).count(),
            'pending_bookings': live.filter(status=BookingStatus.PENDING).count(),
            'todays_checkins': live.filter(
                status__in=[BookingStatus.CONFIRMED, BookingStatus.CHECKED_IN],
                check_in__gte=day_start, check_in__lt=day_end
            ).count(),
            'todays_checkouts': live.filter(
                status__in=BookingStatus.ACTIVE, check_out__gte=day_start, check_out__lt=day_end
            ).count(),
            'pending_payments': Payment.objects.filter(status=PaymentStatus.PENDING).count(),
            'unpaid_bookings': live.filter(payment__isnull=True).exclude(status=BookingStatus.CANCELLED).count(),
            'open_maintenance': MaintenanceLog.objects.filter(status__in=MaintenanceStatus.OPEN).count(),
            'total_guests': User.objects.filter(role=UserRole.GUEST).count(),
        }

    def _month_figures(self, start, end) -> dict:
        return {
            'bookings': Booking.objects.alive().filter(created_at__gte=start, created_at__lt=end)
            .exclude(status=BookingStatus.CANCELLED).count(),
            'revenue': Payment.objects.filter(
                status=PaymentStatus.COMPLETED, paid_at__gte=start, paid_at__lt=end
            ).aggregate(total=Sum('amount'))['total'] or Decimal('0'),
            'new_guests': User.objects.filter(
                role=UserRole.GUEST, date_joined__gte=start, date_joined__lt=end
            ).count(),
        }

    def monthly_metrics(self, today: date = None) -> dict:
        """This month against last month, with % change"""
        today = today or timezone.localdate()
        current_start, current_end = month_bounds(today)
        previous_start, previous_end = month_bounds(add_months(today.replace(day=1), -1))

        current = self._month_figures(current_start, current_end)
        previous = self._month_figures(previous_start, previous_end)
        return {
            'current': current,
            'previous': previous,
            'change': {key: percent_change(current[key], previous[key]) for key in current},
            'month': today.strftime('%B %Y'),
        }

    def room_type_distribution(self) -> list:
        return list(
            Room.objects.values('room_type__display_name')
            .annotate(
                count=Count('id'),
                occupied=Count('id', filter=Q(status=RoomStatus.OCCUPIED)),
            )
            .order_by('-count')
        )

    def recent_bookings(self, limit=DefaultLimits.RECENT_BOOKINGS):
        return list(
            Booking.objects.alive().select_related('guest', 'room').order_by('-created_at')[:limit]
        )

    def payment_method_breakdown(self) -> list:
        return list(
            Payment.objects.filter(status=PaymentStatus.COMPLETED)
            .values('method')
            .annotate(count=Count('id'), total=Sum('amount'))
            .order_by('-total')
        )

    def average_rating(self) -> float:
        avg = Review.objects.aggregate(avg=Avg('rating'))['avg']
        return round(avg, 1) if avg is not None else 0.0

    def block_occupancy(self) -> list:
        blocks = BlockRepository(Block).get_with_stats().order_by('name')
        return [
            {
                'id': block.id,
                'name': block.name,
                'total_rooms': block.room_count,
                'occupied_rooms': block.occupied_count,
                'available_rooms': block.available_count,
                'occupancy_rate': occupancy_rate(block.occupied_count, block.room_count),
            }
            for block in blocks
        ]

    def booking_status_breakdown(self) -> dict:
        counts = {status: 0 for status, _ in BookingStatus.CHOICES}
        for row in Booking.objects.alive().values('status').annotate(count=Count('id')):
            counts[row['status']] = row['count']
        return counts

    def revenue_trend(self, months=6, today: date = None) -> list:
        """Completed payment totals for the last `months` months, oldest first"""
        today = today or timezone.localdate()
        first = today.replace(day=1)
        trend = []
        for offset in range(months - 1, -1, -1):
            month_start = add_months(first, -offset)
            start, end = month_bounds(month_start)
            total = Payment.objects.filter(
                status=PaymentStatus.COMPLETED, paid_at__gte=start, paid_at__lt=end
            ).aggregate(total=Sum('amount'))['total'] or Decimal('0')
            trend.append({'month': month_start.strftime('%b %Y'), 'revenue': total})
        return trend
