"""
Tests for report periods, period reports and dashboard figures.
"""
from datetime import date, timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from core.constants import BookingStatus, RoomStatus
from core.exceptions import ValidationError
from dashboard.monitoring import checkout_status, upcoming_checkouts
from dashboard.reports import report_period, build_report, export_report_csv, PERIODS
from dashboard.services import AnalyticsService, percent_change, occupancy_rate
from payments.models import Payment

# A Wednesday
WEDNESDAY = date(2024, 5, 15)


class TestReportPeriod:

    def test_days(self):
        assert report_period('today', WEDNESDAY) == (WEDNESDAY, WEDNESDAY)
        assert report_period('yesterday', WEDNESDAY) == (date(2024, 5, 14), date(2024, 5, 14))

    def test_weeks_start_on_sunday(self):
        assert report_period('thisWeek', WEDNESDAY) == (date(2024, 5, 12), date(2024, 5, 18))
        assert report_period('lastWeek', WEDNESDAY) == (date(2024, 5, 5), date(2024, 5, 11))
        assert report_period('thisWeek', date(2024, 5, 12))[0] == date(2024, 5, 12)

    def test_months(self):
        assert report_period('thisMonth', WEDNESDAY) == (date(2024, 5, 1), date(2024, 5, 31))
        assert report_period('lastMonth', date(2024, 3, 31)) == (date(2024, 2, 1), date(2024, 2, 29))
        assert report_period('lastMonth', date(2024, 1, 10)) == (date(2023, 12, 1), date(2023, 12, 31))

    def test_quarters(self):
        assert report_period('thisQuarter', WEDNESDAY) == (date(2024, 4, 1), date(2024, 6, 30))
        assert report_period('lastQuarter', date(2024, 2, 1)) == (date(2023, 10, 1), date(2023, 12, 31))

    def test_years(self):
        assert report_period('thisYear', WEDNESDAY) == (date(2024, 1, 1), date(2024, 12, 31))
        assert report_period('lastYear', WEDNESDAY) == (date(2023, 1, 1), date(2023, 12, 31))

    def test_every_named_period_resolves(self):
        for name in PERIODS:
            start, end = report_period(name, WEDNESDAY)
            assert start <= end

    def test_unknown_period(self):
        with pytest.raises(ValidationError) as exc_info:
            report_period('fortnight', WEDNESDAY)
        assert exc_info.value.code == "INVALID_PERIOD"


@pytest.mark.django_db
class TestBuildReport:

    def test_today_report_totals(self, booking):
        Payment.objects.create(booking=booking, amount=Decimal('300.00'), status='COMPLETED',
                               paid_at=timezone.now())
        report = build_report('today')
        assert report['summary']['total_payments'] == 1
        assert report['summary']['payment_amount'] == Decimal('300.00')
        assert report['summary']['total_bookings'] == 1
        assert report['summary']['booking_revenue'] == Decimal('300.00')

    def test_csv_export(self, booking):
        response = export_report_csv('thisMonth')
        assert response['Content-Type'] == 'text/csv'
        assert 'attachment; filename="property_report_thisMonth_' in response['Content-Disposition']
        body = response.content.decode()
        assert body.startswith('Type,Reference,Date,Guest,Room,Amount,Status')
        assert 'Grace Hopper' in body


class TestFigures:

    def test_percent_change(self):
        assert percent_change(150, 100) == 50.0
        assert percent_change(5, 0) == 100.0
        assert percent_change(0, 0) == 0.0

    def test_occupancy_rate(self):
        assert occupancy_rate(1, 4) == 25.0
        assert occupancy_rate(0, 0) == 0.0


@pytest.mark.django_db
class TestAnalytics:

    def test_overview(self, room, monthly_room, checked_in_booking):
        room.status = RoomStatus.OCCUPIED
        room.save()
        overview = AnalyticsService().overview()
        assert overview['total_rooms'] == 2
        assert overview['occupied_rooms'] == 1
        assert overview['occupancy_rate'] == 50.0
        assert overview['active_bookings'] == 1
        assert overview['unpaid_bookings'] == 1

    def test_booking_status_breakdown_lists_every_status(self, booking):
        breakdown = AnalyticsService().booking_status_breakdown()
        assert breakdown[BookingStatus.PENDING] == 1
        assert breakdown[BookingStatus.CANCELLED] == 0

    def test_revenue_trend_length(self):
        trend = AnalyticsService().revenue_trend(months=6, today=WEDNESDAY)
        assert len(trend) == 6
        assert trend[-1]['month'] == 'May 2024'
        assert trend[0]['month'] == 'Dec 2023'


@pytest.mark.django_db
class TestMonitoring:

    def test_upcoming_and_overdue(self, guest, other_guest, room, monthly_room, make_booking):
        now = timezone.now()
        leaving = make_booking(guest, room, start=now - timedelta(days=2), nights=2,
                               status=BookingStatus.CHECKED_IN)
        leaving.check_out = now + timedelta(hours=1)
        leaving.save()
        late = make_booking(other_guest, monthly_room, start=now - timedelta(days=3), nights=2,
                            status=BookingStatus.CHECKED_IN)

        upcoming = upcoming_checkouts(now)
        assert upcoming == [leaving]
        assert upcoming[0].urgency == 'critical'

        status = checkout_status(now)
        assert status['overdue'] == 1
        assert status['upcoming'] == 1
        assert status['total_critical'] == 2
        assert late.check_out < now
