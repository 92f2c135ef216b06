"""
Tests for the pure booking rules (no database).
"""
from datetime import date, datetime, timedelta, timezone as dt_timezone
from decimal import Decimal
from types import SimpleNamespace

import pytest
from django.test import override_settings

from bookings import rules
from core.constants import BookingStatus, PricingPeriod, RoomStatus, Urgency


def _aware(*args):
    return datetime(*args, tzinfo=dt_timezone.utc)


def _booking(status, check_in, check_out, deleted_at=None):
    return SimpleNamespace(id=1, status=status, check_in=check_in, check_out=check_out, deleted_at=deleted_at)


class TestCalendarArithmetic:

    def test_add_months_clamps_to_end_of_month(self):
        assert rules.add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
        assert rules.add_months(date(2023, 1, 31), 1) == date(2023, 2, 28)

    def test_add_months_crosses_year_boundary(self):
        assert rules.add_months(date(2024, 11, 15), 3) == date(2025, 2, 15)
        assert rules.add_months(date(2024, 2, 15), -3) == date(2023, 11, 15)

    @pytest.mark.parametrize("period,expected", [
        (PricingPeriod.NIGHT, date(2024, 1, 12)),
        (PricingPeriod.DAY, date(2024, 1, 12)),
        (PricingPeriod.WEEK, date(2024, 1, 24)),
        (PricingPeriod.MONTH, date(2024, 3, 10)),
        (PricingPeriod.YEAR, date(2026, 1, 10)),
    ])
    def test_advance_by_two_periods(self, period, expected):
        assert rules.advance(date(2024, 1, 10), 2, period) == expected


class TestStayWindow:

    @override_settings(TIME_ZONE='UTC', CHECK_IN_HOUR=15, CHECK_OUT_HOUR=11)
    def test_nightly_window_uses_check_in_and_check_out_hours(self):
        check_in, check_out = rules.stay_window(date(2024, 3, 1), 2, PricingPeriod.NIGHT)
        assert check_in == _aware(2024, 3, 1, 15)
        assert check_out == _aware(2024, 3, 3, 11)

    @override_settings(TIME_ZONE='UTC', CHECK_IN_HOUR=15, CHECK_OUT_HOUR=11)
    def test_monthly_window(self):
        check_in, check_out = rules.stay_window(date(2024, 1, 31), 1, PricingPeriod.MONTH)
        assert check_out == _aware(2024, 2, 29, 11)

    def test_extension_keeps_time_of_day(self):
        check_out = _aware(2024, 3, 3, 11)
        assert rules.advance_checkout(check_out, 1, PricingPeriod.WEEK) == _aware(2024, 3, 10, 11)

    def test_periods_between(self):
        assert rules.periods_between(date(2024, 1, 1), date(2024, 1, 4), PricingPeriod.NIGHT) == 3
        assert rules.periods_between(date(2024, 1, 1), date(2024, 2, 15), PricingPeriod.MONTH) == 2
        assert rules.periods_between(date(2024, 1, 1), date(2024, 1, 1), PricingPeriod.NIGHT) == 1


class TestAmounts:

    def test_booking_total_is_price_times_periods(self):
        assert rules.booking_total(Decimal('100'), 3) == Decimal('300.00')

    def test_booking_total_accepts_floats(self):
        assert rules.booking_total(19.99, 2) == Decimal('39.98')


class TestCheckout:

    @pytest.mark.parametrize("hours,level", [
        (-5, Urgency.CRITICAL),
        (1.5, Urgency.CRITICAL),
        (2, Urgency.CRITICAL),
        (5, Urgency.HIGH),
        (10, Urgency.MEDIUM),
        (20, Urgency.LOW),
    ])
    def test_urgency_levels(self, hours, level):
        assert rules.checkout_urgency(hours) == level

    def test_hours_until_checkout_goes_negative(self):
        now = _aware(2024, 3, 3, 13)
        assert rules.hours_until_checkout(_aware(2024, 3, 3, 11), now) == -2

    def test_only_checked_in_bookings_are_overdue(self):
        now = _aware(2024, 3, 5)
        past = _aware(2024, 3, 4)
        assert rules.is_overdue(_booking(BookingStatus.CHECKED_IN, past - timedelta(days=2), past), now)
        assert not rules.is_overdue(_booking(BookingStatus.CONFIRMED, past - timedelta(days=2), past), now)

    def test_checkout_info(self):
        now = _aware(2024, 3, 3, 10)
        info = rules.checkout_info(_booking(BookingStatus.CHECKED_IN, _aware(2024, 3, 1, 15),
                                            _aware(2024, 3, 3, 11)), now)
        assert info.hours_remaining == 1.0
        assert info.urgency == Urgency.CRITICAL
        assert info.is_overdue is False
        assert info.due_soon is True

        later = rules.checkout_info(_booking(BookingStatus.CHECKED_IN, _aware(2024, 3, 1, 15),
                                             _aware(2024, 3, 10, 11)), now)
        assert later.due_soon is False
        assert later.urgency == Urgency.LOW

    def test_stay_progress_is_clamped(self):
        start, end = _aware(2024, 3, 1), _aware(2024, 3, 5)
        assert rules.stay_progress(start, end, _aware(2024, 2, 1)) == 0.0
        assert rules.stay_progress(start, end, _aware(2024, 3, 4)) == 0.75
        assert rules.stay_progress(start, end, _aware(2024, 4, 1)) == 1.0
        assert rules.stay_progress(start, start, start) == 1.0


class TestStatusRules:

    def test_terminal_statuses_are_final(self):
        assert not rules.can_change_status(BookingStatus.CHECKED_OUT, BookingStatus.CHECKED_IN)
        assert not rules.can_change_status(BookingStatus.CANCELLED, BookingStatus.CONFIRMED)
        assert rules.can_change_status(BookingStatus.CANCELLED, BookingStatus.CANCELLED)
        assert rules.can_change_status(BookingStatus.PENDING, BookingStatus.CHECKED_IN)

    def test_room_status_for_booking_status(self):
        assert rules.room_status_for_booking_status(BookingStatus.CHECKED_IN) == RoomStatus.OCCUPIED
        assert rules.room_status_for_booking_status(BookingStatus.CHECKED_OUT) == RoomStatus.AVAILABLE

    def test_holds_room(self):
        now = _aware(2024, 3, 2)
        window = (_aware(2024, 3, 1), _aware(2024, 3, 4))
        later = (_aware(2024, 3, 10), _aware(2024, 3, 12))
        assert rules.holds_room(_booking(BookingStatus.CHECKED_IN, *later), now)
        assert rules.holds_room(_booking(BookingStatus.CONFIRMED, *window), now)
        assert not rules.holds_room(_booking(BookingStatus.CONFIRMED, *later), now)
        assert not rules.holds_room(_booking(BookingStatus.CHECKED_OUT, *window), now)
        assert not rules.holds_room(_booking(BookingStatus.CHECKED_IN, *window, deleted_at=now), now)

    def test_windows_overlap_is_half_open(self):
        a = (_aware(2024, 3, 1), _aware(2024, 3, 3))
        assert rules.windows_overlap(*a, _aware(2024, 3, 2), _aware(2024, 3, 5))
        assert not rules.windows_overlap(*a, _aware(2024, 3, 3), _aware(2024, 3, 5))

    def test_extension_note(self):
        note = rules.extension_note(date(2024, 3, 3), 2, "")
        assert note == "[EXTENSION] 2024-03-03: Extended by 2 period(s). Reason: Not specified"
