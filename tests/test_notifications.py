"""
Tests for notification recording, delivery and checkout reminders.
"""
from datetime import timedelta

import pytest
from django.core import mail
from django.utils import timezone

from common.utils import set_setting
from core.constants import BookingStatus, NotificationType, NotificationStatus
from notifications.models import Notification
from notifications.services import notify, mark_read, mark_all_read, reminder_candidates, send_checkout_reminders


@pytest.mark.django_db
class TestNotify:

    def test_notification_is_recorded_without_email_by_default(self, guest, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            notification = notify(guest, NotificationType.GENERAL_ANNOUNCEMENT, "Hello", "Welcome")
        notification.refresh_from_db()
        assert notification.status == NotificationStatus.PENDING
        assert len(mail.outbox) == 0

    def test_email_sent_when_enabled(self, guest, django_capture_on_commit_callbacks):
        set_setting('EMAIL_NOTIFICATIONS', 'true')
        with django_capture_on_commit_callbacks(execute=True):
            notification = notify(guest, NotificationType.GENERAL_ANNOUNCEMENT, "Hello", "Welcome")
        notification.refresh_from_db()
        assert notification.status == NotificationStatus.SENT
        assert notification.sent_at is not None
        assert mail.outbox[0].to == [guest.email]

    def test_mark_read(self, guest):
        first = notify(guest, NotificationType.GENERAL_ANNOUNCEMENT, "One", "1")
        notify(guest, NotificationType.GENERAL_ANNOUNCEMENT, "Two", "2")
        mark_read(first)
        assert first.is_read
        assert mark_all_read(guest) == 1
        assert not Notification.objects.filter(user=guest, read_at__isnull=True).exists()


@pytest.mark.django_db
class TestCheckoutReminders:

    def _stay(self, make_booking, guest, room, elapsed_days, status=BookingStatus.CHECKED_IN):
        now = timezone.now()
        return make_booking(guest, room, start=now - timedelta(days=elapsed_days), nights=4, status=status)

    def test_candidates_at_threshold(self, guest, other_guest, room, monthly_room, make_booking):
        late = self._stay(make_booking, guest, room, 3.5)
        self._stay(make_booking, other_guest, monthly_room, 1)
        assert reminder_candidates() == [late]

    def test_pending_bookings_are_not_reminded(self, guest, room, make_booking):
        self._stay(make_booking, guest, room, 3.5, status=BookingStatus.PENDING)
        assert reminder_candidates() == []

    def test_reminder_is_sent_once(self, guest, room, make_booking):
        booking = self._stay(make_booking, guest, room, 3.5)
        assert send_checkout_reminders(dry_run=True) == 1
        assert not Notification.objects.exists()

        assert send_checkout_reminders() == 1
        notification = Notification.objects.get(booking=booking)
        assert notification.type == NotificationType.SEVENTY_FIVE_PERCENT_STAY
        assert send_checkout_reminders() == 0

    def test_removed_bookings_do_not_block_later_reminders(self, guest, other_guest, room, monthly_room,
                                                           make_booking):
        reminded = self._stay(make_booking, guest, room, 3.5)
        send_checkout_reminders()
        reminded.delete()
        assert Notification.objects.filter(booking__isnull=True,
                                           type=NotificationType.SEVENTY_FIVE_PERCENT_STAY).exists()

        later = self._stay(make_booking, other_guest, monthly_room, 3.5)
        assert reminder_candidates() == [later]

    def test_staff_receive_a_summary(self, guest, room, staff, manager, make_booking):
        self._stay(make_booking, guest, room, 3.5)
        send_checkout_reminders()

        summaries = Notification.objects.filter(type=NotificationType.GENERAL_ANNOUNCEMENT)
        assert sorted(n.user.username for n in summaries) == ['manager', 'staff']
        assert "sent to 1 guest:" in summaries[0].message
        assert "Grace Hopper - Room 101" in summaries[0].message

    def test_no_summary_without_reminders(self, staff):
        assert send_checkout_reminders() == 0
        assert not Notification.objects.exists()
