"""
Notification service - records notifications and delivers them by email.

SMS delivery is not wired up; SMS notifications are recorded and stay PENDING.
"""
import logging
import math

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.mail import send_mail
from django.db import transaction
from django.db.models import Exists, OuterRef
from django.utils import timezone

from core.constants import NotificationType, NotificationChannel, NotificationStatus, UserRole
from common.utils import get_bool_setting, get_setting
from bookings.models import Booking
from bookings.rules import stay_progress
from .models import Notification

logger = logging.getLogger(__name__)
User = get_user_model()

EMAIL_CHANNELS = [NotificationChannel.EMAIL, NotificationChannel.EMAIL_SMS]


def _deliver_email(notification):
    user = notification.user
    if not get_bool_setting('EMAIL_NOTIFICATIONS') or not user.email:
        return
    try:
        send_mail(
            subject=notification.title,
            message=notification.message,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[user.email],
        )
        notification.status = NotificationStatus.SENT
        notification.sent_at = timezone.now()
    except Exception as e:
        logger.error(f"Failed to send notification #{notification.id} to {user.email}: {e}", exc_info=True)
        notification.status = NotificationStatus.FAILED
        notification.error = str(e)[:1000]
    notification.save(update_fields=['status', 'sent_at', 'error'])


def notify(user, type, title, message, booking=None, channel=NotificationChannel.EMAIL):
    """
    Record a notification for `user` and send it when email is enabled.

    Returns the Notification.
    """
    notification = Notification.objects.create(
        user=user,
        booking=booking,
        type=type,
        title=title,
        message=message,
        channel=channel,
    )
    logger.info(f"Notification {type} recorded for user {user.id}")
    if channel in EMAIL_CHANNELS:
        # Send after commit so a rolled back booking does not email anyone
        transaction.on_commit(lambda: _deliver_email(notification))
    return notification


def mark_read(notification):
    if notification.read_at is None:
        notification.read_at = timezone.now()
        notification.save(update_fields=['read_at'])
    return notification


def mark_all_read(user) -> int:
    return Notification.objects.filter(user=user, read_at__isnull=True).update(read_at=timezone.now())


def reminder_candidates(now=None):
    """
    Live CONFIRMED / CHECKED_IN bookings that have reached the reminder
    threshold of their stay and have not been reminded yet.
    """
    now = now or timezone.now()
    threshold = getattr(settings, 'CHECKOUT_REMINDER_THRESHOLD', 0.75)
    reminded = Notification.objects.filter(
        booking=OuterRef('pk'),
        type=NotificationType.SEVENTY_FIVE_PERCENT_STAY,
    )
    bookings = (
        Booking.objects.active()
        .filter(check_in__lte=now, check_out__gt=now)
        .exclude(Exists(reminded))
        .select_related('guest', 'room')
    )
    return [b for b in bookings if stay_progress(b.check_in, b.check_out, now) >= threshold]


def send_checkout_reminders(now=None, dry_run=False) -> int:
    """Record a checkout reminder for every eligible booking. Returns the count."""
    now = now or timezone.now()
    candidates = reminder_candidates(now)
    if dry_run:
        return len(candidates)

    app_url = get_setting('APP_URL', '')
    for booking in candidates:
        notify(
            booking.guest,
            NotificationType.SEVENTY_FIVE_PERCENT_STAY,
            f"Your stay in room {booking.room.number} ends soon",
            (
                f"Dear {booking.guest.full_name},\n\n"
                f"Your check-out is scheduled for {timezone.localtime(booking.check_out):%Y-%m-%d %H:%M}. "
                f"If you would like to extend your stay, please contact the front desk.\n\n{app_url}"
            ),
            booking=booking,
        )
    if candidates:
        notify_staff_reminder_summary(candidates, now)
    logger.info(f"Checkout reminders sent: {len(candidates)}")
    return len(candidates)


def _days_remaining(booking, now) -> int:
    return max(math.ceil((booking.check_out - now).total_seconds() / 86400), 0)


def notify_staff_reminder_summary(bookings, now):
    """Tell every active front-desk user which guests were just reminded."""
    lines = []
    for booking in bookings:
        days = _days_remaining(booking, now)
        lines.append(
            f"- {booking.guest.full_name} - Room {booking.room.number} "
            f"({days} day{'s' if days != 1 else ''} remaining)"
        )
    count = len(bookings)
    message = (
        f"Checkout reminder notifications sent to {count} guest{'s' if count != 1 else ''}:\n\n"
        + "\n".join(lines)
    )
    staff = User.objects.filter(role__in=UserRole.STAFF_ROLES, is_active=True)
    for user in staff:
        notify(user, NotificationType.GENERAL_ANNOUNCEMENT, "Checkout reminders sent", message)
    return len(staff)


def send_welcome(guest, temporary_password):
    """Welcome a new guest account and hand over its temporary password."""
    app_url = get_setting('APP_URL', '')
    return notify(
        guest,
        NotificationType.WELCOME,
        f"Welcome to {get_setting('SITE_NAME')}",
        (
            f"Dear {guest.full_name},\n\n"
            f"An account has been created for you.\n"
            f"Username: {guest.username}\n"
            f"Temporary password: {temporary_password}\n\n"
            f"Please sign in and change your password. {app_url}"
        ),
    )
