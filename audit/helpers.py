"""
Recording helpers for the audit trail.

Views and commands call these after a service operation succeeds; a failure to
write the entry is logged and never undoes the operation itself.
"""
import logging

from django.db import DatabaseError

from audit.models import AuditLog
from core.constants import AuditAction, AuditResource

logger = logging.getLogger(__name__)

USER_AGENT_MAX_LENGTH = 500

BOOKING_LIFECYCLE_VERBS = {
    AuditAction.SOFT_DELETE: 'Moved booking to trash',
    AuditAction.RESTORE: 'Restored booking',
    AuditAction.DELETE: 'Permanently deleted booking',
}


def get_client_ip(request):
    """First address of X-Forwarded-For when behind a proxy, else REMOTE_ADDR"""
    forwarded = request.META.get('HTTP_X_FORWARDED_FOR')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR')


def _request_meta(request):
    if request is None:
        return None, ''
    return get_client_ip(request), request.META.get('HTTP_USER_AGENT', '')[:USER_AGENT_MAX_LENGTH]


def log_action(user, action, resource_type, resource_id, description, request=None, metadata=None):
    """
    Append an entry to the audit trail.

    Anonymous users and scheduled jobs (user=None) are recorded as "System".
    Returns the AuditLog, or None when the write failed.
    """
    if user is not None and not getattr(user, 'is_authenticated', False):
        user = None
    ip_address, user_agent = _request_meta(request)

    try:
        entry = AuditLog.objects.create(
            user=user,
            action=action,
            resource_type=resource_type,
            resource_id=resource_id,
            description=description,
            ip_address=ip_address,
            user_agent=user_agent,
            metadata=metadata or {},
        )
    except DatabaseError:
        logger.exception(f"Could not record audit entry {action} {resource_type} #{resource_id}")
        return None

    logger.info(f"Audit: {user.username if user else 'system'} {action} {resource_type} #{resource_id}")
    return entry


def log_login(user, request):
    return log_action(user, AuditAction.LOGIN, AuditResource.USER, user.id,
                      f"{user.username} signed in", request=request)


def log_login_failed(username, request):
    return log_action(None, AuditAction.LOGIN, AuditResource.USER, None,
                      f"Failed sign-in for '{username}'", request=request,
                      metadata={'success': False, 'username': username})


def log_logout(user, request):
    return log_action(user, AuditAction.LOGOUT, AuditResource.USER, user.id,
                      f"{user.username} signed out", request=request)


def log_block_change(user, block, created, request=None):
    verb = 'Created' if created else 'Updated'
    return log_action(
        user,
        AuditAction.CREATE if created else AuditAction.UPDATE,
        AuditResource.BLOCK,
        block.id,
        f"{verb} block {block.name}",
        request=request,
    )


def log_room_status_change(user, room, old_status, new_status, request=None):
    return log_action(
        user, AuditAction.STATUS_CHANGE, AuditResource.ROOM, room.id,
        f"Room {room.number} went from {old_status} to {new_status}",
        request=request,
        metadata={'old_status': old_status, 'new_status': new_status},
    )


def log_booking_created(user, booking, request=None):
    return log_action(
        user, AuditAction.CREATE, AuditResource.BOOKING, booking.id,
        f"Booked room {booking.room.number} for {booking.guest.full_name}, "
        f"{booking.check_in:%Y-%m-%d} to {booking.check_out:%Y-%m-%d}",
        request=request,
        metadata={
            'guest_id': booking.guest_id,
            'room_id': booking.room_id,
            'total_amount': str(booking.total_amount),
        },
    )


def log_booking_status_change(user, booking, old_status, new_status, request=None):
    return log_action(
        user, AuditAction.STATUS_CHANGE, AuditResource.BOOKING, booking.id,
        f"Booking #{booking.id} went from {old_status} to {new_status}",
        request=request,
        metadata={'old_status': old_status, 'new_status': new_status, 'room_id': booking.room_id},
    )


def log_booking_extension(user, booking, periods, additional_amount, request=None):
    return log_action(
        user, AuditAction.EXTEND, AuditResource.BOOKING, booking.id,
        f"Extended booking #{booking.id} by {periods} period(s) until {booking.check_out:%Y-%m-%d %H:%M}",
        request=request,
        metadata={'periods': periods, 'additional_amount': str(additional_amount)},
    )


def log_booking_deletion(user, booking, action, request=None):
    """Trash, restore or permanent removal of a booking"""
    verb = BOOKING_LIFECYCLE_VERBS.get(action, action)
    return log_action(
        user, action, AuditResource.BOOKING, booking.id,
        f"{verb} #{booking.id}",
        request=request,
        metadata={'guest_id': booking.guest_id, 'room_id': booking.room_id},
    )


def log_payment(user, payment, request=None):
    return log_action(
        user, AuditAction.PAYMENT, AuditResource.PAYMENT, payment.id,
        f"{payment.get_status_display()} payment of {payment.amount} "
        f"by {payment.get_method_display()} for booking #{payment.booking_id}",
        request=request,
        metadata={'booking_id': payment.booking_id, 'amount': str(payment.amount),
                  'method': payment.method, 'status': payment.status},
    )


def log_deposit(user, deposit, refunded=False, request=None):
    if refunded:
        action = AuditAction.REFUND
        description = (f"Settled deposit of booking #{deposit.booking_id} as {deposit.get_status_display()}: "
                       f"refunded {deposit.refund_amount}, deducted {deposit.deduction_amount}")
    else:
        action = AuditAction.DEPOSIT
        description = f"Collected deposit of {deposit.amount} for booking #{deposit.booking_id}"
    return log_action(
        user, action, AuditResource.DEPOSIT, deposit.id, description,
        request=request,
        metadata={'booking_id': deposit.booking_id, 'amount': str(deposit.amount), 'status': deposit.status},
    )


def log_maintenance_change(user, log, created=False, request=None):
    room_number = log.room.number
    if created:
        action = AuditAction.CREATE
        description = f"Reported {log.get_type_display().lower()} on room {room_number}, priority {log.priority}"
    else:
        action = AuditAction.STATUS_CHANGE
        description = f"Maintenance #{log.id} on room {room_number} is {log.get_status_display()}"
    return log_action(
        user, action, AuditResource.MAINTENANCE, log.id, description,
        request=request,
        metadata={'room_id': log.room_id, 'status': log.status, 'priority': log.priority},
    )


def log_user_change(user, target, description, request=None, created=False):
    return log_action(
        user,
        AuditAction.CREATE if created else AuditAction.UPDATE,
        AuditResource.USER,
        target.id,
        description,
        request=request,
        metadata={'role': target.role},
    )
