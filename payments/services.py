"""
Payment and security deposit services.
"""
from decimal import Decimal

from django.db import transaction
from django.db.models import Sum, Count, Q
from django.utils import timezone

from core.constants import (
    BookingStatus, PaymentStatus, PaymentMethod, DepositStatus, RoomStatus, NotificationType
)
from core.dto import PaymentDTO, DepositDTO, DepositRefundDTO
from core.exceptions import NotFoundError, ValidationError, BusinessLogicError, ConflictError
from core.services import BaseService
from core.validators import PaymentValidator, DepositValidator
from bookings.models import Booking
from notifications.services import notify
from .models import Payment, SecurityDeposit


def _get_live_booking(booking_id) -> Booking:
    booking = Booking.objects.select_related('guest', 'room').filter(id=booking_id).first()
    if not booking:
        raise NotFoundError(resource_type="Booking", resource_id=booking_id)
    if booking.is_deleted:
        raise BusinessLogicError("Booking is in the trash", code="BOOKING_DELETED")
    return booking


class PaymentService(BaseService):
    """Service for booking payments"""

    def get_payment(self, payment_id: int) -> Payment:
        payment = Payment.objects.select_related('booking', 'booking__guest', 'booking__room').filter(
            id=payment_id).first()
        if not payment:
            raise NotFoundError(resource_type="Payment", resource_id=payment_id)
        return payment

    def record_payment(self, dto: PaymentDTO, user) -> Payment:
        """
        Record the payment of a booking.

        The payment is COMPLETED immediately. A PENDING booking becomes
        CONFIRMED and its room OCCUPIED.

        Raises:
            PermissionDeniedError: If user is not a staff member
            ValidationError: Amount not positive
            ConflictError: The booking already has a payment
        """
        self.require_staff(user, "record payments")
        PaymentValidator.validate_amount(dto.amount)
        if dto.method not in dict(PaymentMethod.CHOICES):
            raise ValidationError(f"Unknown payment method: {dto.method}", code="INVALID_METHOD")

        with transaction.atomic():
            booking = _get_live_booking(dto.booking_id)
            booking = Booking.objects.select_for_update().get(id=booking.id)
            if booking.status == BookingStatus.CANCELLED:
                raise BusinessLogicError("Cannot record a payment for a cancelled booking",
                                         code="BOOKING_CANCELLED")
            if Payment.objects.filter(booking=booking).exists():
                raise ConflictError(
                    "Payment already exists for this booking",
                    code="PAYMENT_EXISTS",
                    details={'booking_id': booking.id}
                )

            payment = Payment.objects.create(
                booking=booking,
                amount=dto.amount,
                method=dto.method,
                status=PaymentStatus.COMPLETED,
                transaction_id=(dto.transaction_id or '').strip(),
                notes=(dto.notes or '').strip(),
                paid_at=timezone.now(),
            )

            if booking.status == BookingStatus.PENDING:
                booking.status = BookingStatus.CONFIRMED
                booking.save(update_fields=['status', 'updated_at'])
                room = booking.room
                if room.status not in RoomStatus.LOCKED:
                    room.status = RoomStatus.OCCUPIED
                    room.save(update_fields=['status', 'updated_at'])

            notify(
                booking.guest,
                NotificationType.PAYMENT_RECEIVED,
                "Payment received",
                f"We received your payment of {payment.amount} for booking #{booking.id} (room {booking.room.number}).",
                booking=booking,
            )
            self.log_info("Payment recorded", payment_id=payment.id, booking_id=booking.id,
                          amount=str(payment.amount), user=user.username)
            return payment

    def update_status(self, payment: Payment, status: str, user, failure_reason: str = "") -> Payment:
        """paid_at follows the status: set on COMPLETED, cleared otherwise"""
        self.require_staff(user, "update payments")
        if status not in dict(PaymentStatus.CHOICES):
            raise ValidationError(f"Unknown payment status: {status}", code="INVALID_STATUS")

        with transaction.atomic():
            payment.status = status
            payment.paid_at = timezone.now() if status == PaymentStatus.COMPLETED else None
            if status == PaymentStatus.FAILED:
                payment.failure_reason = (failure_reason or '').strip()
            payment.save()
            self.log_info("Payment status changed", payment_id=payment.id, status=status, user=user.username)
            return payment

    def unpaid_bookings(self):
        """Live bookings without a payment that are not cancelled"""
        return (
            Booking.objects.alive()
            .filter(payment__isnull=True)
            .exclude(status=BookingStatus.CANCELLED)
            .select_related('guest', 'room')
            .order_by('check_in')
        )

    def search(self, status=None, method=None, q=None):
        queryset = Payment.objects.select_related('booking', 'booking__guest', 'booking__room')
        if status:
            queryset = queryset.filter(status=status)
        if method:
            queryset = queryset.filter(method=method)
        if q:
            queryset = queryset.filter(
                Q(transaction_id__icontains=q) | Q(booking__guest__first_name__icontains=q) |
                Q(booking__guest__last_name__icontains=q) | Q(booking__room__number__icontains=q)
            )
        return queryset.order_by('-created_at')

    def payment_summary(self) -> dict:
        """Totals per status and per method"""
        by_status = {
            row['status']: {'count': row['count'], 'total': row['total'] or Decimal('0')}
            for row in Payment.objects.values('status').annotate(count=Count('id'), total=Sum('amount'))
        }
        by_method = {
            row['method']: {'count': row['count'], 'total': row['total'] or Decimal('0')}
            for row in Payment.objects.filter(status=PaymentStatus.COMPLETED)
            .values('method').annotate(count=Count('id'), total=Sum('amount'))
        }
        completed = by_status.get(PaymentStatus.COMPLETED, {}).get('total', Decimal('0'))
        pending = by_status.get(PaymentStatus.PENDING, {}).get('total', Decimal('0'))
        return {
            'by_status': by_status,
            'by_method': by_method,
            'total_received': completed,
            'total_pending': pending,
            'total_payments': sum(v['count'] for v in by_status.values()),
            'unpaid_bookings': self.unpaid_bookings().count(),
        }


class DepositService(BaseService):
    """Service for security deposits"""

    def get_deposit(self, deposit_id: int) -> SecurityDeposit:
        deposit = SecurityDeposit.objects.select_related('booking', 'booking__guest', 'booking__room').filter(
            id=deposit_id).first()
        if not deposit:
            raise NotFoundError(resource_type="SecurityDeposit", resource_id=deposit_id)
        return deposit

    def collect(self, dto: DepositDTO, user) -> SecurityDeposit:
        """
        Record a security deposit as PAID.

        Raises:
            ValidationError: Amount not positive
            ConflictError: The booking already has a deposit
        """
        self.require_staff(user, "collect deposits")
        PaymentValidator.validate_amount(dto.amount, "Deposit amount")

        with transaction.atomic():
            booking = _get_live_booking(dto.booking_id)
            if SecurityDeposit.objects.filter(booking=booking).exists():
                raise ConflictError(
                    "A security deposit has already been recorded for this booking",
                    code="DEPOSIT_EXISTS",
                    details={'booking_id': booking.id}
                )
            deposit = SecurityDeposit.objects.create(
                booking=booking,
                amount=dto.amount,
                method=dto.method,
                status=DepositStatus.PAID,
                transaction_id=(dto.transaction_id or '').strip(),
                paid_at=timezone.now(),
                processed_by=user,
            )
            self.log_info("Deposit collected", deposit_id=deposit.id, booking_id=booking.id,
                          amount=str(deposit.amount), user=user.username)
            return deposit

    def refund(self, deposit: SecurityDeposit, dto: DepositRefundDTO, user) -> SecurityDeposit:
        """
        Settle a PAID deposit.

        refund + deduction must equal the deposit amount. The resulting status is
        PARTIALLY_REFUNDED, FORFEITED (nothing refunded) or REFUNDED (nothing deducted).
        """
        self.require_staff(user, "refund deposits")
        if deposit.status != DepositStatus.PAID:
            raise BusinessLogicError(
                f"Deposit is {deposit.get_status_display().lower()} and cannot be refunded",
                code="DEPOSIT_NOT_PAID"
            )
        refund_amount = Decimal(str(dto.refund_amount or 0))
        deduction_amount = Decimal(str(dto.deduction_amount or 0))
        DepositValidator.validate_refund(deposit.amount, refund_amount, deduction_amount, dto.deduction_reason)

        if deduction_amount > 0 and refund_amount > 0:
            status = DepositStatus.PARTIALLY_REFUNDED
        elif deduction_amount > 0:
            status = DepositStatus.FORFEITED
        else:
            status = DepositStatus.REFUNDED

        with transaction.atomic():
            deposit.refund_amount = refund_amount
            deposit.deduction_amount = deduction_amount
            deposit.deduction_reason = (dto.deduction_reason or '').strip()
            deposit.damage_report = (dto.damage_report or '').strip()
            deposit.status = status
            deposit.refunded_at = timezone.now()
            deposit.processed_by = user
            deposit.save()
            self.log_info("Deposit settled", deposit_id=deposit.id, status=status,
                          refund=str(refund_amount), deduction=str(deduction_amount), user=user.username)
            return deposit

    def eligible_bookings(self):
        """Live, not cancelled bookings that have no deposit yet"""
        return (
            Booking.objects.alive()
            .filter(security_deposit__isnull=True)
            .exclude(status=BookingStatus.CANCELLED)
            .select_related('guest', 'room')
            .order_by('-check_in')
        )

    def deposit_summary(self) -> dict:
        totals = SecurityDeposit.objects.aggregate(
            total=Sum('amount'),
            held=Sum('amount', filter=Q(status=DepositStatus.PAID)),
            refunded=Sum('refund_amount', filter=Q(status__in=DepositStatus.SETTLED)),
            deducted=Sum('deduction_amount', filter=Q(status__in=DepositStatus.SETTLED)),
            count=Count('id'),
        )
        return {key: (value if value is not None else Decimal('0')) for key, value in totals.items()}
