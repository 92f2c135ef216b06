"""
Tests for PaymentService and DepositService.
"""
from decimal import Decimal

import pytest
from django.urls import reverse
from django.utils import timezone

from core.constants import BookingStatus, RoomStatus, PaymentStatus, DepositStatus, NotificationType
from core.dto import PaymentDTO, DepositDTO, DepositRefundDTO
from core.exceptions import ValidationError, ConflictError, BusinessLogicError, PermissionDeniedError
from notifications.models import Notification
from payments.models import Payment
from payments.receipts import generate_payment_receipt_pdf, receipt_filename, receipt_number
from payments.services import PaymentService, DepositService


def _payment(booking, amount='300.00', method='CASH'):
    return PaymentDTO(booking_id=booking.id, amount=Decimal(amount), method=method)


@pytest.mark.django_db
class TestRecordPayment:

    def test_payment_confirms_pending_booking(self, staff, booking, room):
        payment = PaymentService().record_payment(_payment(booking), staff)

        assert payment.status == PaymentStatus.COMPLETED
        assert payment.paid_at is not None
        booking.refresh_from_db()
        room.refresh_from_db()
        assert booking.status == BookingStatus.CONFIRMED
        assert room.status == RoomStatus.OCCUPIED
        assert Notification.objects.filter(user=booking.guest, type=NotificationType.PAYMENT_RECEIVED).exists()

    def test_second_payment_conflicts(self, staff, booking):
        service = PaymentService()
        service.record_payment(_payment(booking), staff)
        with pytest.raises(ConflictError) as exc_info:
            service.record_payment(_payment(booking), staff)
        assert exc_info.value.code == "PAYMENT_EXISTS"
        assert Payment.objects.filter(booking=booking).count() == 1

    def test_amount_must_be_positive(self, staff, booking):
        with pytest.raises(ValidationError) as exc_info:
            PaymentService().record_payment(_payment(booking, amount='0'), staff)
        assert exc_info.value.code == "INVALID_AMOUNT"

    def test_unknown_method(self, staff, booking):
        with pytest.raises(ValidationError):
            PaymentService().record_payment(_payment(booking, method='GOLD'), staff)

    def test_cancelled_booking_cannot_be_paid(self, staff, booking):
        booking.status = BookingStatus.CANCELLED
        booking.save()
        with pytest.raises(BusinessLogicError):
            PaymentService().record_payment(_payment(booking), staff)

    def test_deleted_booking_cannot_be_paid(self, staff, booking):
        booking.deleted_at = timezone.now()
        booking.save()
        with pytest.raises(BusinessLogicError) as exc_info:
            PaymentService().record_payment(_payment(booking), staff)
        assert exc_info.value.code == "BOOKING_DELETED"

    def test_guests_cannot_record_payments(self, guest, booking):
        with pytest.raises(PermissionDeniedError):
            PaymentService().record_payment(_payment(booking), guest)


@pytest.mark.django_db
class TestPaymentStatus:

    def test_paid_at_follows_status(self, staff, booking):
        service = PaymentService()
        payment = service.record_payment(_payment(booking), staff)

        payment = service.update_status(payment, PaymentStatus.FAILED, staff, failure_reason="Card declined")
        assert payment.paid_at is None
        assert payment.failure_reason == "Card declined"

        payment = service.update_status(payment, PaymentStatus.COMPLETED, staff)
        assert payment.paid_at is not None

    def test_unknown_status(self, staff, booking):
        payment = PaymentService().record_payment(_payment(booking), staff)
        with pytest.raises(ValidationError):
            PaymentService().update_status(payment, "LOST", staff)

    def test_summary_and_unpaid_bookings(self, staff, guest, room, make_booking):
        paid = make_booking(guest, room)
        unpaid = make_booking(guest, room)
        make_booking(guest, room, status=BookingStatus.CANCELLED)
        service = PaymentService()
        service.record_payment(_payment(paid, amount='250.00'), staff)

        assert list(service.unpaid_bookings()) == [unpaid]
        summary = service.payment_summary()
        assert summary['total_received'] == Decimal('250.00')
        assert summary['total_payments'] == 1
        assert summary['unpaid_bookings'] == 1


@pytest.mark.django_db
class TestDeposits:

    def _collect(self, staff, booking, amount='200.00'):
        return DepositService().collect(DepositDTO(booking_id=booking.id, amount=Decimal(amount)), staff)

    def test_collect_marks_deposit_paid(self, staff, booking):
        deposit = self._collect(staff, booking)
        assert deposit.status == DepositStatus.PAID
        assert deposit.processed_by == staff

    def test_one_deposit_per_booking(self, staff, booking):
        self._collect(staff, booking)
        with pytest.raises(ConflictError) as exc_info:
            self._collect(staff, booking)
        assert exc_info.value.code == "DEPOSIT_EXISTS"

    def test_full_refund(self, staff, booking):
        deposit = self._collect(staff, booking)
        deposit = DepositService().refund(deposit, DepositRefundDTO(refund_amount=Decimal('200.00')), staff)
        assert deposit.status == DepositStatus.REFUNDED
        assert deposit.refunded_at is not None

    def test_partial_refund_needs_reason(self, staff, booking):
        deposit = self._collect(staff, booking)
        dto = DepositRefundDTO(refund_amount=Decimal('150.00'), deduction_amount=Decimal('50.00'))
        with pytest.raises(ValidationError) as exc_info:
            DepositService().refund(deposit, dto, staff)
        assert exc_info.value.code == "DEDUCTION_REASON_REQUIRED"

        dto.deduction_reason = "Broken lamp"
        deposit = DepositService().refund(deposit, dto, staff)
        assert deposit.status == DepositStatus.PARTIALLY_REFUNDED
        assert deposit.deduction_amount == Decimal('50.00')

    def test_forfeit(self, staff, booking):
        deposit = self._collect(staff, booking)
        dto = DepositRefundDTO(deduction_amount=Decimal('200.00'), deduction_reason="Room damaged")
        deposit = DepositService().refund(deposit, dto, staff)
        assert deposit.status == DepositStatus.FORFEITED

    def test_amounts_must_add_up(self, staff, booking):
        deposit = self._collect(staff, booking)
        with pytest.raises(ValidationError) as exc_info:
            DepositService().refund(deposit, DepositRefundDTO(refund_amount=Decimal('100.00')), staff)
        assert exc_info.value.code == "REFUND_MISMATCH"

    def test_settled_deposit_cannot_be_refunded_again(self, staff, booking):
        deposit = self._collect(staff, booking)
        service = DepositService()
        service.refund(deposit, DepositRefundDTO(refund_amount=Decimal('200.00')), staff)
        with pytest.raises(BusinessLogicError) as exc_info:
            service.refund(deposit, DepositRefundDTO(refund_amount=Decimal('200.00')), staff)
        assert exc_info.value.code == "DEPOSIT_NOT_PAID"

    def test_deposit_summary(self, staff, guest, room, make_booking):
        first = self._collect(staff, make_booking(guest, room), amount='100.00')
        self._collect(staff, make_booking(guest, room), amount='300.00')
        DepositService().refund(
            first, DepositRefundDTO(refund_amount=Decimal('60.00'), deduction_amount=Decimal('40.00'),
                                    deduction_reason="Cleaning"), staff
        )
        summary = DepositService().deposit_summary()
        assert summary['total'] == Decimal('400.00')
        assert summary['held'] == Decimal('300.00')
        assert summary['refunded'] == Decimal('60.00')
        assert summary['deducted'] == Decimal('40.00')
        assert summary['count'] == 2


@pytest.mark.django_db
class TestReceipts:

    def test_receipt_pdf(self, staff, booking):
        payment = PaymentService().record_payment(_payment(booking), staff)
        buffer = generate_payment_receipt_pdf(payment, signed_by_user=staff)
        assert buffer.getvalue().startswith(b'%PDF')
        assert receipt_number(payment) == f"PR-{payment.id:06d}"
        assert receipt_filename(payment).endswith("_Grace_Hopper.pdf")

    def test_guest_downloads_own_receipt(self, logged_in, staff, guest, other_guest, booking):
        payment = PaymentService().record_payment(_payment(booking), staff)
        url = reverse('payments:receipt', args=[payment.id])

        response = logged_in(guest).get(url + '?inline=1')
        assert response.status_code == 200
        assert response['Content-Type'] == 'application/pdf'
        assert response['Content-Disposition'].startswith('inline;')

        response = logged_in(other_guest).get(url)
        assert response.status_code == 302

    def test_api_receipt(self, api_as, staff, booking):
        payment = PaymentService().record_payment(_payment(booking), staff)
        response = api_as(staff).get(f'/api/payments/{payment.id}/receipt/')
        assert response.status_code == 200
        assert response['Content-Disposition'].startswith('attachment;')
