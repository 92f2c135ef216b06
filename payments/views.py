from django.http import HttpResponse
from django.shortcuts import render, redirect
from django.contrib.auth.decorators import login_required
from django.contrib import messages
from django.core.paginator import Paginator
from django.utils import timezone
from django.views.decorators.http import require_POST
from rest_framework import viewsets, mixins, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from core.constants import PaymentMethod, PaymentStatus, Pagination
from core.dto import PaymentDTO, DepositDTO, DepositRefundDTO
from core.exceptions import PermissionDeniedError
from common.decorators import staff_required, management_required, handle_errors
from audit.helpers import log_payment, log_deposit
from api.permissions import IsStaffMember
from .forms import PaymentForm, PaymentStatusForm, DepositForm, DepositRefundForm
from .models import SecurityDeposit
from .receipts import generate_payment_receipt_pdf, receipt_filename
from .serializers import (
    PaymentSerializer, PaymentStatusSerializer, SecurityDepositSerializer, DepositRefundSerializer
)
from .services import PaymentService, DepositService
from .utils import export_payments_csv


def _receipt_response(payment, user, inline=False):
    buffer = generate_payment_receipt_pdf(payment, signed_by_user=user if user.is_staff_member else None)
    response = HttpResponse(buffer.getvalue(), content_type='application/pdf')
    disposition = 'inline' if inline else 'attachment'
    response['Content-Disposition'] = f'{disposition}; filename="{receipt_filename(payment)}"'
    return response


# Template views

@login_required
@staff_required
@handle_errors
def payment_list(request):
    """
    Payments with totals and the list of bookings still awaiting payment.

    GET params: status, method, q
    """
    service = PaymentService()
    filters = {
        'status': request.GET.get('status', ''),
        'method': request.GET.get('method', ''),
        'q': request.GET.get('q', '').strip(),
    }
    payments = service.search(filters['status'] or None, filters['method'] or None, filters['q'] or None)
    page = Paginator(payments, Pagination.DEFAULT_PAGE_SIZE).get_page(request.GET.get('page'))
    return render(request, 'payments/payment_list.html', {
        'page_obj': page,
        'payments': page.object_list,
        'summary': service.payment_summary(),
        'unpaid_bookings': service.unpaid_bookings()[:10],
        'filters': filters,
        'status_choices': PaymentStatus.CHOICES,
        'method_choices': PaymentMethod.CHOICES,
    })


@login_required
@staff_required
@handle_errors
def payment_create(request):
    service = PaymentService()
    unpaid = service.unpaid_bookings()
    booking_id = request.GET.get('booking')
    initial = {}
    if booking_id:
        booking = unpaid.filter(id=booking_id).first()
        if booking:
            initial = {'booking': booking.id, 'amount': booking.total_amount}
    form = PaymentForm(request.POST or None, bookings=unpaid, initial=initial)
    if request.method == 'POST' and form.is_valid():
        data = form.cleaned_data
        payment = service.record_payment(PaymentDTO(
            booking_id=data['booking'].id,
            amount=data['amount'],
            method=data['method'],
            transaction_id=data['transaction_id'],
            notes=data['notes'],
        ), request.user)
        log_payment(request.user, payment, request=request)
        messages.success(request, f'Payment of {payment.amount} recorded for booking #{payment.booking_id}.')
        return redirect('bookings:detail', booking_id=payment.booking_id)
    return render(request, 'payments/payment_form.html', {'form': form})


@login_required
@staff_required
@require_POST
@handle_errors
def payment_update_status(request, payment_id):
    service = PaymentService()
    payment = service.get_payment(payment_id)
    form = PaymentStatusForm(request.POST)
    if form.is_valid():
        service.update_status(payment, form.cleaned_data['status'], request.user,
                              form.cleaned_data['failure_reason'])
        log_payment(request.user, payment, request=request)
        messages.success(request, f'Payment is now {payment.get_status_display()}.')
    else:
        messages.error(request, 'Please choose a valid status.')
    return redirect('payments:list')


@login_required
@handle_errors
def payment_receipt(request, payment_id):
    """Receipt PDF; guests may download receipts of their own bookings. ?inline=1 opens it in the browser."""
    payment = PaymentService().get_payment(payment_id)
    if not request.user.is_staff_member and payment.booking.guest_id != request.user.id:
        raise PermissionDeniedError("You can only download your own receipts", code="NOT_OWNER")
    return _receipt_response(payment, request.user, inline=request.GET.get('inline') == '1')


@login_required
@management_required
@handle_errors
def payment_export(request):
    """CSV of the payments matching the list filters"""
    payments = PaymentService().search(
        request.GET.get('status') or None,
        request.GET.get('method') or None,
        request.GET.get('q', '').strip() or None,
    )
    return export_payments_csv(payments, f"payments_{timezone.localdate():%Y%m%d}.csv")


@login_required
@staff_required
@handle_errors
def deposit_list(request):
    service = DepositService()
    deposits = SecurityDeposit.objects.select_related('booking', 'booking__guest', 'booking__room', 'processed_by')
    status_filter = request.GET.get('status', '')
    if status_filter:
        deposits = deposits.filter(status=status_filter)
    page = Paginator(deposits, Pagination.DEFAULT_PAGE_SIZE).get_page(request.GET.get('page'))
    return render(request, 'payments/deposit_list.html', {
        'page_obj': page,
        'deposits': page.object_list,
        'summary': service.deposit_summary(),
        'status_filter': status_filter,
        'status_choices': SecurityDeposit._meta.get_field('status').choices,
    })


@login_required
@staff_required
@handle_errors
def deposit_collect(request):
    service = DepositService()
    form = DepositForm(request.POST or None, bookings=service.eligible_bookings(),
                       initial={'booking': request.GET.get('booking')})
    if request.method == 'POST' and form.is_valid():
        data = form.cleaned_data
        deposit = service.collect(DepositDTO(
            booking_id=data['booking'].id,
            amount=data['amount'],
            method=data['method'],
            transaction_id=data['transaction_id'],
        ), request.user)
        log_deposit(request.user, deposit, request=request)
        messages.success(request, f'Deposit of {deposit.amount} collected for booking #{deposit.booking_id}.')
        return redirect('payments:deposit_list')
    return render(request, 'payments/deposit_form.html', {'form': form})


@login_required
@staff_required
@handle_errors
def deposit_refund(request, deposit_id):
    service = DepositService()
    deposit = service.get_deposit(deposit_id)
    form = DepositRefundForm(request.POST or None, initial={'refund_amount': deposit.amount})
    if request.method == 'POST' and form.is_valid():
        data = form.cleaned_data
        service.refund(deposit, DepositRefundDTO(**data), request.user)
        log_deposit(request.user, deposit, refunded=True, request=request)
        messages.success(request, f'Deposit settled: {deposit.get_status_display()}.')
        return redirect('payments:deposit_list')
    return render(request, 'payments/deposit_refund.html', {'form': form, 'deposit': deposit})


# API views

class PaymentViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, mixins.CreateModelMixin,
                     viewsets.GenericViewSet):
    """
    Payments (staff only). Query params: status, method, q
    Payments are never edited directly; use update_status.
    """
    serializer_class = PaymentSerializer
    permission_classes = [IsAuthenticated, IsStaffMember]

    def get_queryset(self):
        params = self.request.query_params
        return PaymentService().search(params.get('status'), params.get('method'), params.get('q'))

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        payment = PaymentService().record_payment(PaymentDTO(
            booking_id=data['booking'].id,
            amount=data['amount'],
            method=data.get('method', PaymentMethod.CASH),
            transaction_id=data.get('transaction_id', ''),
            notes=data.get('notes', ''),
        ), request.user)
        log_payment(request.user, payment, request=request)
        return Response(self.get_serializer(payment).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'])
    def update_status(self, request, pk=None):
        payment = self.get_object()
        serializer = PaymentStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        PaymentService().update_status(
            payment, serializer.validated_data['status'], request.user,
            serializer.validated_data['failure_reason']
        )
        log_payment(request.user, payment, request=request)
        return Response(self.get_serializer(payment).data)

    @action(detail=True, methods=['get'])
    def receipt(self, request, pk=None):
        """Receipt PDF of the payment"""
        return _receipt_response(self.get_object(), request.user)

    @action(detail=False, methods=['get'])
    def summary(self, request):
        summary = PaymentService().payment_summary()
        return Response({
            'total_received': str(summary['total_received']),
            'total_pending': str(summary['total_pending']),
            'total_payments': summary['total_payments'],
            'unpaid_bookings': summary['unpaid_bookings'],
            'by_status': {k: {'count': v['count'], 'total': str(v['total'])} for k, v in summary['by_status'].items()},
            'by_method': {k: {'count': v['count'], 'total': str(v['total'])} for k, v in summary['by_method'].items()},
        })

    @action(detail=False, methods=['get'])
    def unpaid(self, request):
        bookings = PaymentService().unpaid_bookings()
        return Response([
            {
                'booking_id': booking.id,
                'guest_name': booking.guest.full_name,
                'room_number': booking.room.number,
                'check_in': booking.check_in,
                'total_amount': str(booking.total_amount),
                'status': booking.status,
            }
            for booking in bookings
        ])


class SecurityDepositViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, mixins.CreateModelMixin,
                             viewsets.GenericViewSet):
    """Security deposits (staff only); settle with the refund action"""
    serializer_class = SecurityDepositSerializer
    permission_classes = [IsAuthenticated, IsStaffMember]

    def get_queryset(self):
        queryset = SecurityDeposit.objects.select_related('booking', 'booking__guest', 'processed_by')
        status_filter = self.request.query_params.get('status')
        if status_filter:
            queryset = queryset.filter(status=status_filter)
        return queryset

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        deposit = DepositService().collect(DepositDTO(
            booking_id=data['booking'].id,
            amount=data['amount'],
            method=data.get('method', PaymentMethod.CASH),
            transaction_id=data.get('transaction_id', ''),
        ), request.user)
        log_deposit(request.user, deposit, request=request)
        return Response(self.get_serializer(deposit).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'])
    def refund(self, request, pk=None):
        deposit = self.get_object()
        serializer = DepositRefundSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        DepositService().refund(deposit, DepositRefundDTO(**serializer.validated_data), request.user)
        log_deposit(request.user, deposit, refunded=True, request=request)
        return Response(self.get_serializer(deposit).data)

    @action(detail=False, methods=['get'])
    def summary(self, request):
        return Response({key: str(value) if key != 'count' else value
                         for key, value in DepositService().deposit_summary().items()})
