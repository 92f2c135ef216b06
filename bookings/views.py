from django.shortcuts import render, redirect
from django.contrib.auth.decorators import login_required
from django.contrib import messages
from django.core.paginator import Paginator
from django.utils import timezone
from django.views.decorators.http import require_POST
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from core.constants import BookingStatus, Pagination, AuditAction, AuditResource
from core.dto import BookingDTO, ExtensionDTO
from common.decorators import staff_required, admin_required, handle_errors
from audit.helpers import (
    log_action, log_booking_created, log_booking_status_change, log_booking_extension, log_booking_deletion
)
from api.filters import NotDeletedFilterBackend, GuestScopeFilterBackend
from api.permissions import IsOwnerOrStaff, IsStaffMember, IsManagement, IsAdminRole
from addons.services import AddonService
from . import rules
from .forms import BookingForm, BookingEditForm, BookingStatusForm, ExtensionForm, AddServiceForm
from .serializers import BookingSerializer, BookingWriteSerializer, BookingStatusSerializer, ExtensionSerializer
from .services import BookingService


# Template views

@login_required
@staff_required
@handle_errors
def booking_list(request):
    """
    Bookings with filters.

    GET params: status, payment (paid / unpaid / all), q, show_deleted
    """
    filters = {
        'status': request.GET.get('status', ''),
        'payment': request.GET.get('payment', 'all'),
        'q': request.GET.get('q', '').strip(),
        'show_deleted': request.GET.get('show_deleted') == '1',
    }
    bookings = BookingService().booking_repo.search(
        status=filters['status'] or None,
        payment=filters['payment'],
        q=filters['q'] or None,
        include_deleted=filters['show_deleted'],
    )
    paginator = Paginator(bookings, Pagination.DEFAULT_PAGE_SIZE)
    page = paginator.get_page(request.GET.get('page'))
    return render(request, 'bookings/booking_list.html', {
        'page_obj': page,
        'bookings': page.object_list,
        'filters': filters,
        'status_choices': BookingStatus.CHOICES,
    })


@login_required
@handle_errors
def booking_create(request):
    """Staff book for any guest; guests book for themselves"""
    is_staff = request.user.is_staff_member
    form = BookingForm(request.POST or None, include_guest=is_staff,
                       initial={'room': request.GET.get('room')})
    if request.method == 'POST' and form.is_valid():
        data = form.cleaned_data
        dto = BookingDTO(
            guest_id=data['guest'].id if is_staff else request.user.id,
            room_id=data['room'].id,
            check_in_date=data['check_in_date'],
            periods=data['periods'],
            guests=data['guests'],
            special_requests=data['special_requests'],
        )
        booking = BookingService().create_booking(dto, request.user)
        log_booking_created(request.user, booking, request=request)
        messages.success(request, f'Booking #{booking.id} created for room {booking.room.number}.')
        return redirect('bookings:detail', booking_id=booking.id)
    return render(request, 'bookings/booking_form.html', {'form': form})


@login_required
@handle_errors
def booking_detail(request, booking_id):
    booking = BookingService().get_booking(booking_id, user=request.user)
    now = timezone.now()
    return render(request, 'bookings/booking_detail.html', {
        'booking': booking,
        'payment': booking.payment_or_none,
        'deposit': getattr(booking, 'security_deposit', None),
        'services': booking.booking_services.select_related('service'),
        'checkout': rules.checkout_info(booking, now),
        'progress': round(rules.stay_progress(booking.check_in, booking.check_out, now) * 100),
        'status_form': BookingStatusForm(initial={'status': booking.status}),
        'extension_form': ExtensionForm(),
        'service_form': AddServiceForm(),
        'can_extend': booking.status in BookingStatus.EXTENDABLE and not booking.is_deleted,
        'can_soft_delete': booking.status in BookingStatus.SOFT_DELETABLE and not booking.is_deleted,
    })


@login_required
@staff_required
@handle_errors
def booking_edit(request, booking_id):
    service = BookingService()
    booking = service.get_booking(booking_id)
    local_in = timezone.localtime(booking.check_in).date()
    local_out = timezone.localtime(booking.check_out).date()
    form = BookingEditForm(request.POST or None, initial={
        'room': booking.room_id,
        'check_in_date': local_in,
        'periods': rules.periods_between(local_in, local_out, booking.room.pricing_period),
        'guests': booking.guests,
        'special_requests': booking.special_requests,
    })
    if request.method == 'POST' and form.is_valid():
        data = form.cleaned_data
        dto = BookingDTO(
            id=booking.id,
            guest_id=booking.guest_id,
            room_id=data['room'].id,
            check_in_date=data['check_in_date'],
            periods=data['periods'],
            guests=data['guests'],
            special_requests=data['special_requests'],
        )
        service.update_booking(booking, dto, request.user)
        log_action(request.user, AuditAction.UPDATE, AuditResource.BOOKING, booking.id,
                   f"Updated booking #{booking.id}", request=request)
        messages.success(request, 'Booking updated successfully.')
        return redirect('bookings:detail', booking_id=booking.id)
    return render(request, 'bookings/booking_edit.html', {'form': form, 'booking': booking})


@login_required
@staff_required
@require_POST
@handle_errors
def booking_update_status(request, booking_id):
    service = BookingService()
    booking = service.get_booking(booking_id)
    form = BookingStatusForm(request.POST)
    if not form.is_valid():
        messages.error(request, 'Please choose a valid status.')
        return redirect('bookings:detail', booking_id=booking.id)
    old_status = booking.status
    service.update_status(booking, form.cleaned_data['status'], request.user)
    log_booking_status_change(request.user, booking, old_status, booking.status, request=request)
    messages.success(request, f'Booking #{booking.id} is now {booking.get_status_display()}.')
    return redirect('bookings:detail', booking_id=booking.id)


@login_required
@staff_required
@require_POST
@handle_errors
def booking_extend(request, booking_id):
    service = BookingService()
    booking = service.get_booking(booking_id)
    form = ExtensionForm(request.POST)
    if not form.is_valid():
        messages.error(request, 'Number of periods must be at least 1.')
        return redirect('bookings:detail', booking_id=booking.id)
    data = form.cleaned_data
    booking, additional = service.extend_booking(
        booking, ExtensionDTO(periods=data['periods'], reason=data['reason'], method=data['method']), request.user
    )
    log_booking_extension(request.user, booking, data['periods'], additional, request=request)
    messages.success(
        request,
        f'Stay extended until {timezone.localtime(booking.check_out):%b %d, %Y}. Additional amount: {additional}'
    )
    return redirect('bookings:detail', booking_id=booking.id)


@login_required
@staff_required
@require_POST
@handle_errors
def booking_soft_delete(request, booking_id):
    service = BookingService()
    booking = service.soft_delete(service.get_booking(booking_id), request.user)
    log_booking_deletion(request.user, booking, AuditAction.SOFT_DELETE, request=request)
    messages.success(request, f'Booking #{booking.id} moved to trash.')
    return redirect('bookings:list')


@login_required
@staff_required
@require_POST
@handle_errors
def booking_restore(request, booking_id):
    service = BookingService()
    booking = service.restore(service.get_booking(booking_id), request.user)
    log_booking_deletion(request.user, booking, AuditAction.RESTORE, request=request)
    messages.success(request, f'Booking #{booking.id} restored.')
    return redirect('bookings:detail', booking_id=booking.id)


@login_required
@admin_required
@require_POST
@handle_errors
def booking_hard_delete(request, booking_id):
    service = BookingService()
    booking = service.get_booking(booking_id)
    log_booking_deletion(request.user, booking, AuditAction.DELETE, request=request)
    service.hard_delete(booking, request.user)
    messages.success(request, f'Booking #{booking_id} permanently deleted.')
    return redirect('bookings:deleted')


@login_required
@staff_required
@handle_errors
def deleted_bookings(request):
    """Trash: soft-deleted bookings and retention stats"""
    service = BookingService()
    bookings = service.booking_repo.get_queryset().filter(deleted_at__isnull=False).order_by('-deleted_at')
    return render(request, 'bookings/deleted_bookings.html', {
        'bookings': bookings,
        'stats': service.soft_delete_stats(),
    })


@login_required
@handle_errors
def my_bookings(request):
    """The signed-in user's own bookings"""
    now = timezone.now()
    bookings = list(BookingService().booking_repo.for_guest(request.user))
    for booking in bookings:
        booking.checkout = rules.checkout_info(booking, now)
    return render(request, 'bookings/my_bookings.html', {'bookings': bookings})


@login_required
@staff_required
@require_POST
@handle_errors
def booking_add_service(request, booking_id):
    booking = BookingService().get_booking(booking_id)
    form = AddServiceForm(request.POST)
    if not form.is_valid():
        messages.error(request, 'Please choose a service and a quantity of at least 1.')
        return redirect('bookings:detail', booking_id=booking.id)
    line = AddonService().add_to_booking(booking, form.cleaned_data['service'],
                                         form.cleaned_data['quantity'], request.user)
    messages.success(request, f'{line.service.name} added to booking #{booking.id}.')
    return redirect('bookings:detail', booking_id=booking.id)


# API views

class BookingViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Booking management

    Guests see and create only their own bookings; staff see everything.
    List query params: status, payment (paid / unpaid / all), q, include_deleted
    DELETE permanently removes a booking that is already in the trash (admins only).
    """
    serializer_class = BookingSerializer
    permission_classes = [IsAuthenticated, IsOwnerOrStaff]
    http_method_names = ['get', 'post', 'put', 'patch', 'delete', 'head', 'options']
    filter_backends = [NotDeletedFilterBackend, GuestScopeFilterBackend]

    def get_queryset(self):
        params = self.request.query_params
        return BookingService().booking_repo.search(
            status=params.get('status'),
            payment=params.get('payment'),
            q=params.get('q'),
            include_deleted=True,
        )

    def get_permissions(self):
        if self.action in ('update', 'partial_update', 'update_status', 'extend', 'soft_delete', 'restore'):
            return [IsAuthenticated(), IsStaffMember()]
        if self.action == 'purge':
            return [IsAuthenticated(), IsManagement()]
        if self.action == 'destroy':
            return [IsAuthenticated(), IsAdminRole()]
        return super().get_permissions()

    def _dto(self, data, guest_id):
        return BookingDTO(
            guest_id=guest_id,
            room_id=data['room'],
            check_in_date=data['check_in_date'],
            periods=data['periods'],
            guests=data['guests'],
            special_requests=data.get('special_requests', ''),
        )

    def create(self, request, *args, **kwargs):
        serializer = BookingWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        guest_id = data.get('guest') if request.user.is_staff_member else request.user.id
        booking = BookingService().create_booking(self._dto(data, guest_id), request.user)
        log_booking_created(request.user, booking, request=request)
        return Response(BookingSerializer(booking).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        booking = self.get_object()
        serializer = BookingWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = BookingService().update_booking(
            booking, self._dto(serializer.validated_data, booking.guest_id), request.user
        )
        return Response(BookingSerializer(booking).data)

    def partial_update(self, request, *args, **kwargs):
        return Response({'detail': 'Use PUT with the full booking window'},
                        status=status.HTTP_405_METHOD_NOT_ALLOWED)

    def destroy(self, request, *args, **kwargs):
        booking = self.get_object()
        log_booking_deletion(request.user, booking, AuditAction.DELETE, request=request)
        BookingService().hard_delete(booking, request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['post'])
    def update_status(self, request, pk=None):
        booking = self.get_object()
        serializer = BookingStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        old_status = booking.status
        BookingService().update_status(booking, serializer.validated_data['status'], request.user)
        log_booking_status_change(request.user, booking, old_status, booking.status, request=request)
        return Response(BookingSerializer(booking).data)

    @action(detail=True, methods=['post'])
    def extend(self, request, pk=None):
        booking = self.get_object()
        serializer = ExtensionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        booking, additional = BookingService().extend_booking(
            booking, ExtensionDTO(periods=data['periods'], reason=data['reason'], method=data['method']),
            request.user
        )
        log_booking_extension(request.user, booking, data['periods'], additional, request=request)
        return Response({
            'booking': BookingSerializer(booking).data,
            'additional_amount': str(additional),
            'message': f"Stay extended until {timezone.localtime(booking.check_out):%b %d, %Y}",
        })

    @action(detail=True, methods=['post'])
    def soft_delete(self, request, pk=None):
        booking = BookingService().soft_delete(self.get_object(), request.user)
        log_booking_deletion(request.user, booking, AuditAction.SOFT_DELETE, request=request)
        return Response(BookingSerializer(booking).data)

    @action(detail=True, methods=['post'])
    def restore(self, request, pk=None):
        booking = BookingService().restore(self.get_object(), request.user)
        log_booking_deletion(request.user, booking, AuditAction.RESTORE, request=request)
        return Response(BookingSerializer(booking).data)

    @action(detail=False, methods=['get', 'post'])
    def purge(self, request):
        """
        GET: trash statistics. POST: permanently delete bookings soft-deleted
        more than `days` ago (default SOFT_DELETE_RETENTION_DAYS).
        """
        service = BookingService()
        if request.method == 'GET':
            return Response(service.soft_delete_stats())
        days = request.data.get('days')
        try:
            days = int(days) if days not in (None, '') else None
        except (TypeError, ValueError):
            return Response({'detail': 'days must be a whole number'}, status=status.HTTP_400_BAD_REQUEST)
        count = service.purge_deleted(days)
        log_action(request.user, AuditAction.PURGE, AuditResource.BOOKING, None,
                   f"Purged {count} deleted booking(s)", request=request, metadata={'days': days})
        return Response({'purged': count})
