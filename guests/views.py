from django.shortcuts import render, redirect
from django.contrib.auth.decorators import login_required
from django.contrib import messages
from django.core.paginator import Paginator
from django.http import HttpResponse
from django.views.decorators.http import require_POST
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.parsers import MultiPartParser, FormParser, JSONParser
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from core.constants import Pagination
from core.dto import GuestDTO
from common.decorators import staff_required, handle_errors
from audit.helpers import log_user_change
from api.permissions import IsStaffMember
from .forms import GuestForm, GuestImportForm
from .serializers import GuestSerializer, GuestImportSerializer
from .services import GuestService, import_template_csv


def _dto(data, guest_id=None):
    return GuestDTO(
        id=guest_id,
        first_name=data.get('first_name', ''),
        last_name=data.get('last_name', ''),
        email=data.get('email') or '',
        phone=data.get('phone', ''),
        address=data.get('address', ''),
        gender=data.get('gender', ''),
        id_card=data.get('id_card', ''),
    )


# Template views

@login_required
@staff_required
@handle_errors
def guest_list(request):
    """Guests with booking counts, search and revenue figures"""
    service = GuestService()
    q = request.GET.get('q', '').strip()
    page = Paginator(service.search(q or None), Pagination.DEFAULT_PAGE_SIZE).get_page(request.GET.get('page'))
    return render(request, 'guests/guest_list.html', {
        'page_obj': page,
        'guests': page.object_list,
        'q': q,
        'stats': service.guest_list_stats(),
    })


@login_required
@staff_required
@handle_errors
def guest_create(request):
    form = GuestForm(request.POST or None)
    if request.method == 'POST' and form.is_valid():
        guest, password = GuestService().create_guest(_dto(form.cleaned_data), request.user)
        log_user_change(request.user, guest, f"Created guest {guest.full_name}", request=request, created=True)
        # Shown once; only the hash is stored
        return render(request, 'guests/guest_created.html', {'guest': guest, 'password': password})
    return render(request, 'guests/guest_form.html', {'form': form})


@login_required
@staff_required
@handle_errors
def guest_detail(request, guest_id):
    service = GuestService()
    guest = service.get_guest(guest_id)
    return render(request, 'guests/guest_detail.html', {
        'guest': guest,
        'stats': service.guest_detail_stats(guest),
    })


@login_required
@staff_required
@handle_errors
def guest_edit(request, guest_id):
    service = GuestService()
    guest = service.get_guest(guest_id)
    form = GuestForm(request.POST or None, initial={
        'first_name': guest.first_name,
        'last_name': guest.last_name,
        'email': guest.email or '',
        'phone': guest.phone,
        'address': guest.address,
        'gender': guest.gender,
        'id_card': guest.id_card,
    })
    if request.method == 'POST' and form.is_valid():
        service.update_guest(guest, _dto(form.cleaned_data, guest.id), request.user)
        log_user_change(request.user, guest, f"Updated guest {guest.full_name}", request=request)
        messages.success(request, 'Guest updated successfully.')
        return redirect('guests:detail', guest_id=guest.id)
    return render(request, 'guests/guest_form.html', {'form': form, 'guest': guest})


@login_required
@staff_required
@require_POST
@handle_errors
def guest_delete(request, guest_id):
    service = GuestService()
    guest = service.get_guest(guest_id)
    name = guest.full_name
    service.delete_guest(guest, request.user)
    messages.success(request, f'Guest {name} deleted.')
    return redirect('guests:list')


@login_required
@staff_required
@handle_errors
def guest_import(request):
    """Bulk create guests from CSV; the result page lists the generated passwords"""
    form = GuestImportForm(request.POST or None, request.FILES or None)
    if request.method == 'POST' and form.is_valid():
        result = GuestService().import_guests(form.cleaned_data['csv_file'], request.user)
        for guest, _ in result['guests']:
            log_user_change(request.user, guest, f"Imported guest {guest.full_name}", request=request, created=True)
        if result['created']:
            messages.success(request, f"{result['created']} guest(s) imported.")
        if result['errors']:
            messages.warning(request, f"{len(result['errors'])} row(s) skipped.")
        return render(request, 'guests/guest_import_result.html', {'result': result})
    return render(request, 'guests/guest_import.html', {'form': form})


@login_required
@staff_required
def guest_import_template(request):
    response = HttpResponse(import_template_csv(), content_type='text/csv')
    response['Content-Disposition'] = 'attachment; filename="guest_import_template.csv"'
    return response


# API views

class GuestViewSet(viewsets.ModelViewSet):
    """
    ViewSet for guests (users with the GUEST role). Staff only.
    Create returns the generated temporary password once.
    """
    serializer_class = GuestSerializer
    permission_classes = [IsAuthenticated, IsStaffMember]
    parser_classes = [JSONParser, MultiPartParser, FormParser]

    def get_queryset(self):
        return GuestService().search(self.request.query_params.get('q'))

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        guest, password = GuestService().create_guest(_dto(serializer.validated_data), request.user)
        log_user_change(request.user, guest, f"Created guest {guest.full_name}", request=request, created=True)
        data = dict(self.get_serializer(guest).data)
        data['temporary_password'] = password
        return Response(data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        guest = self.get_object()
        partial = kwargs.get('partial', False)
        serializer = self.get_serializer(guest, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        merged = {field: getattr(guest, field) for field in
                  ('first_name', 'last_name', 'email', 'phone', 'address', 'gender', 'id_card')}
        merged.update(serializer.validated_data)
        guest = GuestService().update_guest(guest, _dto(merged, guest.id), request.user)
        return Response(self.get_serializer(guest).data)

    def destroy(self, request, *args, **kwargs):
        GuestService().delete_guest(self.get_object(), request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=['get'])
    def stats(self, request):
        stats = GuestService().guest_list_stats()
        return Response({key: str(value) if key.startswith('total_') and key != 'total_guests' else value
                         for key, value in stats.items()})

    @action(detail=True, methods=['get'])
    def summary(self, request, pk=None):
        """Spending and stay figures of one guest"""
        stats = GuestService().guest_detail_stats(self.get_object())
        checkout = stats['checkout']
        return Response({
            'total_revenue': str(stats['total_revenue']),
            'yearly_revenue': str(stats['yearly_revenue']),
            'total_paid': str(stats['total_paid']),
            'total_pending': str(stats['total_pending']),
            'deposits_total': str(stats['deposits_total']),
            'total_nights': stats['total_nights'],
            'average_stay': stats['average_stay'],
            'average_spending': str(stats['average_spending']),
            'total_bookings': stats['total_bookings'],
            'preferred_room_types': stats['preferred_room_types'],
            'current_booking': stats['current_booking'].id if stats['current_booking'] else None,
            'checkout': {
                'check_out': checkout.check_out,
                'hours_remaining': checkout.hours_remaining,
                'is_overdue': checkout.is_overdue,
                'urgency': checkout.urgency,
            } if checkout else None,
        })

    @action(detail=False, methods=['post'], url_path='import')
    def import_csv(self, request):
        serializer = GuestImportSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = GuestService().import_guests(serializer.validated_data['file'], request.user)
        return Response({
            'created': result['created'],
            'errors': result['errors'],
            'guests': [
                {'id': guest.id, 'username': guest.username, 'full_name': guest.full_name,
                 'temporary_password': password}
                for guest, password in result['guests']
            ],
        }, status=status.HTTP_201_CREATED if result['created'] else status.HTTP_200_OK)
