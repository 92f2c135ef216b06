from django.shortcuts import render, redirect
from django.contrib.auth.decorators import login_required
from django.contrib import messages
from django.utils import timezone
from django.utils.dateparse import parse_date
from django.views.decorators.http import require_POST
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from core.constants import RoomStatus, PricingPeriod, AuditAction, AuditResource
from common.decorators import staff_required, handle_errors
from audit.helpers import log_action, log_room_status_change
from api.permissions import IsStaffMember, IsManagementOrReadOnly
from bookings import rules
from blocks.models import Block
from .forms import RoomForm, RoomStatusForm, AssetForm, AssignAssetForm
from .models import Room, RoomType, Asset
from .serializers import (
    RoomSerializer, RoomDetailSerializer, RoomStatusSerializer, RoomTypeSerializer, AssetSerializer
)
from .services import RoomService
from .status import update_all_room_statuses


# Template views

@login_required
@staff_required
@handle_errors
def room_list(request):
    """Rooms with status / type / block filters and search"""
    service = RoomService()
    filters = {
        'status': request.GET.get('status', ''),
        'room_type': request.GET.get('room_type', ''),
        'block': request.GET.get('block', ''),
        'q': request.GET.get('q', '').strip(),
    }
    rooms = service.room_repo.search(**{k: v or None for k, v in filters.items()})
    all_rooms = Room.objects.all()
    return render(request, 'rooms/room_list.html', {
        'rooms': rooms,
        'filters': filters,
        'status_choices': RoomStatus.CHOICES,
        'room_types': RoomType.objects.filter(is_active=True),
        'blocks': Block.objects.all(),
        'counts': {
            'total': all_rooms.count(),
            'available': all_rooms.filter(status=RoomStatus.AVAILABLE).count(),
            'occupied': all_rooms.filter(status=RoomStatus.OCCUPIED).count(),
            'maintenance': all_rooms.filter(status=RoomStatus.MAINTENANCE).count(),
        },
    })


@login_required
@staff_required
@handle_errors
def room_create(request):
    form = RoomForm(request.POST or None)
    if request.method == 'POST' and form.is_valid():
        room = RoomService().create_room(request.user, form.cleaned_data)
        log_action(request.user, AuditAction.CREATE, AuditResource.ROOM, room.id,
                   f"Created room {room.number}", request=request)
        messages.success(request, f'Room {room.number} created successfully.')
        return redirect('rooms:detail', room_id=room.id)
    return render(request, 'rooms/room_form.html', {'form': form})


@login_required
@staff_required
@handle_errors
def room_detail(request, room_id):
    """Current booking, booking history, maintenance and assets of a room"""
    room = RoomService().get_room(room_id)
    now = timezone.now()
    bookings = room.bookings.filter(deleted_at__isnull=True).select_related('guest').order_by('-check_in')
    current = next((b for b in bookings if rules.holds_room(b, now)), None)
    return render(request, 'rooms/room_detail.html', {
        'room': room,
        'current_booking': current,
        'checkout': rules.checkout_info(current, now) if current else None,
        'bookings': bookings[:20],
        'maintenance_logs': room.maintenance_logs.order_by('-created_at')[:10],
        'room_assets': room.room_assets.select_related('asset'),
        'status_form': RoomStatusForm(initial={'status': room.status}),
        'asset_form': AssignAssetForm(),
    })


@login_required
@staff_required
@handle_errors
def room_edit(request, room_id):
    service = RoomService()
    room = service.get_room(room_id)
    form = RoomForm(request.POST or None, instance=room)
    if request.method == 'POST' and form.is_valid():
        service.update_room(request.user, room, form.cleaned_data)
        log_action(request.user, AuditAction.UPDATE, AuditResource.ROOM, room.id,
                   f"Updated room {room.number}", request=request)
        messages.success(request, 'Room updated successfully.')
        return redirect('rooms:detail', room_id=room.id)
    return render(request, 'rooms/room_form.html', {'form': form, 'room': room})


@login_required
@staff_required
@require_POST
@handle_errors
def room_update_status(request, room_id):
    service = RoomService()
    room = service.get_room(room_id)
    form = RoomStatusForm(request.POST)
    if not form.is_valid():
        messages.error(request, 'Please choose a valid status.')
        return redirect('rooms:detail', room_id=room.id)
    old_status = room.status
    service.set_status(request.user, room, form.cleaned_data['status'])
    log_room_status_change(request.user, room, old_status, room.status, request=request)
    messages.success(request, f'Room {room.number} is now {room.get_status_display()}.')
    return redirect('rooms:detail', room_id=room.id)


@login_required
@staff_required
@require_POST
@handle_errors
def room_assign_asset(request, room_id):
    service = RoomService()
    room = service.get_room(room_id)
    form = AssignAssetForm(request.POST)
    if not form.is_valid():
        messages.error(request, 'Please correct the asset details.')
        return redirect('rooms:detail', room_id=room.id)
    data = form.cleaned_data
    room_asset = service.assign_asset(
        request.user, room, data['asset'], data['quantity'], data['condition'], data.get('notes', '')
    )
    messages.success(request, f'{room_asset.asset.name} assigned to room {room.number}.')
    return redirect('rooms:detail', room_id=room.id)


@login_required
@staff_required
@handle_errors
def asset_list(request):
    assets = Asset.objects.all()
    category = request.GET.get('category')
    if category:
        assets = assets.filter(category=category)
    return render(request, 'rooms/asset_list.html', {'assets': assets, 'selected_category': category or ''})


@login_required
@staff_required
@handle_errors
def asset_create(request):
    form = AssetForm(request.POST or None)
    if request.method == 'POST' and form.is_valid():
        asset = form.save()
        messages.success(request, f'Asset "{asset.name}" created.')
        return redirect('rooms:asset_list')
    return render(request, 'rooms/asset_form.html', {'form': form})


# API views

class RoomViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Room management (staff roles)
    Creates and updates go through RoomService.
    """
    permission_classes = [IsAuthenticated, IsStaffMember]
    search_fields = ['number', 'description']
    ordering = ['number']

    def get_serializer_class(self):
        if self.action == 'retrieve':
            return RoomDetailSerializer
        return RoomSerializer

    def get_queryset(self):
        params = self.request.query_params
        return RoomService().room_repo.search(
            status=params.get('status'), room_type=params.get('room_type'),
            block=params.get('block'), q=params.get('q')
        )

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        room = RoomService().create_room(request.user, serializer.validated_data)
        return Response(RoomSerializer(room).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        room = self.get_object()
        serializer = self.get_serializer(room, data=request.data, partial=kwargs.get('partial', False))
        serializer.is_valid(raise_exception=True)
        data = {field: getattr(room, field) for field in RoomForm.Meta.fields}
        data.update(serializer.validated_data)
        room = RoomService().update_room(request.user, room, data)
        return Response(RoomSerializer(room).data)

    def destroy(self, request, *args, **kwargs):
        RoomService().delete_room(request.user, self.get_object())
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=['get'])
    def available(self, request):
        """
        Rooms free for a stay.

        Query params: check_in, check_out (YYYY-MM-DD, optional)
        """
        start = parse_date(request.query_params.get('check_in', '') or '')
        end = parse_date(request.query_params.get('check_out', '') or '')
        if start and end:
            start_at, _ = rules.stay_window(start, 1, PricingPeriod.DAY)
            _, end_at = rules.stay_window(end, 0, PricingPeriod.DAY)
            rooms = RoomService().available_rooms(start_at, end_at)
        else:
            rooms = RoomService().available_rooms()
        return Response(RoomSerializer(rooms, many=True).data)

    @action(detail=True, methods=['post'])
    def update_status(self, request, pk=None):
        room = self.get_object()
        serializer = RoomStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        old_status = room.status
        RoomService().set_status(request.user, room, serializer.validated_data['status'])
        log_room_status_change(request.user, room, old_status, room.status, request=request)
        return Response(RoomSerializer(room).data)

    @action(detail=False, methods=['post'])
    def sync_status(self, request):
        """Re-derive every room's status from its bookings"""
        changed = update_all_room_statuses()
        return Response({'changed': changed})


class RoomTypeViewSet(viewsets.ModelViewSet):
    """Room types: staff read, management write"""
    serializer_class = RoomTypeSerializer
    permission_classes = [IsAuthenticated, IsManagementOrReadOnly]
    queryset = RoomType.objects.all().order_by('display_name')


class AssetViewSet(viewsets.ModelViewSet):
    serializer_class = AssetSerializer
    permission_classes = [IsAuthenticated, IsStaffMember]
    queryset = Asset.objects.all().order_by('name')
