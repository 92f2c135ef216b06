from django.shortcuts import render, redirect
from django.contrib.auth.decorators import login_required
from django.contrib import messages
from django.db.models import Count, Q
from django.views.decorators.http import require_POST
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
import logging

from core.constants import RoomStatus
from common.decorators import staff_required, admin_required, handle_errors
from audit.helpers import log_block_change
from api.permissions import IsStaffReadAdminWrite
from .forms import BlockForm
from .models import Block
from .serializers import BlockSerializer
from .services import BlockService

logger = logging.getLogger(__name__)


# Template views

@login_required
@staff_required
@handle_errors
def block_list(request):
    """List all blocks with room counts"""
    blocks = BlockService().block_repo.get_with_stats()

    total_rooms = sum(block.room_count for block in blocks)
    total_occupied = sum(block.occupied_count for block in blocks)
    context = {
        'blocks': blocks,
        'total_rooms': total_rooms,
        'total_occupied': total_occupied,
        'avg_occupancy': round(total_occupied / total_rooms * 100) if total_rooms > 0 else 0,
    }
    return render(request, 'blocks/block_list.html', context)


@login_required
@staff_required
@handle_errors
def block_detail(request, block_id):
    """Block detail - rooms and status breakdown"""
    block = BlockService().get_block(block_id)
    rooms = block.rooms.select_related('room_type').order_by('floor', 'number')
    status_counts = rooms.aggregate(
        total=Count('id'),
        available=Count('id', filter=Q(status=RoomStatus.AVAILABLE)),
        occupied=Count('id', filter=Q(status=RoomStatus.OCCUPIED)),
        maintenance=Count('id', filter=Q(status=RoomStatus.MAINTENANCE)),
        out_of_order=Count('id', filter=Q(status=RoomStatus.OUT_OF_ORDER)),
    )
    return render(request, 'blocks/block_detail.html', {
        'block': block,
        'rooms': rooms,
        'status_counts': status_counts,
    })


@login_required
@admin_required
@handle_errors
def add_block(request):
    """Create a block (admins only)"""
    form = BlockForm(request.POST or None)
    if request.method == 'POST' and form.is_valid():
        data = form.cleaned_data
        block = BlockService().create_block(
            request.user, data['name'], data['description'], data['floors'], data['location']
        )
        log_block_change(request.user, block, created=True, request=request)
        messages.success(request, f'Block "{block.name}" created successfully.')
        return redirect('blocks:detail', block_id=block.id)
    return render(request, 'blocks/block_form.html', {'form': form})


@login_required
@admin_required
@handle_errors
def edit_block(request, block_id):
    service = BlockService()
    block = service.get_block(block_id)
    form = BlockForm(request.POST or None, instance=block)
    if request.method == 'POST' and form.is_valid():
        data = form.cleaned_data
        block = service.update_block(
            request.user, block.id, data['name'], data['description'], data['floors'], data['location']
        )
        log_block_change(request.user, block, created=False, request=request)
        messages.success(request, 'Block updated successfully.')
        return redirect('blocks:detail', block_id=block.id)
    return render(request, 'blocks/block_form.html', {'form': form, 'block': block})


@login_required
@admin_required
@require_POST
@handle_errors
def delete_block(request, block_id):
    BlockService().delete_block(request.user, block_id)
    messages.success(request, 'Block deleted successfully.')
    return redirect('blocks:list')


# API views

class BlockViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Block management
    Staff roles can read, only admins can create/update/delete.
    Writes go through BlockService so the same rules apply as in the UI.
    """
    serializer_class = BlockSerializer
    permission_classes = [IsAuthenticated, IsStaffReadAdminWrite]
    search_fields = ['name', 'location']
    ordering_fields = ['name', 'created_at']
    ordering = ['name']

    def get_queryset(self):
        return Block.objects.all()

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        block = BlockService().create_block(
            request.user, data['name'], data.get('description', ''),
            data.get('floors'), data.get('location', '')
        )
        return Response(self.get_serializer(block).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        block = self.get_object()
        serializer = self.get_serializer(block, data=request.data, partial=kwargs.get('partial', False))
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        block = BlockService().update_block(
            request.user, block.id,
            data.get('name', block.name),
            data.get('description', block.description),
            data.get('floors', block.floors),
            data.get('location', block.location),
        )
        return Response(self.get_serializer(block).data)

    def destroy(self, request, *args, **kwargs):
        block = self.get_object()
        BlockService().delete_block(request.user, block.id)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=['get'])
    def stats(self, request):
        """Room counts per block"""
        blocks = BlockService().block_repo.get_with_stats()
        return Response([
            {
                'id': block.id,
                'name': block.name,
                'rooms': block.room_count,
                'occupied': block.occupied_count,
                'available': block.available_count,
                'maintenance': block.maintenance_count,
                'occupancy_rate': round(block.occupied_count / block.room_count * 100, 1) if block.room_count else 0.0,
            }
            for block in blocks
        ])
