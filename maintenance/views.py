from django.shortcuts import render, redirect
from django.contrib.auth.decorators import login_required
from django.contrib import messages
from django.core.paginator import Paginator
from django.views.decorators.http import require_POST
from rest_framework import viewsets, mixins, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from core.constants import MaintenanceStatus, MaintenanceType, Priority, Pagination
from core.dto import MaintenanceDTO
from common.decorators import staff_required, handle_errors
from audit.helpers import log_maintenance_change
from api.permissions import IsStaffMember
from .forms import MaintenanceForm, MaintenanceStatusForm
from .serializers import MaintenanceLogSerializer, MaintenanceStatusSerializer
from .services import MaintenanceService


def _dto(data):
    asset = data.get('asset')
    room = data['room']
    return MaintenanceDTO(
        room_id=room.id if hasattr(room, 'id') else room,
        asset_id=asset.id if hasattr(asset, 'id') else asset,
        type=data.get('type', ''),
        description=data.get('description', ''),
        priority=data.get('priority', Priority.MEDIUM),
        reported_by=data.get('reported_by', ''),
        assigned_to=data.get('assigned_to', ''),
        cost=data.get('cost'),
        notes=data.get('notes', ''),
    )


# Template views

@login_required
@staff_required
@handle_errors
def maintenance_list(request):
    """Maintenance logs. GET params: status, priority, type"""
    service = MaintenanceService()
    filters = {
        'status': request.GET.get('status', ''),
        'priority': request.GET.get('priority', ''),
        'type': request.GET.get('type', ''),
    }
    logs = service.search(**{k: v or None for k, v in filters.items()})
    page = Paginator(logs, Pagination.DEFAULT_PAGE_SIZE).get_page(request.GET.get('page'))
    return render(request, 'maintenance/maintenance_list.html', {
        'page_obj': page,
        'logs': page.object_list,
        'counts': service.counts(),
        'filters': filters,
        'status_choices': MaintenanceStatus.CHOICES,
        'priority_choices': Priority.CHOICES,
        'type_choices': MaintenanceType.CHOICES,
        'status_form': MaintenanceStatusForm(),
    })


@login_required
@staff_required
@handle_errors
def maintenance_create(request):
    form = MaintenanceForm(request.POST or None, initial={'room': request.GET.get('room')})
    if request.method == 'POST' and form.is_valid():
        log = MaintenanceService().create(_dto(form.cleaned_data), request.user)
        log_maintenance_change(request.user, log, created=True, request=request)
        if log.priority in Priority.BLOCKING:
            messages.warning(request, f'Room {log.room.number} is now under maintenance.')
        messages.success(request, 'Maintenance logged.')
        return redirect('maintenance:list')
    return render(request, 'maintenance/maintenance_form.html', {'form': form})


@login_required
@staff_required
@require_POST
@handle_errors
def maintenance_update_status(request, log_id):
    service = MaintenanceService()
    log = service.get_log(log_id)
    form = MaintenanceStatusForm(request.POST)
    if form.is_valid():
        data = form.cleaned_data
        service.update_status(log, data['status'], request.user, cost=data['cost'], notes=data['notes'])
        log_maintenance_change(request.user, log, request=request)
        messages.success(request, f'Maintenance #{log.id} is now {log.get_status_display()}.')
    else:
        messages.error(request, 'Please choose a valid status.')
    return redirect('maintenance:list')


# API views

class MaintenanceLogViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, mixins.CreateModelMixin,
                            viewsets.GenericViewSet):
    """
    Maintenance logs (staff only). Query params: status, priority, type, room
    Status changes go through update_status so room status follows.
    """
    serializer_class = MaintenanceLogSerializer
    permission_classes = [IsAuthenticated, IsStaffMember]

    def get_queryset(self):
        params = self.request.query_params
        return MaintenanceService().search(
            params.get('status'), params.get('priority'), params.get('type'), params.get('room')
        )

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        log = MaintenanceService().create(_dto(serializer.validated_data), request.user)
        log_maintenance_change(request.user, log, created=True, request=request)
        return Response(self.get_serializer(log).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'])
    def update_status(self, request, pk=None):
        log = self.get_object()
        serializer = MaintenanceStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        MaintenanceService().update_status(log, data['status'], request.user,
                                           cost=data.get('cost'), notes=data.get('notes'))
        log_maintenance_change(request.user, log, request=request)
        return Response(self.get_serializer(log).data)

    @action(detail=False, methods=['get'])
    def open(self, request):
        logs = MaintenanceService().search().filter(status__in=MaintenanceStatus.OPEN)
        return Response(self.get_serializer(logs, many=True).data)

    @action(detail=False, methods=['get'])
    def counts(self, request):
        return Response(MaintenanceService().counts())
