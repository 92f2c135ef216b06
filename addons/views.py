from django.shortcuts import render, redirect
from django.contrib.auth.decorators import login_required
from django.contrib import messages
from django.views.decorators.http import require_POST
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from core.constants import ServiceCategory, AuditAction, AuditResource
from common.decorators import staff_required, handle_errors
from audit.helpers import log_action
from api.permissions import IsStaffMember
from bookings.services import BookingService as BookingManager
from .forms import ServiceForm
from .models import Service
from .serializers import ServiceSerializer, BookingServiceSerializer
from .services import AddonService


# Template views

@login_required
@staff_required
@handle_errors
def service_list(request):
    services = Service.objects.all()
    category = request.GET.get('category', '')
    if category:
        services = services.filter(category=category)
    return render(request, 'addons/service_list.html', {
        'services': services,
        'category': category,
        'category_choices': ServiceCategory.CHOICES,
    })


@login_required
@staff_required
@handle_errors
def service_create(request):
    form = ServiceForm(request.POST or None)
    if request.method == 'POST' and form.is_valid():
        service = AddonService().create(request.user, form.cleaned_data)
        log_action(request.user, AuditAction.CREATE, AuditResource.SERVICE, service.id,
                   f"Created service {service.name}", request=request)
        messages.success(request, f'Service "{service.name}" created.')
        return redirect('addons:list')
    return render(request, 'addons/service_form.html', {'form': form})


@login_required
@staff_required
@handle_errors
def service_edit(request, service_id):
    addons = AddonService()
    service = addons.get_service(service_id)
    form = ServiceForm(request.POST or None, instance=service)
    if request.method == 'POST' and form.is_valid():
        addons.update(request.user, service, form.cleaned_data)
        log_action(request.user, AuditAction.UPDATE, AuditResource.SERVICE, service.id,
                   f"Updated service {service.name}", request=request)
        messages.success(request, 'Service updated.')
        return redirect('addons:list')
    return render(request, 'addons/service_form.html', {'form': form, 'service': service})


@login_required
@staff_required
@require_POST
@handle_errors
def service_delete(request, service_id):
    addons = AddonService()
    service = addons.get_service(service_id)
    name = service.name
    addons.delete(request.user, service)
    log_action(request.user, AuditAction.DELETE, AuditResource.SERVICE, service_id,
               f"Deleted service {name}", request=request)
    messages.success(request, f'Service "{name}" deleted.')
    return redirect('addons:list')


# API views

class ServiceViewSet(viewsets.ModelViewSet):
    """
    Extra-services catalogue (staff only).
    add_to_booking: POST {booking, service, quantity}
    """
    serializer_class = ServiceSerializer
    permission_classes = [IsAuthenticated, IsStaffMember]

    def get_queryset(self):
        queryset = Service.objects.all()
        params = self.request.query_params
        if params.get('category'):
            queryset = queryset.filter(category=params['category'])
        if params.get('active') == 'true':
            queryset = queryset.filter(is_active=True)
        return queryset

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        service = AddonService().create(request.user, serializer.validated_data)
        return Response(self.get_serializer(service).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        service = self.get_object()
        serializer = self.get_serializer(service, data=request.data, partial=kwargs.get('partial', False))
        serializer.is_valid(raise_exception=True)
        data = {field: getattr(service, field) for field in ('name', 'description', 'price', 'category', 'is_active')}
        data.update(serializer.validated_data)
        service = AddonService().update(request.user, service, data)
        return Response(self.get_serializer(service).data)

    def destroy(self, request, *args, **kwargs):
        AddonService().delete(request.user, self.get_object())
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=['post'])
    def add_to_booking(self, request):
        serializer = BookingServiceSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        booking = BookingManager().get_booking(data['booking'].id)
        line = AddonService().add_to_booking(booking, data['service'], data.get('quantity', 1), request.user)
        return Response(BookingServiceSerializer(line).data, status=status.HTTP_201_CREATED)
