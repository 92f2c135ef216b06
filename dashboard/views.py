"""
Dashboard, analytics, checkout monitoring and reports.

Pages and API endpoints are for front-desk roles; analytics and reports
are limited to Admin and Manager.
"""
from django.shortcuts import render
from django.contrib.auth.decorators import login_required
from django.utils import timezone
from rest_framework import viewsets, mixins
from rest_framework.decorators import api_view, permission_classes, action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from core.constants import BookingStatus, PaymentMethod
from common.decorators import staff_required, management_required, handle_errors
from api.filters import GuestScopeFilterBackend
from api.permissions import IsStaffMember, IsManagement, IsOwnerOrStaff
from . import monitoring
from .models import Review
from .reports import PERIODS, DEFAULT_PERIOD, build_report, export_report_csv
from .serializers import ReviewSerializer, CheckoutBookingSerializer
from .services import AnalyticsService


# Template views

@login_required
@staff_required
@handle_errors
def home(request):
    """Front-desk dashboard"""
    service = AnalyticsService()
    now = timezone.now()
    return render(request, 'dashboard/home.html', {
        'overview': service.overview(now),
        'recent_bookings': service.recent_bookings(),
        'checkout_status': monitoring.checkout_status(now),
        'todays_checkins': monitoring.todays_checkins(now),
        'average_rating': service.average_rating(),
    })


@login_required
@management_required
@handle_errors
def analytics(request):
    service = AnalyticsService()
    methods = dict(PaymentMethod.CHOICES)
    breakdown = service.payment_method_breakdown()
    for row in breakdown:
        row['label'] = methods.get(row['method'], row['method'])
    return render(request, 'dashboard/analytics.html', {
        'overview': service.overview(),
        'monthly': service.monthly_metrics(),
        'room_types': service.room_type_distribution(),
        'payment_methods': breakdown,
        'blocks': service.block_occupancy(),
        'status_breakdown': service.booking_status_breakdown(),
        'status_labels': dict(BookingStatus.CHOICES),
        'revenue_trend': service.revenue_trend(),
        'average_rating': service.average_rating(),
    })


@login_required
@staff_required
@handle_errors
def checkout_monitor(request):
    """Upcoming, critical and overdue checkouts plus today's arrivals"""
    return render(request, 'dashboard/monitoring.html', monitoring.monitoring_snapshot())


@login_required
@management_required
@handle_errors
def reports(request):
    period = request.GET.get('period', DEFAULT_PERIOD)
    return render(request, 'dashboard/reports.html', {
        'report': build_report(period),
        'periods': PERIODS,
    })


@login_required
@management_required
@handle_errors
def report_export(request):
    return export_report_csv(request.GET.get('period', DEFAULT_PERIOD))


# API views

@api_view(['GET'])
@permission_classes([IsAuthenticated, IsStaffMember])
def checkout_status(request):
    """Counters for the checkout alert badge (polled by the page header)"""
    return Response(monitoring.checkout_status())


class DashboardViewSet(viewsets.ViewSet):
    """
    Dashboard figures

    summary:    room / booking counters
    analytics:  monthly comparison, distributions and revenue trend (management)
    monitoring: checkout monitor lists
    report:     period report totals (management), ?period=thisMonth
    """
    permission_classes = [IsAuthenticated, IsStaffMember]

    def get_permissions(self):
        if self.action in ('analytics', 'report'):
            return [IsAuthenticated(), IsManagement()]
        return super().get_permissions()

    @action(detail=False, methods=['get'])
    def summary(self, request):
        service = AnalyticsService()
        return Response({
            **service.overview(),
            'average_rating': service.average_rating(),
            'recent_bookings': [
                {
                    'id': b.id,
                    'guest_name': b.guest.full_name,
                    'room_number': b.room.number,
                    'check_in': b.check_in,
                    'status': b.status,
                    'total_amount': b.total_amount,
                }
                for b in service.recent_bookings()
            ],
        })

    @action(detail=False, methods=['get'])
    def analytics(self, request):
        service = AnalyticsService()
        return Response({
            'monthly': service.monthly_metrics(),
            'room_types': service.room_type_distribution(),
            'payment_methods': service.payment_method_breakdown(),
            'blocks': service.block_occupancy(),
            'booking_status': service.booking_status_breakdown(),
            'revenue_trend': service.revenue_trend(),
        })

    @action(detail=False, methods=['get'])
    def monitoring(self, request):
        snapshot = monitoring.monitoring_snapshot()
        return Response({
            'upcoming_checkouts': CheckoutBookingSerializer(snapshot['upcoming_checkouts'], many=True).data,
            'critical_checkouts': CheckoutBookingSerializer(snapshot['critical_checkouts'], many=True).data,
            'overdue_checkouts': CheckoutBookingSerializer(snapshot['overdue_checkouts'], many=True).data,
            'todays_checkins': CheckoutBookingSerializer(snapshot['todays_checkins'], many=True).data,
            'status': snapshot['status'],
        })

    @action(detail=False, methods=['get'])
    def report(self, request):
        report = build_report(request.query_params.get('period', DEFAULT_PERIOD))
        return Response({
            'period': report['period'],
            'period_label': report['period_label'],
            'start': report['start'],
            'end': report['end'],
            'summary': report['summary'],
        })


class ReviewViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, mixins.CreateModelMixin,
                    viewsets.GenericViewSet):
    """Guests review their own past stays; staff read every review"""
    serializer_class = ReviewSerializer
    permission_classes = [IsAuthenticated, IsOwnerOrStaff]
    filter_backends = [GuestScopeFilterBackend]

    def get_queryset(self):
        return Review.objects.select_related('guest', 'booking')

    def perform_create(self, serializer):
        serializer.save(guest=self.request.user)
