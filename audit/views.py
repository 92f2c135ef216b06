"""
Audit trail browsing for managers and administrators.
"""
from datetime import timedelta

from django.contrib.auth.decorators import login_required
from django.core.paginator import Paginator
from django.db.models import Count
from django.shortcuts import render
from django.utils import timezone
from django.utils.dateparse import parse_date
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from api.permissions import IsManagement
from audit.models import AuditLog
from audit.serializers import AuditLogSerializer
from common.decorators import management_required, handle_errors
from core.constants import AuditAction, AuditResource, Pagination
from core.exceptions import ValidationError

FILTER_KEYS = ('action', 'resource_type', 'user', 'q', 'date_from', 'date_to')


def _date_param(value):
    try:
        return parse_date(value or '')
    except ValueError:
        raise ValidationError(f"Invalid date: {value}", code="INVALID_DATE")


def _filtered_logs(params):
    """Entries matching the filters shared by the page and the API"""
    queryset = AuditLog.objects.select_related('user')
    if params.get('action'):
        queryset = queryset.of_kind(params['action'])
    if params.get('resource_type'):
        queryset = queryset.filter(resource_type=params['resource_type'])
    if params.get('user'):
        queryset = queryset.by_actor(params['user'])
    if params.get('q'):
        queryset = queryset.filter(description__icontains=params['q'])
    return queryset.between(_date_param(params.get('date_from')), _date_param(params.get('date_to')))


@login_required
@management_required
@handle_errors
def audit_log_list(request):
    page = Paginator(_filtered_logs(request.GET), Pagination.DEFAULT_PAGE_SIZE * 2).get_page(request.GET.get('page'))
    return render(request, 'audit/audit_log_list.html', {
        'page_obj': page,
        'logs': page.object_list,
        'action_choices': AuditAction.CHOICES,
        'resource_choices': AuditResource.CHOICES,
        'filters': {key: request.GET.get(key, '') for key in FILTER_KEYS},
    })


class AuditLogViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Audit trail (ADMIN / MANAGER only).

    Query params: action, resource_type, user, q, date_from, date_to (YYYY-MM-DD)
    """
    serializer_class = AuditLogSerializer
    permission_classes = [IsAuthenticated, IsManagement]

    def get_queryset(self):
        return _filtered_logs(self.request.query_params)

    @action(detail=False, methods=['get'])
    def trail(self, request):
        """History of one object: ?resource_type=Booking&resource_id=12"""
        resource_type = request.query_params.get('resource_type')
        resource_id = request.query_params.get('resource_id')
        if not resource_type or not resource_id or not resource_id.isdigit():
            raise ValidationError(
                "resource_type and a numeric resource_id are required",
                code="MISSING_RESOURCE"
            )
        entries = AuditLog.objects.select_related('user').trail(resource_type, int(resource_id))
        return Response({
            'resource_type': resource_type,
            'resource_id': int(resource_id),
            'count': entries.count(),
            'entries': self.get_serializer(entries, many=True).data,
        })

    @action(detail=False, methods=['get'])
    def stats(self, request):
        """Entry counts per action, resource and most active users"""
        queryset = self.get_queryset()
        since = timezone.now() - timedelta(hours=24)

        def counts(field):
            return dict(queryset.order_by().values_list(field).annotate(total=Count('id')))

        top_users = (
            queryset.exclude(user__isnull=True)
            .order_by()
            .values('user_id', 'user__username')
            .annotate(total=Count('id'))
            .order_by('-total')[:10]
        )
        return Response({
            'total': queryset.count(),
            'last_24h': queryset.filter(timestamp__gte=since).count(),
            'by_action': counts('action'),
            'by_resource': counts('resource_type'),
            'top_users': [
                {'user_id': row['user_id'], 'username': row['user__username'], 'total': row['total']}
                for row in top_users
            ],
        })
