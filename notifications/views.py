from django.shortcuts import render, redirect, get_object_or_404
from django.contrib.auth.decorators import login_required
from django.contrib import messages
from django.core.paginator import Paginator
from django.views.decorators.http import require_POST
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from core.constants import Pagination
from common.decorators import handle_errors
from .models import Notification
from .serializers import NotificationSerializer
from .services import mark_read, mark_all_read


@login_required
@handle_errors
def notification_list(request):
    """The signed-in user's notifications, newest first"""
    notifications = Notification.objects.filter(user=request.user).select_related('booking')
    page = Paginator(notifications, Pagination.DEFAULT_PAGE_SIZE).get_page(request.GET.get('page'))
    return render(request, 'notifications/notification_list.html', {
        'page_obj': page,
        'notifications': page.object_list,
        'unread_count': notifications.filter(read_at__isnull=True).count(),
    })


@login_required
@require_POST
@handle_errors
def notification_mark_read(request, notification_id):
    notification = get_object_or_404(Notification, id=notification_id, user=request.user)
    mark_read(notification)
    return redirect('notifications:list')


@login_required
@require_POST
@handle_errors
def notification_mark_all_read(request):
    count = mark_all_read(request.user)
    messages.success(request, f'{count} notification(s) marked as read.')
    return redirect('notifications:list')


class NotificationViewSet(viewsets.ReadOnlyModelViewSet):
    """Each user sees only their own notifications"""
    serializer_class = NotificationSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        queryset = Notification.objects.filter(user=self.request.user)
        if self.request.query_params.get('unread') == 'true':
            queryset = queryset.filter(read_at__isnull=True)
        return queryset

    @action(detail=True, methods=['post'])
    def mark_read(self, request, pk=None):
        notification = mark_read(self.get_object())
        return Response(self.get_serializer(notification).data)

    @action(detail=False, methods=['post'])
    def mark_all_read(self, request):
        return Response({'marked': mark_all_read(request.user)})

    @action(detail=False, methods=['get'])
    def unread_count(self, request):
        return Response({'unread': self.get_queryset().filter(read_at__isnull=True).count()})
