from django.conf import settings
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.shortcuts import render, redirect, get_object_or_404
from django.utils.crypto import constant_time_compare
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, authentication_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
import logging

from core.constants import SettingCategory, AuditAction, AuditResource
from audit.helpers import log_action
from notifications.services import send_checkout_reminders
from .decorators import admin_required, handle_errors
from .forms import SettingForm
from .models import Setting
from .utils import set_setting, initialize_default_settings

logger = logging.getLogger(__name__)


@login_required
@admin_required
@handle_errors
def settings_list(request):
    """Runtime settings grouped by category (admins only)"""
    if request.method == 'POST' and request.POST.get('action') == 'initialize':
        created = initialize_default_settings()
        messages.success(request, f'{created} default setting(s) created.')
        return redirect('common:settings')

    grouped = []
    all_settings = list(Setting.objects.all())
    for code, label in SettingCategory.CHOICES:
        rows = [s for s in all_settings if s.category == code]
        if rows:
            grouped.append((label, rows))
    return render(request, 'common/settings_list.html', {'grouped': grouped})


@login_required
@admin_required
@handle_errors
def setting_edit(request, setting_id=None):
    setting = get_object_or_404(Setting, id=setting_id) if setting_id else None
    form = SettingForm(request.POST or None, instance=setting)
    if request.method == 'POST' and form.is_valid():
        data = form.cleaned_data
        saved = set_setting(data['key'], data['value'], category=data['category'],
                            is_secret=data['is_secret'], description=data['description'])
        log_action(request.user, AuditAction.UPDATE, AuditResource.SETTING, saved.id,
                   f"Updated setting {saved.key}", request=request)
        messages.success(request, f'Setting {saved.key} saved.')
        return redirect('common:settings')
    return render(request, 'common/setting_form.html', {'form': form, 'setting': setting})


def _cron_secret(request):
    return request.headers.get('X-Cron-Secret') or request.query_params.get('secret') or ''


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def cron_checkout_reminders(request):
    """
    Trigger checkout reminders from an external scheduler.
    Requires CRON_SECRET in the X-Cron-Secret header or ?secret=.
    """
    expected = getattr(settings, 'CRON_SECRET', '')
    if not expected or not constant_time_compare(_cron_secret(request), expected):
        logger.warning("Rejected cron call with a missing or wrong secret")
        return Response({'detail': 'Unauthorized'}, status=status.HTTP_401_UNAUTHORIZED)

    sent = send_checkout_reminders()
    return Response({'success': True, 'reminders_sent': sent})
