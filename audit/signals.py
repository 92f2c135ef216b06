"""Authentication events recorded on the audit trail"""
from django.contrib.auth.signals import user_logged_in, user_logged_out, user_login_failed
from django.dispatch import receiver

from audit.helpers import log_login, log_login_failed, log_logout


@receiver(user_logged_in)
def record_login(sender, request, user, **kwargs):
    log_login(user, request)


@receiver(user_logged_out)
def record_logout(sender, request, user, **kwargs):
    # Anonymous sessions log out with user=None
    if user is not None:
        log_logout(user, request)


@receiver(user_login_failed)
def record_failed_login(sender, credentials, request=None, **kwargs):
    log_login_failed(credentials.get('username', ''), request)
