"""
View decorators: role gating and translation of service exceptions into
flash messages and redirects for the template views.
"""
import logging
from functools import wraps

from django.contrib import messages
from django.core.exceptions import PermissionDenied
from django.http import Http404
from django.shortcuts import redirect

from core.constants import UserRole
from core.exceptions import BaseApplicationException, NotFoundError, PermissionDeniedError

logger = logging.getLogger(__name__)


def _log(level, request, message, **kwargs):
    request_id = getattr(request, 'request_id', 'N/A')
    logger.log(level, f"[{request_id}] {message}", extra={'request_id': request_id}, **kwargs)


def _username(request):
    return request.user.username if request.user.is_authenticated else 'anonymous'


def home_url_name(user):
    """Staff land on the dashboard, guests on their bookings"""
    if getattr(user, 'role', None) in UserRole.STAFF_ROLES:
        return 'dashboard:home'
    return 'bookings:my_bookings'


def _go_home(request):
    # The dashboard itself failing must not bounce back to the dashboard
    match = request.resolver_match
    if match and match.url_name == 'home':
        return redirect('rooms:list')
    return redirect(home_url_name(request.user))


def _go_back(request):
    referer = request.META.get('HTTP_REFERER')
    return redirect(referer) if referer else _go_home(request)


def role_required(*roles):
    """Anonymous users go to the login page; users with another role are sent home"""
    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            if not request.user.is_authenticated:
                messages.error(request, 'Please sign in to continue.')
                return redirect('users:login')
            if request.user.role not in roles:
                _log(logging.WARNING, request,
                     f"{request.user.username} ({request.user.role}) refused at {view_func.__name__}")
                messages.error(request, 'You do not have access to that page.')
                return redirect(home_url_name(request.user))
            return view_func(request, *args, **kwargs)
        return wrapper
    return decorator


staff_required = role_required(*UserRole.STAFF_ROLES)
management_required = role_required(*UserRole.MANAGEMENT_ROLES)
admin_required = role_required(UserRole.ADMIN)


def handle_errors(view_func):
    """
    NotFoundError becomes a 404, permission errors a redirect home, other
    domain errors a redirect back with the message flashed. Anything else is
    logged with its traceback and reported generically.
    """
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        try:
            return view_func(request, *args, **kwargs)
        except Http404:
            raise
        except NotFoundError as exc:
            raise Http404(exc.message)
        except (PermissionDenied, PermissionDeniedError) as exc:
            _log(logging.WARNING, request, f"Permission denied for {_username(request)} in {view_func.__name__}")
            messages.error(request, getattr(exc, 'message', None) or 'You do not have permission to do that.')
            return _go_home(request)
        except BaseApplicationException as exc:
            _log(logging.INFO, request, f"{view_func.__name__}: {exc.code or type(exc).__name__}: {exc.message}")
            messages.error(request, exc.message)
            return _go_back(request)
        except ValueError as exc:
            _log(logging.WARNING, request, f"Bad input in {view_func.__name__}: {exc}")
            messages.error(request, f'Invalid input: {exc}')
            return _go_back(request)
        except Exception as exc:
            _log(logging.ERROR, request, f"Unexpected {type(exc).__name__} in {view_func.__name__}: {exc}",
                 exc_info=True)
            messages.error(request, 'Something went wrong. Please try again.')
            return _go_home(request)
    return wrapper
