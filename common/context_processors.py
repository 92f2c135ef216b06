"""
Context processors to make settings and role flags available in all templates
"""
from core.constants import UserRole
from .utils import get_site_settings


def site_settings(request):
    """Add site settings to template context"""
    return {
        'site_settings': get_site_settings(),
    }


def role_flags(request):
    """Role switches used by templates to show or hide navigation"""
    user = getattr(request, 'user', None)
    role = getattr(user, 'role', None) if user is not None and user.is_authenticated else None
    return {
        'is_admin_role': role == UserRole.ADMIN,
        'is_management': role in UserRole.MANAGEMENT_ROLES,
        'is_staff_member': role in UserRole.STAFF_ROLES,
        'is_guest': role == UserRole.GUEST,
    }
