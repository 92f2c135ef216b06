"""
Role-based permissions for the REST API
"""
from rest_framework import permissions
from core.constants import UserRole


def _role(request):
    user = getattr(request, 'user', None)
    if not (user and user.is_authenticated):
        return None
    return getattr(user, 'role', None)


class IsStaffMember(permissions.BasePermission):
    """
    Permission to allow front-desk roles (Admin, Manager, Staff)
    """
    message = 'Only staff members can access this resource.'

    def has_permission(self, request, view):
        return _role(request) in UserRole.STAFF_ROLES


class IsManagement(permissions.BasePermission):
    """
    Permission to allow Admin and Manager roles
    """
    message = 'Only managers and administrators can access this resource.'

    def has_permission(self, request, view):
        return _role(request) in UserRole.MANAGEMENT_ROLES


class IsAdminRole(permissions.BasePermission):
    """
    Permission to allow the Admin role only
    """
    message = 'Only administrators can access this resource.'

    def has_permission(self, request, view):
        return _role(request) == UserRole.ADMIN


class IsStaffReadAdminWrite(permissions.BasePermission):
    """
    Staff roles may read; only admins may write (blocks, users)
    """

    def has_permission(self, request, view):
        role = _role(request)
        if request.method in permissions.SAFE_METHODS:
            return role in UserRole.STAFF_ROLES
        return role == UserRole.ADMIN


class IsOwnerOrStaff(permissions.BasePermission):
    """
    Object-level: guests only reach objects they own, staff reach everything
    """

    def has_permission(self, request, view):
        return _role(request) is not None

    def has_object_permission(self, request, view, obj):
        if _role(request) in UserRole.STAFF_ROLES:
            return True
        owner = getattr(obj, 'guest', None) or getattr(obj, 'user', None)
        if owner is None and hasattr(obj, 'booking'):
            owner = obj.booking.guest
        return owner == request.user


class IsManagementOrReadOnly(permissions.BasePermission):
    """
    Staff roles may read; Admin and Manager may write
    """

    def has_permission(self, request, view):
        role = _role(request)
        if request.method in permissions.SAFE_METHODS:
            return role in UserRole.STAFF_ROLES
        return role in UserRole.MANAGEMENT_ROLES
