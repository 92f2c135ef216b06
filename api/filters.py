"""
Custom filter backends
"""
from rest_framework import filters


class NotDeletedFilterBackend(filters.BaseFilterBackend):
    """
    Hide soft-deleted rows from lists unless ?include_deleted=true is passed by a
    staff user. Staff reach deleted rows on detail routes (restore, purge).
    """

    def filter_queryset(self, request, queryset, view):
        if getattr(request.user, 'is_staff_member', False):
            include_deleted = request.query_params.get('include_deleted', '').lower() == 'true'
            if include_deleted or getattr(view, 'detail', False):
                return queryset
        return queryset.filter(deleted_at__isnull=True)


class GuestScopeFilterBackend(filters.BaseFilterBackend):
    """
    Restrict guests to their own rows; staff see everything.
    The owning field is taken from view.guest_field (default 'guest').
    """

    def filter_queryset(self, request, queryset, view):
        user = request.user
        if not (user and user.is_authenticated):
            return queryset.none()
        if getattr(user, 'is_staff_member', False):
            return queryset
        field = getattr(view, 'guest_field', 'guest')
        return queryset.filter(**{field: user})
