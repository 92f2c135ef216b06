from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    User management for every role.

    ADMIN / MANAGER / STAFF users operate the front desk.
    GUEST users are the people who stay; they are normally created from the
    Guests page, which generates a temporary password.
    """
    list_display = ['username', 'email', 'first_name', 'last_name', 'role', 'is_active', 'date_joined']
    list_filter = ['role', 'is_active', 'is_staff', 'gender']
    search_fields = ['username', 'email', 'first_name', 'last_name', 'phone', 'id_card']

    fieldsets = BaseUserAdmin.fieldsets + (
        ('Property Role & Profile', {
            'fields': ('role', 'phone', 'address', 'gender', 'id_card'),
            'description': 'Role controls which pages the user can reach.'
        }),
    )

    add_fieldsets = BaseUserAdmin.add_fieldsets + (
        ('Property Role & Profile', {
            'fields': ('email', 'first_name', 'last_name', 'role', 'phone'),
        }),
    )
