import json

from django.contrib import admin
from django.utils.html import format_html

from audit.models import AuditLog


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    """Browse-only: entries cannot be added, edited or removed from the admin"""

    list_display = ['timestamp', 'user_display', 'action', 'resource_type', 'resource_id', 'summary']
    list_filter = ['action', 'resource_type', ('user', admin.RelatedOnlyFieldListFilter)]
    search_fields = ['description', 'user__username', 'ip_address']
    date_hierarchy = 'timestamp'
    readonly_fields = ['timestamp', 'user', 'action', 'resource_type', 'resource_id',
                       'description', 'pretty_metadata', 'ip_address', 'user_agent']
    exclude = ['metadata']
    actions = None

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    @admin.display(description='Description')
    def summary(self, obj):
        return obj.description if len(obj.description) <= 80 else f"{obj.description[:77]}..."

    @admin.display(description='Metadata')
    def pretty_metadata(self, obj):
        return format_html('<pre>{}</pre>', json.dumps(obj.metadata, indent=2, sort_keys=True))
