from django.contrib import admin
from .models import MaintenanceLog


@admin.register(MaintenanceLog)
class MaintenanceLogAdmin(admin.ModelAdmin):
    list_display = ['room', 'type', 'priority', 'status', 'assigned_to', 'cost', 'created_at']
    list_filter = ['status', 'priority', 'type']
    search_fields = ['room__number', 'description', 'assigned_to', 'reported_by']
    readonly_fields = ['start_date', 'end_date', 'created_at', 'updated_at']
