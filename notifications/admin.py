from django.contrib import admin
from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ['user', 'type', 'title', 'channel', 'status', 'sent_at', 'read_at', 'created_at']
    list_filter = ['type', 'channel', 'status']
    search_fields = ['title', 'message', 'user__username', 'user__email']
    readonly_fields = ['sent_at', 'read_at', 'error', 'created_at']
