from rest_framework import serializers
from .models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    type_display = serializers.CharField(source='get_type_display', read_only=True)
    is_read = serializers.ReadOnlyField()

    class Meta:
        model = Notification
        fields = [
            'id', 'booking', 'type', 'type_display', 'title', 'message', 'channel', 'status',
            'sent_at', 'read_at', 'is_read', 'created_at'
        ]
        read_only_fields = fields
