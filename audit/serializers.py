from rest_framework import serializers

from audit.models import AuditLog


class AuditLogSerializer(serializers.ModelSerializer):
    """Read-only view of an audit entry with its display labels"""

    actor = serializers.CharField(source='user_display', read_only=True)
    username = serializers.CharField(source='user.username', default=None, read_only=True)
    action_label = serializers.CharField(source='get_action_display', read_only=True)
    resource_label = serializers.CharField(source='get_resource_type_display', read_only=True)

    class Meta:
        model = AuditLog
        fields = [
            'id', 'timestamp',
            'user', 'username', 'actor',
            'action', 'action_label',
            'resource_type', 'resource_label', 'resource_id',
            'description', 'metadata',
            'ip_address', 'user_agent',
        ]
        read_only_fields = fields
