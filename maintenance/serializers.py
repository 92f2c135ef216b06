from rest_framework import serializers
from core.constants import MaintenanceStatus
from .models import MaintenanceLog


class MaintenanceLogSerializer(serializers.ModelSerializer):
    """Serializer for MaintenanceLog"""
    room_number = serializers.CharField(source='room.number', read_only=True)
    asset_name = serializers.CharField(source='asset.name', read_only=True, default=None)
    is_open = serializers.ReadOnlyField()

    class Meta:
        model = MaintenanceLog
        fields = [
            'id', 'room', 'room_number', 'asset', 'asset_name', 'type', 'description', 'status', 'priority',
            'reported_by', 'assigned_to', 'start_date', 'end_date', 'cost', 'notes', 'is_open',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'status', 'start_date', 'end_date', 'created_at', 'updated_at']


class MaintenanceStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=MaintenanceStatus.CHOICES)
    cost = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, default='')
