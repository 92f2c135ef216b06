from rest_framework import serializers
from .models import Block


class BlockSerializer(serializers.ModelSerializer):
    """Serializer for Block"""
    total_rooms = serializers.ReadOnlyField()
    occupied_rooms = serializers.ReadOnlyField()
    available_rooms = serializers.ReadOnlyField()
    occupancy_rate = serializers.ReadOnlyField()

    class Meta:
        model = Block
        fields = [
            'id', 'name', 'description', 'floors', 'location',
            'total_rooms', 'occupied_rooms', 'available_rooms', 'occupancy_rate',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
