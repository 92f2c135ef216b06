from rest_framework import serializers
from .models import Service, BookingService


class ServiceSerializer(serializers.ModelSerializer):
    category_display = serializers.CharField(source='get_category_display', read_only=True)

    class Meta:
        model = Service
        fields = ['id', 'name', 'description', 'price', 'category', 'category_display', 'is_active', 'created_at']
        read_only_fields = ['id', 'created_at']
        extra_kwargs = {'name': {'validators': []}}


class BookingServiceSerializer(serializers.ModelSerializer):
    service_name = serializers.CharField(source='service.name', read_only=True)

    class Meta:
        model = BookingService
        fields = ['id', 'booking', 'service', 'service_name', 'quantity', 'total_price', 'created_at']
        read_only_fields = ['id', 'total_price', 'created_at']
        validators = []
