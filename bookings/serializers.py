from rest_framework import serializers
from core.constants import BookingStatus, PaymentMethod
from .models import Booking


class BookingSerializer(serializers.ModelSerializer):
    """Serializer for Booking (read side)"""
    guest_name = serializers.CharField(source='guest.full_name', read_only=True)
    room_number = serializers.CharField(source='room.number', read_only=True)
    payment_status = serializers.SerializerMethodField()
    is_deleted = serializers.ReadOnlyField()
    nights = serializers.ReadOnlyField()

    class Meta:
        model = Booking
        fields = [
            'id', 'guest', 'guest_name', 'room', 'room_number', 'check_in', 'check_out', 'nights',
            'guests', 'total_amount', 'status', 'special_requests', 'payment_status',
            'is_deleted', 'deleted_at', 'created_at', 'updated_at'
        ]
        read_only_fields = fields

    def get_payment_status(self, obj):
        payment = obj.payment_or_none
        return payment.status if payment else None


class BookingWriteSerializer(serializers.Serializer):
    """Input for creating / editing a booking"""
    guest = serializers.IntegerField(required=False)
    room = serializers.IntegerField()
    check_in_date = serializers.DateField()
    periods = serializers.IntegerField(min_value=1)
    guests = serializers.IntegerField(min_value=1, default=1)
    special_requests = serializers.CharField(required=False, allow_blank=True, default='')


class BookingStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=BookingStatus.CHOICES)


class ExtensionSerializer(serializers.Serializer):
    periods = serializers.IntegerField(min_value=1)
    reason = serializers.CharField(required=False, allow_blank=True, default='')
    method = serializers.ChoiceField(choices=PaymentMethod.CHOICES, default=PaymentMethod.CASH)
