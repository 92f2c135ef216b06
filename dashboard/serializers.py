from rest_framework import serializers
from core.constants import BookingStatus
from .models import Review


class ReviewSerializer(serializers.ModelSerializer):
    guest_name = serializers.CharField(source='guest.full_name', read_only=True)

    class Meta:
        model = Review
        fields = ['id', 'guest', 'guest_name', 'booking', 'rating', 'title', 'comment', 'category', 'created_at']
        read_only_fields = ['id', 'guest', 'created_at']

    def validate_booking(self, booking):
        request = self.context.get('request')
        if booking is None or request is None:
            return booking
        if booking.guest_id != request.user.id:
            raise serializers.ValidationError("You can only review your own bookings.")
        if booking.status != BookingStatus.CHECKED_OUT:
            raise serializers.ValidationError("Reviews are accepted after check-out.")
        return booking


class CheckoutBookingSerializer(serializers.Serializer):
    """Booking row on the checkout monitor"""
    id = serializers.IntegerField()
    guest_name = serializers.CharField(source='guest.full_name')
    room_number = serializers.CharField(source='room.number')
    block_name = serializers.CharField(source='room.block.name', default=None)
    check_in = serializers.DateTimeField()
    check_out = serializers.DateTimeField()
    status = serializers.CharField()
    hours_remaining = serializers.FloatField(required=False)
    urgency = serializers.CharField(required=False)
    is_overdue = serializers.BooleanField(required=False)
