from rest_framework import serializers
from core.constants import PaymentStatus
from .models import Payment, SecurityDeposit


class PaymentSerializer(serializers.ModelSerializer):
    """Serializer for Payment"""
    guest_name = serializers.CharField(source='booking.guest.full_name', read_only=True)
    room_number = serializers.CharField(source='booking.room.number', read_only=True)
    method_display = serializers.CharField(source='get_method_display', read_only=True)

    class Meta:
        model = Payment
        fields = [
            'id', 'booking', 'guest_name', 'room_number', 'amount', 'method', 'method_display', 'status',
            'transaction_id', 'paid_at', 'notes', 'failure_reason', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'status', 'paid_at', 'failure_reason', 'created_at', 'updated_at']
        # One payment per booking is reported as a conflict by PaymentService
        validators = []
        extra_kwargs = {'booking': {'validators': []}}


class PaymentStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=PaymentStatus.CHOICES)
    failure_reason = serializers.CharField(required=False, allow_blank=True, default='')


class SecurityDepositSerializer(serializers.ModelSerializer):
    guest_name = serializers.CharField(source='booking.guest.full_name', read_only=True)
    processed_by_name = serializers.CharField(source='processed_by.username', read_only=True, default=None)
    is_settled = serializers.ReadOnlyField()

    class Meta:
        model = SecurityDeposit
        fields = [
            'id', 'booking', 'guest_name', 'amount', 'method', 'status', 'transaction_id', 'paid_at',
            'refunded_at', 'refund_amount', 'deduction_amount', 'deduction_reason', 'damage_report',
            'processed_by', 'processed_by_name', 'is_settled', 'created_at'
        ]
        read_only_fields = [
            'id', 'status', 'paid_at', 'refunded_at', 'refund_amount', 'deduction_amount',
            'deduction_reason', 'damage_report', 'processed_by', 'created_at'
        ]
        validators = []
        extra_kwargs = {'booking': {'validators': []}}


class DepositRefundSerializer(serializers.Serializer):
    refund_amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, default=0)
    deduction_amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, default=0)
    deduction_reason = serializers.CharField(required=False, allow_blank=True, default='')
    damage_report = serializers.CharField(required=False, allow_blank=True, default='')
