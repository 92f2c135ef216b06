from django.db import models
from django.conf import settings
from django.core.validators import MinValueValidator
from decimal import Decimal
from core.constants import PaymentMethod, PaymentStatus, DepositStatus
from bookings.models import Booking


class Payment(models.Model):
    """The main payment of a booking - one per booking"""
    booking = models.OneToOneField(Booking, on_delete=models.CASCADE, related_name='payment')
    amount = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(Decimal('0.01'))])
    method = models.CharField(max_length=20, choices=PaymentMethod.CHOICES, default=PaymentMethod.CASH)
    status = models.CharField(max_length=20, choices=PaymentStatus.CHOICES, default=PaymentStatus.PENDING)
    transaction_id = models.CharField(max_length=100, blank=True)
    paid_at = models.DateTimeField(null=True, blank=True)
    notes = models.TextField(blank=True)
    failure_reason = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name = "Payment"
        verbose_name_plural = "Payments"
        indexes = [
            models.Index(fields=['status'], name='payment_status_idx'),
            models.Index(fields=['status', 'paid_at'], name='payment_paid_at_idx'),
            models.Index(fields=['method'], name='payment_method_idx'),
        ]

    def __str__(self):
        return f"Payment {self.amount} for booking #{self.booking_id} ({self.get_status_display()})"


class SecurityDeposit(models.Model):
    """Refundable deposit tracked separately from the booking's payment"""
    booking = models.OneToOneField(Booking, on_delete=models.CASCADE, related_name='security_deposit')
    amount = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(Decimal('0.01'))])
    method = models.CharField(max_length=20, choices=PaymentMethod.CHOICES, default=PaymentMethod.CASH)
    status = models.CharField(max_length=20, choices=DepositStatus.CHOICES, default=DepositStatus.PENDING)
    transaction_id = models.CharField(max_length=100, blank=True)
    paid_at = models.DateTimeField(null=True, blank=True)
    refunded_at = models.DateTimeField(null=True, blank=True)
    refund_amount = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    deduction_amount = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    deduction_reason = models.TextField(blank=True)
    damage_report = models.TextField(blank=True)
    processed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
        related_name='processed_deposits'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name = "Security Deposit"
        verbose_name_plural = "Security Deposits"
        indexes = [
            models.Index(fields=['status'], name='deposit_status_idx'),
        ]

    def __str__(self):
        return f"Deposit {self.amount} for booking #{self.booking_id} ({self.get_status_display()})"

    @property
    def is_settled(self):
        return self.status in DepositStatus.SETTLED
