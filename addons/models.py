from django.db import models
from django.core.validators import MinValueValidator
from core.constants import ServiceCategory
from bookings.models import Booking


class Service(models.Model):
    """Extra service that can be added to a booking (room service, spa, laundry...)"""
    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True)
    price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    category = models.CharField(max_length=20, choices=ServiceCategory.CHOICES, default=ServiceCategory.OTHER)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['category', 'name']
        verbose_name = "Service"
        verbose_name_plural = "Services"

    def __str__(self):
        return f"{self.name} ({self.price})"


class BookingService(models.Model):
    """A service line on a booking"""
    booking = models.ForeignKey(Booking, on_delete=models.CASCADE, related_name='booking_services')
    service = models.ForeignKey(Service, on_delete=models.PROTECT, related_name='booking_services')
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    total_price = models.DecimalField(max_digits=12, decimal_places=2)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ['booking', 'service']
        verbose_name = "Booking Service"
        verbose_name_plural = "Booking Services"

    def __str__(self):
        return f"{self.service.name} x{self.quantity} on booking #{self.booking_id}"
