from django.db import models
from django.core.validators import MinValueValidator
from core.constants import RoomStatus, PricingPeriod, AssetCategory, AssetCondition
from blocks.models import Block


class RoomType(models.Model):
    """Room category (Single, Double, Suite...) with its base price and capacity"""
    name = models.CharField(max_length=50, unique=True, help_text="Code, e.g. 'DELUXE'")
    display_name = models.CharField(max_length=100)
    description = models.TextField(blank=True)
    base_price = models.DecimalField(max_digits=10, decimal_places=2, default=0, validators=[MinValueValidator(0)])
    max_capacity = models.PositiveIntegerField(default=1)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['display_name']
        verbose_name = "Room Type"
        verbose_name_plural = "Room Types"

    def __str__(self):
        return self.display_name


class Room(models.Model):
    """A bookable room"""
    number = models.CharField(max_length=20, help_text="e.g., '101', 'A-12'")
    room_type = models.ForeignKey(RoomType, on_delete=models.PROTECT, related_name='rooms')
    status = models.CharField(max_length=20, choices=RoomStatus.CHOICES, default=RoomStatus.AVAILABLE)
    block = models.ForeignKey(Block, on_delete=models.SET_NULL, null=True, blank=True, related_name='rooms')
    floor = models.IntegerField(default=1)
    capacity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    price_per_night = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)],
                                          help_text="Price for one pricing period")
    pricing_period = models.CharField(max_length=10, choices=PricingPeriod.CHOICES, default=PricingPeriod.NIGHT)
    description = models.TextField(blank=True)
    amenities = models.TextField(blank=True, help_text="Comma separated, e.g. 'WiFi, TV, Mini bar'")
    images = models.TextField(blank=True, help_text="One image URL per line")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['number']
        unique_together = ['block', 'number']
        verbose_name = "Room"
        verbose_name_plural = "Rooms"
        indexes = [
            models.Index(fields=['status'], name='room_status_idx'),
            models.Index(fields=['block', 'status'], name='room_block_status_idx'),
            models.Index(fields=['room_type', 'status'], name='room_type_status_idx'),
        ]

    def __str__(self):
        if self.block_id:
            return f"{self.block.name} - Room {self.number}"
        return f"Room {self.number}"

    @property
    def amenity_list(self):
        return [a.strip() for a in self.amenities.split(',') if a.strip()]

    @property
    def image_list(self):
        return [line.strip() for line in self.images.splitlines() if line.strip()]

    @property
    def period_label(self):
        return PricingPeriod.LABELS.get(self.pricing_period, 'night')

    @property
    def is_locked(self):
        """Maintenance / out-of-order rooms are not touched by booking changes"""
        return self.status in RoomStatus.LOCKED


class Asset(models.Model):
    """Inventory item that can be placed in rooms"""
    name = models.CharField(max_length=100)
    category = models.CharField(max_length=20, choices=AssetCategory.CHOICES, default=AssetCategory.OTHER)
    description = models.TextField(blank=True)
    serial_number = models.CharField(max_length=100, blank=True)
    purchase_date = models.DateField(null=True, blank=True)
    warranty_expiry = models.DateField(null=True, blank=True)
    last_inspected = models.DateField(null=True, blank=True)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']
        verbose_name = "Asset"
        verbose_name_plural = "Assets"

    def __str__(self):
        return f"{self.name} ({self.get_category_display()})"


class RoomAsset(models.Model):
    """Asset placed in a room"""
    room = models.ForeignKey(Room, on_delete=models.CASCADE, related_name='room_assets')
    asset = models.ForeignKey(Asset, on_delete=models.CASCADE, related_name='room_assets')
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    condition = models.CharField(max_length=20, choices=AssetCondition.CHOICES, default=AssetCondition.GOOD)
    notes = models.TextField(blank=True)
    assigned_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ['room', 'asset']
        verbose_name = "Room Asset"
        verbose_name_plural = "Room Assets"

    def __str__(self):
        return f"{self.asset.name} x{self.quantity} in {self.room}"
