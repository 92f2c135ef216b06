from django.contrib import admin
from .models import RoomType, Room, Asset, RoomAsset


@admin.register(RoomType)
class RoomTypeAdmin(admin.ModelAdmin):
    list_display = ['name', 'display_name', 'base_price', 'max_capacity', 'is_active']
    list_filter = ['is_active']
    search_fields = ['name', 'display_name']


class RoomAssetInline(admin.TabularInline):
    model = RoomAsset
    extra = 0


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ['number', 'block', 'room_type', 'floor', 'status', 'capacity', 'price_per_night', 'pricing_period']
    list_filter = ['status', 'room_type', 'block', 'pricing_period']
    search_fields = ['number', 'description', 'amenities']
    inlines = [RoomAssetInline]


@admin.register(Asset)
class AssetAdmin(admin.ModelAdmin):
    list_display = ['name', 'category', 'serial_number', 'purchase_date', 'warranty_expiry', 'last_inspected']
    list_filter = ['category']
    search_fields = ['name', 'serial_number']
