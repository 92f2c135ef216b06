from rest_framework import serializers
from .models import RoomType, Room, Asset, RoomAsset


class RoomTypeSerializer(serializers.ModelSerializer):
    """Serializer for RoomType"""
    class Meta:
        model = RoomType
        fields = ['id', 'name', 'display_name', 'description', 'base_price', 'max_capacity', 'is_active']
        read_only_fields = ['id']


class RoomAssetSerializer(serializers.ModelSerializer):
    asset_name = serializers.CharField(source='asset.name', read_only=True)

    class Meta:
        model = RoomAsset
        fields = ['id', 'asset', 'asset_name', 'quantity', 'condition', 'notes', 'assigned_at']
        read_only_fields = ['id', 'assigned_at']


class RoomSerializer(serializers.ModelSerializer):
    """Serializer for Room"""
    room_type_name = serializers.CharField(source='room_type.display_name', read_only=True)
    block_name = serializers.CharField(source='block.name', read_only=True, default=None)
    amenity_list = serializers.ReadOnlyField()
    image_list = serializers.ReadOnlyField()

    class Meta:
        model = Room
        fields = [
            'id', 'number', 'room_type', 'room_type_name', 'status', 'block', 'block_name', 'floor',
            'capacity', 'price_per_night', 'pricing_period', 'description', 'amenities', 'amenity_list',
            'images', 'image_list', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'status', 'created_at', 'updated_at']
        # (block, number) uniqueness is checked case-insensitively by RoomService
        validators = []


class RoomDetailSerializer(RoomSerializer):
    room_assets = RoomAssetSerializer(many=True, read_only=True)

    class Meta(RoomSerializer.Meta):
        fields = RoomSerializer.Meta.fields + ['room_assets']


class RoomStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Room._meta.get_field('status').choices)


class AssetSerializer(serializers.ModelSerializer):
    """Serializer for Asset"""
    class Meta:
        model = Asset
        fields = [
            'id', 'name', 'category', 'description', 'serial_number', 'purchase_date',
            'warranty_expiry', 'last_inspected', 'notes', 'created_at'
        ]
        read_only_fields = ['id', 'created_at']
