from rest_framework import serializers
from users.models import User


class GuestSerializer(serializers.ModelSerializer):
    """Guest record; username and password are generated on create"""
    full_name = serializers.ReadOnlyField()
    booking_count = serializers.IntegerField(read_only=True, required=False)

    class Meta:
        model = User
        fields = [
            'id', 'username', 'first_name', 'last_name', 'full_name', 'email', 'phone',
            'address', 'gender', 'id_card', 'booking_count', 'date_joined'
        ]
        read_only_fields = ['id', 'username', 'date_joined']
        extra_kwargs = {
            'first_name': {'required': True, 'allow_blank': False},
            'last_name': {'required': True, 'allow_blank': False},
            # Email uniqueness is reported by GuestService
            'email': {'validators': []},
        }


class GuestImportSerializer(serializers.Serializer):
    file = serializers.FileField()
