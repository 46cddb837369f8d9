from rest_framework import serializers
from .models import User


class UserSerializer(serializers.ModelSerializer):
    """Shop account as shown to the POS client."""

    display_name = serializers.CharField(source='get_display_name', read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'username',
            'name',
            'display_name',
            'role',
            'created_at',
            'last_login',
        ]
        read_only_fields = fields


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    username = serializers.CharField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )
