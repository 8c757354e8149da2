from __future__ import annotations

from rest_framework import serializers

from .models import ADMIN_ROLES, CUSTOMER_ROLES, CustomUser


class CustomerSerializer(serializers.ModelSerializer):
    """Compact customer card used by the POS customer picker."""
    name = serializers.CharField(source='display_name', read_only=True)

    class Meta:
        model = CustomUser
        fields = ['id', 'name', 'email', 'mobile_number', 'role']


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = CustomUser
        fields = [
            'id', 'username', 'name', 'email', 'mobile_number', 'role',
            'kyc_status', 'state', 'district', 'is_active', 'date_joined',
        ]
        read_only_fields = ('id', 'username', 'date_joined')

    def validate_role(self, value: str) -> str:
        request = self.context.get('request')
        actor = getattr(request, 'user', None)
        current = self.instance.role if self.instance else None
        touches_console_role = value in ADMIN_ROLES or current in ADMIN_ROLES
        if touches_console_role and value != current and not getattr(actor, 'is_super_admin', False):
            raise serializers.ValidationError('Only a Super Admin can grant or revoke console roles.')
        return value


class RegisterSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=150)
    password = serializers.CharField(min_length=6, write_only=True)
    name = serializers.CharField(max_length=255)
    mobile_number = serializers.CharField(max_length=20)
    email = serializers.EmailField(required=False, allow_blank=True)
    role = serializers.ChoiceField(choices=CUSTOMER_ROLES, default='farmer')
    state = serializers.CharField(required=False, allow_blank=True, max_length=100)
    district = serializers.CharField(required=False, allow_blank=True, max_length=100)

    def validate_username(self, value: str) -> str:
        if CustomUser.objects.filter(username=value).exists():
            raise serializers.ValidationError('Username already exists')
        return value

    def validate_mobile_number(self, value: str) -> str:
        value = value.strip()
        if not value.isdigit() or len(value) != 10:
            raise serializers.ValidationError('Mobile number must be 10 digits')
        if CustomUser.objects.filter(mobile_number=value).exists():
            raise serializers.ValidationError('Mobile number already registered')
        return value

    def create(self, validated_data):
        password = validated_data.pop('password')
        user = CustomUser(**validated_data)
        user.set_password(password)
        user.save()
        return user
