from rest_framework import serializers

from apps.accounts.models import User, UserStatus
from apps.accounts.serializers import UserProfileSerializer
from apps.coins.serializers import CoinBalanceSerializer

from .models import Admin, AdminRole, AdminStatus


# =============================================================================
# Admin accounts
# =============================================================================

class AdminSerializer(serializers.ModelSerializer):
    """Admin account without the password hash."""

    full_name = serializers.CharField(source='get_full_name', read_only=True)

    class Meta:
        model = Admin
        fields = [
            'id',
            'email',
            'first_name',
            'last_name',
            'full_name',
            'role',
            'status',
            'profile_picture',
            'phone_number',
            'department',
            'permissions',
            'last_login_at',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class AdminCreateSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(min_length=8, write_only=True, style={'input_type': 'password'})
    first_name = serializers.CharField(max_length=100)
    last_name = serializers.CharField(max_length=100)
    role = serializers.ChoiceField(choices=AdminRole.choices, default=AdminRole.ADMIN)
    phone_number = serializers.CharField(max_length=20, required=False, allow_null=True)
    department = serializers.CharField(max_length=100, required=False, allow_null=True)
    permissions = serializers.ListField(child=serializers.CharField(), required=False)


class AdminUpdateSerializer(serializers.Serializer):
    email = serializers.EmailField(required=False)
    password = serializers.CharField(min_length=8, required=False, write_only=True)
    first_name = serializers.CharField(max_length=100, required=False)
    last_name = serializers.CharField(max_length=100, required=False)
    role = serializers.ChoiceField(choices=AdminRole.choices, required=False)
    status = serializers.ChoiceField(choices=AdminStatus.choices, required=False)
    profile_picture = serializers.URLField(max_length=500, required=False, allow_null=True)
    phone_number = serializers.CharField(max_length=20, required=False, allow_null=True)
    department = serializers.CharField(max_length=100, required=False, allow_null=True)
    permissions = serializers.ListField(child=serializers.CharField(), required=False)


class AdminProfileUpdateSerializer(serializers.Serializer):
    password = serializers.CharField(min_length=8, required=False, write_only=True)
    first_name = serializers.CharField(max_length=100, required=False)
    last_name = serializers.CharField(max_length=100, required=False)
    profile_picture = serializers.URLField(max_length=500, required=False, allow_null=True)
    phone_number = serializers.CharField(max_length=20, required=False, allow_null=True)
    department = serializers.CharField(max_length=100, required=False, allow_null=True)


class AdminLoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(style={'input_type': 'password'})


class AdminStatsSerializer(serializers.Serializer):
    total_admins = serializers.IntegerField()
    active_admins = serializers.IntegerField()
    super_admins = serializers.IntegerField()


# =============================================================================
# App users (admin view)
# =============================================================================

class ManagedUserSerializer(serializers.ModelSerializer):
    """User as seen from the admin portal, with profile and coin balance."""

    profile = UserProfileSerializer(read_only=True, allow_null=True)
    coin_balance = CoinBalanceSerializer(read_only=True, allow_null=True)

    class Meta:
        model = User
        fields = [
            'id',
            'mobile_number',
            'email',
            'status',
            'is_mobile_verified',
            'is_email_verified',
            'has_welcome_bonus_processed',
            'roles',
            'last_login',
            'created_at',
            'updated_at',
            'profile',
            'coin_balance',
        ]
        read_only_fields = fields


class UserStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=UserStatus.choices)


class UserStatsSerializer(serializers.Serializer):
    total_users = serializers.IntegerField()
    active_users = serializers.IntegerField()
    pending_users = serializers.IntegerField()
    total_coins = serializers.IntegerField()
