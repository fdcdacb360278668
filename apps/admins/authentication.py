from django.core.exceptions import ValidationError
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import AuthenticationFailed
from rest_framework_simplejwt.tokens import RefreshToken

from .models import Admin


ADMIN_ID_CLAIM = 'admin_id'
ROLE_CLAIM = 'role'


def tokens_for_admin(admin: Admin) -> RefreshToken:
    """Refresh token carrying the admin claims (copied into its access token)."""
    refresh = RefreshToken()
    refresh[ADMIN_ID_CLAIM] = str(admin.id)
    refresh[ROLE_CLAIM] = admin.role
    return refresh


def get_admin_for_token(validated_token) -> Admin:
    """
    Resolve an admin token to its Admin record.

    Raises:
        AuthenticationFailed: If the admin is missing or not active
    """
    try:
        admin = Admin.objects.get(id=validated_token[ADMIN_ID_CLAIM])
    except (Admin.DoesNotExist, ValidationError, ValueError):
        raise AuthenticationFailed('Admin not found', code='user_not_found')

    if not admin.is_active:
        raise AuthenticationFailed('Admin is inactive', code='user_inactive')

    return admin


class PlatformJWTAuthentication(JWTAuthentication):
    """
    JWT authentication for both principals.

    Tokens with an ``admin_id`` claim resolve to Admin records,
    all other tokens to Users.
    """

    def get_user(self, validated_token):
        if ADMIN_ID_CLAIM in validated_token:
            return get_admin_for_token(validated_token)
        return super().get_user(validated_token)
