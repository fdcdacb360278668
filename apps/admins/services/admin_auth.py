"""Admin login and token issuance."""

import logging

from django.conf import settings
from django.utils import timezone

from ..authentication import tokens_for_admin
from ..models import Admin
from .exceptions import InvalidAdminCredentialsError, InactiveAdminError

logger = logging.getLogger(__name__)


def issue_admin_tokens(admin: Admin) -> dict:
    refresh = tokens_for_admin(admin)
    return {
        'access_token': str(refresh.access_token),
        'refresh_token': str(refresh),
        'expires_in': int(settings.SIMPLE_JWT['ACCESS_TOKEN_LIFETIME'].total_seconds()),
    }


def admin_login(*, email: str, password: str) -> Admin:
    """
    Authenticate an admin with email and password.

    Args:
        email: Admin email
        password: Plain password

    Returns:
        The authenticated Admin

    Raises:
        InvalidAdminCredentialsError: If the admin is unknown or the password is wrong
        InactiveAdminError: If the admin is not ACTIVE
    """
    admin = Admin.objects.filter(email__iexact=email.strip()).first()

    if admin is None or not admin.check_password(password):
        logger.warning("Failed admin login for %s", email)
        raise InvalidAdminCredentialsError("Invalid credentials")

    if not admin.is_active:
        logger.warning("Login attempt by non-active admin %s", admin.id)
        raise InactiveAdminError("Admin account is not active")

    admin.last_login_at = timezone.now()
    admin.save(update_fields=['last_login_at', 'updated_at'])

    logger.info("Admin %s logged in", admin.id)
    return admin
