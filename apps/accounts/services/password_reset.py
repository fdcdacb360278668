"""Password reset service."""

import logging
import secrets
from datetime import timedelta

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.mail import send_mail
from django.db import transaction
from django.utils import timezone

from .exceptions import InvalidTokenError
from .passwords import validate_password_strength

User = get_user_model()
logger = logging.getLogger(__name__)

PASSWORD_RESET_EXPIRY_HOURS = 1


@transaction.atomic
def request_password_reset(*, email: str) -> str | None:
    """
    Generate password reset token for user and email it.

    Unknown emails are ignored so callers never reveal whether
    an account exists.

    Args:
        email: User's email address

    Returns:
        Reset token, or None if there is no matching account
    """
    user = (
        User.objects
        .select_for_update()
        .filter(email__iexact=email)
        .first()
    )
    if user is None or not user.is_active:
        logger.info("Password reset requested for unknown email")
        return None

    reset_token = secrets.token_urlsafe(32)
    user.password_reset_token = reset_token
    user.password_reset_token_expires_at = (
        timezone.now() + timedelta(hours=PASSWORD_RESET_EXPIRY_HOURS)
    )
    user.save(update_fields=[
        'password_reset_token',
        'password_reset_token_expires_at',
        'updated_at',
    ])

    transaction.on_commit(lambda: send_mail(
        subject="Reset your Club Corra password",
        message=f"Your password reset token is: {reset_token}",
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[user.email],
    ))

    return reset_token


@transaction.atomic
def reset_password_with_token(*, token: str, password: str, confirm_password: str) -> User:
    """
    Reset user password with token.

    Args:
        token: Reset token
        password: New password
        confirm_password: Must match password

    Returns:
        User instance

    Raises:
        WeakPasswordError: If password is too weak
        PasswordConfirmationError: If passwords don't match
        InvalidTokenError: If token is invalid or expired
    """
    validate_password_strength(password, confirm_password)

    try:
        user = (
            User.objects
            .select_for_update()
            .get(password_reset_token=token)
        )
    except User.DoesNotExist:
        raise InvalidTokenError("Invalid or expired reset token")

    expires_at = user.password_reset_token_expires_at
    if expires_at is None or expires_at <= timezone.now():
        raise InvalidTokenError("Invalid or expired reset token")

    # Set new password and clear token
    user.set_password(password)
    user.password_reset_token = None
    user.password_reset_token_expires_at = None
    user.save(update_fields=[
        'password',
        'password_reset_token',
        'password_reset_token_expires_at',
        'updated_at',
    ])

    logger.info("Password reset for user %s", user.id)
    return user
