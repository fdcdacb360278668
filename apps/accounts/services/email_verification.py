"""Email verification service."""

import logging
import secrets
from datetime import timedelta

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.mail import send_mail
from django.db import transaction
from django.utils import timezone

from apps.accounts.models import UserStatus

from .exceptions import (
    InvalidTokenError,
    TokenExpiredError,
    UserNotFoundError,
    EmailAlreadyVerifiedError,
)

User = get_user_model()
logger = logging.getLogger(__name__)

EMAIL_VERIFICATION_EXPIRY_HOURS = 24


def generate_email_verification_token(user: User) -> str:
    """Store a fresh 24-hour verification token on the user and return it."""
    token = secrets.token_urlsafe(32)
    user.email_verification_token = token
    user.email_verification_token_expires_at = (
        timezone.now() + timedelta(hours=EMAIL_VERIFICATION_EXPIRY_HOURS)
    )
    user.save(update_fields=[
        'email_verification_token',
        'email_verification_token_expires_at',
        'updated_at',
    ])
    return token


def send_verification_email(user: User, token: str) -> None:
    send_mail(
        subject="Verify your Club Corra email",
        message=f"Your email verification token is: {token}",
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[user.email],
    )


@transaction.atomic
def request_email_verification(*, email: str) -> str:
    """
    Generate and send a verification token for email.

    Returns:
        The generated token

    Raises:
        UserNotFoundError: If no user has this email
        EmailAlreadyVerifiedError: If email is already verified
    """
    user = User.objects.select_for_update().filter(email__iexact=email).first()
    if user is None:
        raise UserNotFoundError("User not found with this email")
    if user.is_email_verified:
        raise EmailAlreadyVerifiedError("Email is already verified")

    token = generate_email_verification_token(user)
    transaction.on_commit(lambda: send_verification_email(user, token))
    return token


@transaction.atomic
def verify_email_with_token(*, token: str) -> User:
    """
    Verify user's email with token.

    Activates a PENDING user whose mobile number is already verified.

    Args:
        token: Verification token

    Returns:
        User instance

    Raises:
        InvalidTokenError: If token is unknown
        TokenExpiredError: If token has expired
    """
    try:
        user = (
            User.objects
            .select_for_update()
            .get(email_verification_token=token)
        )
    except User.DoesNotExist:
        raise InvalidTokenError("Invalid verification token")

    expires_at = user.email_verification_token_expires_at
    if expires_at is None or expires_at <= timezone.now():
        raise TokenExpiredError("Verification token has expired")

    user.is_email_verified = True
    user.email_verification_token = None
    user.email_verification_token_expires_at = None
    update_fields = [
        'is_email_verified',
        'email_verification_token',
        'email_verification_token_expires_at',
        'updated_at',
    ]

    if user.status == UserStatus.PENDING and user.is_mobile_verified:
        user.status = UserStatus.ACTIVE
        update_fields.append('status')
        logger.info("User %s activated by email verification", user.id)

    user.save(update_fields=update_fields)
    return user
