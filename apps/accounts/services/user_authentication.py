"""User authentication service."""

import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import OTPType, UserStatus

from . import otp as otp_service
from .exceptions import (
    InvalidCredentialsError,
    InactiveAccountError,
    InvalidRefreshTokenError,
    PasswordNotSetError,
)

User = get_user_model()
logger = logging.getLogger(__name__)


def issue_tokens(user: User) -> dict:
    """Return a fresh JWT pair for user."""
    refresh = RefreshToken.for_user(user)
    return {
        'access_token': str(refresh.access_token),
        'refresh_token': str(refresh),
        'expires_in': int(api_settings.ACCESS_TOKEN_LIFETIME.total_seconds()),
    }


def _ensure_active(user: User) -> None:
    if user.status != UserStatus.ACTIVE:
        raise InactiveAccountError("User account is not active")


def _touch_last_login(user: User) -> None:
    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])


def _authenticate_with_password(user: User | None, password: str) -> User:
    if user is None:
        raise InvalidCredentialsError("Invalid credentials")

    if not user.has_usable_password():
        raise PasswordNotSetError(
            "Password not set for this account. Please use OTP login or set a password first."
        )

    if not user.check_password(password):
        logger.warning("Failed password login for user %s", user.id)
        raise InvalidCredentialsError("Invalid credentials")

    _ensure_active(user)
    _touch_last_login(user)
    return user


def mobile_login(*, mobile_number: str, otp_code: str) -> User:
    """
    Log in with mobile number and OTP.

    Raises:
        InvalidOTPError: If the OTP is wrong or expired
        InvalidCredentialsError: If no user has this mobile number
        InactiveAccountError: If account is not ACTIVE
    """
    otp_service.verify_otp(identifier=mobile_number, otp_type=OTPType.SMS, code=otp_code)

    with transaction.atomic():
        user = User.objects.select_for_update().filter(mobile_number=mobile_number).first()
        if user is None:
            raise InvalidCredentialsError("User not found")

        _ensure_active(user)
        _touch_last_login(user)

    return user


@transaction.atomic
def mobile_password_login(*, mobile_number: str, password: str) -> User:
    """
    Authenticate user with mobile number and password.

    Uses select_for_update() to prevent race conditions when updating last_login.

    Raises:
        InvalidCredentialsError: If credentials are invalid
        PasswordNotSetError: If account has no password
        InactiveAccountError: If account is not ACTIVE
    """
    user = User.objects.select_for_update().filter(mobile_number=mobile_number).first()
    return _authenticate_with_password(user, password)


@transaction.atomic
def email_login(*, email: str, password: str) -> User:
    """
    Authenticate user with email and password.

    Raises:
        InvalidCredentialsError: If credentials are invalid
        PasswordNotSetError: If account has no password
        InactiveAccountError: If account is not ACTIVE
    """
    user = User.objects.select_for_update().filter(email__iexact=email).first()
    return _authenticate_with_password(user, password)


def refresh_tokens(*, refresh_token: str) -> dict:
    """
    Exchange a refresh token for a new token pair.

    Raises:
        InvalidRefreshTokenError: If the token is invalid or its user is gone
    """
    try:
        refresh = RefreshToken(refresh_token)
    except TokenError:
        raise InvalidRefreshTokenError("Invalid refresh token")

    user_id = refresh.payload.get(api_settings.USER_ID_CLAIM)
    user = User.objects.filter(id=user_id).first() if user_id else None
    if user is None or user.status != UserStatus.ACTIVE:
        raise InvalidRefreshTokenError("Invalid refresh token")

    return issue_tokens(user)
