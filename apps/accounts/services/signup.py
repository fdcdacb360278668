"""
Signup flows.

The staged mobile signup runs in this order:

1. ``initial_signup``: create a PENDING user and send an SMS OTP
2. ``verify_signup_otp``: mark the mobile number verified
3. ``setup_signup_password``: set password (activates when no email)
4. ``add_signup_email``: attach email and send verification
5. ``verify_signup_email``: verify email and activate the account

The generic OTP flow (``request_otp`` / ``verify_otp_flow``) and the
standalone ``setup_password`` live here too.
"""

import logging

from django.contrib.auth import get_user_model
from django.db import transaction

from apps.accounts.models import OTPType, UserStatus

from . import otp as otp_service
from . import user_management
from .email_verification import (
    generate_email_verification_token,
    send_verification_email,
    verify_email_with_token,
)
from .exceptions import (
    InvalidSignupStateError,
    MissingIdentifierError,
    PasswordAlreadySetError,
    UserNotFoundError,
)
from .passwords import validate_password_strength

User = get_user_model()
logger = logging.getLogger(__name__)


def _identifier_for(otp_type: str, mobile_number: str | None, email: str | None) -> str:
    if otp_type == OTPType.SMS:
        if not mobile_number:
            raise MissingIdentifierError("Mobile number is required for mobile OTP")
        return mobile_number
    if not email:
        raise MissingIdentifierError("Email is required for email OTP")
    return email


def _get_by_mobile_for_update(mobile_number: str) -> User | None:
    return User.objects.select_for_update().filter(mobile_number=mobile_number).first()


# =============================================================================
# Staged signup
# =============================================================================

@transaction.atomic
def initial_signup(*, first_name: str, last_name: str, mobile_number: str) -> dict:
    """
    Start signup for a mobile number.

    Args:
        first_name: User's first name
        last_name: User's last name
        mobile_number: Mobile number to register

    Returns:
        dict with ``message``, ``mobile_number``, ``requires_otp_verification``
        and ``redirect_to_login``
    """
    existing = _get_by_mobile_for_update(mobile_number)

    if existing is not None and existing.status == UserStatus.ACTIVE:
        return {
            'message': 'This mobile number is already registered. Please login instead.',
            'mobile_number': mobile_number,
            'requires_otp_verification': False,
            'redirect_to_login': True,
        }

    if existing is not None and existing.status == UserStatus.PENDING and not existing.has_usable_password():
        user_management.update_profile(user=existing, first_name=first_name, last_name=last_name)
        transaction.on_commit(
            lambda: otp_service.issue_otp(identifier=mobile_number, otp_type=OTPType.SMS)
        )
        return {
            'message': 'Account found but incomplete. New OTP sent for verification.',
            'mobile_number': mobile_number,
            'requires_otp_verification': True,
            'redirect_to_login': False,
        }

    if existing is not None:
        raise InvalidSignupStateError("This mobile number cannot be used for signup")

    user_management.create_user(
        mobile_number=mobile_number,
        first_name=first_name,
        last_name=last_name,
    )
    transaction.on_commit(
        lambda: otp_service.issue_otp(identifier=mobile_number, otp_type=OTPType.SMS)
    )

    return {
        'message': 'Account created successfully. Please verify your mobile number.',
        'mobile_number': mobile_number,
        'requires_otp_verification': True,
        'redirect_to_login': False,
    }


def verify_signup_otp(*, mobile_number: str, otp_code: str) -> User:
    """
    Verify the signup OTP and mark the mobile number verified.

    The OTP check runs before the user transaction so failed
    attempts are counted even when verification fails.

    Raises:
        InvalidOTPError: If the code is wrong or expired
        UserNotFoundError: If initial signup wasn't completed
        InvalidSignupStateError: If the user already set a password
    """
    otp_service.verify_otp(identifier=mobile_number, otp_type=OTPType.SMS, code=otp_code)

    with transaction.atomic():
        user = _get_by_mobile_for_update(mobile_number)
        if user is None:
            raise UserNotFoundError("User not found. Please complete initial signup first.")

        if user.status != UserStatus.PENDING or user.has_usable_password():
            raise InvalidSignupStateError("Invalid user state for OTP verification")

        return user_management.mark_mobile_verified(user)


@transaction.atomic
def setup_signup_password(*, mobile_number: str, password: str, confirm_password: str) -> User:
    """
    Set the password for a PENDING user.

    Users without an email are activated right away.

    Raises:
        WeakPasswordError / PasswordConfirmationError: On invalid password
        UserNotFoundError: If user doesn't exist
        InvalidSignupStateError: If mobile isn't verified or password is already set
    """
    validate_password_strength(password, confirm_password)

    user = _get_by_mobile_for_update(mobile_number)
    if user is None:
        raise UserNotFoundError("User not found. Please complete OTP verification first.")

    if (
        user.status != UserStatus.PENDING
        or user.has_usable_password()
        or not user.is_mobile_verified
    ):
        raise InvalidSignupStateError("Invalid user state for password setup")

    user.set_password(password)
    update_fields = ['password', 'updated_at']
    if not user.email:
        user.status = UserStatus.ACTIVE
        update_fields.append('status')
        logger.info("User %s activated after password setup", user.id)
    user.save(update_fields=update_fields)

    return user


@transaction.atomic
def add_signup_email(*, mobile_number: str, email: str) -> User:
    """
    Attach an email to a PENDING user with a password and send verification.

    Raises:
        UserNotFoundError: If user doesn't exist
        InvalidSignupStateError: If password isn't set yet
        EmailAlreadyInUseError: If email belongs to another account
    """
    user = _get_by_mobile_for_update(mobile_number)
    if user is None:
        raise UserNotFoundError("User not found. Please complete password setup first.")

    if user.status != UserStatus.PENDING or not user.has_usable_password():
        raise InvalidSignupStateError("Invalid user state for email verification")

    user_management.add_email(user=user, email=email)
    token = generate_email_verification_token(user)

    transaction.on_commit(lambda: send_verification_email(user, token))
    transaction.on_commit(
        lambda: otp_service.issue_otp(identifier=user.email, otp_type=OTPType.EMAIL)
    )
    return user


@transaction.atomic
def verify_signup_email(*, token: str) -> User:
    """
    Verify email during signup and activate the account.

    Raises:
        InvalidTokenError: If token is invalid or expired
        InvalidSignupStateError: If the user is not awaiting email verification
    """
    user = User.objects.select_for_update().filter(email_verification_token=token).first()
    if user is not None and (user.status != UserStatus.PENDING or not user.has_usable_password()):
        raise InvalidSignupStateError("Invalid user state for email verification")

    user = verify_email_with_token(token=token)
    if user.status != UserStatus.ACTIVE:
        user_management.update_status(user, UserStatus.ACTIVE)
    return user


# =============================================================================
# Generic OTP flow
# =============================================================================

def request_otp(*, otp_type: str, mobile_number: str | None = None, email: str | None = None) -> int:
    """
    Send an OTP to the identifier matching otp_type.

    Returns:
        Seconds until the code expires

    Raises:
        MissingIdentifierError: If the identifier for otp_type is missing
    """
    identifier = _identifier_for(otp_type, mobile_number, email)
    otp_service.issue_otp(identifier=identifier, otp_type=otp_type)
    return otp_service.OTP_EXPIRY_MINUTES * 60


def verify_otp_flow(
    *,
    otp_type: str,
    code: str,
    mobile_number: str | None = None,
    email: str | None = None,
) -> User | None:
    """
    Verify an OTP and mark the matching channel verified.

    SMS verification creates a minimal PENDING user when none exists.
    A user with both channels verified is activated.

    Returns:
        The user, or None for an email without an account
    """
    identifier = _identifier_for(otp_type, mobile_number, email)
    otp_service.verify_otp(identifier=identifier, otp_type=otp_type, code=code)

    with transaction.atomic():
        if otp_type == OTPType.SMS:
            user = _get_by_mobile_for_update(mobile_number)
            if user is None:
                logger.info("Creating minimal user for mobile number %s", mobile_number)
                user = user_management.create_user(mobile_number=mobile_number)
            user_management.mark_mobile_verified(user)
        else:
            user = User.objects.select_for_update().filter(email__iexact=email).first()
            if user is not None:
                user_management.mark_email_verified(user)

        if (
            user is not None
            and user.is_mobile_verified
            and user.is_email_verified
            and user.status == UserStatus.PENDING
        ):
            user_management.update_status(user, UserStatus.ACTIVE)

    return user


@transaction.atomic
def setup_password(*, mobile_number: str, password: str, confirm_password: str) -> User:
    """
    Set a password for a user created through the OTP flow.

    Raises:
        UserNotFoundError: If user doesn't exist
        PasswordAlreadySetError: If a password is already set
    """
    validate_password_strength(password, confirm_password)

    user = _get_by_mobile_for_update(mobile_number)
    if user is None:
        raise UserNotFoundError("User not found. Please complete OTP verification first.")
    if user.has_usable_password():
        raise PasswordAlreadySetError(
            "User already has a password set. Please use the login page instead."
        )

    user.set_password(password)
    update_fields = ['password', 'updated_at']
    if user.is_mobile_verified and user.is_email_verified and user.status == UserStatus.PENDING:
        user.status = UserStatus.ACTIVE
        update_fields.append('status')
    user.save(update_fields=update_fields)

    return user
