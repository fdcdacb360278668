"""User, profile and payment details management."""

import logging
from uuid import UUID

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.accounts.models import UserProfile, PaymentDetails, UserStatus

from .exceptions import UserNotFoundError, UserAlreadyExistsError, EmailAlreadyInUseError

User = get_user_model()
logger = logging.getLogger(__name__)

PROFILE_FIELDS = (
    'first_name', 'last_name', 'date_of_birth', 'gender',
    'street', 'city', 'state', 'postal_code', 'country',
)


@transaction.atomic
def create_user(
    *,
    mobile_number: str,
    first_name: str = '',
    last_name: str = '',
    email: str | None = None,
    password: str | None = None,
    status: str = UserStatus.PENDING,
) -> User:
    """
    Create a user together with an empty profile and payment details.

    Args:
        mobile_number: Unique mobile number
        first_name: Profile first name
        last_name: Profile last name
        email: Optional unique email
        password: Optional password (unusable password when omitted)
        status: Initial UserStatus

    Returns:
        Created User instance

    Raises:
        UserAlreadyExistsError: If mobile number or email is taken
    """
    if User.objects.filter(mobile_number=mobile_number).exists():
        raise UserAlreadyExistsError("This mobile number is already registered")
    if email and User.objects.filter(email__iexact=email).exists():
        raise EmailAlreadyInUseError("This email is already registered")

    try:
        user = User.objects.create_user(
            mobile_number=mobile_number,
            password=password,
            email=email,
            status=status,
        )
    except IntegrityError:
        raise UserAlreadyExistsError("This mobile number is already registered")

    UserProfile.objects.create(user=user, first_name=first_name, last_name=last_name)
    PaymentDetails.objects.create(user=user)

    logger.info("Created user %s (%s)", user.id, status)
    return user


def get_user(*, user_id: UUID) -> User:
    try:
        return User.objects.select_related('profile', 'payment_details').get(id=user_id)
    except User.DoesNotExist:
        raise UserNotFoundError(f"User {user_id} not found")


def find_by_mobile_number(mobile_number: str) -> User | None:
    return User.objects.filter(mobile_number=mobile_number).first()


def find_by_email(email: str) -> User | None:
    return User.objects.filter(email__iexact=email).first()


@transaction.atomic
def update_profile(*, user: User, **fields) -> UserProfile:
    """Update profile fields, creating the profile if missing."""
    profile, _ = UserProfile.objects.select_for_update().get_or_create(user=user)
    for field, value in fields.items():
        if field in PROFILE_FIELDS:
            setattr(profile, field, value)
    profile.save()
    return profile


@transaction.atomic
def update_payment_details(
    *,
    user: User,
    upi_id: str | None = None,
    mobile_number: str | None = None,
) -> PaymentDetails:
    details, _ = PaymentDetails.objects.select_for_update().get_or_create(user=user)
    if upi_id is not None:
        details.upi_id = upi_id or None
    if mobile_number is not None:
        details.mobile_number = mobile_number or None
    details.save()
    return details


def mark_mobile_verified(user: User) -> User:
    user.is_mobile_verified = True
    user.save(update_fields=['is_mobile_verified', 'updated_at'])
    return user


def mark_email_verified(user: User) -> User:
    user.is_email_verified = True
    user.save(update_fields=['is_email_verified', 'updated_at'])
    return user


def update_status(user: User, status: str) -> User:
    if user.status != status:
        logger.info("User %s status %s -> %s", user.id, user.status, status)
    user.status = status
    user.save(update_fields=['status', 'updated_at'])
    return user


def update_last_login(user: User) -> User:
    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])
    return user


@transaction.atomic
def add_email(*, user: User, email: str) -> User:
    """
    Attach an email to the user, resetting its verification.

    Raises:
        EmailAlreadyInUseError: If email belongs to another account
    """
    if User.objects.filter(email__iexact=email).exclude(id=user.id).exists():
        raise EmailAlreadyInUseError("This email is already registered with another account")

    user.email = User.objects.normalize_email(email)
    user.is_email_verified = False
    user.save(update_fields=['email', 'is_email_verified', 'updated_at'])
    return user
