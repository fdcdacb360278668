"""One-time password generation, delivery and verification."""

import logging
import secrets
from datetime import timedelta

from django.conf import settings
from django.contrib.auth.hashers import make_password, check_password
from django.core.mail import send_mail
from django.db import transaction
from django.utils import timezone

from apps.accounts.models import OTP, OTPStatus, OTPType
from apps.accounts.sms import send_sms

from .exceptions import InvalidOTPError, OTPExpiredError, OTPAttemptsExceededError

logger = logging.getLogger(__name__)

OTP_LENGTH = 6
OTP_EXPIRY_MINUTES = 5
OTP_MAX_ATTEMPTS = 3


def _generate_code() -> str:
    return ''.join(secrets.choice('0123456789') for _ in range(OTP_LENGTH))


@transaction.atomic
def generate_otp(*, identifier: str, otp_type: str) -> str:
    """
    Create a new OTP for identifier, expiring any pending ones.

    Args:
        identifier: Mobile number or email
        otp_type: OTPType value

    Returns:
        The plain 6-digit code (only its hash is stored)
    """
    OTP.objects.filter(
        identifier=identifier,
        type=otp_type,
        status=OTPStatus.PENDING,
    ).update(status=OTPStatus.EXPIRED)

    code = _generate_code()
    OTP.objects.create(
        identifier=identifier,
        type=otp_type,
        code_hash=make_password(code),
        expires_at=timezone.now() + timedelta(minutes=OTP_EXPIRY_MINUTES),
    )

    if settings.DEBUG:
        logger.debug("Generated %s OTP %s for %s", otp_type, code, identifier)
    else:
        logger.info("Generated %s OTP for %s", otp_type, identifier)

    return code


def verify_otp(*, identifier: str, otp_type: str, code: str) -> OTP:
    """
    Verify the latest pending OTP for identifier.

    Failed attempts are persisted even though an error is raised,
    so this function manages its own transaction.

    Args:
        identifier: Mobile number or email
        otp_type: OTPType value
        code: Code entered by the user

    Returns:
        The verified OTP instance

    Raises:
        InvalidOTPError: If there is no pending OTP or the code is wrong
        OTPExpiredError: If the OTP has expired
        OTPAttemptsExceededError: If too many attempts were made
    """
    with transaction.atomic():
        otp = (
            OTP.objects
            .select_for_update()
            .filter(identifier=identifier, type=otp_type, status=OTPStatus.PENDING)
            .order_by('-created_at')
            .first()
        )

        if otp is None:
            error = InvalidOTPError("Invalid OTP")
        elif otp.is_expired:
            otp.status = OTPStatus.EXPIRED
            otp.save(update_fields=['status', 'updated_at'])
            error = OTPExpiredError("OTP has expired")
        elif otp.attempts >= OTP_MAX_ATTEMPTS:
            otp.status = OTPStatus.EXPIRED
            otp.save(update_fields=['status', 'updated_at'])
            error = OTPAttemptsExceededError("Maximum OTP attempts exceeded")
        elif not check_password(code, otp.code_hash):
            otp.attempts += 1
            otp.save(update_fields=['attempts', 'updated_at'])
            error = InvalidOTPError("Invalid OTP")
        else:
            otp.status = OTPStatus.VERIFIED
            otp.verified_at = timezone.now()
            otp.save(update_fields=['status', 'verified_at', 'updated_at'])
            return otp

    logger.warning("OTP verification failed for %s: %s", identifier, error)
    raise error


def cleanup_expired_otps() -> int:
    """Delete OTPs past their expiry. Returns number of rows removed."""
    deleted, _ = OTP.objects.filter(expires_at__lt=timezone.now()).delete()
    logger.info("Removed %s expired OTPs", deleted)
    return deleted


def send_otp(*, identifier: str, otp_type: str, code: str) -> None:
    """Deliver code over SMS or email."""
    if otp_type == OTPType.SMS:
        send_sms(identifier, f"Your Club Corra verification code is {code}. It expires in {OTP_EXPIRY_MINUTES} minutes.")
    else:
        send_mail(
            subject="Your Club Corra verification code",
            message=f"Your verification code is {code}. It expires in {OTP_EXPIRY_MINUTES} minutes.",
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[identifier],
        )


def issue_otp(*, identifier: str, otp_type: str) -> str:
    """Generate and deliver an OTP. Returns the plain code."""
    code = generate_otp(identifier=identifier, otp_type=otp_type)
    send_otp(identifier=identifier, otp_type=otp_type, code=code)
    return code
