"""
Service layer unit tests for accounts app.

Tests cover:
- OTP lifecycle (expiry, attempt limits, replacement)
- Staged signup state transitions
- Login rules
- Email verification and password reset tokens
"""

from datetime import timedelta

import pytest
from django.core import mail
from django.utils import timezone

from apps.accounts.models import OTP, OTPStatus, OTPType, User, UserStatus
from apps.accounts.services import (
    generate_otp,
    verify_otp,
    cleanup_expired_otps,
    validate_password_strength,
    create_user,
    add_email,
    initial_signup,
    verify_signup_otp,
    setup_signup_password,
    add_signup_email,
    verify_signup_email,
    verify_otp_flow,
    setup_password,
    mobile_login,
    mobile_password_login,
    email_login,
    refresh_tokens,
    issue_tokens,
    request_email_verification,
    verify_email_with_token,
    request_password_reset,
    reset_password_with_token,
    update_payment_details,
)
from apps.accounts.services.exceptions import (
    InvalidOTPError,
    OTPExpiredError,
    OTPAttemptsExceededError,
    WeakPasswordError,
    PasswordConfirmationError,
    UserAlreadyExistsError,
    EmailAlreadyInUseError,
    InvalidSignupStateError,
    UserNotFoundError,
    InvalidCredentialsError,
    InactiveAccountError,
    PasswordNotSetError,
    PasswordAlreadySetError,
    InvalidTokenError,
    TokenExpiredError,
    InvalidRefreshTokenError,
    EmailAlreadyVerifiedError,
    MissingIdentifierError,
)


# =============================================================================
# OTP Service Tests
# =============================================================================

@pytest.mark.django_db
class TestOtp:
    """Tests for otp.py service functions."""

    def test_generate_otp_stores_hash_only(self):
        """Generated code is 6 digits and never stored in plain text."""
        code = generate_otp(identifier='9876543210', otp_type=OTPType.SMS)

        otp = OTP.objects.get(identifier='9876543210')
        assert len(code) == 6
        assert code.isdigit()
        assert otp.code_hash != code
        assert otp.status == OTPStatus.PENDING
        assert otp.expires_at > timezone.now()

    def test_generate_otp_expires_previous_pending(self):
        """Requesting a new OTP expires older pending ones."""
        generate_otp(identifier='9876543210', otp_type=OTPType.SMS)
        generate_otp(identifier='9876543210', otp_type=OTPType.SMS)

        statuses = list(
            OTP.objects.filter(identifier='9876543210')
            .order_by('created_at')
            .values_list('status', flat=True)
        )
        assert statuses == [OTPStatus.EXPIRED, OTPStatus.PENDING]

    def test_verify_otp_success(self):
        code = generate_otp(identifier='9876543210', otp_type=OTPType.SMS)

        otp = verify_otp(identifier='9876543210', otp_type=OTPType.SMS, code=code)

        assert otp.status == OTPStatus.VERIFIED
        assert otp.verified_at is not None

    def test_verify_otp_wrong_code_counts_attempt(self):
        code = generate_otp(identifier='9876543210', otp_type=OTPType.SMS)
        wrong = '000000' if code != '000000' else '111111'

        with pytest.raises(InvalidOTPError):
            verify_otp(identifier='9876543210', otp_type=OTPType.SMS, code=wrong)

        otp = OTP.objects.get(identifier='9876543210')
        assert otp.attempts == 1
        assert otp.status == OTPStatus.PENDING

    def test_verify_otp_locks_after_three_attempts(self):
        """Fourth attempt is rejected even with the right code."""
        code = generate_otp(identifier='9876543210', otp_type=OTPType.SMS)
        wrong = '000000' if code != '000000' else '111111'

        for _ in range(3):
            with pytest.raises(InvalidOTPError):
                verify_otp(identifier='9876543210', otp_type=OTPType.SMS, code=wrong)

        with pytest.raises(OTPAttemptsExceededError):
            verify_otp(identifier='9876543210', otp_type=OTPType.SMS, code=code)

        assert OTP.objects.get(identifier='9876543210').status == OTPStatus.EXPIRED

    def test_verify_otp_expired(self):
        code = generate_otp(identifier='9876543210', otp_type=OTPType.SMS)
        OTP.objects.update(expires_at=timezone.now() - timedelta(seconds=1))

        with pytest.raises(OTPExpiredError):
            verify_otp(identifier='9876543210', otp_type=OTPType.SMS, code=code)

        assert OTP.objects.get().status == OTPStatus.EXPIRED

    def test_verify_otp_without_pending_otp(self):
        with pytest.raises(InvalidOTPError):
            verify_otp(identifier='9876543210', otp_type=OTPType.SMS, code='123456')

    def test_cleanup_expired_otps(self):
        generate_otp(identifier='a@example.com', otp_type=OTPType.EMAIL)
        generate_otp(identifier='9876543210', otp_type=OTPType.SMS)
        OTP.objects.filter(identifier='a@example.com').update(
            expires_at=timezone.now() - timedelta(minutes=1)
        )

        assert cleanup_expired_otps() == 1
        assert OTP.objects.count() == 1


# =============================================================================
# Password Rules
# =============================================================================

class TestPasswordStrength:

    @pytest.mark.parametrize('password', ['short1A', 'alllowercase1', 'ALLUPPERCASE1', 'NoDigitsHere'])
    def test_weak_passwords_rejected(self, password):
        with pytest.raises(WeakPasswordError):
            validate_password_strength(password)

    def test_strong_password_accepted(self):
        validate_password_strength('StrongPass1', 'StrongPass1')

    def test_confirmation_mismatch(self):
        with pytest.raises(PasswordConfirmationError):
            validate_password_strength('StrongPass1', 'StrongPass2')


# =============================================================================
# User Management
# =============================================================================

@pytest.mark.django_db
class TestUserManagement:

    def test_create_user_creates_profile_and_payment_details(self):
        user = create_user(mobile_number='9999999999', first_name='Asha', last_name='Rao')

        assert user.status == UserStatus.PENDING
        assert user.profile.first_name == 'Asha'
        assert user.payment_details.upi_id is None
        assert not user.has_usable_password()

    def test_create_user_duplicate_mobile(self, user):
        with pytest.raises(UserAlreadyExistsError):
            create_user(mobile_number=user.mobile_number)

    def test_create_user_duplicate_email(self, user):
        with pytest.raises(EmailAlreadyInUseError):
            create_user(mobile_number='9999999999', email='TESTUSER@example.com')

    def test_add_email_conflict(self, user, other_user):
        with pytest.raises(EmailAlreadyInUseError):
            add_email(user=user, email=other_user.email)

    def test_add_email_resets_verification(self, user):
        add_email(user=user, email='new@example.com')

        user.refresh_from_db()
        assert user.email == 'new@example.com'
        assert user.is_email_verified is False

    def test_update_payment_details(self, user):
        details = update_payment_details(user=user, upi_id='test@upi')

        assert details.upi_id == 'test@upi'
        assert details.mobile_number is None

    def test_is_active_follows_status(self, user, suspended_user):
        assert user.is_active is True
        assert suspended_user.is_active is False


# =============================================================================
# Staged Signup
# =============================================================================

@pytest.mark.django_db
class TestStagedSignup:

    def test_initial_signup_creates_pending_user(self, django_capture_on_commit_callbacks, sms_outbox):
        with django_capture_on_commit_callbacks(execute=True):
            result = initial_signup(first_name='Asha', last_name='Rao', mobile_number='9999999999')

        user = User.objects.get(mobile_number='9999999999')
        assert result['requires_otp_verification'] is True
        assert result['redirect_to_login'] is False
        assert user.status == UserStatus.PENDING
        assert user.profile.last_name == 'Rao'
        assert len(sms_outbox) == 1
        assert sms_outbox[0].to == '9999999999'

    def test_initial_signup_existing_active_user_redirects(self, user):
        result = initial_signup(first_name='Test', last_name='User', mobile_number=user.mobile_number)

        assert result['redirect_to_login'] is True
        assert result['requires_otp_verification'] is False

    def test_initial_signup_incomplete_user_gets_new_otp(self, pending_user, django_capture_on_commit_callbacks, sms_outbox):
        with django_capture_on_commit_callbacks(execute=True):
            result = initial_signup(first_name='New', last_name='Name', mobile_number=pending_user.mobile_number)

        assert result['requires_otp_verification'] is True
        assert User.objects.filter(mobile_number=pending_user.mobile_number).count() == 1
        assert len(sms_outbox) == 1

    def test_full_signup_without_email_activates(self, pending_user):
        code = generate_otp(identifier=pending_user.mobile_number, otp_type=OTPType.SMS)

        user = verify_signup_otp(mobile_number=pending_user.mobile_number, otp_code=code)
        assert user.is_mobile_verified is True

        user = setup_signup_password(
            mobile_number=pending_user.mobile_number,
            password='StrongPass1',
            confirm_password='StrongPass1',
        )
        assert user.status == UserStatus.ACTIVE
        assert user.check_password('StrongPass1')

    def test_setup_password_requires_verified_mobile(self, pending_user):
        with pytest.raises(InvalidSignupStateError):
            setup_signup_password(
                mobile_number=pending_user.mobile_number,
                password='StrongPass1',
                confirm_password='StrongPass1',
            )

    def test_verify_signup_otp_unknown_user(self):
        code = generate_otp(identifier='9999999999', otp_type=OTPType.SMS)

        with pytest.raises(UserNotFoundError):
            verify_signup_otp(mobile_number='9999999999', otp_code=code)

    def test_signup_with_email_flow(self, pending_user, django_capture_on_commit_callbacks):
        pending_user.is_mobile_verified = True
        pending_user.set_password('StrongPass1')
        pending_user.save()

        with django_capture_on_commit_callbacks(execute=True):
            user = add_signup_email(mobile_number=pending_user.mobile_number, email='asha@example.com')

        assert user.email == 'asha@example.com'
        assert user.status == UserStatus.PENDING
        assert any('asha@example.com' in message.to for message in mail.outbox)

        user = verify_signup_email(token=user.email_verification_token)
        assert user.status == UserStatus.ACTIVE
        assert user.is_email_verified is True

    def test_add_signup_email_before_password(self, pending_user):
        with pytest.raises(InvalidSignupStateError):
            add_signup_email(mobile_number=pending_user.mobile_number, email='asha@example.com')


# =============================================================================
# Generic OTP Flow
# =============================================================================

@pytest.mark.django_db
class TestOtpFlow:

    def test_sms_otp_creates_minimal_user(self):
        code = generate_otp(identifier='9999999999', otp_type=OTPType.SMS)

        user = verify_otp_flow(otp_type=OTPType.SMS, code=code, mobile_number='9999999999')

        assert user.mobile_number == '9999999999'
        assert user.is_mobile_verified is True
        assert user.status == UserStatus.PENDING

    def test_both_channels_verified_activates(self, pending_user):
        pending_user.email = 'pending@example.com'
        pending_user.is_email_verified = True
        pending_user.save()
        code = generate_otp(identifier=pending_user.mobile_number, otp_type=OTPType.SMS)

        user = verify_otp_flow(otp_type=OTPType.SMS, code=code, mobile_number=pending_user.mobile_number)

        assert user.status == UserStatus.ACTIVE

    def test_missing_identifier(self):
        with pytest.raises(MissingIdentifierError):
            verify_otp_flow(otp_type=OTPType.EMAIL, code='123456', mobile_number='9999999999')

    def test_setup_password_twice(self, user):
        with pytest.raises(PasswordAlreadySetError):
            setup_password(
                mobile_number=user.mobile_number,
                password='StrongPass1',
                confirm_password='StrongPass1',
            )


# =============================================================================
# Login
# =============================================================================

@pytest.mark.django_db
class TestLogin:

    def test_mobile_login(self, user):
        code = generate_otp(identifier=user.mobile_number, otp_type=OTPType.SMS)

        logged_in = mobile_login(mobile_number=user.mobile_number, otp_code=code)

        assert logged_in == user
        assert logged_in.last_login is not None

    def test_mobile_login_inactive(self, suspended_user):
        code = generate_otp(identifier=suspended_user.mobile_number, otp_type=OTPType.SMS)

        with pytest.raises(InactiveAccountError):
            mobile_login(mobile_number=suspended_user.mobile_number, otp_code=code)

    def test_mobile_login_unknown_user(self):
        code = generate_otp(identifier='9999999999', otp_type=OTPType.SMS)

        with pytest.raises(InvalidCredentialsError):
            mobile_login(mobile_number='9999999999', otp_code=code)

    def test_email_login(self, user):
        assert email_login(email='testuser@example.com', password='TestPass123') == user

    def test_email_login_wrong_password(self, user):
        with pytest.raises(InvalidCredentialsError):
            email_login(email='testuser@example.com', password='WrongPass123')

    def test_email_login_unknown(self):
        with pytest.raises(InvalidCredentialsError):
            email_login(email='nobody@example.com', password='TestPass123')

    def test_password_login_without_password(self, pending_user):
        with pytest.raises(PasswordNotSetError):
            mobile_password_login(mobile_number=pending_user.mobile_number, password='TestPass123')

    def test_password_login_inactive(self, suspended_user):
        with pytest.raises(InactiveAccountError):
            mobile_password_login(mobile_number=suspended_user.mobile_number, password='TestPass123')

    def test_refresh_tokens(self, user):
        tokens = issue_tokens(user)

        refreshed = refresh_tokens(refresh_token=tokens['refresh_token'])

        assert refreshed['access_token']
        assert refreshed['expires_in'] > 0

    def test_refresh_tokens_invalid(self):
        with pytest.raises(InvalidRefreshTokenError):
            refresh_tokens(refresh_token='not-a-token')


# =============================================================================
# Email Verification & Password Reset
# =============================================================================

@pytest.mark.django_db
class TestTokens:

    def test_request_email_verification_already_verified(self, user):
        with pytest.raises(EmailAlreadyVerifiedError):
            request_email_verification(email=user.email)

    def test_request_email_verification_unknown(self):
        with pytest.raises(UserNotFoundError):
            request_email_verification(email='nobody@example.com')

    def test_verify_email_token(self, other_user):
        other_user.is_email_verified = False
        other_user.save()
        token = request_email_verification(email=other_user.email)

        user = verify_email_with_token(token=token)

        assert user.is_email_verified is True
        assert user.email_verification_token is None

    def test_verify_email_token_activates_otp_user(self):
        code = generate_otp(identifier='9999999999', otp_type=OTPType.SMS)
        user = verify_otp_flow(otp_type=OTPType.SMS, code=code, mobile_number='9999999999')
        add_email(user=user, email='otp.user@example.com')
        token = request_email_verification(email='otp.user@example.com')

        user = verify_email_with_token(token=token)

        assert user.is_mobile_verified is True
        assert user.is_email_verified is True
        assert user.status == UserStatus.ACTIVE
        assert User.objects.get(id=user.id).status == UserStatus.ACTIVE

    def test_verify_email_token_keeps_unverified_mobile_pending(self, pending_user):
        pending_user.is_mobile_verified = False
        pending_user.save()
        add_email(user=pending_user, email='pending@example.com')
        token = request_email_verification(email='pending@example.com')

        user = verify_email_with_token(token=token)

        assert user.is_email_verified is True
        assert user.status == UserStatus.PENDING

    def test_verify_email_token_expired(self, other_user):
        other_user.is_email_verified = False
        other_user.save()
        token = request_email_verification(email=other_user.email)
        User.objects.filter(id=other_user.id).update(
            email_verification_token_expires_at=timezone.now() - timedelta(minutes=1)
        )

        with pytest.raises(TokenExpiredError):
            verify_email_with_token(token=token)

    def test_verify_email_invalid_token(self):
        with pytest.raises(InvalidTokenError):
            verify_email_with_token(token='nope')

    def test_password_reset_roundtrip(self, user):
        token = request_password_reset(email=user.email)

        reset_password_with_token(token=token, password='NewPass123', confirm_password='NewPass123')

        user.refresh_from_db()
        assert user.check_password('NewPass123')
        assert user.password_reset_token is None

    def test_password_reset_unknown_email_is_silent(self):
        assert request_password_reset(email='nobody@example.com') is None

    def test_password_reset_expired_token(self, user):
        token = request_password_reset(email=user.email)
        User.objects.filter(id=user.id).update(
            password_reset_token_expires_at=timezone.now() - timedelta(minutes=1)
        )

        with pytest.raises(InvalidTokenError):
            reset_password_with_token(token=token, password='NewPass123', confirm_password='NewPass123')
