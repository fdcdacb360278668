"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    UserNotFoundError,
    UserAlreadyExistsError,
    EmailAlreadyInUseError,
    InvalidCredentialsError,
    InactiveAccountError,
    PasswordNotSetError,
    PasswordAlreadySetError,
    WeakPasswordError,
    PasswordConfirmationError,
    InvalidTokenError,
    TokenExpiredError,
    InvalidRefreshTokenError,
    InvalidOTPError,
    OTPExpiredError,
    OTPAttemptsExceededError,
    MissingIdentifierError,
    InvalidSignupStateError,
    EmailAlreadyVerifiedError,
)
from .passwords import validate_password_strength
from .otp import generate_otp, verify_otp, issue_otp, cleanup_expired_otps
from .user_management import (
    create_user,
    get_user,
    find_by_mobile_number,
    find_by_email,
    update_profile,
    update_payment_details,
    mark_mobile_verified,
    mark_email_verified,
    update_status,
    update_last_login,
    add_email,
)
from .email_verification import (
    generate_email_verification_token,
    request_email_verification,
    verify_email_with_token,
)
from .password_reset import request_password_reset, reset_password_with_token
from .signup import (
    initial_signup,
    verify_signup_otp,
    setup_signup_password,
    add_signup_email,
    verify_signup_email,
    request_otp,
    verify_otp_flow,
    setup_password,
)
from .user_authentication import (
    issue_tokens,
    mobile_login,
    mobile_password_login,
    email_login,
    refresh_tokens,
)

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'UserNotFoundError',
    'UserAlreadyExistsError',
    'EmailAlreadyInUseError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'PasswordNotSetError',
    'PasswordAlreadySetError',
    'WeakPasswordError',
    'PasswordConfirmationError',
    'InvalidTokenError',
    'TokenExpiredError',
    'InvalidRefreshTokenError',
    'InvalidOTPError',
    'OTPExpiredError',
    'OTPAttemptsExceededError',
    'MissingIdentifierError',
    'InvalidSignupStateError',
    'EmailAlreadyVerifiedError',
    # Services
    'validate_password_strength',
    'generate_otp',
    'verify_otp',
    'issue_otp',
    'cleanup_expired_otps',
    'create_user',
    'get_user',
    'find_by_mobile_number',
    'find_by_email',
    'update_profile',
    'update_payment_details',
    'mark_mobile_verified',
    'mark_email_verified',
    'update_status',
    'update_last_login',
    'add_email',
    'generate_email_verification_token',
    'request_email_verification',
    'verify_email_with_token',
    'request_password_reset',
    'reset_password_with_token',
    'initial_signup',
    'verify_signup_otp',
    'setup_signup_password',
    'add_signup_email',
    'verify_signup_email',
    'request_otp',
    'verify_otp_flow',
    'setup_password',
    'issue_tokens',
    'mobile_login',
    'mobile_password_login',
    'email_login',
    'refresh_tokens',
]
