"""Domain-specific exceptions for accounts services."""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class UserNotFoundError(AccountsServiceError):
    """Raised when user does not exist."""
    pass


class UserAlreadyExistsError(AccountsServiceError):
    """Raised when mobile number or email is already registered."""
    pass


class EmailAlreadyInUseError(UserAlreadyExistsError):
    """Raised when email belongs to another account."""
    pass


class InvalidCredentialsError(AccountsServiceError):
    """Raised when authentication credentials are invalid."""
    pass


class InactiveAccountError(AccountsServiceError):
    """Raised when account is not ACTIVE."""
    pass


class PasswordNotSetError(AccountsServiceError):
    """Raised when password login is attempted on an account without one."""
    pass


class PasswordAlreadySetError(AccountsServiceError):
    """Raised when password setup is attempted twice."""
    pass


class WeakPasswordError(AccountsServiceError):
    """Raised when password does not meet strength requirements."""
    pass


class PasswordConfirmationError(AccountsServiceError):
    """Raised when password confirmation fails."""
    pass


class InvalidTokenError(AccountsServiceError):
    """Raised when verification/reset token is invalid."""
    pass


class TokenExpiredError(InvalidTokenError):
    """Raised when verification/reset token has expired."""
    pass


class InvalidRefreshTokenError(AccountsServiceError):
    """Raised when a JWT refresh token cannot be used."""
    pass


class InvalidOTPError(AccountsServiceError):
    """Raised when OTP code is wrong or missing."""
    pass


class OTPExpiredError(InvalidOTPError):
    """Raised when OTP has expired."""
    pass


class OTPAttemptsExceededError(InvalidOTPError):
    """Raised when OTP has been tried too many times."""
    pass


class MissingIdentifierError(AccountsServiceError):
    """Raised when OTP type doesn't match the supplied identifier."""
    pass


class InvalidSignupStateError(AccountsServiceError):
    """Raised when a signup step is called out of order."""
    pass


class EmailAlreadyVerifiedError(AccountsServiceError):
    """Raised when verification is requested for a verified email."""
    pass
