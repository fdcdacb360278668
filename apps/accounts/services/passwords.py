"""Password strength rules."""

import re

from .exceptions import WeakPasswordError, PasswordConfirmationError

MIN_PASSWORD_LENGTH = 8


def validate_password_strength(password: str, confirm_password: str | None = None) -> None:
    """
    Check password strength and, optionally, its confirmation.

    Rules: at least 8 characters with a lowercase letter,
    an uppercase letter and a digit.

    Raises:
        WeakPasswordError: If password is too weak
        PasswordConfirmationError: If confirmation doesn't match
    """
    if (
        len(password) < MIN_PASSWORD_LENGTH
        or not re.search(r'[a-z]', password)
        or not re.search(r'[A-Z]', password)
        or not re.search(r'\d', password)
    ):
        raise WeakPasswordError(
            "Password must be at least 8 characters and contain "
            "lowercase, uppercase and numeric characters"
        )

    if confirm_password is not None and password != confirm_password:
        raise PasswordConfirmationError("Passwords do not match")
