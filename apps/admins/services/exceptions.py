"""Domain-specific exceptions for admins services."""


class AdminsServiceError(Exception):
    """Base exception for admins services."""
    pass


class AdminNotFoundError(AdminsServiceError):
    """Raised when admin does not exist."""
    pass


class DuplicateAdminError(AdminsServiceError):
    """Raised when an admin with the email already exists."""
    pass


class InvalidAdminCredentialsError(AdminsServiceError):
    """Raised when admin email or password is wrong."""
    pass


class InactiveAdminError(AdminsServiceError):
    """Raised when a non-active admin tries to log in."""
    pass


class CannotDeleteSelfError(AdminsServiceError):
    """Raised when an admin tries to delete their own account."""
    pass


class ManagedUserNotFoundError(AdminsServiceError):
    """Raised when the user being managed does not exist."""
    pass
