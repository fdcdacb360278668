"""
Domain exceptions for notifications app.

Exception Hierarchy:
    NotificationsServiceError (base)
    └── NotificationNotFoundError
"""


class NotificationsServiceError(Exception):
    """Base exception for notification service errors."""
    pass


class NotificationNotFoundError(NotificationsServiceError):
    """Raised when a notification does not exist or belongs to another user."""
    pass
