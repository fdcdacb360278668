"""Services for notifications and the realtime relay."""

from .exceptions import NotificationsServiceError, NotificationNotFoundError
from .notification_management import (
    create_notification,
    notify_transaction_status,
    notify_balance_update,
    notify_new_transaction,
    notify_admin_dashboard,
    list_notifications,
    mark_as_read,
    mark_all_as_read,
    unread_count,
    delete_notification,
    delete_old_notifications,
)
from .realtime import publish, publish_to_user, publish_to_admins, user_group, ADMINS_GROUP

__all__ = [
    # Exceptions
    'NotificationsServiceError',
    'NotificationNotFoundError',
    # Notifications
    'create_notification',
    'notify_transaction_status',
    'notify_balance_update',
    'notify_new_transaction',
    'notify_admin_dashboard',
    'list_notifications',
    'mark_as_read',
    'mark_all_as_read',
    'unread_count',
    'delete_notification',
    'delete_old_notifications',
    # Realtime
    'publish',
    'publish_to_user',
    'publish_to_admins',
    'user_group',
    'ADMINS_GROUP',
]
