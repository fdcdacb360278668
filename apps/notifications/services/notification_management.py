"""Notification storage and the user-facing notify helpers."""

import logging
from datetime import timedelta
from uuid import UUID
from typing import Optional, Dict, Any

from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from ..models import Notification, NotificationType
from .exceptions import NotificationNotFoundError
from . import realtime

logger = logging.getLogger(__name__)

BALANCE_CHANGE_VERBS = {
    'EARN': 'earned',
    'WELCOME_BONUS': 'earned',
    'REDEEM': 'redeemed',
}


def notification_payload(notification: Notification) -> Dict[str, Any]:
    """Plain dict of a notification for the websocket relay."""
    return {
        'id': str(notification.id),
        'type': notification.type,
        'title': notification.title,
        'message': notification.message,
        'data': notification.data,
        'is_read': notification.is_read,
        'created_at': notification.created_at.isoformat(),
    }


def create_notification(
    *,
    user,
    type: str,
    title: str,
    message: str,
    data: Optional[Dict[str, Any]] = None,
) -> Notification:
    """
    Store a notification and push it to the user's sockets after commit.

    Args:
        user: Recipient
        type: NotificationType value
        title: Short heading
        message: Body text
        data: JSON-serializable extra payload

    Returns:
        Created Notification
    """
    notification = Notification.objects.create(
        user=user,
        type=type,
        title=title,
        message=message,
        data=data or {},
    )
    logger.info("Notification %s created for user %s", notification.id, user.id)

    payload = notification_payload(notification)
    transaction.on_commit(
        lambda: realtime.publish_to_user(user.id, realtime.NOTIFICATION_RECEIVED, payload)
    )
    return notification


def notify_transaction_status(user, coin_transaction, notes: Optional[str] = None) -> Notification:
    """
    Tell a user their coin transaction changed status.

    Stores a TRANSACTION_STATUS notification (PAYMENT_PROCESSED once paid)
    and publishes ``transaction_status_changed``.
    """
    status = coin_transaction.status
    label = coin_transaction.brand.name if coin_transaction.brand_id else coin_transaction.get_type_display()
    coins = abs(coin_transaction.amount)

    message = f"Your {label} transaction for {coins} coins has been {status.lower()}"
    if notes:
        message += f". {notes}"

    notification = create_notification(
        user=user,
        type=NotificationType.PAYMENT_PROCESSED if status == 'PAID' else NotificationType.TRANSACTION_STATUS,
        title=f"Transaction {status.lower()}",
        message=message,
        data={
            'transaction_id': str(coin_transaction.id),
            'transaction_type': coin_transaction.type,
            'status': status,
            'brand_name': label,
            'amount': coins,
            'notes': notes,
        },
    )

    realtime.publish_to_user(user.id, realtime.TRANSACTION_STATUS_CHANGED, {
        'transaction_id': str(coin_transaction.id),
        'type': coin_transaction.type,
        'status': status,
        'message': message,
    })
    return notification


def notify_balance_update(
    user,
    old_balance: int,
    new_balance: int,
    change_type: str,
    amount: int,
    transaction_id: Optional[UUID] = None,
) -> Notification:
    """Store a BALANCE_UPDATE notification and publish ``balance_updated``."""
    verb = BALANCE_CHANGE_VERBS.get(change_type)
    if verb:
        message = f"You {verb} {abs(amount)} coins. New balance: {new_balance}"
    else:
        message = f"Your balance was adjusted by {amount} coins. New balance: {new_balance}"

    data = {
        'old_balance': old_balance,
        'new_balance': new_balance,
        'change_type': change_type,
        'amount': amount,
        'transaction_id': str(transaction_id) if transaction_id else None,
    }
    notification = create_notification(
        user=user,
        type=NotificationType.BALANCE_UPDATE,
        title='Balance Updated',
        message=message,
        data=data,
    )

    realtime.publish_to_user(user.id, realtime.BALANCE_UPDATED, data)
    return notification


def notify_new_transaction(coin_transaction) -> bool:
    """Let connected admins know a request is waiting for review."""
    return realtime.publish_to_admins(realtime.NEW_TRANSACTION, {
        'transaction_id': str(coin_transaction.id),
        'user_id': str(coin_transaction.user_id),
        'type': coin_transaction.type,
        'amount': coin_transaction.amount,
        'brand_id': str(coin_transaction.brand_id) if coin_transaction.brand_id else None,
    })


def notify_admin_dashboard(*, pending_earn: int, pending_redeem: int) -> bool:
    """Push the current review queue sizes to connected admins."""
    return realtime.publish_to_admins(realtime.ADMIN_DASHBOARD_UPDATE, {
        'pending_earn': pending_earn,
        'pending_redeem': pending_redeem,
        'total_pending': pending_earn + pending_redeem,
    })


def list_notifications(*, user, unread_only: bool = False, type: Optional[str] = None) -> QuerySet:
    """User's notifications, newest first."""
    queryset = Notification.objects.filter(user=user)
    if unread_only:
        queryset = queryset.filter(is_read=False)
    if type:
        queryset = queryset.filter(type=type)
    return queryset.order_by('-created_at')


def _get_own(user, notification_id: UUID) -> Notification:
    try:
        return Notification.objects.get(id=notification_id, user=user)
    except Notification.DoesNotExist:
        raise NotificationNotFoundError("Notification not found")


def mark_as_read(*, user, notification_id: UUID) -> Notification:
    """
    Mark one of the user's notifications as read.

    Raises:
        NotificationNotFoundError: If missing or owned by someone else
    """
    notification = _get_own(user, notification_id)
    if not notification.is_read:
        notification.is_read = True
        notification.read_at = timezone.now()
        notification.save(update_fields=['is_read', 'read_at', 'updated_at'])
    return notification


def mark_all_as_read(*, user) -> int:
    """Mark every unread notification as read. Returns the number updated."""
    updated = Notification.objects.filter(user=user, is_read=False).update(
        is_read=True,
        read_at=timezone.now(),
    )
    logger.info("Marked %s notifications read for user %s", updated, user.id)
    return updated


def unread_count(*, user) -> int:
    return Notification.objects.filter(user=user, is_read=False).count()


def delete_notification(*, user, notification_id: UUID) -> None:
    """
    Raises:
        NotificationNotFoundError: If missing or owned by someone else
    """
    _get_own(user, notification_id).delete()
    logger.info("Notification %s deleted", notification_id)


def delete_old_notifications(*, user=None, days: int = 30) -> int:
    """
    Delete notifications older than ``days``. Returns the count.

    Without ``user`` every user's old notifications are removed.
    """
    cutoff = timezone.now() - timedelta(days=days)
    notifications = Notification.objects.filter(created_at__lt=cutoff)
    if user is not None:
        notifications = notifications.filter(user=user)
    deleted, _ = notifications.delete()
    logger.info(
        "Deleted %s notifications older than %s days (%s)",
        deleted, days, f"user {user.id}" if user is not None else "all users",
    )
    return deleted
