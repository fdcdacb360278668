"""
After-commit announcements for coin state changes.

Everything here is scheduled with ``transaction.on_commit`` so a rolled
back approval never reaches a user's socket.
"""

from typing import Optional

from django.db import transaction

from apps.notifications.services import (
    notify_transaction_status,
    notify_balance_update,
    notify_new_transaction,
    notify_admin_dashboard,
)

from ..models import CoinTransaction, TransactionType, TransactionStatus


def pending_counts() -> dict:
    """Sizes of the admin review queues."""
    pending = CoinTransaction.objects.filter(status=TransactionStatus.PENDING)
    return {
        'pending_earn': pending.filter(type=TransactionType.EARN).count(),
        'pending_redeem': pending.filter(type=TransactionType.REDEEM).count(),
    }


def _push_dashboard():
    notify_admin_dashboard(**pending_counts())


def announce_new_request(coin_transaction: CoinTransaction) -> None:
    """New earn or redeem request waiting for admin review."""
    def _announce():
        notify_new_transaction(coin_transaction)
        _push_dashboard()

    transaction.on_commit(_announce, robust=True)


def announce_status_change(
    coin_transaction: CoinTransaction,
    *,
    notes: Optional[str] = None,
    old_balance: Optional[int] = None,
    new_balance: Optional[int] = None,
    refresh_dashboard: bool = True,
) -> None:
    """
    Notify the owner of a status change and, when coins moved, of the new balance.
    """
    user = coin_transaction.user

    def _announce():
        notify_transaction_status(user, coin_transaction, notes or None)
        if old_balance is not None and new_balance is not None:
            notify_balance_update(
                user,
                old_balance,
                new_balance,
                coin_transaction.type,
                coin_transaction.amount,
                transaction_id=coin_transaction.id,
            )
        if refresh_dashboard:
            _push_dashboard()

    transaction.on_commit(_announce, robust=True)
