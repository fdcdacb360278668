"""Coin balance reads and the locked balance helper used by every write."""

import logging
from uuid import UUID

from django.contrib.auth import get_user_model
from django.db.models import QuerySet

from ..models import CoinBalance, CoinTransaction, TransactionType, TransactionStatus
from .exceptions import TransactionNotFoundError, CoinUserNotFoundError

logger = logging.getLogger(__name__)

User = get_user_model()


def get_or_create_balance(user) -> CoinBalance:
    """Return the user's balance row, creating an empty one on first use."""
    balance, created = CoinBalance.objects.get_or_create(user=user)
    if created:
        logger.info("Coin balance created for user %s", user.pk)
    return balance


def lock_balance(user) -> CoinBalance:
    """
    Balance row locked for the current transaction.

    Must be called inside ``transaction.atomic``.
    """
    get_or_create_balance(user)
    return CoinBalance.objects.select_for_update().get(user=user)


def get_balance_summary(user) -> dict:
    """
    Balance, lifetime totals and review queue sizes for one user.

    Returns:
        dict with balance, total_earned, total_redeemed, pending_earn_count,
        pending_redeem_count, total_transactions, last_updated
    """
    balance = get_or_create_balance(user)
    transactions = CoinTransaction.objects.filter(user=user)
    pending = transactions.filter(status=TransactionStatus.PENDING)

    return {
        'balance': balance.balance,
        'total_earned': balance.total_earned,
        'total_redeemed': balance.total_redeemed,
        'pending_earn_count': pending.filter(type=TransactionType.EARN).count(),
        'pending_redeem_count': pending.filter(type=TransactionType.REDEEM).count(),
        'total_transactions': transactions.count(),
        'last_updated': balance.updated_at,
    }


def get_transaction_history(*, user) -> QuerySet[CoinTransaction]:
    """User's transactions, newest first. Views paginate the result."""
    return (
        CoinTransaction.objects
        .filter(user=user)
        .select_related('brand')
        .order_by('-created_at')
    )


def get_user_transaction(*, user, transaction_id: UUID) -> CoinTransaction:
    """
    One of the user's own transactions.

    Raises:
        TransactionNotFoundError: If missing or owned by someone else
    """
    try:
        return CoinTransaction.objects.select_related('brand').get(id=transaction_id, user=user)
    except CoinTransaction.DoesNotExist:
        raise TransactionNotFoundError()


def get_coin_user(*, user_id: UUID):
    """
    Raises:
        CoinUserNotFoundError: Unknown user
    """
    try:
        return User.objects.get(id=user_id)
    except User.DoesNotExist:
        raise CoinUserNotFoundError()
