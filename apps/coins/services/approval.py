"""
Admin review of earn and redeem requests.

Status moves are linear and checked under a row lock:

    EARN:   PENDING -> APPROVED | REJECTED
    REDEEM: PENDING -> PROCESSED | REJECTED, then PROCESSED -> PAID (payments)

Balance changes happen in the same database transaction as the status
change, with the balance row locked.
"""

import logging
from uuid import UUID
from typing import Optional

from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from ..models import CoinBalance, CoinTransaction, TransactionType, TransactionStatus
from .exceptions import (
    TransactionNotFoundError,
    InvalidTransactionStateError,
    InsufficientBalanceError,
    PendingEarnRequestsError,
    AdminNotesRequiredError,
)
from .balance import lock_balance
from .events import announce_status_change

logger = logging.getLogger(__name__)


def _lock_transaction(transaction_id: UUID) -> CoinTransaction:
    try:
        return (
            CoinTransaction.objects
            .select_for_update(of=('self',))
            .select_related('user', 'brand')
            .get(id=transaction_id)
        )
    except CoinTransaction.DoesNotExist:
        raise TransactionNotFoundError()


def _require_pending(coin_transaction: CoinTransaction, expected_type: str, verb: str) -> None:
    if coin_transaction.type != expected_type:
        raise InvalidTransactionStateError(
            f"Only {expected_type.lower()} transactions can be {verb}"
        )
    if coin_transaction.status != TransactionStatus.PENDING:
        raise InvalidTransactionStateError("Transaction is not pending approval")


def _require_notes(admin_notes: Optional[str]) -> str:
    if not admin_notes or not admin_notes.strip():
        raise AdminNotesRequiredError()
    return admin_notes.strip()


def _close(coin_transaction: CoinTransaction, status: str, admin_notes: Optional[str]) -> None:
    coin_transaction.status = status
    coin_transaction.processed_at = timezone.now()
    if admin_notes:
        coin_transaction.admin_notes = admin_notes
    coin_transaction.save(update_fields=['status', 'processed_at', 'admin_notes', 'updated_at'])


@transaction.atomic
def approve_earn(*, transaction_id: UUID, admin_notes: Optional[str] = None) -> CoinTransaction:
    """
    Approve a pending earn request and credit the coins.

    Raises:
        TransactionNotFoundError: Unknown transaction
        InvalidTransactionStateError: Not a PENDING EARN
    """
    earn = _lock_transaction(transaction_id)
    _require_pending(earn, TransactionType.EARN, 'approved')

    balance = lock_balance(earn.user)
    old_balance = balance.balance
    balance.credit(earn.amount)
    balance.save(update_fields=['balance', 'total_earned', 'updated_at'])

    _close(earn, TransactionStatus.APPROVED, admin_notes)
    logger.info(
        "Earn %s approved: user %s balance %s -> %s",
        earn.id, earn.user_id, old_balance, balance.balance,
    )

    announce_status_change(earn, notes=admin_notes, old_balance=old_balance, new_balance=balance.balance)
    return earn


@transaction.atomic
def reject_earn(*, transaction_id: UUID, admin_notes: Optional[str]) -> CoinTransaction:
    """
    Reject a pending earn request. The balance is untouched.

    Raises:
        AdminNotesRequiredError: No rejection reason given
        TransactionNotFoundError: Unknown transaction
        InvalidTransactionStateError: Not a PENDING EARN
    """
    notes = _require_notes(admin_notes)
    earn = _lock_transaction(transaction_id)
    _require_pending(earn, TransactionType.EARN, 'rejected')

    _close(earn, TransactionStatus.REJECTED, notes)
    logger.info("Earn %s rejected", earn.id)

    announce_status_change(earn, notes=notes)
    return earn


@transaction.atomic
def approve_redeem(*, transaction_id: UUID, admin_notes: Optional[str] = None) -> CoinTransaction:
    """
    Approve a pending redeem request and deduct the coins.

    The transaction moves to PROCESSED and waits for payout.

    Raises:
        TransactionNotFoundError: Unknown transaction
        InvalidTransactionStateError: Not a PENDING REDEEM
        PendingEarnRequestsError: User still has earn requests under review
        InsufficientBalanceError: No balance row or too few coins
    """
    redeem = _lock_transaction(transaction_id)
    _require_pending(redeem, TransactionType.REDEEM, 'approved')

    has_pending_earn = CoinTransaction.objects.filter(
        user_id=redeem.user_id,
        type=TransactionType.EARN,
        status=TransactionStatus.PENDING,
    ).exists()
    if has_pending_earn:
        logger.warning("Redeem %s blocked by pending earn requests", redeem.id)
        raise PendingEarnRequestsError()

    try:
        balance = CoinBalance.objects.select_for_update().get(user_id=redeem.user_id)
    except CoinBalance.DoesNotExist:
        raise InsufficientBalanceError("User has no coin balance")

    coins = redeem.coins
    if balance.balance < coins:
        raise InsufficientBalanceError("Insufficient coin balance for redemption")

    old_balance = balance.balance
    balance.debit(coins)
    balance.save(update_fields=['balance', 'total_redeemed', 'updated_at'])

    _close(redeem, TransactionStatus.PROCESSED, admin_notes)
    logger.info(
        "Redeem %s processed: user %s balance %s -> %s",
        redeem.id, redeem.user_id, old_balance, balance.balance,
    )

    announce_status_change(redeem, notes=admin_notes, old_balance=old_balance, new_balance=balance.balance)
    return redeem


@transaction.atomic
def reject_redeem(*, transaction_id: UUID, admin_notes: Optional[str]) -> CoinTransaction:
    """
    Reject a pending redeem request. No coins are deducted.

    Raises:
        AdminNotesRequiredError: No rejection reason given
        TransactionNotFoundError: Unknown transaction
        InvalidTransactionStateError: Not a PENDING REDEEM
    """
    notes = _require_notes(admin_notes)
    redeem = _lock_transaction(transaction_id)
    _require_pending(redeem, TransactionType.REDEEM, 'rejected')

    _close(redeem, TransactionStatus.REJECTED, notes)
    logger.info("Redeem %s rejected", redeem.id)

    announce_status_change(redeem, notes=notes)
    return redeem


def list_transactions(
    *,
    type: Optional[str] = None,
    status: Optional[str] = None,
    user_id: Optional[UUID] = None,
    brand_id: Optional[UUID] = None,
) -> QuerySet[CoinTransaction]:
    """All transactions for the admin portal, newest first."""
    queryset = CoinTransaction.objects.select_related('user', 'brand')
    if type:
        queryset = queryset.filter(type=type)
    if status:
        queryset = queryset.filter(status=status)
    if user_id:
        queryset = queryset.filter(user_id=user_id)
    if brand_id:
        queryset = queryset.filter(brand_id=brand_id)
    return queryset.order_by('-created_at')


def list_pending_transactions(*, type: Optional[str] = None) -> QuerySet[CoinTransaction]:
    """Review queue, oldest first."""
    queryset = CoinTransaction.objects.select_related('user', 'brand').filter(
        status=TransactionStatus.PENDING,
    )
    if type:
        queryset = queryset.filter(type=type)
    return queryset.order_by('created_at')
