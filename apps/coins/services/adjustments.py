"""Manual balance corrections by admins."""

import logging
from uuid import UUID
from typing import Optional

from django.db import transaction
from django.utils import timezone

from ..models import CoinTransaction, TransactionType, TransactionStatus
from .exceptions import InvalidAdjustmentError, InsufficientBalanceError
from .balance import lock_balance, get_coin_user
from .events import announce_status_change

logger = logging.getLogger(__name__)


@transaction.atomic
def adjust_balance(
    *,
    user_id: UUID,
    amount: int,
    description: str,
    reason: Optional[str] = None,
) -> CoinTransaction:
    """
    Add or remove coins outside the earn and redeem flow.

    Only ``balance`` moves; lifetime earned and redeemed totals are left alone.

    Args:
        user_id: Target user
        amount: Signed, non-zero coin delta
        description: Shown to the user in their history
        reason: Internal note stored as admin notes

    Raises:
        InvalidAdjustmentError: Zero amount
        CoinUserNotFoundError: Unknown user
        InsufficientBalanceError: The balance would go negative
    """
    if not amount:
        raise InvalidAdjustmentError()

    user = get_coin_user(user_id=user_id)

    balance = lock_balance(user)
    old_balance = balance.balance
    if old_balance + amount < 0:
        raise InsufficientBalanceError(
            f"Adjustment of {amount} would leave a negative balance ({old_balance + amount})"
        )

    balance.balance = old_balance + amount
    balance.save(update_fields=['balance', 'updated_at'])

    adjustment = CoinTransaction.objects.create(
        user=user,
        type=TransactionType.ADJUSTMENT,
        status=TransactionStatus.APPROVED,
        amount=amount,
        description=description,
        admin_notes=reason or '',
        processed_at=timezone.now(),
    )
    logger.info(
        "Balance adjusted for user %s by %s: %s -> %s",
        user.id, amount, old_balance, balance.balance,
    )

    announce_status_change(
        adjustment,
        notes=description,
        old_balance=old_balance,
        new_balance=balance.balance,
        refresh_dashboard=False,
    )
    return adjustment
