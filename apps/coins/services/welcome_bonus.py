"""One-time welcome bonus for new users."""

import logging
from uuid import UUID
from typing import Optional

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.accounts.models import UserStatus
from apps.configuration.services import get_value

from ..models import CoinTransaction, TransactionType, TransactionStatus
from .exceptions import (
    CoinUserNotFoundError,
    InactiveUserError,
    WelcomeBonusAlreadyProcessedError,
)
from .balance import lock_balance
from .events import announce_status_change

logger = logging.getLogger(__name__)

User = get_user_model()

DEFAULT_WELCOME_BONUS = 100


def welcome_bonus_amount() -> int:
    return int(get_value('WELCOME_BONUS_AMOUNT', DEFAULT_WELCOME_BONUS))


def _has_bonus_row(user) -> bool:
    return CoinTransaction.objects.filter(user=user, type=TransactionType.WELCOME_BONUS).exists()


def is_eligible_for_welcome_bonus(user) -> bool:
    return (
        user.status == UserStatus.ACTIVE
        and not user.has_welcome_bonus_processed
        and not _has_bonus_row(user)
    )


@transaction.atomic
def create_welcome_bonus(*, user_id: UUID, mobile_number: Optional[str] = None) -> dict:
    """
    Grant the welcome bonus once per user.

    Args:
        user_id: Recipient
        mobile_number: When given, must match the user's number

    Returns:
        dict with success, message, coins_awarded, new_balance, transaction_id

    Raises:
        CoinUserNotFoundError: No such user (or mobile number mismatch)
        InactiveUserError: User is not ACTIVE
        WelcomeBonusAlreadyProcessedError: Bonus already granted
    """
    lookup = {'id': user_id}
    if mobile_number:
        lookup['mobile_number'] = mobile_number

    try:
        user = User.objects.select_for_update().get(**lookup)
    except User.DoesNotExist:
        raise CoinUserNotFoundError()

    if user.status != UserStatus.ACTIVE:
        raise InactiveUserError()

    if user.has_welcome_bonus_processed or _has_bonus_row(user):
        raise WelcomeBonusAlreadyProcessedError()

    amount = welcome_bonus_amount()
    try:
        with transaction.atomic():
            bonus = CoinTransaction.objects.create(
                user=user,
                type=TransactionType.WELCOME_BONUS,
                status=TransactionStatus.APPROVED,
                amount=amount,
                coins_earned=amount,
                description='Welcome bonus',
                processed_at=timezone.now(),
            )
    except IntegrityError:
        raise WelcomeBonusAlreadyProcessedError()

    balance = lock_balance(user)
    old_balance = balance.balance
    balance.credit(amount)
    balance.save(update_fields=['balance', 'total_earned', 'updated_at'])

    user.has_welcome_bonus_processed = True
    user.save(update_fields=['has_welcome_bonus_processed', 'updated_at'])

    logger.info("Welcome bonus of %s coins granted to user %s", amount, user.id)

    announce_status_change(
        bonus,
        old_balance=old_balance,
        new_balance=balance.balance,
        refresh_dashboard=False,
    )

    return {
        'success': True,
        'message': f'Welcome bonus of {amount} Corra Coins awarded successfully!',
        'coins_awarded': amount,
        'new_balance': balance.balance,
        'transaction_id': bonus.id,
    }
