"""User-submitted earn and redeem requests."""

import logging
from datetime import date
from decimal import Decimal
from uuid import UUID
from typing import Optional

from django.db import transaction

from apps.brands.models import Brand

from ..models import CoinTransaction, TransactionType, TransactionStatus
from .exceptions import (
    TransactionValidationError,
    InsufficientBalanceError,
    CoinBrandNotFoundError,
    BrandUnavailableError,
)
from .validation import validate_earn_request, validate_redeem_request
from .events import announce_new_request
from .balance import get_or_create_balance

logger = logging.getLogger(__name__)


def _get_active_brand(brand_id: UUID) -> Brand:
    try:
        brand = Brand.objects.get(id=brand_id)
    except Brand.DoesNotExist:
        raise CoinBrandNotFoundError()
    if not brand.is_active:
        raise BrandUnavailableError()
    return brand


@transaction.atomic
def create_earn_request(
    *,
    user,
    brand_id: UUID,
    bill_amount: Decimal,
    bill_date: date,
    receipt_url: Optional[str] = None,
    notes: str = '',
) -> CoinTransaction:
    """
    Submit a bill for coin earning.

    Stored as a PENDING EARN worth ``round(bill * earning% / 100)`` coins;
    the balance only changes when an admin approves it.

    Raises:
        CoinBrandNotFoundError: Unknown brand
        BrandUnavailableError: Brand is inactive
        TransactionValidationError: Any business rule failed
    """
    brand = _get_active_brand(brand_id)

    result = validate_earn_request(user=user, brand=brand, bill_amount=bill_amount, bill_date=bill_date)
    if not result.is_valid:
        raise TransactionValidationError('; '.join(result.errors))

    coins = brand.coins_for_bill(bill_amount)
    if coins < 1:
        raise TransactionValidationError("Bill amount is too small to earn coins at this brand")

    earn = CoinTransaction.objects.create(
        user=user,
        brand=brand,
        type=TransactionType.EARN,
        status=TransactionStatus.PENDING,
        amount=coins,
        coins_earned=coins,
        bill_amount=bill_amount,
        bill_date=bill_date,
        receipt_url=receipt_url,
        notes=notes or '',
    )
    logger.info("Earn request %s created: user %s, %s coins at %s", earn.id, user.id, coins, brand.name)
    for warning in result.warnings:
        logger.warning("Earn request %s: %s", earn.id, warning)

    announce_new_request(earn)
    return earn


@transaction.atomic
def create_redeem_request(
    *,
    user,
    brand_id: UUID,
    bill_amount: Decimal,
    coins_to_redeem: int,
    bill_date: Optional[date] = None,
    notes: str = '',
) -> CoinTransaction:
    """
    Ask to spend coins against a bill.

    Stored as a PENDING REDEEM with a negative amount; coins are only
    deducted when an admin approves it.

    Raises:
        CoinBrandNotFoundError: Unknown brand
        BrandUnavailableError: Brand is inactive
        TransactionValidationError: Outside the brand's redemption limits or a rule failed
        InsufficientBalanceError: Not enough coins
    """
    brand = _get_active_brand(brand_id)

    if not brand.min_redemption_amount <= coins_to_redeem <= brand.max_redemption_amount:
        raise TransactionValidationError(
            f"Redemption must be between {brand.min_redemption_amount} and "
            f"{brand.max_redemption_amount} coins for {brand.name}"
        )

    if get_or_create_balance(user).balance < coins_to_redeem:
        raise InsufficientBalanceError()

    result = validate_redeem_request(
        user=user,
        brand=brand,
        bill_amount=bill_amount,
        coins_to_redeem=coins_to_redeem,
    )
    if not result.is_valid:
        raise TransactionValidationError('; '.join(result.errors))

    redeem = CoinTransaction.objects.create(
        user=user,
        brand=brand,
        type=TransactionType.REDEEM,
        status=TransactionStatus.PENDING,
        amount=-coins_to_redeem,
        coins_redeemed=coins_to_redeem,
        bill_amount=bill_amount,
        bill_date=bill_date,
        notes=notes or '',
    )
    logger.info(
        "Redeem request %s created: user %s, %s coins at %s",
        redeem.id, user.id, coins_to_redeem, brand.name,
    )

    announce_new_request(redeem)
    return redeem
