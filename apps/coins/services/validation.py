"""
Business validation for earn and redeem requests.

Checks collect every problem instead of stopping at the first one, so the
app can show the user the full list. Limits come from GlobalConfig.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from typing import List

from django.db.models import Sum
from django.utils import timezone

from apps.brands.models import Brand
from apps.configuration.services import transaction_config, user_config

from ..models import CoinBalance, CoinTransaction, TransactionType, TransactionStatus

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def _current_balance(user) -> int:
    return (
        CoinBalance.objects.filter(user=user).values_list('balance', flat=True).first()
        or 0
    )


def validate_earn_request(*, user, brand: Brand, bill_amount: Decimal, bill_date: date) -> ValidationResult:
    """
    Validate an earn request before it is stored.

    Errors:
        - bill below MIN_BILL_AMOUNT
        - bill date in the future or older than MAX_BILL_AGE_DAYS
        - pending earn for the same brand inside the submission cooldown
        - MAX_PENDING_REQUESTS already waiting for review
        - brandwise earning cap already reached

    Warnings:
        - same bill amount submitted for the brand within FRAUD_PREVENTION_HOURS
    """
    result = ValidationResult()
    limits = transaction_config()
    user_limits = user_config()
    now = timezone.now()

    if Decimal(bill_amount) < Decimal(str(limits['min_bill_amount'])):
        result.errors.append(f"Bill amount must be at least {limits['min_bill_amount']}")

    today = timezone.localdate()
    if bill_date > today:
        result.errors.append("Bill date cannot be in the future")
    elif (today - bill_date).days > limits['max_bill_age_days']:
        result.errors.append(
            f"Bill is too old. Maximum age allowed is {limits['max_bill_age_days']} days"
        )

    user_transactions = CoinTransaction.objects.filter(user=user)

    recent = (
        user_transactions
        .filter(brand=brand, type=TransactionType.EARN, status=TransactionStatus.PENDING)
        .order_by('-created_at')
        .first()
    )
    if recent:
        cooldown = limits['min_time_between_submissions_minutes']
        minutes_since = int((now - recent.created_at).total_seconds() // 60)
        if minutes_since < cooldown:
            result.errors.append(
                f"Please wait {cooldown - minutes_since} minutes before submitting another request"
            )

    pending_total = user_transactions.filter(status=TransactionStatus.PENDING).count()
    if pending_total >= user_limits['max_pending_requests']:
        result.errors.append(
            f"You already have {pending_total} pending requests. "
            f"Maximum allowed is {user_limits['max_pending_requests']}"
        )

    earned_at_brand = (
        user_transactions
        .filter(brand=brand, type=TransactionType.EARN, status=TransactionStatus.APPROVED)
        .aggregate(total=Sum('amount'))['total']
        or 0
    )
    if earned_at_brand >= brand.brandwise_max_cap:
        result.errors.append(
            f"You have reached the maximum earning cap for this brand ({brand.brandwise_max_cap} coins)"
        )

    window_start = now - timedelta(hours=limits['fraud_prevention_hours'])
    similar = (
        user_transactions
        .filter(brand=brand, type=TransactionType.EARN, bill_amount=bill_amount, created_at__gte=window_start)
        .exclude(status=TransactionStatus.REJECTED)
    )
    if similar.exists():
        result.warnings.append("A bill with the same amount was submitted for this brand recently")

    if not result.is_valid:
        logger.warning("Earn request from user %s rejected: %s", user.id, result.errors)
    return result


def validate_redeem_request(
    *,
    user,
    brand: Brand,
    bill_amount: Decimal,
    coins_to_redeem: int,
) -> ValidationResult:
    """
    Validate a redeem request before it is stored.

    Errors:
        - balance below the requested coins or MIN_BALANCE_FOR_REDEMPTION
        - earn requests still pending
        - bill below MIN_BILL_AMOUNT
        - coins above the brand's redemption percentage of the bill
    """
    result = ValidationResult()
    limits = transaction_config()
    user_limits = user_config()

    balance = _current_balance(user)
    if balance < coins_to_redeem:
        result.errors.append("Insufficient coin balance")
    if balance < user_limits['min_balance_for_redemption']:
        result.errors.append(
            f"A balance of at least {user_limits['min_balance_for_redemption']} coins is required to redeem"
        )

    pending_earn = CoinTransaction.objects.filter(
        user=user,
        type=TransactionType.EARN,
        status=TransactionStatus.PENDING,
    ).count()
    if pending_earn:
        result.errors.append(
            "You have pending earn requests. Please wait for them to be processed before redeeming"
        )

    if Decimal(bill_amount) < Decimal(str(limits['min_bill_amount'])):
        result.errors.append(f"Bill amount must be at least {limits['min_bill_amount']}")

    max_for_bill = Decimal(bill_amount) * brand.redemption_percentage / Decimal('100')
    if coins_to_redeem > max_for_bill:
        result.errors.append(
            f"Maximum redemption for this bill is {max_for_bill.quantize(Decimal('0.01'))} coins "
            f"({brand.redemption_percentage}% of bill amount)"
        )

    if not result.is_valid:
        logger.warning("Redeem request from user %s rejected: %s", user.id, result.errors)
    return result
