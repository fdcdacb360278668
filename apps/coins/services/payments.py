"""Payout of processed redemptions (1 coin = 1 currency unit)."""

import logging
from datetime import date
from decimal import Decimal
from uuid import UUID
from typing import Optional

from django.db import IntegrityError, transaction
from django.db.models import Avg, Count, QuerySet, Sum
from django.utils import timezone

from ..models import CoinTransaction, TransactionType, TransactionStatus
from .exceptions import (
    TransactionNotFoundError,
    InvalidTransactionStateError,
    InvalidPaymentError,
    DuplicatePaymentReferenceError,
)
from .events import announce_status_change

logger = logging.getLogger(__name__)

PAYMENT_TOLERANCE = Decimal('0.01')


def expected_payment_amount(coins: int) -> Decimal:
    return Decimal(coins)


@transaction.atomic
def process_payment(
    *,
    transaction_id: UUID,
    payment_transaction_id: str,
    payment_method: str,
    payment_amount: Decimal,
    admin_notes: Optional[str] = None,
) -> CoinTransaction:
    """
    Record the payout for a processed redemption and mark it PAID.

    Args:
        transaction_id: CoinTransaction UUID
        payment_transaction_id: Reference from the payment provider, unique
        payment_method: e.g. UPI, BANK_TRANSFER
        payment_amount: Amount paid out, must equal the redeemed coins
        admin_notes: Optional note

    Raises:
        InvalidPaymentError: Missing reference or method, bad amount
        TransactionNotFoundError: Unknown transaction
        InvalidTransactionStateError: Not a PROCESSED REDEEM
        DuplicatePaymentReferenceError: Reference already used
    """
    reference = (payment_transaction_id or '').strip()
    if not reference:
        raise InvalidPaymentError("Payment transaction ID is required")

    method = (payment_method or '').strip()
    if not method:
        raise InvalidPaymentError("Payment method is required")

    amount = Decimal(payment_amount)
    if amount <= 0:
        raise InvalidPaymentError("Payment amount must be greater than zero")

    try:
        redeem = (
            CoinTransaction.objects
            .select_for_update(of=('self',))
            .select_related('user', 'brand')
            .get(id=transaction_id)
        )
    except CoinTransaction.DoesNotExist:
        raise TransactionNotFoundError()

    if redeem.type != TransactionType.REDEEM:
        raise InvalidTransactionStateError("Only redeem transactions can be processed for payment")
    if redeem.status != TransactionStatus.PROCESSED:
        raise InvalidTransactionStateError("Transaction must be processed before payment can be made")

    expected = expected_payment_amount(redeem.coins)
    if abs(amount - expected) > PAYMENT_TOLERANCE:
        raise InvalidPaymentError(
            f"Payment amount {amount} does not match expected amount {expected} for {redeem.coins} coins"
        )

    if CoinTransaction.objects.filter(transaction_id=reference).exists():
        raise DuplicatePaymentReferenceError()

    redeem.status = TransactionStatus.PAID
    redeem.transaction_id = reference
    redeem.payment_method = method
    redeem.payment_amount = amount
    redeem.payment_processed_at = timezone.now()
    if admin_notes:
        redeem.admin_notes = admin_notes

    try:
        with transaction.atomic():
            redeem.save()
    except IntegrityError:
        raise DuplicatePaymentReferenceError()

    logger.info("Redeem %s paid: %s via %s (ref %s)", redeem.id, amount, method, reference)

    announce_status_change(redeem, notes=admin_notes, refresh_dashboard=False)
    return redeem


def get_payment_summary(*, transaction_id: UUID) -> dict:
    """
    Payout receipt for a paid redemption.

    Raises:
        TransactionNotFoundError: Unknown transaction
        InvalidTransactionStateError: Not a PAID REDEEM
    """
    try:
        redeem = CoinTransaction.objects.select_related(
            'user', 'user__profile', 'user__payment_details', 'brand',
        ).get(id=transaction_id)
    except CoinTransaction.DoesNotExist:
        raise TransactionNotFoundError()

    if redeem.type != TransactionType.REDEEM or redeem.status != TransactionStatus.PAID:
        raise InvalidTransactionStateError("Only paid redeem transactions have payment summaries")

    user = redeem.user
    profile = getattr(user, 'profile', None)
    payment_details = getattr(user, 'payment_details', None)
    user_name = f"{profile.first_name} {profile.last_name}".strip() if profile else ''

    return {
        'transaction_id': redeem.id,
        'user_id': user.id,
        'user_name': user_name or 'Unknown User',
        'user_mobile_number': user.mobile_number,
        'user_email': user.email,
        'upi_id': payment_details.upi_id if payment_details else None,
        'brand_name': redeem.brand.name if redeem.brand_id else None,
        'coin_amount': redeem.coins,
        'payment_amount': redeem.payment_amount,
        'payment_method': redeem.payment_method,
        'payment_transaction_id': redeem.transaction_id,
        'status': redeem.status,
        'admin_notes': redeem.admin_notes,
        'created_at': redeem.created_at,
        'payment_processed_at': redeem.payment_processed_at,
    }


def list_paid_transactions(
    *,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> QuerySet[CoinTransaction]:
    """Paid redemptions, most recently paid first, optionally by payout date."""
    queryset = CoinTransaction.objects.select_related('user', 'brand').filter(
        type=TransactionType.REDEEM,
        status=TransactionStatus.PAID,
    )
    if start_date:
        queryset = queryset.filter(payment_processed_at__date__gte=start_date)
    if end_date:
        queryset = queryset.filter(payment_processed_at__date__lte=end_date)
    return queryset.order_by('-payment_processed_at')


def get_payment_stats(*, start_date: Optional[date] = None, end_date: Optional[date] = None) -> dict:
    """
    Payout totals.

    Returns:
        dict with total_paid, total_amount, average_amount, payment_methods
    """
    paid = list_paid_transactions(start_date=start_date, end_date=end_date)
    totals = paid.aggregate(
        total_paid=Count('id'),
        total_amount=Sum('payment_amount'),
        average_amount=Avg('payment_amount'),
    )
    methods = paid.order_by().values('payment_method').annotate(count=Count('id'))

    return {
        'total_paid': totals['total_paid'],
        'total_amount': totals['total_amount'] or Decimal('0'),
        'average_amount': Decimal(totals['average_amount'] or 0).quantize(Decimal('0.01')),
        'payment_methods': {row['payment_method']: row['count'] for row in methods},
    }
