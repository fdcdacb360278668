"""Admin dashboard figures."""

from django.contrib.auth import get_user_model
from django.db.models import Sum

from ..models import CoinBalance, CoinTransaction, TransactionType, TransactionStatus
from .events import pending_counts

User = get_user_model()


def get_transaction_stats() -> dict:
    """
    Returns:
        dict with total_users, total_coins_in_circulation, pending_earn_requests,
        pending_redeem_requests, total_earned, total_redeemed, welcome_bonuses_given
    """
    pending = pending_counts()
    transactions = CoinTransaction.objects.all()

    total_earned = transactions.filter(
        type=TransactionType.EARN,
        status=TransactionStatus.APPROVED,
    ).aggregate(total=Sum('amount'))['total']

    total_redeemed = transactions.filter(
        type=TransactionType.REDEEM,
        status=TransactionStatus.PAID,
    ).aggregate(total=Sum('coins_redeemed'))['total']

    return {
        'total_users': User.objects.count(),
        'total_coins_in_circulation': CoinBalance.objects.aggregate(total=Sum('balance'))['total'] or 0,
        'pending_earn_requests': pending['pending_earn'],
        'pending_redeem_requests': pending['pending_redeem'],
        'total_earned': total_earned or 0,
        'total_redeemed': total_redeemed or 0,
        'welcome_bonuses_given': transactions.filter(type=TransactionType.WELCOME_BONUS).count(),
    }
