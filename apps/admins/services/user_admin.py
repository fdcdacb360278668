"""App user management for portal admins."""

import logging
from uuid import UUID
from typing import Optional

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Q, QuerySet, Sum, Count

from apps.accounts.models import UserStatus
from apps.coins.models import CoinBalance

from .exceptions import ManagedUserNotFoundError

User = get_user_model()
logger = logging.getLogger(__name__)


def list_users(*, status: Optional[str] = None, search: Optional[str] = None) -> QuerySet:
    """
    List app users with profile and coin balance, newest first.

    Args:
        status: Filter by UserStatus
        search: Match on mobile number or email
    """
    queryset = User.objects.select_related('profile', 'coin_balance').order_by('-created_at')

    if status:
        queryset = queryset.filter(status=status)

    if search:
        queryset = queryset.filter(
            Q(mobile_number__icontains=search) |
            Q(email__icontains=search)
        )

    return queryset


def get_managed_user(*, user_id: UUID):
    """
    Raises:
        ManagedUserNotFoundError: If user doesn't exist
    """
    try:
        return (
            User.objects
            .select_related('profile', 'payment_details', 'coin_balance')
            .get(id=user_id)
        )
    except User.DoesNotExist:
        raise ManagedUserNotFoundError("User not found")


def get_user_stats() -> dict:
    """
    Count users by status and sum coins in circulation.

    Returns:
        dict with total_users, active_users, pending_users, total_coins
    """
    counts = User.objects.aggregate(
        total_users=Count('id'),
        active_users=Count('id', filter=Q(status=UserStatus.ACTIVE)),
        pending_users=Count('id', filter=Q(status=UserStatus.PENDING)),
    )
    counts['total_coins'] = CoinBalance.objects.aggregate(total=Sum('balance'))['total'] or 0
    return counts


@transaction.atomic
def update_user_status(*, user_id: UUID, status: str):
    """
    Set a user's account status (activate, suspend, ...).

    Raises:
        ManagedUserNotFoundError: If user doesn't exist
    """
    try:
        user = User.objects.select_for_update().get(id=user_id)
    except User.DoesNotExist:
        raise ManagedUserNotFoundError("User not found")

    previous = user.status
    user.status = status
    user.save(update_fields=['status', 'updated_at'])

    logger.info("User %s status changed %s -> %s", user.id, previous, status)
    return get_managed_user(user_id=user.id)
