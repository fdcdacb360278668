import pytest
from decimal import Decimal
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User, UserProfile, PaymentDetails, UserStatus
from apps.brands.models import Brand
from apps.coins.models import CoinBalance, CoinTransaction, TransactionType, TransactionStatus


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


def make_user(mobile_number, status=UserStatus.ACTIVE, **extra):
    user = User.objects.create_user(
        mobile_number=mobile_number,
        password='TestPass123',
        status=status,
        is_mobile_verified=True,
        **extra,
    )
    UserProfile.objects.create(user=user, first_name='Coin', last_name='Tester')
    PaymentDetails.objects.create(user=user, upi_id=f'{mobile_number}@upi')
    return user


def fund(user, coins):
    """Give a user a balance without going through the approval flow."""
    balance, _ = CoinBalance.objects.get_or_create(user=user)
    balance.balance += coins
    balance.total_earned += coins
    balance.save()
    return balance


@pytest.fixture
def user(db):
    """Create and return an active user."""
    return make_user('9876543210', email='coins@example.com')


@pytest.fixture
def other_user(db):
    """Create and return another active user."""
    return make_user('9000000002', email='other@example.com')


@pytest.fixture
def suspended_user(db):
    return make_user('9000000003', status=UserStatus.SUSPENDED)


@pytest.fixture
def brand(db):
    """Active brand: 10% earning, 30% redemption, 1-2000 coins."""
    return Brand.objects.create(
        name='Cafe Corra',
        earning_percentage=Decimal('10.00'),
        redemption_percentage=Decimal('30.00'),
        min_redemption_amount=1,
        max_redemption_amount=2000,
        brandwise_max_cap=2000,
    )


@pytest.fixture
def other_brand(db):
    return Brand.objects.create(name='Style Street', earning_percentage=Decimal('5.00'))


@pytest.fixture
def inactive_brand(db):
    return Brand.objects.create(name='Closed Shop', is_active=False)


@pytest.fixture
def funded_user(user):
    """User with 500 coins."""
    fund(user, 500)
    return user


@pytest.fixture
def pending_earn(user, brand):
    """PENDING EARN worth 100 coins for a 1000 bill."""
    return CoinTransaction.objects.create(
        user=user,
        brand=brand,
        type=TransactionType.EARN,
        status=TransactionStatus.PENDING,
        amount=100,
        coins_earned=100,
        bill_amount=Decimal('1000.00'),
        bill_date=timezone.localdate(),
    )


@pytest.fixture
def pending_redeem(funded_user, brand):
    """PENDING REDEEM of 200 coins against a 1000 bill."""
    return CoinTransaction.objects.create(
        user=funded_user,
        brand=brand,
        type=TransactionType.REDEEM,
        status=TransactionStatus.PENDING,
        amount=-200,
        coins_redeemed=200,
        bill_amount=Decimal('1000.00'),
    )


@pytest.fixture
def processed_redeem(pending_redeem):
    """Redeem that was approved and awaits payout (balance already debited)."""
    balance = pending_redeem.user.coin_balance
    balance.balance -= 200
    balance.total_redeemed += 200
    balance.save()
    pending_redeem.status = TransactionStatus.PROCESSED
    pending_redeem.processed_at = timezone.now()
    pending_redeem.save()
    return pending_redeem


@pytest.fixture
def authenticated_client(api_client, user):
    """Return API client authenticated as user."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client
