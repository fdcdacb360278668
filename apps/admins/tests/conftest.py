import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User, UserProfile, UserStatus
from apps.coins.models import CoinBalance


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


def make_user(mobile_number, status=UserStatus.ACTIVE, **extra):
    user = User.objects.create_user(
        mobile_number=mobile_number,
        password='TestPass123',
        status=status,
        **extra,
    )
    UserProfile.objects.create(user=user, first_name='Managed', last_name='User')
    return user


@pytest.fixture
def app_user(db):
    """Active user with 250 coins."""
    user = make_user('9876543210', email='member@example.com')
    CoinBalance.objects.create(user=user, balance=250, total_earned=250)
    return user


@pytest.fixture
def pending_app_user(db):
    return make_user('9123456780', status=UserStatus.PENDING)


@pytest.fixture
def user_client(app_user):
    """API client authenticated as an app user."""
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {RefreshToken.for_user(app_user).access_token}')
    return client
