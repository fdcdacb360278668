import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User, UserProfile, PaymentDetails, UserStatus
from apps.accounts.sms import InMemorySmsBackend


@pytest.fixture(autouse=True)
def sms_outbox():
    """Empty the in-memory SMS outbox around each test."""
    InMemorySmsBackend.outbox.clear()
    yield InMemorySmsBackend.outbox
    InMemorySmsBackend.outbox.clear()


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


def make_user(mobile_number, password='TestPass123', status=UserStatus.ACTIVE, **extra):
    extra.setdefault('is_mobile_verified', status == UserStatus.ACTIVE)
    user = User.objects.create_user(
        mobile_number=mobile_number,
        password=password,
        status=status,
        **extra,
    )
    UserProfile.objects.create(user=user, first_name='Test', last_name='User')
    PaymentDetails.objects.create(user=user)
    return user


@pytest.fixture
def user(db):
    """Create and return an active user with a password and email."""
    return make_user(
        '9876543210',
        email='testuser@example.com',
        is_email_verified=True,
    )


@pytest.fixture
def pending_user(db):
    """Create a PENDING user who started signup but has no password."""
    return make_user('9123456780', password=None, status=UserStatus.PENDING)


@pytest.fixture
def suspended_user(db):
    """Create and return a suspended user."""
    return make_user('9000000001', email='suspended@example.com', status=UserStatus.SUSPENDED)


@pytest.fixture
def other_user(db):
    """Create and return another active user."""
    return make_user('9000000002', email='other@example.com', is_email_verified=True)


@pytest.fixture
def authenticated_client(api_client, user):
    """Return API client authenticated as user."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client
