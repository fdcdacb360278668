import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User, UserStatus
from apps.brands.models import Brand, BrandCategory


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def food(db):
    return BrandCategory.objects.create(name='Food', icon='utensils', color='#FF6600')


@pytest.fixture
def fashion(db):
    return BrandCategory.objects.create(name='Fashion')


@pytest.fixture
def brand(food):
    """Active food brand: 10% earning, 30% redemption."""
    return Brand.objects.create(
        name='Cafe Corra',
        description='Coffee and snacks',
        category=food,
        earning_percentage=Decimal('10.00'),
        redemption_percentage=Decimal('30.00'),
    )


@pytest.fixture
def inactive_brand(fashion):
    return Brand.objects.create(name='Closed Boutique', category=fashion, is_active=False)


@pytest.fixture
def brands(brand, inactive_brand, fashion):
    """Three brands, one of them inactive."""
    street = Brand.objects.create(name='Style Street', category=fashion, description='Casual coffee-stained tees')
    return [brand, inactive_brand, street]


@pytest.fixture
def user_client(db):
    """API client authenticated as an app user."""
    user = User.objects.create_user(
        mobile_number='9876543210',
        password='TestPass123',
        status=UserStatus.ACTIVE,
    )
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {RefreshToken.for_user(user).access_token}')
    return client
