import pytest
from django.core.cache import cache
from rest_framework.test import APIClient


@pytest.fixture(autouse=True)
def clear_config_cache():
    """GlobalConfig values are cached; start every test cold."""
    cache.clear()
    yield
    cache.clear()


def make_admin(email, role='ADMIN', password='AdminPass123', **extra):
    from apps.admins.models import Admin

    admin = Admin(email=email, first_name='Portal', last_name='Admin', role=role, **extra)
    admin.set_password(password)
    admin.save()
    return admin


def client_for_admin(admin):
    from apps.admins.authentication import tokens_for_admin

    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {tokens_for_admin(admin).access_token}')
    return client


@pytest.fixture
def platform_admin(db):
    """Create and return an active ADMIN."""
    return make_admin('admin@clubcorra.com')


@pytest.fixture
def super_admin(db):
    """Create and return an active SUPER_ADMIN."""
    return make_admin('super@clubcorra.com', role='SUPER_ADMIN')


@pytest.fixture
def admin_api_client(platform_admin):
    """Return API client authenticated as an ADMIN."""
    return client_for_admin(platform_admin)


@pytest.fixture
def super_admin_api_client(super_admin):
    """Return API client authenticated as a SUPER_ADMIN."""
    return client_for_admin(super_admin)
