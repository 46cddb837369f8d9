import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, Role
from apps.catalog.defaults import TARPAULIN_RULES, LAMINATION_RULES
from apps.catalog.models import Service, ServiceCategory


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(
        username='admin',
        password='TestPass123!',
        name='Shop Admin',
        role=Role.ADMIN,
    )


@pytest.fixture
def cashier_user(db):
    return User.objects.create_user(
        username='cashier',
        password='TestPass123!',
        name='Front Desk',
        role=Role.CASHIER,
    )


@pytest.fixture
def admin_client(admin_user):
    """Return API client authenticated as admin."""
    return _client_for(admin_user)


@pytest.fixture
def cashier_client(cashier_user):
    """Return API client authenticated as cashier."""
    return _client_for(cashier_user)


@pytest.fixture
def tarpaulin_service(db):
    return Service.objects.create(
        name='Tarpaulin Printing',
        category=ServiceCategory.DYNAMIC,
        type='tarpaulin',
        base_price=Decimal('25.00'),
        pricing_rules=TARPAULIN_RULES,
        display_order=1,
    )


@pytest.fixture
def lamination_service(db):
    return Service.objects.create(
        name='ID Lamination',
        category=ServiceCategory.DYNAMIC,
        type='lamination',
        base_price=Decimal('25.00'),
        pricing_rules=LAMINATION_RULES,
        display_order=2,
        online_available=False,
    )


@pytest.fixture
def standard_service(db):
    return Service.objects.create(
        name='Photocopying Service',
        category=ServiceCategory.STANDARD,
        type='standard',
        base_price=Decimal('2.00'),
        display_order=3,
    )


@pytest.fixture
def inactive_service(db):
    return Service.objects.create(
        name='Old Binding',
        category=ServiceCategory.STANDARD,
        type='standard',
        base_price=Decimal('40.00'),
        active=False,
    )
