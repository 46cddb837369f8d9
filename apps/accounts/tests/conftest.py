import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, Role


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a cashier account."""
    return User.objects.create_user(
        username='cashier',
        password='TestPass123!',
        name='Front Desk',
        role=Role.CASHIER,
    )


@pytest.fixture
def user_inactive(db):
    """Create and return a deactivated account."""
    return User.objects.create_user(
        username='former',
        password='TestPass123!',
        is_active=False,
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an authenticated API client using JWT."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client
