import pytest
from types import SimpleNamespace
from django.urls import reverse
from rest_framework import status
from apps.accounts.models import User, Role
from apps.accounts.permissions import IsAdmin, IsCashier, IsShopStaff


# =============================================================================
# Login Tests
# =============================================================================

@pytest.mark.django_db
class TestLogin:
    """Tests for POST /api/auth/login/"""

    def test_login_success(self, api_client, user):
        url = reverse('accounts:login')
        response = api_client.post(url, {'username': 'cashier', 'password': 'TestPass123!'})

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data['tokens']
        assert 'refresh' in response.data['tokens']
        assert response.data['user']['role'] == 'cashier'
        user.refresh_from_db()
        assert user.last_login is not None

    def test_login_wrong_password(self, api_client, user):
        url = reverse('accounts:login')
        response = api_client.post(url, {'username': 'cashier', 'password': 'WrongPass123!'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert 'error' in response.data

    def test_login_inactive_user(self, api_client, user_inactive):
        url = reverse('accounts:login')
        response = api_client.post(url, {'username': 'former', 'password': 'TestPass123!'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_missing_fields(self, api_client):
        url = reverse('accounts:login')
        response = api_client.post(url, {'username': 'cashier'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'password' in response.data

    def test_token_pair_endpoint(self, api_client, user):
        response = api_client.post(
            reverse('token_obtain_pair'),
            {'username': 'cashier', 'password': 'TestPass123!'},
        )

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data


@pytest.mark.django_db
class TestCurrentUser:
    """Tests for GET /api/auth/user/"""

    def test_get_current_user(self, authenticated_client, user):
        url = reverse('accounts:current-user')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['username'] == 'cashier'
        assert response.data['display_name'] == 'Front Desk'
        assert response.data['role'] == Role.CASHIER

    def test_unauthenticated(self, api_client):
        url = reverse('accounts:current-user')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Model and Permission Tests
# =============================================================================

@pytest.mark.django_db
class TestUserModel:

    def test_default_role_is_staff(self):
        user = User.objects.create_user(username='operator', password='TestPass123!')

        assert user.role == Role.STAFF
        assert user.get_display_name() == 'operator'

    def test_superuser_is_admin(self):
        user = User.objects.create_superuser(username='owner', password='TestPass123!')

        assert user.role == Role.ADMIN
        assert user.is_staff

    def test_username_required(self):
        with pytest.raises(ValueError):
            User.objects.create_user(username='', password='TestPass123!')


class TestRolePermissions:

    @staticmethod
    def _request(role):
        return SimpleNamespace(user=SimpleNamespace(is_authenticated=True, role=role))

    @pytest.mark.parametrize('permission, role, allowed', [
        (IsAdmin, Role.ADMIN, True),
        (IsAdmin, Role.CASHIER, False),
        (IsCashier, Role.ADMIN, True),
        (IsCashier, Role.CASHIER, True),
        (IsCashier, Role.STAFF, False),
        (IsShopStaff, Role.STAFF, True),
    ])
    def test_roles(self, permission, role, allowed):
        assert permission().has_permission(self._request(role), None) is allowed

    def test_anonymous_denied(self):
        request = SimpleNamespace(user=SimpleNamespace(is_authenticated=False))

        assert IsShopStaff().has_permission(request, None) is False


# =============================================================================
# Health Check Tests
# =============================================================================

@pytest.mark.django_db
class TestHealthCheck:
    """Tests for GET /api/health/ over plain http"""

    def test_health_check(self, api_client):
        url = reverse('health-check')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {'status': 'ok', 'service': 'print-shop'}

    def test_no_https_redirect(self, settings):
        assert settings.SECURE_SSL_REDIRECT is False
