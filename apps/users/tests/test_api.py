import pytest
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from apps.users.models import User
from apps.families.models import Family


@pytest.mark.django_db
class TestUserRegistration:
    """Tests for POST /api/auth/register/"""

    def test_register_success(self, api_client):
        url = reverse('users:register')
        data = {
            'username': 'newuser',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
            'first_name': 'New',
            'last_name': 'User',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['user']['username'] == 'newuser'
        assert response.data['user']['family_id'] is None
        assert response.data['family'] is None
        assert 'access' in response.data['tokens']
        assert 'refresh' in response.data['tokens']
        assert User.objects.filter(username='newuser').exists()

    def test_register_with_family_name(self, api_client):
        url = reverse('users:register')
        response = api_client.post(url, {
            'username': 'founder',
            'password': 'SecurePass123!',
            'family_name': 'Founders',
        })

        assert response.status_code == status.HTTP_201_CREATED
        family = Family.objects.get(name='Founders')
        assert response.data['family']['id'] == str(family.id)
        assert response.data['user']['family_id'] == str(family.id)
        assert response.data['user']['role'] == 'admin'

    def test_register_with_invitation_code(self, api_client, invitation, user_family):
        url = reverse('users:register')
        response = api_client.post(url, {
            'username': 'joiner',
            'password': 'SecurePass123!',
            'invitation_code': 'JOIN42',
        })

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['family']['name'] == 'Test Family'
        assert response.data['user']['role'] == 'member'

    def test_register_with_invalid_code(self, api_client):
        url = reverse('users:register')
        response = api_client.post(url, {
            'username': 'joiner',
            'password': 'SecurePass123!',
            'invitation_code': 'NOPE00',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Invalid invitation code'
        assert not User.objects.filter(username='joiner').exists()

    def test_register_duplicate_username(self, api_client, user):
        url = reverse('users:register')
        response = api_client.post(url, {'username': 'testuser', 'password': 'SecurePass123!'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'User already exists'

    def test_register_password_mismatch(self, api_client):
        url = reverse('users:register')
        response = api_client.post(url, {
            'username': 'newuser',
            'password': 'SecurePass123!',
            'password_confirm': 'Different123!',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'password_confirm' in response.data

    def test_register_short_username(self, api_client):
        url = reverse('users:register')
        response = api_client.post(url, {'username': 'ab', 'password': 'SecurePass123!'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_register_short_password(self, api_client):
        url = reverse('users:register')
        response = api_client.post(url, {'username': 'newuser', 'password': '12345'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestUserLogin:
    """Tests for POST /api/auth/login/"""

    def test_login_success(self, api_client, user, user_family):
        url = reverse('users:login')
        response = api_client.post(url, {'username': 'testuser', 'password': 'TestPass123!'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['user']['username'] == 'testuser'
        assert response.data['family']['id'] == str(user_family.id)
        assert 'access' in response.data['tokens']

    def test_login_without_family(self, api_client, user):
        url = reverse('users:login')
        response = api_client.post(url, {'username': 'testuser', 'password': 'TestPass123!'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['family'] is None

    def test_login_wrong_password(self, api_client, user):
        url = reverse('users:login')
        response = api_client.post(url, {'username': 'testuser', 'password': 'WrongPass123!'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['error'] == 'Invalid credentials'

    def test_login_inactive(self, api_client, inactive_user):
        url = reverse('users:login')
        response = api_client.post(url, {'username': 'inactive', 'password': 'TestPass123!'})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_token_authenticates(self, api_client, user):
        url = reverse('users:login')
        response = api_client.post(url, {'username': 'testuser', 'password': 'TestPass123!'})

        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['tokens']['access']}")
        me = client.get(reverse('users:current-user'))

        assert me.status_code == status.HTTP_200_OK
        assert me.data['id'] == str(user.id)


@pytest.mark.django_db
class TestCurrentUser:
    """Tests for /api/auth/user/ endpoints."""

    def test_get_current_user(self, authenticated_client, user_family):
        url = reverse('users:current-user')
        response = authenticated_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['username'] == 'testuser'
        assert response.data['family_id'] == str(user_family.id)
        assert response.data['role'] == 'admin'

    def test_get_current_user_unauthenticated(self, api_client):
        url = reverse('users:current-user')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_update_profile(self, authenticated_client, user):
        url = reverse('users:update-profile')
        response = authenticated_client.patch(url, {'first_name': 'Renamed'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['first_name'] == 'Renamed'
        user.refresh_from_db()
        assert user.first_name == 'Renamed'

    def test_update_password_is_hashed(self, authenticated_client, user):
        url = reverse('users:update-profile')
        response = authenticated_client.patch(url, {'password': 'BrandNew123!'})

        assert response.status_code == status.HTTP_200_OK
        user.refresh_from_db()
        assert user.check_password('BrandNew123!')


@pytest.mark.django_db
class TestDeleteAccount:
    """Tests for DELETE /api/auth/user/delete/"""

    def test_delete_account(self, authenticated_client, user):
        url = reverse('users:delete-account')
        response = authenticated_client.delete(url, {'password': 'TestPass123!'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'success': True, 'message': 'Account deleted successfully'}
        assert not User.objects.filter(id=user.id).exists()

    def test_delete_account_wrong_password(self, authenticated_client, user):
        url = reverse('users:delete-account')
        response = authenticated_client.delete(url, {'password': 'nope'}, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert User.objects.filter(id=user.id).exists()

    def test_delete_account_requires_password(self, authenticated_client):
        url = reverse('users:delete-account')
        response = authenticated_client.delete(url, {}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
