import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.users.models import User
from apps.families.models import FamilyInvitation, FamilyMembership, FamilyRole
from apps.families.services import create_family


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
def family_admin(db):
    """Create and return the user who founds the family."""
    return User.objects.create_user(
        username='jana',
        password='TestPass123!',
        first_name='Jana',
        last_name='Novak',
    )


@pytest.fixture
def family_member(db):
    """Create and return a second household member."""
    return User.objects.create_user(
        username='petr',
        password='TestPass123!',
        first_name='Petr',
        last_name='Novak',
    )


@pytest.fixture
def outsider(db):
    """Create and return a user without a family."""
    return User.objects.create_user(
        username='outsider',
        password='TestPass123!',
    )


@pytest.fixture
def family(family_admin):
    """Create a family with family_admin as its admin."""
    return create_family(name='Novak Household', creator=family_admin)


@pytest.fixture
def family_with_member(family, family_member):
    """The family with family_member added as a regular member."""
    FamilyMembership.objects.create(
        user=family_member,
        family=family,
        role=FamilyRole.MEMBER,
    )
    return family


@pytest.fixture
def pending_invitation(family, family_admin, outsider):
    """A pending invitation addressed to the outsider."""
    return FamilyInvitation.objects.create(
        family=family,
        invited_by=family_admin,
        invited_username=outsider.username,
        invitation_code='ABC123',
    )


@pytest.fixture
def code_invitation(family, family_admin):
    """A pending code-only invitation."""
    return FamilyInvitation.objects.create(
        family=family,
        invited_by=family_admin,
        invitation_code='XYZ789',
    )


@pytest.fixture
def admin_client(family_admin):
    """Return API client authenticated as the family admin."""
    return _client_for(family_admin)


@pytest.fixture
def member_client(family_member):
    """Return API client authenticated as the family member."""
    return _client_for(family_member)


@pytest.fixture
def outsider_client(outsider):
    """Return API client authenticated as the outsider."""
    return _client_for(outsider)
