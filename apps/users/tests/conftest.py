import pytest
from decimal import Decimal
from datetime import date
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.users.models import User
from apps.families.models import FamilyInvitation, FamilyMembership, FamilyRole
from apps.families.services import create_family
from apps.ledger.models import Account, AccountType, TransactionType
from apps.ledger.services import create_transaction
from apps.recurring.models import Frequency, RecurringPayment


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a test user."""
    return User.objects.create_user(
        username='testuser',
        password='TestPass123!',
        first_name='Test',
        last_name='User',
    )


@pytest.fixture
def inactive_user(db):
    """Create and return a deactivated user."""
    return User.objects.create_user(
        username='inactive',
        password='TestPass123!',
        is_active=False,
    )


@pytest.fixture
def housemate(db):
    """Create and return a second user."""
    return User.objects.create_user(
        username='housemate',
        password='TestPass123!',
        first_name='House',
    )


@pytest.fixture
def user_family(user):
    """Family administered by ``user``."""
    return create_family(name='Test Family', creator=user)


@pytest.fixture
def shared_family(user_family, housemate):
    """``user_family`` with the housemate as a regular member."""
    FamilyMembership.objects.create(user=housemate, family=user_family, role=FamilyRole.MEMBER)
    return user_family


@pytest.fixture
def invitation(user_family, user):
    """Pending code-only invitation to ``user_family``."""
    return FamilyInvitation.objects.create(
        family=user_family,
        invited_by=user,
        invitation_code='JOIN42',
    )


@pytest.fixture
def account(user_family):
    return Account.objects.create(
        family=user_family,
        name='Shared Checking',
        type=AccountType.CHECKING,
        balance=Decimal('1000.00'),
    )


@pytest.fixture
def user_records(shared_family, user, housemate, account):
    """Transactions and a recurring payment from both users."""
    mine = create_transaction(
        account=account,
        created_by=user,
        amount=Decimal('200.00'),
        date=date(2025, 1, 10),
        description='Mine',
        type=TransactionType.EXPENSE,
    )
    theirs = create_transaction(
        account=account,
        created_by=housemate,
        amount=Decimal('300.00'),
        date=date(2025, 1, 11),
        description='Theirs',
        type=TransactionType.INCOME,
    )
    payment = RecurringPayment.objects.create(
        family=shared_family,
        created_by=user,
        name='Phone',
        amount=Decimal('20.00'),
        frequency=Frequency.MONTHLY,
        start_date=date(2025, 1, 1),
    )
    return mine, theirs, payment


@pytest.fixture
def authenticated_client(api_client, user):
    """Return API client with JWT authentication."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client
