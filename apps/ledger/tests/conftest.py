import pytest
from decimal import Decimal
from datetime import date
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.users.models import User
from apps.families.models import FamilyMembership, FamilyRole
from apps.families.services import create_family
from apps.ledger.models import Account, AccountType, Category, TransactionType
from apps.ledger.services import create_transaction


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def ledger_owner(db):
    """Create and return the family admin who keeps the books."""
    return User.objects.create_user(
        username='ledger_owner',
        password='TestPass123!',
        first_name='Anna',
        last_name='Svobodova',
    )


@pytest.fixture
def ledger_member(db):
    """Create and return a second member of the same family."""
    return User.objects.create_user(
        username='ledger_member',
        password='TestPass123!',
        first_name='Karel',
    )


@pytest.fixture
def stranger(db):
    """Create and return a user of another family."""
    return User.objects.create_user(
        username='stranger',
        password='TestPass123!',
    )


@pytest.fixture
def homeless_user(db):
    """Create and return a user without a family."""
    return User.objects.create_user(
        username='homeless',
        password='TestPass123!',
    )


@pytest.fixture
def ledger_family(ledger_owner, ledger_member):
    """Family of ledger_owner (admin) and ledger_member, with default categories."""
    family = create_family(name='Svoboda Family', creator=ledger_owner)
    FamilyMembership.objects.create(user=ledger_member, family=family, role=FamilyRole.MEMBER)
    return family


@pytest.fixture
def other_family(stranger):
    """A second family, used to check isolation."""
    return create_family(name='Other Family', creator=stranger)


@pytest.fixture
def checking_account(ledger_family):
    """Checking account starting at 1000."""
    return Account.objects.create(
        family=ledger_family,
        name='Main Checking',
        type=AccountType.CHECKING,
        balance=Decimal('1000.00'),
    )


@pytest.fixture
def savings_account(ledger_family):
    """Empty savings account."""
    return Account.objects.create(
        family=ledger_family,
        name='Savings',
        type=AccountType.SAVINGS,
    )


@pytest.fixture
def foreign_account(other_family):
    """Account of another family."""
    return Account.objects.create(
        family=other_family,
        name='Foreign Wallet',
        type=AccountType.CASH,
        balance=Decimal('50.00'),
    )


@pytest.fixture
def groceries(ledger_family):
    return Category.objects.get(family=ledger_family, name='Groceries')


@pytest.fixture
def salary(ledger_family):
    return Category.objects.get(family=ledger_family, name='Salary')


@pytest.fixture
def grocery_expense(checking_account, ledger_owner, groceries):
    """Expense of 150 booked on the checking account (balance 850 after)."""
    return create_transaction(
        account=checking_account,
        created_by=ledger_owner,
        amount=Decimal('150.00'),
        date=date(2025, 1, 10),
        description='Weekly shopping',
        type=TransactionType.EXPENSE,
        category=groceries,
    )


@pytest.fixture
def salary_income(checking_account, ledger_member, salary):
    """Income of 2000 booked by the member."""
    return create_transaction(
        account=checking_account,
        created_by=ledger_member,
        amount=Decimal('2000.00'),
        date=date(2025, 1, 5),
        description='January salary',
        type=TransactionType.INCOME,
        category=salary,
    )


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def owner_client(ledger_owner, ledger_family):
    """Return API client authenticated as the family admin."""
    return _client_for(ledger_owner)


@pytest.fixture
def member_client(ledger_member, ledger_family):
    """Return API client authenticated as the family member."""
    return _client_for(ledger_member)


@pytest.fixture
def stranger_client(stranger, other_family):
    """Return API client authenticated as a user of another family."""
    return _client_for(stranger)


@pytest.fixture
def homeless_client(homeless_user):
    """Return API client authenticated as a user without a family."""
    return _client_for(homeless_user)
