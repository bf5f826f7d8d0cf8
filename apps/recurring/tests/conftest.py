import pytest
from decimal import Decimal
from datetime import date
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.users.models import User
from apps.families.services import create_family
from apps.ledger.models import Account, AccountType, TransactionType
from apps.ledger.services import create_transaction
from apps.recurring.models import Frequency, RecurringPayment, RecurringPaymentType


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def payer(db):
    """Create and return the family admin who sets up payments."""
    return User.objects.create_user(
        username='payer',
        password='TestPass123!',
        first_name='Eva',
    )


@pytest.fixture
def other_payer(db):
    """Create and return a user of another family."""
    return User.objects.create_user(
        username='other_payer',
        password='TestPass123!',
    )


@pytest.fixture
def payer_family(payer):
    return create_family(name='Payer Family', creator=payer)


@pytest.fixture
def other_family(other_payer):
    return create_family(name='Other Family', creator=other_payer)


@pytest.fixture
def rent(payer_family, payer):
    """Monthly rent due on the 5th since January 2025."""
    return RecurringPayment.objects.create(
        family=payer_family,
        created_by=payer,
        name='Rent',
        amount=Decimal('1200.00'),
        frequency=Frequency.MONTHLY,
        start_date=date(2025, 1, 5),
    )


@pytest.fixture
def insurance(payer_family, payer):
    """Semi-annual insurance due on March 20th and September 20th."""
    return RecurringPayment.objects.create(
        family=payer_family,
        created_by=payer,
        name='Car insurance',
        amount=Decimal('300.00'),
        frequency=Frequency.SEMI_ANNUAL,
        start_date=date(2025, 3, 20),
    )


@pytest.fixture
def loan(payer_family, payer):
    """Annual loan instalment due every January 31st."""
    return RecurringPayment.objects.create(
        family=payer_family,
        created_by=payer,
        name='Loan',
        amount=Decimal('5000.00'),
        frequency=Frequency.ANNUAL,
        start_date=date(2025, 1, 31),
        type=RecurringPaymentType.LOAN,
    )


@pytest.fixture
def foreign_payment(other_family, other_payer):
    return RecurringPayment.objects.create(
        family=other_family,
        created_by=other_payer,
        name='Foreign subscription',
        amount=Decimal('10.00'),
        frequency=Frequency.MONTHLY,
        start_date=date(2025, 1, 5),
    )


@pytest.fixture
def march_transactions(payer_family, payer):
    """An income and an expense in March 2025."""
    account = Account.objects.create(
        family=payer_family,
        name='Checking',
        type=AccountType.CHECKING,
    )
    income = create_transaction(
        account=account,
        created_by=payer,
        amount=Decimal('3000.00'),
        date=date(2025, 3, 1),
        description='Salary',
        type=TransactionType.INCOME,
    )
    expense = create_transaction(
        account=account,
        created_by=payer,
        amount=Decimal('80.00'),
        date=date(2025, 3, 20),
        description='Fuel',
        type=TransactionType.EXPENSE,
    )
    return income, expense


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def payer_client(payer, payer_family):
    """Return API client authenticated as the payer."""
    return _client_for(payer)


@pytest.fixture
def other_client(other_payer, other_family):
    """Return API client authenticated as a user of another family."""
    return _client_for(other_payer)
