"""
Fixtures for analytics tests.

The ``january_ledger`` fixture books a known month so every figure in the
dashboard and budget can be checked exactly:

    checking (starts at 0)
        2025-01-01  income   4000.00  Salary
        2025-01-03  expense  1500.00  Housing         (100% of 1500)
        2025-01-10  expense   540.00  Groceries       (90% of 600)
        2025-01-15  transfer  100.00  -
        2025-01-28  expense   330.00  Cafes           (110% of 300)
        2025-02-02  expense    50.00  Groceries       (outside January)
    savings (starts at 500)
"""

import pytest
from decimal import Decimal
from datetime import date
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.users.models import User
from apps.families.services import create_family
from apps.ledger.models import Account, AccountType, Category, TransactionType
from apps.ledger.services import create_transaction


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def analyst(db):
    """Create and return the family admin."""
    return User.objects.create_user(
        username='analyst',
        password='TestPass123!',
        first_name='Olga',
    )


@pytest.fixture
def loner(db):
    """Create and return a user without a family."""
    return User.objects.create_user(
        username='loner',
        password='TestPass123!',
    )


@pytest.fixture
def analytics_family(analyst):
    return create_family(name='Analytics Family', creator=analyst)


@pytest.fixture
def checking(analytics_family):
    return Account.objects.create(
        family=analytics_family,
        name='Checking',
        type=AccountType.CHECKING,
    )


@pytest.fixture
def savings(analytics_family):
    return Account.objects.create(
        family=analytics_family,
        name='Savings',
        type=AccountType.SAVINGS,
        balance=Decimal('500.00'),
    )


def _category(family, name):
    return Category.objects.get(family=family, name=name)


@pytest.fixture
def january_ledger(analytics_family, analyst, checking, savings):
    """Book the month described in the module docstring."""
    bookings = [
        (date(2025, 1, 1), TransactionType.INCOME, '4000.00', 'Salary'),
        (date(2025, 1, 3), TransactionType.EXPENSE, '1500.00', 'Housing'),
        (date(2025, 1, 10), TransactionType.EXPENSE, '540.00', 'Groceries'),
        (date(2025, 1, 15), TransactionType.TRANSFER, '100.00', None),
        (date(2025, 1, 28), TransactionType.EXPENSE, '330.00', 'Cafes & restaurants'),
        (date(2025, 2, 2), TransactionType.EXPENSE, '50.00', 'Groceries'),
    ]
    transactions = []
    for day, txn_type, amount, category_name in bookings:
        transactions.append(create_transaction(
            account=checking,
            created_by=analyst,
            amount=Decimal(amount),
            date=day,
            description=category_name or 'Transfer to savings',
            type=txn_type,
            category=_category(analytics_family, category_name) if category_name else None,
        ))
    return transactions


@pytest.fixture
def analyst_client(analyst, analytics_family):
    """Return API client authenticated as the family admin."""
    client = APIClient()
    refresh = RefreshToken.for_user(analyst)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def loner_client(loner):
    """Return API client authenticated as a user without a family."""
    client = APIClient()
    refresh = RefreshToken.for_user(loner)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client
