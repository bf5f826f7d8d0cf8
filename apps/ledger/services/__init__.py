"""
Ledger app services layer.

Balance changes go through these functions so every transaction mutation
keeps its account balance consistent.
"""

from .exceptions import (
    LedgerServiceError,
    AccountNotFoundError,
    TransactionNotFoundError,
    InvalidTransactionError,
)

from .categories import (
    DEFAULT_CATEGORIES,
    seed_default_categories,
)

from .balance import (
    balance_delta,
    create_transaction,
    update_transaction,
    delete_transaction,
    delete_transactions_by_user,
    update_account,
)


__all__ = [
    # Exceptions
    'LedgerServiceError',
    'AccountNotFoundError',
    'TransactionNotFoundError',
    'InvalidTransactionError',

    # Categories
    'DEFAULT_CATEGORIES',
    'seed_default_categories',

    # Transactions
    'balance_delta',
    'create_transaction',
    'update_transaction',
    'delete_transaction',
    'delete_transactions_by_user',

    # Accounts
    'update_account',
]
