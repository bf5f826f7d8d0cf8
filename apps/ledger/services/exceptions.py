"""
Domain exceptions for the ledger app.

Services raise these; views translate them into error responses.
"""


class LedgerServiceError(Exception):
    """Base exception for ledger service errors."""
    pass


class AccountNotFoundError(LedgerServiceError):
    """Raised when an account doesn't exist in the family."""
    pass


class TransactionNotFoundError(LedgerServiceError):
    """Raised when a transaction doesn't exist."""
    pass


class InvalidTransactionError(LedgerServiceError):
    """Raised when transaction data breaks a ledger rule."""
    pass
