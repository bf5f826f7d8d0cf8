"""
Transaction service with account balance bookkeeping.

Every create, update and delete of a transaction moves its account balance
by the transaction's effect: income adds the amount, expense subtracts it,
transfer leaves it untouched. Each operation runs in one database
transaction with the affected account rows locked.
"""

import logging
from decimal import Decimal
from typing import Iterable
from uuid import UUID

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from apps.ledger.models import Account, Transaction, TransactionType

from .exceptions import (
    AccountNotFoundError,
    InvalidTransactionError,
    TransactionNotFoundError,
)

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ('amount', 'date', 'description', 'type', 'category', 'account')


def balance_delta(transaction_type: str, amount: Decimal) -> Decimal:
    """Signed change a transaction applies to its account balance."""
    if transaction_type == TransactionType.INCOME:
        return amount
    if transaction_type == TransactionType.EXPENSE:
        return -amount
    return Decimal('0')


def _lock_accounts(account_ids: Iterable) -> None:
    # Fixed lock order avoids deadlocks when two accounts are involved
    ids = sorted({str(account_id) for account_id in account_ids})
    list(Account.objects.select_for_update().filter(id__in=ids).order_by('id'))


def _adjust_balance(account_id, delta: Decimal) -> None:
    if not delta:
        return
    Account.objects.filter(id=account_id).update(
        balance=F('balance') + delta,
        updated_at=timezone.now(),
    )


def _validate_amount(amount) -> None:
    if amount is None or amount <= 0:
        raise InvalidTransactionError("Amount must be greater than zero")


@transaction.atomic
def create_transaction(
    *,
    account: Account,
    created_by,
    amount: Decimal,
    date,
    description: str,
    type: str,
    category=None
) -> Transaction:
    """
    Record a transaction and apply its effect to the account balance.

    Args:
        account: Account the transaction is booked on
        created_by: User recording the transaction
        amount: Positive amount
        date: Transaction date
        description: Free-text description
        type: expense, income or transfer
        category: Optional category

    Returns:
        Created Transaction instance

    Raises:
        InvalidTransactionError: If amount is not positive
        AccountNotFoundError: If the account was deleted meanwhile
    """
    _validate_amount(amount)
    _lock_accounts([account.id])
    if not Account.objects.filter(id=account.id).exists():
        raise AccountNotFoundError("Account not found")

    txn = Transaction.objects.create(
        family_id=account.family_id,
        account=account,
        category=category,
        created_by=created_by,
        amount=amount,
        date=date,
        description=description,
        type=type,
    )
    _adjust_balance(account.id, balance_delta(type, amount))

    logger.info(
        "Transaction %s (%s %s) created on account %s by %s",
        txn.id, type, amount, account.id, created_by.username,
    )
    return txn


@transaction.atomic
def update_transaction(*, transaction_id: UUID, **changes) -> Transaction:
    """
    Update a transaction and move balances accordingly.

    The old effect is reversed on the old account, then the new effect is
    applied on the (possibly different) new account.

    Raises:
        TransactionNotFoundError: If transaction doesn't exist
        InvalidTransactionError: If an unknown field is given or the amount
            is not positive
    """
    unknown = set(changes) - set(UPDATABLE_FIELDS)
    if unknown:
        raise InvalidTransactionError(f"Cannot update fields: {', '.join(sorted(unknown))}")

    try:
        txn = Transaction.objects.select_for_update().get(id=transaction_id)
    except Transaction.DoesNotExist:
        raise TransactionNotFoundError(f"Transaction with ID {transaction_id} not found")

    old_account_id = txn.account_id
    old_delta = balance_delta(txn.type, txn.amount)

    for field, value in changes.items():
        setattr(txn, field, value)
    _validate_amount(txn.amount)

    _lock_accounts([old_account_id, txn.account_id])
    _adjust_balance(old_account_id, -old_delta)
    _adjust_balance(txn.account_id, balance_delta(txn.type, txn.amount))
    txn.save()

    logger.info("Transaction %s updated", txn.id)
    return txn


@transaction.atomic
def delete_transaction(*, transaction_id: UUID) -> None:
    """
    Delete a transaction and reverse its balance effect.

    Raises:
        TransactionNotFoundError: If transaction doesn't exist
    """
    try:
        txn = Transaction.objects.select_for_update().get(id=transaction_id)
    except Transaction.DoesNotExist:
        raise TransactionNotFoundError(f"Transaction with ID {transaction_id} not found")

    _lock_accounts([txn.account_id])
    _adjust_balance(txn.account_id, -balance_delta(txn.type, txn.amount))
    txn.delete()

    logger.info("Transaction %s deleted", transaction_id)


@transaction.atomic
def delete_transactions_by_user(*, user) -> int:
    """
    Delete every transaction a user created, reversing balance effects.

    Returns:
        Number of deleted transactions
    """
    transactions = list(
        Transaction.objects.select_for_update().filter(created_by=user)
    )
    if not transactions:
        return 0

    totals = {}
    for txn in transactions:
        totals[txn.account_id] = totals.get(txn.account_id, Decimal('0')) + balance_delta(txn.type, txn.amount)

    _lock_accounts(totals.keys())
    for account_id, delta in totals.items():
        _adjust_balance(account_id, -delta)

    Transaction.objects.filter(id__in=[txn.id for txn in transactions]).delete()

    logger.info("Deleted %d transactions created by %s", len(transactions), user.username)
    return len(transactions)


@transaction.atomic
def update_account(*, account_id: UUID, **changes) -> Account:
    """
    Update account details under a row lock.

    Only the given fields are written, so a rename never overwrites a
    balance moved by a concurrent transaction. Passing ``balance`` sets it
    directly as a manual correction.

    Raises:
        AccountNotFoundError: If account doesn't exist
    """
    try:
        account = Account.objects.select_for_update().get(id=account_id)
    except Account.DoesNotExist:
        raise AccountNotFoundError(f"Account with ID {account_id} not found")

    for field, value in changes.items():
        setattr(account, field, value)
    account.save(update_fields=[*changes, 'updated_at'])

    if 'balance' in changes:
        logger.info("Account %s balance set to %s", account.id, account.balance)
    return account
