from django.conf import settings
from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class CategoryType(models.TextChoices):
    EXPENSE = 'expense', 'Expense'
    INCOME = 'income', 'Income'


class AccountType(models.TextChoices):
    CHECKING = 'checking', 'Checking'
    SAVINGS = 'savings', 'Savings'
    CREDIT = 'credit', 'Credit'
    CASH = 'cash', 'Cash'
    INVESTMENT = 'investment', 'Investment'


class TransactionType(models.TextChoices):
    EXPENSE = 'expense', 'Expense'
    INCOME = 'income', 'Income'
    TRANSFER = 'transfer', 'Transfer'


def default_currency():
    return settings.DEFAULT_CURRENCY


class Category(models.Model):
    """Expense or income category, optionally with a monthly budget limit."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    family = models.ForeignKey(
        'families.Family',
        on_delete=models.CASCADE,
        related_name='categories'
    )
    name = models.CharField(max_length=100)
    type = models.CharField(max_length=10, choices=CategoryType.choices)
    color = models.CharField(max_length=20, blank=True)
    icon = models.CharField(max_length=50, blank=True)
    budget_limit = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'categories'
        indexes = [
            models.Index(fields=['family', 'type'], name='categories_family_type_idx'),
        ]
        ordering = ['type', 'name']
        verbose_name_plural = 'categories'

    def __str__(self):
        return f"{self.name} ({self.type})"


class Account(models.Model):
    """Money account whose balance follows its transactions."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    family = models.ForeignKey(
        'families.Family',
        on_delete=models.CASCADE,
        related_name='accounts'
    )
    name = models.CharField(max_length=100)
    type = models.CharField(max_length=20, choices=AccountType.choices)
    balance = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    currency = models.CharField(max_length=3, default=default_currency)
    color = models.CharField(max_length=20, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'accounts'
        indexes = [
            models.Index(fields=['family', 'type'], name='accounts_family_type_idx'),
        ]
        ordering = ['created_at']

    def __str__(self):
        return f"{self.name} - {self.balance} {self.currency}"


class Transaction(models.Model):
    """Income, expense or transfer recorded against an account."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    family = models.ForeignKey(
        'families.Family',
        on_delete=models.CASCADE,
        related_name='transactions'
    )
    account = models.ForeignKey(
        Account,
        on_delete=models.CASCADE,
        related_name='transactions'
    )
    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='transactions'
    )
    created_by = models.ForeignKey(
        'users.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='transactions_created'
    )

    amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    date = models.DateField()
    description = models.CharField(max_length=255)
    type = models.CharField(max_length=10, choices=TransactionType.choices)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'transactions'
        indexes = [
            models.Index(fields=['family', 'date'], name='txn_family_date_idx'),
            models.Index(fields=['account', 'date'], name='txn_account_date_idx'),
            models.Index(fields=['category', 'date'], name='txn_category_date_idx'),
            models.Index(fields=['created_by'], name='txn_created_by_idx'),
        ]
        ordering = ['-date', '-created_at']

    def __str__(self):
        return f"{self.description} - {self.amount} ({self.type})"

    def get_created_by_name(self):
        if self.created_by_id is None:
            return 'Unknown user'
        return self.created_by.get_display_name()
