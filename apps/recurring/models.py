# ==========================================
# apps/recurring/models.py
# ==========================================

from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class Frequency(models.TextChoices):
    MONTHLY = 'monthly', 'Monthly'
    SEMI_ANNUAL = 'semi_annual', 'Semi-annual'
    ANNUAL = 'annual', 'Annual'


class RecurringPaymentType(models.TextChoices):
    PAYMENT = 'payment', 'Payment'
    DEBT = 'debt', 'Debt'
    LOAN = 'loan', 'Loan'


class RecurringPayment(models.Model):
    """
    A scheduled payment template.

    Nothing is ever executed: the payment is shown on every date that
    matches its frequency (see ``apps.recurring.occurrences``).
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    family = models.ForeignKey(
        'families.Family',
        on_delete=models.CASCADE,
        related_name='recurring_payments'
    )
    created_by = models.ForeignKey(
        'users.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='recurring_payments_created'
    )
    name = models.CharField(max_length=200)
    amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    frequency = models.CharField(max_length=20, choices=Frequency.choices)
    start_date = models.DateField()
    type = models.CharField(
        max_length=10,
        choices=RecurringPaymentType.choices,
        default=RecurringPaymentType.PAYMENT
    )
    color = models.CharField(max_length=20, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'recurring_payments'
        indexes = [
            models.Index(fields=['family', 'start_date'], name='recurring_family_start_idx'),
        ]
        ordering = ['start_date', 'name']

    def __str__(self):
        return f"{self.name} - {self.amount} ({self.frequency})"

    def get_created_by_name(self):
        if self.created_by_id is None:
            return 'Unknown user'
        return self.created_by.get_display_name()

    def occurs_on(self, day):
        from .occurrences import occurs_on
        return occurs_on(self.start_date, self.frequency, day)
