"""
Analytics Module
=================

Read-only aggregate queries over a family's ledger: all-time statistics,
the dashboard summary for a period and budget usage per category.

Classes:
    FamilyAnalytics: Static methods for the analytics endpoints.

Example:
    Dashboard numbers for January::

        from apps.analytics.analytics import FamilyAnalytics

        data = FamilyAnalytics.dashboard(
            family=family,
            start_date=date(2025, 1, 1),
            end_date=date(2025, 1, 31),
        )
        print(f"Savings rate: {data['savings_rate']}%")

Note:
    All methods return plain dictionaries; model instances appear only
    where the view serializes them (recent transactions).
"""

from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP

from django.db import connection
from django.db.models import Sum, Q, DecimalField
from django.db.models.functions import Coalesce

from apps.ledger.models import Account, Category, CategoryType, Transaction, TransactionType
from apps.recurring.models import RecurringPayment

ZERO = Decimal('0.00')
NEAR_LIMIT_PERCENT = Decimal('85')
RECENT_TRANSACTIONS_LIMIT = 5
DAILY_WINDOW_DAYS = 7


def _sum(field, **filters):
    return Coalesce(
        Sum(field, filter=Q(**filters)),
        ZERO,
        output_field=DecimalField(max_digits=14, decimal_places=2),
    )


def _percent(part: Decimal, whole: Decimal) -> Decimal:
    if not whole:
        return ZERO
    return (part / whole * 100).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)


class FamilyAnalytics:
    """
    Aggregate queries for a family's finances.

    Methods:
        stats: All-time counts and totals.
        total_balance: Sum of account balances.
        income_and_expenses: Income and expense sums over a date range.
        dashboard: Period summary with a daily breakdown.
        budget: Spending against each category's budget limit.
    """

    @staticmethod
    def stats(family):
        """
        All-time counts and totals for the family.

        Returns:
            dict: storage info, object counts, total balance, income and
            expenses over every recorded transaction.
        """
        totals = Transaction.objects.filter(family=family).aggregate(
            total_income=_sum('amount', type=TransactionType.INCOME),
            total_expenses=_sum('amount', type=TransactionType.EXPENSE),
        )
        return {
            'storage': {
                'type': connection.vendor,
                'is_database': True,
            },
            'counts': {
                'categories': Category.objects.filter(family=family).count(),
                'accounts': Account.objects.filter(family=family).count(),
                'transactions': Transaction.objects.filter(family=family).count(),
                'recurring_payments': RecurringPayment.objects.filter(family=family).count(),
            },
            'total_balance': FamilyAnalytics.total_balance(family),
            'total_income': totals['total_income'],
            'total_expenses': totals['total_expenses'],
        }

    @staticmethod
    def income_and_expenses(family, start_date, end_date):
        """Sum income and expenses dated within ``[start_date, end_date]``."""
        return Transaction.objects.filter(
            family=family,
            date__range=(start_date, end_date),
        ).aggregate(
            income=_sum('amount', type=TransactionType.INCOME),
            expenses=_sum('amount', type=TransactionType.EXPENSE),
        )

    @staticmethod
    def dashboard(family, start_date, end_date):
        """
        Summary of a period.

        ``savings_rate`` is ``(income - expenses) / income * 100`` and 0
        without income. ``daily`` covers the seven days ending at
        ``end_date`` regardless of where the period starts.

        Returns:
            dict: total_balance, monthly_income, monthly_expenses,
            savings_rate, daily, recent_transactions
        """
        totals = FamilyAnalytics.income_and_expenses(family, start_date, end_date)
        income = totals['income']
        expenses = totals['expenses']

        # Shorter at the very start of the calendar
        window_days = min(DAILY_WINDOW_DAYS, (end_date - date.min).days + 1)
        window_start = end_date - timedelta(days=window_days - 1)
        rows = (
            Transaction.objects
            .filter(family=family, date__range=(window_start, end_date))
            .values('date')
            .order_by('date')
            .annotate(
                income=_sum('amount', type=TransactionType.INCOME),
                expenses=_sum('amount', type=TransactionType.EXPENSE),
            )
        )
        by_date = {row['date']: row for row in rows}

        daily = []
        for offset in range(window_days):
            day = window_start + timedelta(days=offset)
            row = by_date.get(day)
            daily.append({
                'date': day,
                'income': row['income'] if row else ZERO,
                'expenses': row['expenses'] if row else ZERO,
            })

        recent = (
            Transaction.objects
            .filter(family=family)
            .select_related('account', 'category', 'created_by')
            .order_by('-date', '-created_at')[:RECENT_TRANSACTIONS_LIMIT]
        )

        return {
            'total_balance': FamilyAnalytics.total_balance(family),
            'monthly_income': income,
            'monthly_expenses': expenses,
            'savings_rate': _percent(income - expenses, income),
            'daily': daily,
            'recent_transactions': list(recent),
        }

    @staticmethod
    def total_balance(family):
        """Sum of all account balances."""
        return Account.objects.filter(family=family).aggregate(
            total=Coalesce(Sum('balance'), ZERO, output_field=DecimalField(max_digits=14, decimal_places=2))
        )['total']

    @staticmethod
    def budget(family, start_date, end_date):
        """
        Spending against budget limits for expense categories.

        Only expense categories with a limit are listed. A category is
        ``over_budget`` above 100% and ``near_limit`` above 85% up to 100%.

        Returns:
            dict: categories (list), total_limit, total_spent, total_percentage
        """
        categories = (
            Category.objects
            .filter(family=family, type=CategoryType.EXPENSE, budget_limit__isnull=False)
            .annotate(spent=_sum(
                'transactions__amount',
                transactions__type=TransactionType.EXPENSE,
                transactions__date__range=(start_date, end_date),
            ))
            .order_by('name')
        )

        rows = []
        total_limit = ZERO
        total_spent = ZERO
        for category in categories:
            limit = category.budget_limit
            spent = category.spent
            # Flags compare exact amounts; only the reported percentage is rounded
            near_threshold = limit * NEAR_LIMIT_PERCENT / 100

            rows.append({
                'category_id': category.id,
                'name': category.name,
                'color': category.color,
                'limit': limit,
                'spent': spent,
                'percentage': _percent(spent, limit),
                'remaining': limit - spent,
                'over_budget': spent > limit,
                'near_limit': near_threshold < spent <= limit,
            })
            total_limit += limit
            total_spent += spent

        return {
            'categories': rows,
            'total_limit': total_limit,
            'total_spent': total_spent,
            'total_percentage': _percent(total_spent, total_limit),
        }
