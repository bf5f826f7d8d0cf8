"""
Schedule service.

Expands recurring payments into concrete dates: per-payment occurrence
lists, the upcoming-payments feed and the month calendar.
"""

import calendar
from datetime import date, timedelta, MAXYEAR
from decimal import Decimal
from typing import List, Optional

from django.utils import timezone

from apps.ledger.models import Transaction, TransactionType
from apps.recurring.models import RecurringPayment
from apps.recurring.occurrences import next_occurrence, occurrences_between

from .exceptions import InvalidDateRangeError


def one_year_later(day: date) -> date:
    if day.year == MAXYEAR:
        raise InvalidDateRangeError("Date range would run past the last supported year")
    try:
        return day.replace(year=day.year + 1)
    except ValueError:
        # Feb 29 has no counterpart next year
        return day.replace(year=day.year + 1, day=28)


def get_payment_occurrences(
    *,
    payment: RecurringPayment,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None
) -> List[date]:
    """
    Dates the payment falls on within a range.

    Defaults to the twelve months starting today.

    Raises:
        InvalidDateRangeError: If end_date is before start_date
    """
    start_date = start_date or timezone.localdate()
    end_date = end_date or one_year_later(start_date)
    if start_date > end_date:
        raise InvalidDateRangeError("End date must be after start date")

    return occurrences_between(payment.start_date, payment.frequency, start_date, end_date)


def get_upcoming_payments(*, family, days: int = 30, today: Optional[date] = None) -> List[dict]:
    """
    Each payment's next occurrence within ``days`` days, soonest first.

    Returns:
        List of ``{'payment', 'date', 'days_until'}`` dicts
    """
    today = today or timezone.localdate()
    horizon = today + timedelta(days=days)

    upcoming = []
    for payment in RecurringPayment.objects.filter(family=family).select_related('created_by'):
        due = next_occurrence(payment.start_date, payment.frequency, today)
        if due is not None and due <= horizon:
            upcoming.append({
                'payment': payment,
                'date': due,
                'days_until': (due - today).days,
            })

    upcoming.sort(key=lambda item: (item['date'], item['payment'].name))
    return upcoming


def build_month_calendar(*, family, year: int, month: int) -> dict:
    """
    Lay out one month: the payments and transactions of every day.

    ``leading_blank_days`` is the weekday of the 1st with Sunday as 0, the
    number of empty cells before it in a Sunday-first grid.
    """
    days_in_month = calendar.monthrange(year, month)[1]
    first = date(year, month, 1)
    last = date(year, month, days_in_month)

    days = {
        first + timedelta(days=offset): {'payments': [], 'transactions': []}
        for offset in range(days_in_month)
    }

    scheduled = Decimal('0')
    payments = RecurringPayment.objects.filter(family=family, start_date__lte=last).select_related('created_by')
    for payment in payments:
        for day in occurrences_between(payment.start_date, payment.frequency, first, last):
            days[day]['payments'].append(payment)
            scheduled += payment.amount

    income = Decimal('0')
    expenses = Decimal('0')
    transactions = (
        Transaction.objects
        .filter(family=family, date__range=(first, last))
        .select_related('account', 'category', 'created_by')
        .order_by('date', 'created_at')
    )
    for txn in transactions:
        days[txn.date]['transactions'].append(txn)
        if txn.type == TransactionType.INCOME:
            income += txn.amount
        elif txn.type == TransactionType.EXPENSE:
            expenses += txn.amount

    return {
        'month': f"{year:04d}-{month:02d}",
        'leading_blank_days': (first.weekday() + 1) % 7,
        'days': [
            {'date': day, 'payments': cell['payments'], 'transactions': cell['transactions']}
            for day, cell in sorted(days.items())
        ],
        'totals': {
            'scheduled': scheduled,
            'income': income,
            'expenses': expenses,
        },
    }
