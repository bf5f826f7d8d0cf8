"""
Serializers for analytics app.

Input Serializers:
    PeriodQuerySerializer - Validates period and date range parameters

Response Serializers:
    StatsResponseSerializer - All-time family statistics
    DashboardResponseSerializer - Period summary
    BudgetResponseSerializer - Budget usage per category
"""

import calendar
from datetime import date, MINYEAR, MAXYEAR

from django.utils import timezone
from rest_framework import serializers

from apps.ledger.serializers import TransactionSerializer


def month_bounds(year, month):
    """First and last day of a month."""
    return date(year, month, 1), date(year, month, calendar.monthrange(year, month)[1])


# =============================================================================
# Input Serializers (Query Parameter Validation)
# =============================================================================

class PeriodQuerySerializer(serializers.Serializer):
    """
    Validate period and date range query parameters.

    Query Parameters:
        period (str): Month period in YYYY-MM format (e.g., '2025-01')
        start_date (date): Start of date range
        end_date (date): End of date range

    Note:
        If 'period' is provided, it takes precedence and is converted
        to start_date and end_date for the full month. Missing bounds
        fall back to the current month.
    """

    period = serializers.RegexField(
        regex=r'^\d{4}-(0[1-9]|1[0-2])$',
        required=False,
        allow_blank=True,
        help_text='Month period in YYYY-MM format'
    )
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, attrs):
        """Resolve the period into a date range."""
        period = attrs.get('period')

        if period:
            year, month = (int(part) for part in period.split('-'))
            if not MINYEAR <= year <= MAXYEAR:
                raise serializers.ValidationError({
                    'period': f'Year must be between {MINYEAR} and {MAXYEAR}'
                })
            attrs['start_date'], attrs['end_date'] = month_bounds(year, month)
        else:
            today = timezone.localdate()
            first, last = month_bounds(today.year, today.month)
            attrs.setdefault('start_date', first)
            attrs.setdefault('end_date', last)

        if attrs['start_date'] > attrs['end_date']:
            raise serializers.ValidationError({
                'start_date': 'Start date must be before end date'
            })

        return attrs


# =============================================================================
# Response Serializers (API Documentation & Output)
# =============================================================================

def _money(**kwargs):
    return serializers.DecimalField(max_digits=14, decimal_places=2, **kwargs)


class StorageSerializer(serializers.Serializer):
    type = serializers.CharField()
    is_database = serializers.BooleanField()


class CountsSerializer(serializers.Serializer):
    categories = serializers.IntegerField()
    accounts = serializers.IntegerField()
    transactions = serializers.IntegerField()
    recurring_payments = serializers.IntegerField()


class StatsResponseSerializer(serializers.Serializer):
    storage = StorageSerializer()
    counts = CountsSerializer()
    total_balance = _money()
    total_income = _money()
    total_expenses = _money()


class DailyPointSerializer(serializers.Serializer):
    date = serializers.DateField()
    income = _money()
    expenses = _money()


class DashboardResponseSerializer(serializers.Serializer):
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    total_balance = _money()
    monthly_income = _money()
    monthly_expenses = _money()
    savings_rate = serializers.FloatField()
    daily = DailyPointSerializer(many=True)
    recent_transactions = TransactionSerializer(many=True)


class BudgetCategorySerializer(serializers.Serializer):
    category_id = serializers.UUIDField()
    name = serializers.CharField()
    color = serializers.CharField(allow_blank=True)
    limit = _money()
    spent = _money()
    percentage = serializers.FloatField()
    remaining = _money()
    over_budget = serializers.BooleanField()
    near_limit = serializers.BooleanField()


class BudgetResponseSerializer(serializers.Serializer):
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    categories = BudgetCategorySerializer(many=True)
    total_limit = _money()
    total_spent = _money()
    total_percentage = serializers.FloatField()
