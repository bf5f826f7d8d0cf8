"""
Recurring app services layer.
"""

from .exceptions import (
    RecurringServiceError,
    RecurringPaymentNotFoundError,
    InvalidDateRangeError,
)

from .payment_management import (
    create_recurring_payment,
    update_recurring_payment,
    delete_recurring_payment,
    delete_payments_by_user,
)

from .schedule import (
    get_payment_occurrences,
    get_upcoming_payments,
    build_month_calendar,
    one_year_later,
)


__all__ = [
    # Exceptions
    'RecurringServiceError',
    'RecurringPaymentNotFoundError',
    'InvalidDateRangeError',

    # Payment Management
    'create_recurring_payment',
    'update_recurring_payment',
    'delete_recurring_payment',
    'delete_payments_by_user',

    # Schedule
    'get_payment_occurrences',
    'get_upcoming_payments',
    'build_month_calendar',
    'one_year_later',
]
