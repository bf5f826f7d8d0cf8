"""
Domain exceptions for the recurring app.
"""


class RecurringServiceError(Exception):
    """Base exception for recurring payment service errors."""
    pass


class RecurringPaymentNotFoundError(RecurringServiceError):
    """Raised when a recurring payment doesn't exist."""
    pass


class InvalidDateRangeError(RecurringServiceError):
    """Raised when a range ends before it starts."""
    pass
