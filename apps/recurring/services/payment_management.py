"""
Recurring payment management service.
"""

import logging
from uuid import UUID

from django.db import transaction

from apps.recurring.models import RecurringPayment

from .exceptions import RecurringPaymentNotFoundError

logger = logging.getLogger(__name__)


def create_recurring_payment(*, family, created_by, **fields) -> RecurringPayment:
    """Create a recurring payment in the family."""
    payment = RecurringPayment.objects.create(family=family, created_by=created_by, **fields)
    logger.info(
        "Recurring payment %s (%s %s) created by %s",
        payment.name, payment.frequency, payment.amount, created_by.username,
    )
    return payment


@transaction.atomic
def update_recurring_payment(*, payment_id: UUID, **fields) -> RecurringPayment:
    """
    Update a recurring payment.

    Raises:
        RecurringPaymentNotFoundError: If payment doesn't exist
    """
    try:
        payment = RecurringPayment.objects.select_for_update().get(id=payment_id)
    except RecurringPayment.DoesNotExist:
        raise RecurringPaymentNotFoundError(f"Recurring payment with ID {payment_id} not found")

    for field, value in fields.items():
        setattr(payment, field, value)
    payment.save()

    logger.info("Recurring payment %s updated", payment.id)
    return payment


def delete_recurring_payment(*, payment_id: UUID) -> None:
    """
    Delete a recurring payment.

    Raises:
        RecurringPaymentNotFoundError: If payment doesn't exist
    """
    deleted, _ = RecurringPayment.objects.filter(id=payment_id).delete()
    if not deleted:
        raise RecurringPaymentNotFoundError(f"Recurring payment with ID {payment_id} not found")
    logger.info("Recurring payment %s deleted", payment_id)


def delete_payments_by_user(*, user) -> int:
    """Delete every recurring payment the user created."""
    deleted, _ = RecurringPayment.objects.filter(created_by=user).delete()
    if deleted:
        logger.info("Deleted %d recurring payments created by %s", deleted, user.username)
    return deleted
