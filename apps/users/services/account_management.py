"""Account management service."""

import logging
from uuid import UUID

from django.db import transaction
from django.contrib.auth import get_user_model

from apps.families.models import FamilyMembership, FamilyRole
from apps.ledger.services import delete_transactions_by_user
from apps.recurring.services import delete_payments_by_user

from .exceptions import PasswordConfirmationError

User = get_user_model()
logger = logging.getLogger(__name__)


def _release_membership(user) -> None:
    try:
        membership = FamilyMembership.objects.select_related('family').get(user=user)
    except FamilyMembership.DoesNotExist:
        return

    family = membership.family
    membership.delete()

    remaining = family.memberships.order_by('joined_at')
    if not remaining.exists():
        # Nobody is left to see the family's ledger
        family.delete()
        logger.info("Family %s deleted with its last member", family.name)
        return

    if membership.role == FamilyRole.ADMIN and not remaining.filter(role=FamilyRole.ADMIN).exists():
        successor = remaining.first()
        successor.role = FamilyRole.ADMIN
        successor.save(update_fields=['role'])
        logger.info("User %s promoted to admin of %s", successor.user_id, family.name)


@transaction.atomic
def delete_user_account(*, user_id: UUID, password: str) -> None:
    """
    Delete an account together with everything the user recorded.

    Transactions are removed through the balance service so account
    balances drop their effect. The user's family survives unless they
    were its last member; if they were its only admin, the longest-standing
    remaining member becomes admin.

    Args:
        user_id: User's ID
        password: User's password for confirmation

    Raises:
        PasswordConfirmationError: If password is incorrect
    """
    user = (
        User.objects
        .select_for_update()
        .get(id=user_id)
    )

    if not user.check_password(password):
        raise PasswordConfirmationError("Invalid password")

    transactions_deleted = delete_transactions_by_user(user=user)
    payments_deleted = delete_payments_by_user(user=user)
    _release_membership(user)

    username = user.username
    user.delete()

    logger.info(
        "User %s deleted with %d transactions and %d recurring payments",
        username, transactions_deleted, payments_deleted,
    )
