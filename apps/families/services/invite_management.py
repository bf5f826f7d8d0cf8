"""
Invite management service.

Handles family invitations with unique, human-typeable codes.
"""

import logging
import secrets
import string
from uuid import UUID

from django.conf import settings
from django.db import transaction, IntegrityError
from django.db.models import QuerySet

from apps.users.models import User
from apps.families.models import Family, FamilyInvitation, InvitationStatus

from .exceptions import (
    FamilyNotFoundError,
    InsufficientPermissionsError,
    NotMemberError,
)

logger = logging.getLogger(__name__)

INVITATION_CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_invitation_code(length: int = None) -> str:
    """Return a random code of upper-case letters and digits."""
    length = length or settings.INVITATION_CODE_LENGTH
    return ''.join(secrets.choice(INVITATION_CODE_ALPHABET) for _ in range(length))


def create_invitation(
    *,
    family_id: UUID,
    invited_by: User,
    username: str = '',
    max_retries: int = 5
) -> FamilyInvitation:
    """
    Create a pending invitation to a family.

    Any member may invite. With a username the invitation is addressed to
    that user; without one it is a code-only invitation.

    Args:
        family_id: UUID of the family
        invited_by: Member issuing the invitation
        username: Optional username the invitation is addressed to
        max_retries: Maximum attempts to generate a unique code

    Returns:
        Created FamilyInvitation instance

    Raises:
        FamilyNotFoundError: If family doesn't exist
        InsufficientPermissionsError: If invited_by is not a member
        RuntimeError: If cannot generate unique code after retries
    """
    try:
        family = Family.objects.get(id=family_id)
    except Family.DoesNotExist:
        raise FamilyNotFoundError(f"Family with ID {family_id} not found")

    if not family.has_member(invited_by):
        raise InsufficientPermissionsError("Not authorized to invite")

    for attempt in range(max_retries):
        code = generate_invitation_code()

        try:
            # Each attempt is a separate transaction
            with transaction.atomic():
                invitation = FamilyInvitation.objects.create(
                    family=family,
                    invited_by=invited_by,
                    invited_username=username or '',
                    invitation_code=code,
                )
        except IntegrityError:
            # Code collision, retry
            if attempt == max_retries - 1:
                raise RuntimeError(
                    f"Failed to generate unique invitation code after {max_retries} attempts"
                )
            continue

        logger.info(
            "Invitation %s to %s created by %s",
            invitation.invitation_code, family.name, invited_by.username,
        )
        return invitation

    # Should never reach here
    raise RuntimeError("Unexpected error in invitation creation")


def get_family_invitations(*, family_id: UUID, user: User) -> QuerySet[FamilyInvitation]:
    """
    List a family's invitations (members only).

    Raises:
        FamilyNotFoundError: If family doesn't exist
        NotMemberError: If user is not a member
    """
    try:
        family = Family.objects.get(id=family_id)
    except Family.DoesNotExist:
        raise FamilyNotFoundError(f"Family with ID {family_id} not found")

    if not family.has_member(user):
        raise NotMemberError(f"User is not a member of {family.name}")

    return family.invitations.select_related('invited_by').all()


def get_pending_invitations_for_user(*, user: User) -> QuerySet[FamilyInvitation]:
    """Pending invitations addressed to the user by username."""
    return (
        FamilyInvitation.objects
        .filter(invited_username=user.username, status=InvitationStatus.PENDING)
        .select_related('family', 'invited_by')
    )
