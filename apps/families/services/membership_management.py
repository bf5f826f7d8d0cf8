"""
Membership management service.

Handles joining and leaving families with concurrency protection.
"""

import logging
from uuid import UUID

from django.db import transaction, IntegrityError

from apps.users.models import User
from apps.families.models import (
    Family,
    FamilyInvitation,
    FamilyMembership,
    FamilyRole,
    InvitationStatus,
)

from .exceptions import (
    AlreadyInFamilyError,
    CannotRemoveSelfError,
    FamilyNotFoundError,
    InsufficientPermissionsError,
    InvitationNotForUserError,
    InvitationNotFoundError,
    InvitationNotPendingError,
    LastAdminCannotLeaveError,
    NotMemberError,
)

logger = logging.getLogger(__name__)


def _add_member(*, user: User, family: Family, role: str = FamilyRole.MEMBER) -> FamilyMembership:
    if FamilyMembership.objects.filter(user=user).exists():
        raise AlreadyInFamilyError("User already belongs to a family")

    try:
        with transaction.atomic():
            return FamilyMembership.objects.create(user=user, family=family, role=role)
    except IntegrityError:
        # One-to-one constraint caught a concurrent join
        raise AlreadyInFamilyError("User already belongs to a family")


def _accept(invitation: FamilyInvitation, user: User) -> FamilyMembership:
    if not invitation.is_pending:
        raise InvitationNotPendingError("Invitation is no longer valid")

    membership = _add_member(user=user, family=invitation.family)

    invitation.status = InvitationStatus.ACCEPTED
    invitation.save(update_fields=['status', 'updated_at'])

    logger.info("User %s joined family %s", user.username, invitation.family.name)
    return membership


@transaction.atomic
def join_family_by_code(*, user: User, invitation_code: str) -> FamilyMembership:
    """
    Join a family using an invitation code.

    The invitation row is locked so a code cannot be redeemed twice.

    Args:
        user: User joining the family
        invitation_code: Code from a pending invitation

    Returns:
        Created FamilyMembership instance

    Raises:
        InvitationNotFoundError: If no invitation has this code
        InvitationNotPendingError: If the invitation was already used
        AlreadyInFamilyError: If the user already belongs to a family
    """
    try:
        invitation = (
            FamilyInvitation.objects
            .select_for_update()
            .select_related('family')
            .get(invitation_code=invitation_code.strip().upper())
        )
    except FamilyInvitation.DoesNotExist:
        raise InvitationNotFoundError("Invitation not found")

    return _accept(invitation, user)


@transaction.atomic
def accept_invitation(*, invitation_id: UUID, user: User) -> FamilyMembership:
    """
    Accept an invitation by its id.

    Raises:
        InvitationNotFoundError: If invitation doesn't exist
        InvitationNotForUserError: If it is addressed to another username
        InvitationNotPendingError: If the invitation was already used
        AlreadyInFamilyError: If the user already belongs to a family
    """
    try:
        invitation = (
            FamilyInvitation.objects
            .select_for_update()
            .select_related('family')
            .get(id=invitation_id)
        )
    except FamilyInvitation.DoesNotExist:
        raise InvitationNotFoundError("Invitation not found")

    if not invitation.is_addressed_to(user):
        raise InvitationNotForUserError("Invitation not for this user")

    return _accept(invitation, user)


@transaction.atomic
def decline_invitation(*, invitation_id: UUID, user: User) -> FamilyInvitation:
    """
    Decline an invitation addressed to the user.

    Raises:
        InvitationNotFoundError: If invitation doesn't exist
        InvitationNotForUserError: If it is addressed to another username
        InvitationNotPendingError: If the invitation was already used
    """
    try:
        invitation = (
            FamilyInvitation.objects
            .select_for_update()
            .get(id=invitation_id)
        )
    except FamilyInvitation.DoesNotExist:
        raise InvitationNotFoundError("Invitation not found")

    if not invitation.is_addressed_to(user):
        raise InvitationNotForUserError("Invitation not for this user")

    if not invitation.is_pending:
        raise InvitationNotPendingError("Invitation is no longer valid")

    invitation.status = InvitationStatus.REJECTED
    invitation.save(update_fields=['status', 'updated_at'])
    return invitation


@transaction.atomic
def leave_family(*, family_id: UUID, user: User) -> None:
    """
    Leave a family.

    The last admin cannot leave while other members remain; they must
    first promote someone or remove the others.

    Raises:
        FamilyNotFoundError: If family doesn't exist
        NotMemberError: If user is not a member
        LastAdminCannotLeaveError: If user is the only admin of a shared family
    """
    try:
        family = Family.objects.select_for_update().get(id=family_id)
    except Family.DoesNotExist:
        raise FamilyNotFoundError(f"Family with ID {family_id} not found")

    try:
        membership = FamilyMembership.objects.get(user=user, family=family)
    except FamilyMembership.DoesNotExist:
        raise NotMemberError(f"User is not a member of {family.name}")

    if membership.role == FamilyRole.ADMIN:
        other_members = family.memberships.exclude(user=user)
        other_admins = other_members.filter(role=FamilyRole.ADMIN)
        if other_members.exists() and not other_admins.exists():
            raise LastAdminCannotLeaveError(
                "The last admin cannot leave while the family has other members"
            )

    membership.delete()
    logger.info("User %s left family %s", user.username, family.name)


@transaction.atomic
def remove_member(*, family_id: UUID, user_id: UUID, removed_by: User) -> None:
    """
    Remove a member from a family (admin only).

    Raises:
        FamilyNotFoundError: If family doesn't exist
        InsufficientPermissionsError: If removed_by is not an admin
        CannotRemoveSelfError: If an admin targets themselves
        NotMemberError: If target user is not a member
    """
    try:
        family = Family.objects.get(id=family_id)
    except Family.DoesNotExist:
        raise FamilyNotFoundError(f"Family with ID {family_id} not found")

    if not family.is_admin(removed_by):
        raise InsufficientPermissionsError("Only family admins can remove members")

    if str(removed_by.id) == str(user_id):
        raise CannotRemoveSelfError("Use leave to exit the family yourself")

    try:
        membership = (
            FamilyMembership.objects
            .select_for_update()
            .get(family=family, user_id=user_id)
        )
    except FamilyMembership.DoesNotExist:
        raise NotMemberError("User is not a member of this family")

    membership.delete()
    logger.info("User %s removed from family %s by %s", user_id, family.name, removed_by.username)
