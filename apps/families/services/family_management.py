"""
Family management service.

Handles family creation, lookup and renaming.
"""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Prefetch, QuerySet

from apps.users.models import User
from apps.families.models import Family, FamilyMembership, FamilyRole
from apps.ledger.services import seed_default_categories

from .exceptions import (
    AlreadyInFamilyError,
    FamilyNotFoundError,
    InsufficientPermissionsError,
    NotMemberError,
)

logger = logging.getLogger(__name__)


def get_family_for_user(user: User) -> Optional[Family]:
    """
    Return the family the user belongs to, or None.

    Always queries the database so a membership created or deleted
    earlier in the same request is reflected.
    """
    return Family.objects.filter(memberships__user=user).first()


@transaction.atomic
def create_family(*, name: str, creator: User) -> Family:
    """
    Create a new family with the creator as its admin.

    This is a multi-step operation wrapped in a transaction:
    1. Create the family
    2. Create admin membership for the creator
    3. Seed the default expense and income categories

    Args:
        name: Family name
        creator: User who creates (and administers) the family

    Returns:
        Created Family instance

    Raises:
        AlreadyInFamilyError: If the creator already belongs to a family
    """
    if FamilyMembership.objects.select_for_update().filter(user=creator).exists():
        raise AlreadyInFamilyError("User already belongs to a family")

    family = Family.objects.create(name=name)
    FamilyMembership.objects.create(
        user=creator,
        family=family,
        role=FamilyRole.ADMIN,
    )

    categories = seed_default_categories(family=family)
    logger.info(
        "Family %s created by %s with %d default categories",
        family.name, creator.username, len(categories),
    )
    return family


def get_family_by_id(*, family_id: UUID) -> Family:
    """
    Get a family by ID with its memberships prefetched.

    Raises:
        FamilyNotFoundError: If family doesn't exist
    """
    try:
        return (
            Family.objects
            .prefetch_related(
                Prefetch(
                    'memberships',
                    queryset=FamilyMembership.objects.select_related('user')
                )
            )
            .get(id=family_id)
        )
    except Family.DoesNotExist:
        raise FamilyNotFoundError(f"Family with ID {family_id} not found")


def get_family_for_member(*, family_id: UUID, user: User) -> Family:
    """
    Get a family the user belongs to.

    Raises:
        FamilyNotFoundError: If family doesn't exist
        NotMemberError: If the user is not a member
    """
    family = get_family_by_id(family_id=family_id)
    if not family.has_member(user):
        raise NotMemberError(f"User is not a member of {family.name}")
    return family


@transaction.atomic
def update_family(*, family_id: UUID, user: User, name: Optional[str] = None) -> Family:
    """
    Rename a family (admin only).

    Raises:
        FamilyNotFoundError: If family doesn't exist
        InsufficientPermissionsError: If user is not an admin
    """
    try:
        family = Family.objects.select_for_update().get(id=family_id)
    except Family.DoesNotExist:
        raise FamilyNotFoundError(f"Family with ID {family_id} not found")

    if not family.is_admin(user):
        raise InsufficientPermissionsError("Only family admins can update the family")

    if name is not None:
        family.name = name
        family.save(update_fields=['name', 'updated_at'])

    return family


def get_family_members(*, family_id: UUID) -> QuerySet[FamilyMembership]:
    """
    Get all memberships of a family, admins first.

    Raises:
        FamilyNotFoundError: If family doesn't exist
    """
    if not Family.objects.filter(id=family_id).exists():
        raise FamilyNotFoundError(f"Family with ID {family_id} not found")

    return (
        FamilyMembership.objects
        .filter(family_id=family_id)
        .select_related('user')
        .order_by('role', 'joined_at')
    )
