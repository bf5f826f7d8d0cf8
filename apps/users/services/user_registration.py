"""User registration service."""

import logging
from typing import Optional, Tuple

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from apps.families.models import Family
from apps.families.services import (
    create_family,
    join_family_by_code,
    InvitationNotFoundError,
    InvitationNotPendingError,
)

from .exceptions import (
    UserAlreadyExistsError,
    InvalidInvitationCodeError,
    InvitationAlreadyUsedError,
)

User = get_user_model()
logger = logging.getLogger(__name__)


@transaction.atomic
def register_user(
    *,
    username: str,
    password: str,
    first_name: str = "",
    last_name: str = "",
    family_name: Optional[str] = None,
    invitation_code: Optional[str] = None
) -> Tuple[User, Optional[Family]]:
    """
    Register a new user, optionally creating or joining a family.

    An invitation code wins over a family name. The whole operation is one
    transaction: a bad code leaves no user behind.

    Args:
        username: Unique username
        password: User's password (will be hashed)
        first_name: Optional first name
        last_name: Optional last name
        family_name: Name of a new family the user will administer
        invitation_code: Code of a pending invitation to join

    Returns:
        Tuple of (created User, joined or created Family or None)

    Raises:
        UserAlreadyExistsError: If the username is taken
        InvalidInvitationCodeError: If no invitation has the code
        InvitationAlreadyUsedError: If the invitation is not pending
    """
    if User.objects.filter(username=username).exists():
        raise UserAlreadyExistsError("User already exists")

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                username=username,
                password=password,
                first_name=first_name or '',
                last_name=last_name or '',
            )
    except IntegrityError:
        # Concurrent registration with the same username
        raise UserAlreadyExistsError("User already exists")

    family = None
    if invitation_code:
        try:
            membership = join_family_by_code(user=user, invitation_code=invitation_code)
        except InvitationNotFoundError:
            raise InvalidInvitationCodeError("Invalid invitation code")
        except InvitationNotPendingError:
            raise InvitationAlreadyUsedError("Invitation code has already been used")
        family = membership.family
    elif family_name:
        family = create_family(name=family_name, creator=user)

    logger.info(
        "User %s registered%s",
        user.username,
        f" into family {family.name}" if family else "",
    )
    return user, family
