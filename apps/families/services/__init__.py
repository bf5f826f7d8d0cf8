"""
Families app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions and concurrency protection.
"""

from .exceptions import (
    FamiliesServiceError,
    FamilyNotFoundError,
    AlreadyInFamilyError,
    NotMemberError,
    InsufficientPermissionsError,
    InvitationNotFoundError,
    InvitationNotPendingError,
    InvitationNotForUserError,
    LastAdminCannotLeaveError,
    CannotRemoveSelfError,
)

from .family_management import (
    get_family_for_user,
    create_family,
    get_family_by_id,
    get_family_for_member,
    update_family,
    get_family_members,
)

from .membership_management import (
    join_family_by_code,
    accept_invitation,
    decline_invitation,
    leave_family,
    remove_member,
)

from .invite_management import (
    generate_invitation_code,
    create_invitation,
    get_family_invitations,
    get_pending_invitations_for_user,
)


__all__ = [
    # Exceptions
    'FamiliesServiceError',
    'FamilyNotFoundError',
    'AlreadyInFamilyError',
    'NotMemberError',
    'InsufficientPermissionsError',
    'InvitationNotFoundError',
    'InvitationNotPendingError',
    'InvitationNotForUserError',
    'LastAdminCannotLeaveError',
    'CannotRemoveSelfError',

    # Family Management
    'get_family_for_user',
    'create_family',
    'get_family_by_id',
    'get_family_for_member',
    'update_family',
    'get_family_members',

    # Membership Management
    'join_family_by_code',
    'accept_invitation',
    'decline_invitation',
    'leave_family',
    'remove_member',

    # Invite Management
    'generate_invitation_code',
    'create_invitation',
    'get_family_invitations',
    'get_pending_invitations_for_user',
]
