"""
Domain-specific exceptions for families app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class FamiliesServiceError(Exception):
    """Base exception for all families service errors."""
    pass


class FamilyNotFoundError(FamiliesServiceError):
    """Raised when a family does not exist or is inaccessible."""
    pass


class AlreadyInFamilyError(FamiliesServiceError):
    """Raised when a user who already has a family tries to join or create one."""
    pass


class NotMemberError(FamiliesServiceError):
    """Raised when a user tries to perform an action requiring membership."""
    pass


class InsufficientPermissionsError(FamiliesServiceError):
    """Raised when a user lacks required permissions for an action."""
    pass


class InvitationNotFoundError(FamiliesServiceError):
    """Raised when an invitation id or code does not exist."""
    pass


class InvitationNotPendingError(FamiliesServiceError):
    """Raised when an invitation was already accepted or rejected."""
    pass


class InvitationNotForUserError(FamiliesServiceError):
    """Raised when a user redeems an invitation addressed to someone else."""
    pass


class LastAdminCannotLeaveError(FamiliesServiceError):
    """Raised when the only admin tries to leave a family that still has members."""
    pass


class CannotRemoveSelfError(FamiliesServiceError):
    """Raised when an admin tries to remove themselves instead of leaving."""
    pass
