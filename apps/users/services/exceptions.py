"""Domain-specific exceptions for users services."""


class UsersServiceError(Exception):
    """Base exception for users services."""
    pass


class UserRegistrationError(UsersServiceError):
    """Raised when user registration fails."""
    pass


class UserAlreadyExistsError(UserRegistrationError):
    """Raised when the username is taken."""
    pass


class InvalidInvitationCodeError(UserRegistrationError):
    """Raised when no invitation has the given code."""
    pass


class InvitationAlreadyUsedError(UserRegistrationError):
    """Raised when the invitation was already accepted or rejected."""
    pass


class InvalidCredentialsError(UsersServiceError):
    """Raised when authentication credentials are invalid."""
    pass


class InactiveAccountError(UsersServiceError):
    """Raised when account is deactivated."""
    pass


class PasswordConfirmationError(UsersServiceError):
    """Raised when password confirmation fails."""
    pass
