"""
Login for username/password credentials.

A missing user and a wrong password fail the same way, and both run the
password hasher once so response time doesn't reveal which usernames exist.
Deactivated accounts are told apart after the password matched.
"""

import logging

from django.contrib.auth import get_user_model
from django.contrib.auth.models import update_last_login

from .exceptions import InvalidCredentialsError, InactiveAccountError

User = get_user_model()
logger = logging.getLogger(__name__)


def authenticate_user(*, username: str, password: str) -> User:
    """
    Check credentials and stamp ``last_login``.

    Raises:
        InvalidCredentialsError: Unknown username or wrong password
        InactiveAccountError: Password matched a deactivated account
    """
    user = User.objects.filter(username=username).first()
    if user is None:
        User().set_password(password)
        logger.warning("Login attempt for unknown username %s", username)
        raise InvalidCredentialsError("Invalid credentials")

    if not user.check_password(password):
        logger.warning("Failed login for %s", username)
        raise InvalidCredentialsError("Invalid credentials")

    if not user.is_active:
        raise InactiveAccountError("Account is deactivated")

    update_last_login(None, user)
    return user
