"""
Use case: Check a username and password.

Input: AuthenticateCommand (username, password)
Output: UserResult
Side effects: None. Token issuance is left to the interface layer.
Failure cases: InvalidCredentialsError, EmailNotVerifiedError.
"""

import logging

from tradedesk.application.brokerage.dtos import AuthenticateCommand, UserResult
from tradedesk.domain.brokerage.errors import (
    EmailNotVerifiedError,
    InvalidCredentialsError,
)
from tradedesk.domain.brokerage.ports import PasswordHasher, UnitOfWork

logger = logging.getLogger(__name__)


class AuthenticateUserUseCase:
    """Verifies credentials for a login attempt."""

    def __init__(self, uow: UnitOfWork, hasher: PasswordHasher) -> None:
        self._uow = uow
        self._hasher = hasher

    def execute(self, command: AuthenticateCommand) -> UserResult:
        """Authenticate a user.

        Unknown usernames and wrong passwords fail the same way.

        Returns:
            The authenticated user.
        """
        with self._uow as uow:
            user = uow.users.get_by_username(command.username)

        if user is None or not self._hasher.verify(command.password, user.password_hash):
            logger.warning("Login failed for username=%s", command.username)
            raise InvalidCredentialsError()
        if not user.is_email_verified:
            logger.warning("Login refused, email not verified: user=%d", user.id)
            raise EmailNotVerifiedError(user.username)

        logger.info("User logged in: user=%d", user.id)
        return UserResult.from_entity(user)
