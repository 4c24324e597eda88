"""
Use case: Confirm an email address with its verification token.

Input: VerifyEmailCommand (token)
Output: UserResult
Side effects: Sets is_email_verified and consumes the token. Also promotes
    is_verified when email verification is configured to grant trading.
Failure cases: InvalidVerificationTokenError (unknown, used or expired).
"""

import logging
from datetime import datetime, timezone

from tradedesk.application.brokerage.dtos import UserResult, VerifyEmailCommand
from tradedesk.domain.brokerage.errors import InvalidVerificationTokenError
from tradedesk.domain.brokerage.ports import UnitOfWork

logger = logging.getLogger(__name__)


class VerifyEmailUseCase:
    """Consumes a verification token exactly once."""

    def __init__(self, uow: UnitOfWork, grants_trading: bool = False) -> None:
        """Initialize the use case.

        Args:
            uow: Unit of work for users.
            grants_trading: Whether a confirmed email also clears the user
                for withdrawals and trading.
        """
        self._uow = uow
        self._grants_trading = grants_trading

    def execute(self, command: VerifyEmailCommand) -> UserResult:
        with self._uow as uow:
            user = uow.users.get_by_verification_token(command.token)
            if user is None:
                logger.warning("Unknown verification token presented")
                raise InvalidVerificationTokenError()

            expiry = user.verification_token_expiry
            if expiry is not None and expiry < datetime.now(timezone.utc):
                logger.warning("Expired verification token for user=%d", user.id)
                raise InvalidVerificationTokenError()

            uow.users.mark_email_verified(user.id, grant_trading=self._grants_trading)
            user = uow.users.get(user.id)

        logger.info("Email verified: user=%d", user.id)
        return UserResult.from_entity(user)
