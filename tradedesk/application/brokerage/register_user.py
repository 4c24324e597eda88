"""
Use case: Register a new account.

Input: RegisterUserCommand (username, email, password, names)
Output: UserResult
Side effects: Creates the user and an empty wallet in one unit of work,
    then sends a verification link.
Failure cases: UsernameTakenError, EmailTakenError.
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone

from tradedesk.application.brokerage.dtos import RegisterUserCommand, UserResult
from tradedesk.domain.brokerage.entities import DEFAULT_CURRENCY, User, Wallet
from tradedesk.domain.brokerage.errors import EmailTakenError, UsernameTakenError
from tradedesk.domain.brokerage.ports import (
    PasswordHasher,
    UnitOfWork,
    VerificationMailer,
)

logger = logging.getLogger(__name__)


class RegisterUserUseCase:
    """Creates an account, its wallet and a verification token."""

    def __init__(
        self,
        uow: UnitOfWork,
        hasher: PasswordHasher,
        mailer: VerificationMailer,
        token_ttl_hours: int = 24,
        currency: str = DEFAULT_CURRENCY,
    ) -> None:
        """Initialize the use case.

        Args:
            uow: Unit of work for users and wallets.
            hasher: Password hasher.
            mailer: Delivers the verification link.
            token_ttl_hours: Lifetime of the verification token.
            currency: Currency of the new wallet.
        """
        self._uow = uow
        self._hasher = hasher
        self._mailer = mailer
        self._token_ttl = timedelta(hours=token_ttl_hours)
        self._currency = currency

    def execute(self, command: RegisterUserCommand) -> UserResult:
        """Run the registration.

        Args:
            command: Account details with the plain-text password.

        Returns:
            The new user, without secrets.
        """
        token = secrets.token_hex(32)
        expiry = datetime.now(timezone.utc) + self._token_ttl

        with self._uow as uow:
            if uow.users.get_by_username(command.username) is not None:
                logger.warning("Registration refused: username taken")
                raise UsernameTakenError(command.username)
            if uow.users.get_by_email(command.email) is not None:
                logger.warning("Registration refused: email taken")
                raise EmailTakenError(command.email)

            user = uow.users.add(
                User(
                    username=command.username,
                    email=command.email,
                    password_hash=self._hasher.hash(command.password),
                    first_name=command.first_name,
                    last_name=command.last_name,
                    verification_token=token,
                    verification_token_expiry=expiry,
                )
            )
            uow.wallets.add(Wallet(user_id=user.id, currency=self._currency))

        logger.info("User registered: user=%d", user.id)
        self._mailer.send_verification(user.email, token)
        return UserResult.from_entity(user)
