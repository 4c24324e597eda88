"""
Port interfaces (ABCs) for the brokerage bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional

from tradedesk.domain.brokerage.entities import (
    KycRecord,
    KycStatus,
    PortfolioEntry,
    Transaction,
    TransactionStatus,
    User,
    Wallet,
    WatchlistEntry,
)


class UserRepository(ABC):
    """Port for persisting and retrieving users."""

    @abstractmethod
    def add(self, user: User) -> User:
        """Insert a new user and return it with its id assigned."""
        raise NotImplementedError

    @abstractmethod
    def get(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    @abstractmethod
    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    @abstractmethod
    def get_by_verification_token(self, token: str) -> Optional[User]:
        raise NotImplementedError

    @abstractmethod
    def mark_email_verified(self, user_id: int, grant_trading: bool) -> None:
        """Set the email flag and consume the verification token.

        Args:
            user_id: Owner of the token.
            grant_trading: Also promote ``is_verified``.
        """
        raise NotImplementedError

    @abstractmethod
    def mark_verified(self, user_id: int) -> None:
        """Promote ``is_verified`` after KYC approval."""
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> list[User]:
        """Return every user ordered by registration time, newest first."""
        raise NotImplementedError


class WalletRepository(ABC):
    """Port for wallet balances.

    ``adjust_balance`` is the only way a balance changes. It must apply
    the delta in a single storage statement guarded by a floor at zero,
    so that a stale read in application code can never drive a balance
    negative.
    """

    @abstractmethod
    def add(self, wallet: Wallet) -> Wallet:
        raise NotImplementedError

    @abstractmethod
    def get(self, wallet_id: int) -> Optional[Wallet]:
        raise NotImplementedError

    @abstractmethod
    def get_by_user(self, user_id: int) -> Optional[Wallet]:
        raise NotImplementedError

    @abstractmethod
    def adjust_balance(self, wallet_id: int, delta: Decimal) -> Optional[Decimal]:
        """Apply ``delta`` to the balance.

        Returns:
            The new balance, or None when the guard rejected the update
            (the balance would have gone negative or the wallet is absent).
        """
        raise NotImplementedError

    @abstractmethod
    def total_balance(self) -> Decimal:
        """Return the sum of all balances."""
        raise NotImplementedError


class KycRepository(ABC):
    """Port for KYC records. At most one record per user."""

    @abstractmethod
    def add(self, record: KycRecord) -> KycRecord:
        """Insert a record.

        Raises:
            KycAlreadySubmittedError: When the user already has a record.
        """
        raise NotImplementedError

    @abstractmethod
    def get(self, kyc_id: int) -> Optional[KycRecord]:
        raise NotImplementedError

    @abstractmethod
    def get_by_user(self, user_id: int) -> Optional[KycRecord]:
        raise NotImplementedError

    @abstractmethod
    def decide(
        self,
        kyc_id: int,
        status: KycStatus,
        rejection_reason: Optional[str],
        admin_notes: Optional[str],
    ) -> bool:
        """Move a pending record to a terminal status.

        Returns:
            False when the record was no longer pending.
        """
        raise NotImplementedError

    @abstractmethod
    def list_by_status(self, status: KycStatus) -> list[KycRecord]:
        """Return records in a status ordered by submission time ascending."""
        raise NotImplementedError


class TransactionRepository(ABC):
    """Port for transaction records."""

    @abstractmethod
    def add(self, transaction: Transaction) -> Transaction:
        raise NotImplementedError

    @abstractmethod
    def get(self, transaction_id: int) -> Optional[Transaction]:
        raise NotImplementedError

    @abstractmethod
    def transition(
        self,
        transaction_id: int,
        from_status: TransactionStatus,
        to_status: TransactionStatus,
    ) -> bool:
        """Compare-and-set the status.

        Returns:
            False when the stored status was not ``from_status``.
        """
        raise NotImplementedError

    @abstractmethod
    def list_for_user(self, user_id: int) -> list[Transaction]:
        """Return a user's transactions ordered by creation time ascending."""
        raise NotImplementedError

    @abstractmethod
    def list_by_status(self, status: TransactionStatus) -> list[Transaction]:
        """Return transactions in a status ordered by creation time ascending."""
        raise NotImplementedError


class PortfolioRepository(ABC):
    """Port for portfolio holdings."""

    @abstractmethod
    def add(self, entry: PortfolioEntry) -> PortfolioEntry:
        raise NotImplementedError

    @abstractmethod
    def list_for_user(self, user_id: int) -> list[PortfolioEntry]:
        raise NotImplementedError


class WatchlistRepository(ABC):
    """Port for watchlist entries."""

    @abstractmethod
    def add(self, entry: WatchlistEntry) -> WatchlistEntry:
        raise NotImplementedError

    @abstractmethod
    def list_for_user(self, user_id: int) -> list[WatchlistEntry]:
        raise NotImplementedError

    @abstractmethod
    def delete(self, entry_id: int, user_id: int) -> bool:
        """Delete an entry owned by ``user_id``.

        Returns:
            False when no such entry belongs to the user.
        """
        raise NotImplementedError


class UnitOfWork(ABC):
    """Port for one atomic unit of storage work.

    Used as a context manager. Repositories exposed on the instance are
    only valid inside the ``with`` block; everything done through them is
    committed on normal exit and rolled back when an exception escapes.
    """

    users: UserRepository
    wallets: WalletRepository
    kyc: KycRepository
    transactions: TransactionRepository
    portfolio: PortfolioRepository
    watchlist: WatchlistRepository

    @abstractmethod
    def __enter__(self) -> "UnitOfWork":
        raise NotImplementedError

    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None:
        raise NotImplementedError


class PasswordHasher(ABC):
    """Port for one-way password hashing."""

    @abstractmethod
    def hash(self, password: str) -> str:
        raise NotImplementedError

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        raise NotImplementedError


class VerificationMailer(ABC):
    """Port for delivering email verification links."""

    @abstractmethod
    def send_verification(self, email: str, token: str) -> None:
        """Send the verification link for ``token`` to ``email``."""
        raise NotImplementedError
