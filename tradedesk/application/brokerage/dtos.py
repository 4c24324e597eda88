"""
Data Transfer Objects for the brokerage application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior beyond mapping
from domain entities.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from tradedesk.domain.brokerage.entities import (
    KycRecord,
    PortfolioEntry,
    TradeTerms,
    Transaction,
    User,
    Wallet,
    WatchlistEntry,
)

# ── Accounts ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class RegisterUserCommand:
    """Input DTO for registering a new account."""

    username: str
    email: str
    password: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None


@dataclass(frozen=True)
class VerifyEmailCommand:
    """Input DTO carrying an email verification token."""

    token: str


@dataclass(frozen=True)
class AuthenticateCommand:
    """Input DTO for a login attempt."""

    username: str
    password: str


@dataclass(frozen=True)
class UserResult:
    """Output DTO for a user. Never carries secrets."""

    id: int
    username: str
    email: str
    first_name: Optional[str]
    last_name: Optional[str]
    is_email_verified: bool
    is_verified: bool
    is_admin: bool
    created_at: Optional[datetime]

    @classmethod
    def from_entity(cls, user: User) -> "UserResult":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            is_email_verified=user.is_email_verified,
            is_verified=user.is_verified,
            is_admin=user.is_admin,
            created_at=user.created_at,
        )


# ── KYC ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class SubmitKycCommand:
    """Input DTO for a KYC submission.

    Attributes:
        user_id: Submitting user.
        document_type: Kind of identity document (passport, id_card, ...).
        document_id: Number printed on the document.
        document_path: Reference to the uploaded document file.
    """

    user_id: int
    document_type: str
    document_id: str
    document_path: Optional[str] = None


@dataclass(frozen=True)
class DecideKycCommand:
    """Input DTO for an admin KYC decision."""

    kyc_id: int
    status: str
    rejection_reason: Optional[str] = None
    admin_notes: Optional[str] = None


@dataclass(frozen=True)
class KycResult:
    """Output DTO for a KYC record."""

    id: int
    user_id: int
    document_type: str
    document_id: str
    document_path: Optional[str]
    status: str
    rejection_reason: Optional[str]
    admin_notes: Optional[str]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    @classmethod
    def from_entity(cls, record: KycRecord) -> "KycResult":
        return cls(
            id=record.id,
            user_id=record.user_id,
            document_type=record.document_type,
            document_id=record.document_id,
            document_path=record.document_path,
            status=record.status.value,
            rejection_reason=record.rejection_reason,
            admin_notes=record.admin_notes,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


@dataclass(frozen=True)
class KycStatusResult:
    """Output DTO for a user's KYC state.

    ``record`` is None while the status is ``none``.
    """

    status: str
    record: Optional[KycResult] = None


# ── Wallet & transactions ───────────────────────────────────────


@dataclass(frozen=True)
class WalletResult:
    """Output DTO for a wallet."""

    balance: Decimal
    currency: str
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, wallet: Wallet) -> "WalletResult":
        return cls(
            balance=wallet.balance,
            currency=wallet.currency,
            updated_at=wallet.updated_at,
        )


@dataclass(frozen=True)
class CreateTransactionCommand:
    """Input DTO for creating a transaction.

    Attributes:
        user_id: Acting user, taken from the authenticated identity.
        type: deposit, withdrawal, buy or sell.
        amount: Cash amount for deposits and withdrawals.
        asset_symbol: Ticker for buys and sells.
        asset_type: stock, crypto, forex, ...
        quantity: Units to buy.
        price: Unit price for buys.
        terms: Optional trade metadata.
    """

    user_id: int
    type: str
    amount: Optional[Decimal] = None
    asset_symbol: Optional[str] = None
    asset_type: Optional[str] = None
    quantity: Optional[Decimal] = None
    price: Optional[Decimal] = None
    terms: TradeTerms = field(default_factory=TradeTerms)


@dataclass(frozen=True)
class BuyAssetCommand:
    """Input DTO for buying an asset with wallet funds."""

    user_id: int
    asset_symbol: str
    asset_type: str
    quantity: Decimal
    price: Decimal
    terms: TradeTerms = field(default_factory=TradeTerms)


@dataclass(frozen=True)
class DecideTransactionCommand:
    """Input DTO for an admin transaction decision."""

    transaction_id: int
    status: str


@dataclass(frozen=True)
class TransactionResult:
    """Output DTO for a transaction."""

    id: int
    user_id: int
    type: str
    amount: Decimal
    currency: str
    status: str
    asset_symbol: Optional[str]
    asset_type: Optional[str]
    leverage: Optional[Decimal]
    duration: int
    take_profit: Optional[Decimal]
    stop_loss: Optional[Decimal]
    margin: Optional[Decimal]
    order_type: Optional[str]
    created_at: Optional[datetime]

    @classmethod
    def from_entity(cls, transaction: Transaction) -> "TransactionResult":
        terms = transaction.terms
        return cls(
            id=transaction.id,
            user_id=transaction.user_id,
            type=transaction.type.value,
            amount=transaction.amount,
            currency=transaction.currency,
            status=transaction.status.value,
            asset_symbol=transaction.asset_symbol,
            asset_type=transaction.asset_type,
            leverage=terms.leverage,
            duration=terms.duration,
            take_profit=terms.take_profit,
            stop_loss=terms.stop_loss,
            margin=terms.margin,
            order_type=terms.order_type.value if terms.order_type else None,
            created_at=transaction.created_at,
        )


# ── Portfolio & watchlist ───────────────────────────────────────


@dataclass(frozen=True)
class PortfolioEntryResult:
    """Output DTO for a holding."""

    id: int
    asset_symbol: str
    asset_type: str
    quantity: Decimal
    average_price: Decimal
    cost_basis: Decimal
    created_at: Optional[datetime]

    @classmethod
    def from_entity(cls, entry: PortfolioEntry) -> "PortfolioEntryResult":
        return cls(
            id=entry.id,
            asset_symbol=entry.asset_symbol,
            asset_type=entry.asset_type,
            quantity=entry.quantity,
            average_price=entry.average_price,
            cost_basis=entry.cost_basis,
            created_at=entry.created_at,
        )


@dataclass(frozen=True)
class PurchaseResult:
    """Output DTO for a completed buy."""

    holding: PortfolioEntryResult
    transaction: TransactionResult
    balance: Decimal


@dataclass(frozen=True)
class AddWatchlistEntryCommand:
    """Input DTO for adding an asset to a watchlist."""

    user_id: int
    asset_symbol: str
    asset_name: str
    asset_type: str
    exchange: Optional[str] = None


@dataclass(frozen=True)
class WatchlistEntryResult:
    """Output DTO for a watchlist entry."""

    id: int
    asset_symbol: str
    asset_name: str
    asset_type: str
    exchange: Optional[str]
    created_at: Optional[datetime]

    @classmethod
    def from_entity(cls, entry: WatchlistEntry) -> "WatchlistEntryResult":
        return cls(
            id=entry.id,
            asset_symbol=entry.asset_symbol,
            asset_name=entry.asset_name,
            asset_type=entry.asset_type,
            exchange=entry.exchange,
            created_at=entry.created_at,
        )


# ── Admin ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class DashboardResult:
    """Output DTO for the admin dashboard aggregate.

    Attributes:
        total_users: Registered accounts.
        verified_users: Accounts cleared by KYC.
        unverified_users: Accounts not cleared by KYC.
        verified_percentage: Share of verified accounts, rounded to an integer.
        pending_kyc: KYC submissions awaiting review.
        pending_transactions: Transactions awaiting a decision, by type.
        total_balance: Sum of all wallet balances.
        recent_users: The newest registrations.
    """

    total_users: int
    verified_users: int
    unverified_users: int
    verified_percentage: int
    pending_kyc: int
    pending_transactions: dict[str, int]
    total_balance: Decimal
    recent_users: list[UserResult]
