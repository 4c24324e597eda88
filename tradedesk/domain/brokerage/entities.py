"""
Domain entities for the brokerage bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Optional

CENT = Decimal("0.01")
DEFAULT_CURRENCY = "USD"

# Storage precision: money is Numeric(18, 2), quantities and prices Numeric(24, 8).
MONEY_PLACES = 2
QUANTITY_PLACES = 8
MAX_INTEGER_DIGITS = 16


def to_money(value: Decimal | int | str) -> Decimal:
    """Quantize a monetary value to cents."""
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def fits_precision(value: Decimal, places: int) -> bool:
    """Whether ``value`` is stored exactly with ``places`` decimals.

    Values with more significant decimals, or with more than
    ``MAX_INTEGER_DIGITS`` digits before the point, do not fit.
    """
    if not value.is_finite() or abs(value) >= Decimal(10) ** MAX_INTEGER_DIGITS:
        return False
    return value == value.quantize(Decimal(1).scaleb(-places))


class TransactionType(Enum):
    """Kind of ledger-affecting request."""

    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    BUY = "buy"
    SELL = "sell"


class TransactionStatus(Enum):
    """Lifecycle state of a transaction.

    ``pending`` is the only non-terminal state.
    """

    PENDING = "pending"
    COMPLETED = "completed"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not TransactionStatus.PENDING


class KycStatus(Enum):
    """Review state of a user's identity documents.

    ``none`` is never stored; it is what the gate reports for a user
    that has not submitted anything yet.
    """

    NONE = "none"
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class OrderType(Enum):
    """Order style recorded with a trade. Informational only."""

    MARKET = "market"
    LIMIT = "limit"


@dataclass
class User:
    """A registered platform user."""

    username: str
    email: str
    password_hash: str
    id: Optional[int] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    is_email_verified: bool = False
    is_verified: bool = False
    is_admin: bool = False
    verification_token: Optional[str] = None
    verification_token_expiry: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class Wallet:
    """A user's cash balance. The balance is never negative."""

    user_id: int
    id: Optional[int] = None
    balance: Decimal = Decimal("0.00")
    currency: str = DEFAULT_CURRENCY
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class KycRecord:
    """Identity documents submitted by a user for review."""

    user_id: int
    document_type: str
    document_id: str
    id: Optional[int] = None
    document_path: Optional[str] = None
    status: KycStatus = KycStatus.PENDING
    rejection_reason: Optional[str] = None
    admin_notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class TradeTerms:
    """Optional trade metadata carried by buy/sell requests.

    Stored and echoed back; never enforced against any pricing engine.
    """

    leverage: Optional[Decimal] = None
    duration: int = 1
    take_profit: Optional[Decimal] = None
    stop_loss: Optional[Decimal] = None
    margin: Optional[Decimal] = None
    order_type: Optional[OrderType] = None


@dataclass
class Transaction:
    """A deposit, withdrawal, buy or sell request."""

    user_id: int
    type: TransactionType
    amount: Decimal
    id: Optional[int] = None
    currency: str = DEFAULT_CURRENCY
    status: TransactionStatus = TransactionStatus.PENDING
    asset_symbol: Optional[str] = None
    asset_type: Optional[str] = None
    terms: TradeTerms = TradeTerms()
    created_at: Optional[datetime] = None


@dataclass
class PortfolioEntry:
    """A holding recorded from a single purchase."""

    user_id: int
    asset_symbol: str
    asset_type: str
    quantity: Decimal
    average_price: Decimal
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def cost_basis(self) -> Decimal:
        """Total amount paid for this holding."""
        return to_money(self.quantity * self.average_price)


@dataclass
class WatchlistEntry:
    """An asset a user keeps an eye on."""

    user_id: int
    asset_symbol: str
    asset_name: str
    asset_type: str
    id: Optional[int] = None
    exchange: Optional[str] = None
    created_at: Optional[datetime] = None
