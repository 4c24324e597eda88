"""
Pydantic schemas for brokerage API request/response validation.

These schemas enforce request shape and define the API contract.
Decimal fields are bounded to the precision of their columns.
Business rules (positive amounts, decisions, KYC clearance) are enforced
by the domain and reported as structured errors, not here.
No business logic belongs here.
"""

from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field

USERNAME_PATTERN = r"^[A-Za-z0-9_.-]+$"
SYMBOL_MAX_LEN = 20

# Column precision: money Numeric(18, 2), quantities and prices Numeric(24, 8).
MONEY_DIGITS = {"max_digits": 18, "decimal_places": 2}
QUANTITY_DIGITS = {"max_digits": 24, "decimal_places": 8}


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    error: str
    detail: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = "ok"
    version: str
    database: str = "ok"


# ── Accounts ─────────────────────────────────────────────────────


class RegisterRequest(BaseModel):
    """Request schema for account registration."""

    username: str = Field(..., min_length=3, max_length=50, pattern=USERNAME_PATTERN)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1, max_length=128)


class VerifyEmailRequest(BaseModel):
    token: str = Field(..., min_length=1, max_length=128)


class UserResponse(BaseModel):
    """Public view of a user. Password hash and tokens are never included."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    first_name: Optional[str]
    last_name: Optional[str]
    is_email_verified: bool
    is_verified: bool
    is_admin: bool
    created_at: Optional[datetime]


class TokenResponse(BaseModel):
    """Response schema for a successful login."""

    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class MessageResponse(BaseModel):
    message: str


# ── KYC ──────────────────────────────────────────────────────────


class KycSubmitRequest(BaseModel):
    """Request schema for a KYC submission.

    Attributes:
        document_type: passport, id_card, drivers_license, ...
        document_id: Number printed on the document.
        document_path: Reference to the stored document scan.
    """

    document_type: str = Field(..., min_length=1, max_length=50)
    document_id: str = Field(..., min_length=1, max_length=100)
    document_path: Optional[str] = Field(default=None, max_length=500)


class KycResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

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


class KycStatusResponse(BaseModel):
    """KYC state of the caller. ``kyc`` is null while the status is ``none``."""

    model_config = ConfigDict(from_attributes=True)

    status: str
    kyc: Optional[KycResponse] = Field(
        default=None, validation_alias=AliasChoices("record", "kyc")
    )


class KycDecisionRequest(BaseModel):
    """Admin decision on a KYC submission.

    ``status`` must be ``approved`` or ``rejected``; a rejection needs a reason.
    """

    status: str = Field(..., min_length=1, max_length=20)
    rejection_reason: Optional[str] = Field(default=None, max_length=1000)
    admin_notes: Optional[str] = Field(default=None, max_length=1000)


# ── Wallet & transactions ───────────────────────────────────────


class WalletResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    balance: Decimal
    currency: str
    updated_at: Optional[datetime]


class TradeTermsFields(BaseModel):
    """Optional trade metadata shared by trade requests."""

    leverage: Optional[Decimal] = Field(
        default=None, gt=0, max_digits=10, decimal_places=2
    )
    duration: int = Field(default=1, ge=1, le=24, description="Hours (1-24)")
    take_profit: Optional[Decimal] = Field(default=None, **MONEY_DIGITS)
    stop_loss: Optional[Decimal] = Field(default=None, **MONEY_DIGITS)
    margin: Optional[Decimal] = Field(default=None, **MONEY_DIGITS)
    order_type: Optional[Literal["market", "limit"]] = None


class TransactionRequest(TradeTermsFields):
    """Request schema for creating a transaction.

    Deposits and withdrawals use ``amount``. Buys use ``asset_symbol``,
    ``asset_type``, ``quantity`` and ``price``.
    """

    type: Literal["deposit", "withdrawal", "buy", "sell"]
    amount: Optional[Decimal] = Field(default=None, **MONEY_DIGITS)
    asset_symbol: Optional[str] = Field(default=None, min_length=1, max_length=SYMBOL_MAX_LEN)
    asset_type: Optional[str] = Field(default=None, min_length=1, max_length=20)
    quantity: Optional[Decimal] = Field(default=None, **QUANTITY_DIGITS)
    price: Optional[Decimal] = Field(default=None, **QUANTITY_DIGITS)


class TransactionDecisionRequest(BaseModel):
    """Admin decision on a pending transaction: ``completed`` or ``rejected``."""

    status: str = Field(..., min_length=1, max_length=20)


class TransactionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

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


# ── Portfolio & watchlist ───────────────────────────────────────


class BuyRequest(TradeTermsFields):
    """Request schema for buying an asset with wallet funds."""

    asset_symbol: str = Field(..., min_length=1, max_length=SYMBOL_MAX_LEN)
    asset_type: str = Field(..., min_length=1, max_length=20)
    quantity: Decimal = Field(..., **QUANTITY_DIGITS)
    price: Decimal = Field(..., **QUANTITY_DIGITS)


class PortfolioEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    asset_symbol: str
    asset_type: str
    quantity: Decimal
    average_price: Decimal
    cost_basis: Decimal
    created_at: Optional[datetime]


class PurchaseResponse(BaseModel):
    """Result of a buy: the new holding, its transaction and the balance left."""

    model_config = ConfigDict(from_attributes=True)

    holding: PortfolioEntryResponse
    transaction: TransactionResponse
    balance: Decimal


class WatchlistRequest(BaseModel):
    asset_symbol: str = Field(..., min_length=1, max_length=SYMBOL_MAX_LEN)
    asset_name: str = Field(..., min_length=1, max_length=100)
    asset_type: str = Field(..., min_length=1, max_length=20)
    exchange: Optional[str] = Field(default=None, max_length=50)


class WatchlistEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    asset_symbol: str
    asset_name: str
    asset_type: str
    exchange: Optional[str]
    created_at: Optional[datetime]


# ── Admin ────────────────────────────────────────────────────────


class DashboardResponse(BaseModel):
    """Admin dashboard aggregate."""

    model_config = ConfigDict(from_attributes=True)

    total_users: int
    verified_users: int
    unverified_users: int
    verified_percentage: int
    pending_kyc: int
    pending_transactions: dict[str, int]
    total_balance: Decimal
    recent_users: list[UserResponse]
