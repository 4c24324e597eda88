"""
Relational schema.

SQLAlchemy Core table definitions shared by every repository adapter.
Money is stored as NUMERIC(18, 2); asset quantities as NUMERIC(24, 8).
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
    UniqueConstraint,
)

MONEY = Numeric(18, 2)
QUANTITY = Numeric(24, 8)

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("username", String(255), nullable=False, unique=True),
    Column("email", String(255), nullable=False, unique=True),
    Column("password", String(255), nullable=False),
    Column("first_name", Text),
    Column("last_name", Text),
    Column("is_verified", Boolean, nullable=False, default=False),
    Column("is_email_verified", Boolean, nullable=False, default=False),
    Column("is_admin", Boolean, nullable=False, default=False),
    Column("verification_token", Text, index=True),
    Column("verification_token_expiry", DateTime(timezone=True)),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)

wallets = Table(
    "wallets",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id"), nullable=False, unique=True),
    Column("balance", MONEY, nullable=False, default=0),
    Column("currency", String(3), nullable=False, default="USD"),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
    CheckConstraint("balance >= 0", name="ck_wallets_balance_non_negative"),
)

kyc = Table(
    "kyc",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id"), nullable=False),
    Column("document_type", Text, nullable=False),
    Column("document_id", Text, nullable=False),
    Column("document_path", Text),
    Column("status", String(16), nullable=False, default="pending"),
    Column("rejection_reason", Text),
    Column("admin_notes", Text),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
    UniqueConstraint("user_id", name="uq_kyc_user_id"),
)

transactions = Table(
    "transactions",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id"), nullable=False, index=True),
    Column("type", String(16), nullable=False),
    Column("amount", MONEY, nullable=False),
    Column("currency", String(3), nullable=False, default="USD"),
    Column("status", String(16), nullable=False, default="pending", index=True),
    Column("asset_symbol", Text),
    Column("asset_type", Text),
    Column("leverage", Numeric(10, 2)),
    Column("duration", Integer, nullable=False, default=1),
    Column("take_profit", MONEY),
    Column("stop_loss", MONEY),
    Column("margin", MONEY),
    Column("order_type", String(16)),
    Column("created_at", DateTime(timezone=True), nullable=False),
    CheckConstraint("amount > 0", name="ck_transactions_amount_positive"),
)

portfolio = Table(
    "portfolio",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id"), nullable=False, index=True),
    Column("asset_symbol", Text, nullable=False),
    Column("asset_type", Text, nullable=False),
    Column("quantity", QUANTITY, nullable=False),
    Column("average_price", QUANTITY, nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)

watchlist = Table(
    "watchlist",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id"), nullable=False, index=True),
    Column("asset_symbol", Text, nullable=False),
    Column("asset_name", Text, nullable=False),
    Column("asset_type", Text, nullable=False),
    Column("exchange", Text),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

contents = Table(
    "contents",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("title", Text, nullable=False),
    Column("slug", String(255), nullable=False, unique=True),
    Column("content", Text, nullable=False),
    Column("is_published", Boolean, nullable=False, default=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)

settings = Table(
    "settings",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("key", String(255), nullable=False, unique=True),
    Column("value", Text, nullable=False),
    Column("type", String(16), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)
