"""
Database engine and schema bootstrap.

Builds the SQLAlchemy engine from the configured URL and creates the
schema on startup. PostgreSQL is the production target; SQLite is used
for local runs and the test suite.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import create_engine, event, insert, select
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from tradedesk.core.config import Settings
from tradedesk.domain.brokerage.ports import PasswordHasher
from tradedesk.infrastructure import schema

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    """Current time in UTC."""
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive timestamps read back from SQLite."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def build_engine(database_url: str) -> Engine:
    """Build a SQLAlchemy engine for the given URL.

    SQLite connections open every transaction with ``BEGIN IMMEDIATE`` so
    that write transactions are serialized up front instead of failing
    when two readers try to upgrade their locks. In-memory databases share
    a single connection.
    """
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, pool_pre_ping=True)

    options = {"connect_args": {"check_same_thread": False, "timeout": 30}}
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        options["poolclass"] = StaticPool
    engine = create_engine(database_url, **options)

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection, _record) -> None:
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _begin_immediate(connection) -> None:
        connection.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


def init_db(engine: Engine, settings: Settings, hasher: PasswordHasher) -> None:
    """Create all tables and the bootstrap administrator.

    The administrator (and its wallet) is only created when
    ``admin_password`` is configured and no user with that username exists.

    Args:
        engine: Target database engine.
        settings: Application settings.
        hasher: Password hasher for the administrator password.
    """
    schema.metadata.create_all(engine)
    logger.info("Database schema ready")

    if not settings.admin_password:
        return

    with engine.begin() as conn:
        existing = conn.execute(
            select(schema.users.c.id).where(
                schema.users.c.username == settings.admin_username
            )
        ).first()
        if existing is not None:
            return

        now = utcnow()
        user_id = conn.execute(
            insert(schema.users)
            .values(
                username=settings.admin_username,
                email=settings.admin_email,
                password=hasher.hash(settings.admin_password),
                is_admin=True,
                is_email_verified=True,
                is_verified=True,
                created_at=now,
                updated_at=now,
            )
            .returning(schema.users.c.id)
        ).scalar_one()
        conn.execute(
            insert(schema.wallets).values(
                user_id=user_id,
                balance=0,
                currency=settings.default_currency,
                created_at=now,
                updated_at=now,
            )
        )

    logger.info("Bootstrap administrator created: %s", settings.admin_username)
