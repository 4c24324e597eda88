"""
Adapter: User repository.

Implements UserRepository port on a connection owned by the unit of work.

The insert runs in a savepoint, so a unique violation from a concurrent
registration leaves the outer transaction usable for telling which
column clashed.
"""

import logging
from typing import Optional

from sqlalchemy import insert, select, update
from sqlalchemy.engine import Connection, Row
from sqlalchemy.exc import IntegrityError

from tradedesk.domain.brokerage.entities import User
from tradedesk.domain.brokerage.errors import EmailTakenError, UsernameTakenError
from tradedesk.domain.brokerage.ports import UserRepository
from tradedesk.infrastructure.database import as_utc, utcnow
from tradedesk.infrastructure.schema import users

logger = logging.getLogger(__name__)


def _to_entity(row: Row) -> User:
    return User(
        id=row.id,
        username=row.username,
        email=row.email,
        password_hash=row.password,
        first_name=row.first_name,
        last_name=row.last_name,
        is_email_verified=row.is_email_verified,
        is_verified=row.is_verified,
        is_admin=row.is_admin,
        verification_token=row.verification_token,
        verification_token_expiry=as_utc(row.verification_token_expiry),
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )


class UserRepositoryAdapter(UserRepository):
    """Persists users in the ``users`` table."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def add(self, user: User) -> User:
        """Insert a user and return the stored row.

        Raises:
            UsernameTakenError: If the username is already stored.
            EmailTakenError: If the email is already stored.
        """
        now = utcnow()
        try:
            with self._conn.begin_nested():
                row = self._conn.execute(
                    insert(users)
                    .values(
                        username=user.username,
                        email=user.email,
                        password=user.password_hash,
                        first_name=user.first_name,
                        last_name=user.last_name,
                        is_email_verified=user.is_email_verified,
                        is_verified=user.is_verified,
                        is_admin=user.is_admin,
                        verification_token=user.verification_token,
                        verification_token_expiry=user.verification_token_expiry,
                        created_at=now,
                        updated_at=now,
                    )
                    .returning(*users.c)
                ).one()
        except IntegrityError:
            if self.get_by_username(user.username) is not None:
                logger.warning("Duplicate username on insert")
                raise UsernameTakenError(user.username) from None
            if self.get_by_email(user.email) is not None:
                logger.warning("Duplicate email on insert")
                raise EmailTakenError(user.email) from None
            raise
        return _to_entity(row)

    def get(self, user_id: int) -> Optional[User]:
        return self._first(users.c.id == user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return self._first(users.c.username == username)

    def get_by_email(self, email: str) -> Optional[User]:
        return self._first(users.c.email == email)

    def get_by_verification_token(self, token: str) -> Optional[User]:
        return self._first(users.c.verification_token == token)

    def mark_email_verified(self, user_id: int, grant_trading: bool) -> None:
        values = {
            "is_email_verified": True,
            "verification_token": None,
            "verification_token_expiry": None,
            "updated_at": utcnow(),
        }
        if grant_trading:
            values["is_verified"] = True
        self._conn.execute(update(users).where(users.c.id == user_id).values(**values))

    def mark_verified(self, user_id: int) -> None:
        self._conn.execute(
            update(users)
            .where(users.c.id == user_id)
            .values(is_verified=True, updated_at=utcnow())
        )

    def list_all(self) -> list[User]:
        rows = self._conn.execute(
            select(users).order_by(users.c.created_at.desc(), users.c.id.desc())
        )
        return [_to_entity(row) for row in rows]

    def _first(self, condition) -> Optional[User]:
        row = self._conn.execute(select(users).where(condition)).first()
        return _to_entity(row) if row is not None else None
