"""
Adapter: Wallet repository.

Implements WalletRepository port.

Balance changes are applied with one guarded statement:

    UPDATE wallets
       SET balance = ROUND(balance + :delta, 2), updated_at = :now
     WHERE id = :id AND ROUND(balance + :delta, 2) >= 0
 RETURNING balance

The read-check-write happens inside the database, so two concurrent
debits can never both pass against the same stale balance.
"""

import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy import func, insert, select, update
from sqlalchemy.engine import Connection, Row

from tradedesk.domain.brokerage.entities import Wallet, to_money
from tradedesk.domain.brokerage.ports import WalletRepository
from tradedesk.infrastructure.database import as_utc, utcnow
from tradedesk.infrastructure.schema import wallets

logger = logging.getLogger(__name__)


def _to_entity(row: Row) -> Wallet:
    return Wallet(
        id=row.id,
        user_id=row.user_id,
        balance=to_money(row.balance),
        currency=row.currency,
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )


class WalletRepositoryAdapter(WalletRepository):
    """Persists wallets in the ``wallets`` table."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def add(self, wallet: Wallet) -> Wallet:
        now = utcnow()
        row = self._conn.execute(
            insert(wallets)
            .values(
                user_id=wallet.user_id,
                balance=wallet.balance,
                currency=wallet.currency,
                created_at=now,
                updated_at=now,
            )
            .returning(*wallets.c)
        ).one()
        return _to_entity(row)

    def get(self, wallet_id: int) -> Optional[Wallet]:
        row = self._conn.execute(select(wallets).where(wallets.c.id == wallet_id)).first()
        return _to_entity(row) if row is not None else None

    def get_by_user(self, user_id: int) -> Optional[Wallet]:
        row = self._conn.execute(
            select(wallets).where(wallets.c.user_id == user_id)
        ).first()
        return _to_entity(row) if row is not None else None

    def adjust_balance(self, wallet_id: int, delta: Decimal) -> Optional[Decimal]:
        """Apply ``delta`` unless the result would be negative.

        Returns:
            The new balance, or None if no row matched the guard.
        """
        new_balance = func.round(wallets.c.balance + delta, 2)
        row = self._conn.execute(
            update(wallets)
            .where(wallets.c.id == wallet_id, new_balance >= 0)
            .values(balance=new_balance, updated_at=utcnow())
            .returning(wallets.c.balance)
        ).first()
        if row is None:
            return None
        logger.debug("Wallet %d adjusted by %s", wallet_id, delta)
        return to_money(row.balance)

    def total_balance(self) -> Decimal:
        total = self._conn.execute(
            select(func.coalesce(func.sum(wallets.c.balance), 0))
        ).scalar_one()
        return to_money(total)
