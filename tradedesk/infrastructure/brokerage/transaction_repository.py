"""
Adapter: Transaction repository.

Implements TransactionRepository port. Status changes are
compare-and-set updates, so a transaction leaves ``pending`` once.
"""

from decimal import Decimal
from typing import Optional

from sqlalchemy import insert, select, update
from sqlalchemy.engine import Connection, Row

from tradedesk.domain.brokerage.entities import (
    OrderType,
    TradeTerms,
    Transaction,
    TransactionStatus,
    TransactionType,
    to_money,
)
from tradedesk.domain.brokerage.ports import TransactionRepository
from tradedesk.infrastructure.database import as_utc, utcnow
from tradedesk.infrastructure.schema import transactions


def _decimal_or_none(value) -> Optional[Decimal]:
    return Decimal(str(value)) if value is not None else None


def _to_entity(row: Row) -> Transaction:
    return Transaction(
        id=row.id,
        user_id=row.user_id,
        type=TransactionType(row.type),
        amount=to_money(row.amount),
        currency=row.currency,
        status=TransactionStatus(row.status),
        asset_symbol=row.asset_symbol,
        asset_type=row.asset_type,
        terms=TradeTerms(
            leverage=_decimal_or_none(row.leverage),
            duration=row.duration,
            take_profit=_decimal_or_none(row.take_profit),
            stop_loss=_decimal_or_none(row.stop_loss),
            margin=_decimal_or_none(row.margin),
            order_type=OrderType(row.order_type) if row.order_type else None,
        ),
        created_at=as_utc(row.created_at),
    )


class TransactionRepositoryAdapter(TransactionRepository):
    """Persists transactions in the ``transactions`` table."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def add(self, transaction: Transaction) -> Transaction:
        terms = transaction.terms
        row = self._conn.execute(
            insert(transactions)
            .values(
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
                created_at=utcnow(),
            )
            .returning(*transactions.c)
        ).one()
        return _to_entity(row)

    def get(self, transaction_id: int) -> Optional[Transaction]:
        row = self._conn.execute(
            select(transactions).where(transactions.c.id == transaction_id)
        ).first()
        return _to_entity(row) if row is not None else None

    def transition(
        self,
        transaction_id: int,
        from_status: TransactionStatus,
        to_status: TransactionStatus,
    ) -> bool:
        result = self._conn.execute(
            update(transactions)
            .where(
                transactions.c.id == transaction_id,
                transactions.c.status == from_status.value,
            )
            .values(status=to_status.value)
        )
        return result.rowcount == 1

    def list_for_user(self, user_id: int) -> list[Transaction]:
        rows = self._conn.execute(
            select(transactions)
            .where(transactions.c.user_id == user_id)
            .order_by(transactions.c.created_at, transactions.c.id)
        )
        return [_to_entity(row) for row in rows]

    def list_by_status(self, status: TransactionStatus) -> list[Transaction]:
        rows = self._conn.execute(
            select(transactions)
            .where(transactions.c.status == status.value)
            .order_by(transactions.c.created_at, transactions.c.id)
        )
        return [_to_entity(row) for row in rows]
