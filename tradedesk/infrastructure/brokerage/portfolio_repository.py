"""
Adapter: Portfolio persistence.

Implements PortfolioRepository port.
Responsible for persisting and retrieving portfolio holdings.
"""

from decimal import Decimal

from sqlalchemy import insert, select
from sqlalchemy.engine import Connection, Row

from tradedesk.domain.brokerage.entities import PortfolioEntry
from tradedesk.domain.brokerage.ports import PortfolioRepository
from tradedesk.infrastructure.database import as_utc, utcnow
from tradedesk.infrastructure.schema import portfolio


def _to_entity(row: Row) -> PortfolioEntry:
    return PortfolioEntry(
        id=row.id,
        user_id=row.user_id,
        asset_symbol=row.asset_symbol,
        asset_type=row.asset_type,
        quantity=Decimal(str(row.quantity)),
        average_price=Decimal(str(row.average_price)),
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )


class PortfolioRepositoryAdapter(PortfolioRepository):
    """Concrete adapter for portfolio data persistence.

    Implements the PortfolioRepository port defined in the domain layer.
    One row per purchase; rows are never merged.
    """

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def add(self, entry: PortfolioEntry) -> PortfolioEntry:
        """Persist a holding.

        Args:
            entry: PortfolioEntry entity to save.

        Returns:
            The stored entry with its id assigned.
        """
        now = utcnow()
        row = self._conn.execute(
            insert(portfolio)
            .values(
                user_id=entry.user_id,
                asset_symbol=entry.asset_symbol,
                asset_type=entry.asset_type,
                quantity=entry.quantity,
                average_price=entry.average_price,
                created_at=now,
                updated_at=now,
            )
            .returning(*portfolio.c)
        ).one()
        return _to_entity(row)

    def list_for_user(self, user_id: int) -> list[PortfolioEntry]:
        """Return a user's holdings, oldest first.

        Args:
            user_id: Owner of the holdings.

        Returns:
            List of PortfolioEntry.
        """
        rows = self._conn.execute(
            select(portfolio)
            .where(portfolio.c.user_id == user_id)
            .order_by(portfolio.c.created_at, portfolio.c.id)
        )
        return [_to_entity(row) for row in rows]
