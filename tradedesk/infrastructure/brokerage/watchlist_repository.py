"""
Adapter: Watchlist repository.

Implements WatchlistRepository port.
"""

from sqlalchemy import delete, insert, select
from sqlalchemy.engine import Connection, Row

from tradedesk.domain.brokerage.entities import WatchlistEntry
from tradedesk.domain.brokerage.ports import WatchlistRepository
from tradedesk.infrastructure.database import as_utc, utcnow
from tradedesk.infrastructure.schema import watchlist


def _to_entity(row: Row) -> WatchlistEntry:
    return WatchlistEntry(
        id=row.id,
        user_id=row.user_id,
        asset_symbol=row.asset_symbol,
        asset_name=row.asset_name,
        asset_type=row.asset_type,
        exchange=row.exchange,
        created_at=as_utc(row.created_at),
    )


class WatchlistRepositoryAdapter(WatchlistRepository):
    """Persists watchlist entries in the ``watchlist`` table."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def add(self, entry: WatchlistEntry) -> WatchlistEntry:
        row = self._conn.execute(
            insert(watchlist)
            .values(
                user_id=entry.user_id,
                asset_symbol=entry.asset_symbol,
                asset_name=entry.asset_name,
                asset_type=entry.asset_type,
                exchange=entry.exchange,
                created_at=utcnow(),
            )
            .returning(*watchlist.c)
        ).one()
        return _to_entity(row)

    def list_for_user(self, user_id: int) -> list[WatchlistEntry]:
        rows = self._conn.execute(
            select(watchlist)
            .where(watchlist.c.user_id == user_id)
            .order_by(watchlist.c.created_at, watchlist.c.id)
        )
        return [_to_entity(row) for row in rows]

    def delete(self, entry_id: int, user_id: int) -> bool:
        result = self._conn.execute(
            delete(watchlist).where(
                watchlist.c.id == entry_id, watchlist.c.user_id == user_id
            )
        )
        return result.rowcount == 1
