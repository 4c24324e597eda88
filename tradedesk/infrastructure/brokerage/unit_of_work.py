"""
Adapter: SQL unit of work.

Implements the UnitOfWork port with one SQLAlchemy transaction
(``engine.begin()``). Repositories are bound to that transaction's
connection, so everything done through them commits or rolls back
together.
"""

from sqlalchemy.engine import Engine

from tradedesk.domain.brokerage.ports import UnitOfWork
from tradedesk.infrastructure.brokerage.kyc_repository import KycRepositoryAdapter
from tradedesk.infrastructure.brokerage.portfolio_repository import (
    PortfolioRepositoryAdapter,
)
from tradedesk.infrastructure.brokerage.transaction_repository import (
    TransactionRepositoryAdapter,
)
from tradedesk.infrastructure.brokerage.user_repository import UserRepositoryAdapter
from tradedesk.infrastructure.brokerage.wallet_repository import (
    WalletRepositoryAdapter,
)
from tradedesk.infrastructure.brokerage.watchlist_repository import (
    WatchlistRepositoryAdapter,
)


class SqlUnitOfWork(UnitOfWork):
    """One database transaction exposing the brokerage repositories.

    Not reentrant: each ``with`` block opens a fresh transaction.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._transaction = None

    def __enter__(self) -> "SqlUnitOfWork":
        self._transaction = self._engine.begin()
        conn = self._transaction.__enter__()
        self.users = UserRepositoryAdapter(conn)
        self.wallets = WalletRepositoryAdapter(conn)
        self.kyc = KycRepositoryAdapter(conn)
        self.transactions = TransactionRepositoryAdapter(conn)
        self.portfolio = PortfolioRepositoryAdapter(conn)
        self.watchlist = WatchlistRepositoryAdapter(conn)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        transaction, self._transaction = self._transaction, None
        transaction.__exit__(exc_type, exc, tb)
