"""
Use case: Add an asset to the caller's watchlist.

Input: AddWatchlistEntryCommand
Output: WatchlistEntryResult
Side effects: Inserts a watchlist row.
"""

import logging

from tradedesk.application.brokerage.dtos import (
    AddWatchlistEntryCommand,
    WatchlistEntryResult,
)
from tradedesk.domain.brokerage.entities import WatchlistEntry
from tradedesk.domain.brokerage.ports import UnitOfWork

logger = logging.getLogger(__name__)


class AddWatchlistEntryUseCase:
    """Adds one asset to a watchlist."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def execute(self, command: AddWatchlistEntryCommand) -> WatchlistEntryResult:
        with self._uow as uow:
            entry = uow.watchlist.add(
                WatchlistEntry(
                    user_id=command.user_id,
                    asset_symbol=command.asset_symbol.strip().upper(),
                    asset_name=command.asset_name,
                    asset_type=command.asset_type,
                    exchange=command.exchange,
                )
            )
        logger.info(
            "Watchlist entry added: entry=%d, user=%d, symbol=%s",
            entry.id,
            entry.user_id,
            entry.asset_symbol,
        )
        return WatchlistEntryResult.from_entity(entry)
