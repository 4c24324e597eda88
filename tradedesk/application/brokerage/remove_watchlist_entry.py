"""
Use case: Remove an entry from the caller's watchlist.

Input: user id, entry id
Output: None
Side effects: Deletes the watchlist row.
Failure cases: WatchlistEntryNotFoundError when the entry does not exist
    or belongs to another user.
"""

import logging

from tradedesk.domain.brokerage.errors import WatchlistEntryNotFoundError
from tradedesk.domain.brokerage.ports import UnitOfWork

logger = logging.getLogger(__name__)


class RemoveWatchlistEntryUseCase:
    """Deletes a watchlist entry owned by the caller."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def execute(self, user_id: int, entry_id: int) -> None:
        with self._uow as uow:
            if not uow.watchlist.delete(entry_id, user_id):
                logger.warning(
                    "Watchlist delete refused: entry=%d, user=%d", entry_id, user_id
                )
                raise WatchlistEntryNotFoundError(entry_id)
        logger.info("Watchlist entry removed: entry=%d, user=%d", entry_id, user_id)
