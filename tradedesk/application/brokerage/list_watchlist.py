"""
Use case: List the caller's watchlist.

Input: user id
Output: list[WatchlistEntryResult]
Side effects: None (read-only query).
"""

from tradedesk.application.brokerage.dtos import WatchlistEntryResult
from tradedesk.domain.brokerage.ports import UnitOfWork


class ListWatchlistUseCase:
    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def execute(self, user_id: int) -> list[WatchlistEntryResult]:
        with self._uow as uow:
            entries = uow.watchlist.list_for_user(user_id)
        return [WatchlistEntryResult.from_entity(entry) for entry in entries]
