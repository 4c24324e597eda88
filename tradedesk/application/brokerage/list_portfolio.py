"""
Use case: List the caller's holdings.

Input: user id
Output: list[PortfolioEntryResult]
Side effects: None (read-only query).
"""

from tradedesk.application.brokerage.dtos import PortfolioEntryResult
from tradedesk.domain.brokerage.portfolio_tracker import PortfolioTracker
from tradedesk.domain.brokerage.ports import UnitOfWork


class ListPortfolioUseCase:
    """Holdings recorded from completed purchases."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def execute(self, user_id: int) -> list[PortfolioEntryResult]:
        with self._uow as uow:
            entries = PortfolioTracker(uow.portfolio).list_for_user(user_id)
        return [PortfolioEntryResult.from_entity(entry) for entry in entries]
