"""
Use case: List transactions awaiting an admin decision.

Input: None
Output: list[TransactionResult], oldest first
Side effects: None (read-only query).
"""

from tradedesk.application.brokerage.dtos import TransactionResult
from tradedesk.application.brokerage.services import bind_services
from tradedesk.domain.brokerage.ports import UnitOfWork


class ListPendingTransactionsUseCase:
    """Admin queue of pending transactions."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def execute(self) -> list[TransactionResult]:
        with self._uow as uow:
            transactions = bind_services(uow).engine.list_pending_for_admin()
        return [TransactionResult.from_entity(t) for t in transactions]
