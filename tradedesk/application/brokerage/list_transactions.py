"""
Use case: List the caller's transactions.

Input: user id
Output: list[TransactionResult], oldest first
Side effects: None (read-only query).
"""

from tradedesk.application.brokerage.dtos import TransactionResult
from tradedesk.application.brokerage.services import bind_services
from tradedesk.domain.brokerage.ports import UnitOfWork


class ListTransactionsUseCase:
    """Transaction history of one user."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def execute(self, user_id: int) -> list[TransactionResult]:
        with self._uow as uow:
            transactions = bind_services(uow).engine.list_for_user(user_id)
        return [TransactionResult.from_entity(t) for t in transactions]
