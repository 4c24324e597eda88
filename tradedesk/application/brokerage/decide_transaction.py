"""
Use case: Approve or reject a pending transaction.

Input: DecideTransactionCommand (transaction_id, status)
Output: TransactionResult
Side effects: Moves the transaction to its terminal status. Completing a
    withdrawal debits the wallet, completing a deposit credits it. Status
    and balance change in one unit of work.
Failure cases: InvalidDecisionError, TransactionNotFoundError,
    TransactionAlreadyDecidedError, InsufficientFundsError (the withdrawal
    then stays pending).
"""

import logging

from tradedesk.application.brokerage.dtos import (
    DecideTransactionCommand,
    TransactionResult,
)
from tradedesk.application.brokerage.services import bind_services
from tradedesk.domain.brokerage.entities import DEFAULT_CURRENCY, TransactionStatus
from tradedesk.domain.brokerage.errors import InvalidDecisionError
from tradedesk.domain.brokerage.ports import UnitOfWork

logger = logging.getLogger(__name__)


class DecideTransactionUseCase:
    """Applies an admin decision to a pending transaction."""

    def __init__(self, uow: UnitOfWork, currency: str = DEFAULT_CURRENCY) -> None:
        self._uow = uow
        self._currency = currency

    def execute(self, command: DecideTransactionCommand) -> TransactionResult:
        try:
            outcome = TransactionStatus(command.status)
        except ValueError:
            raise InvalidDecisionError(command.status) from None

        with self._uow as uow:
            transaction = bind_services(uow, self._currency).engine.decide(
                command.transaction_id, outcome
            )
        return TransactionResult.from_entity(transaction)
