"""
Use case: Create a deposit, withdrawal or buy.

Input: CreateTransactionCommand (user_id, type, amount or trade details)
Output: TransactionResult
Side effects:
    deposit     credits the wallet; the transaction is stored completed.
    withdrawal  stores a pending transaction for admin review.
    buy         debits the wallet, records a holding, stores a completed
                transaction.
Failure cases: UnknownTransactionTypeError, InvalidAmountError,
    MissingTradeDetailsError, VerificationRequiredError,
    InsufficientFundsError, OperationNotSupportedError (sell).
"""

import logging

from tradedesk.application.brokerage.dtos import (
    CreateTransactionCommand,
    TransactionResult,
)
from tradedesk.application.brokerage.services import bind_services
from tradedesk.domain.brokerage.entities import DEFAULT_CURRENCY, TransactionType
from tradedesk.domain.brokerage.errors import UnknownTransactionTypeError
from tradedesk.domain.brokerage.ports import UnitOfWork

logger = logging.getLogger(__name__)


class CreateTransactionUseCase:
    """Entry point for user-initiated ledger requests."""

    def __init__(self, uow: UnitOfWork, currency: str = DEFAULT_CURRENCY) -> None:
        """Initialize the use case.

        Args:
            uow: Unit of work shared by the ledger, KYC gate and engine.
            currency: Currency recorded on new transactions.
        """
        self._uow = uow
        self._currency = currency

    def execute(self, command: CreateTransactionCommand) -> TransactionResult:
        try:
            transaction_type = TransactionType(command.type)
        except ValueError:
            raise UnknownTransactionTypeError(command.type) from None

        logger.info(
            "Transaction request: user=%d, type=%s",
            command.user_id,
            transaction_type.value,
        )
        with self._uow as uow:
            engine = bind_services(uow, self._currency).engine
            transaction = engine.create(
                command.user_id,
                transaction_type,
                amount=command.amount,
                asset_symbol=command.asset_symbol,
                asset_type=command.asset_type,
                terms=command.terms,
                quantity=command.quantity,
                price=command.price,
            )
        return TransactionResult.from_entity(transaction)
