"""
Use case: Buy an asset with wallet funds.

Input: BuyAssetCommand (user_id, asset_symbol, asset_type, quantity, price)
Output: PurchaseResult (holding, completed transaction, new balance)
Side effects: Debits quantity * price, inserts a holding and a completed
    buy transaction. All three happen in one unit of work.
Failure cases: InvalidAmountError, VerificationRequiredError,
    InsufficientFundsError, WalletNotFoundError.
"""

import logging

from tradedesk.application.brokerage.dtos import (
    BuyAssetCommand,
    PortfolioEntryResult,
    PurchaseResult,
    TransactionResult,
)
from tradedesk.application.brokerage.services import bind_services
from tradedesk.domain.brokerage.entities import DEFAULT_CURRENCY
from tradedesk.domain.brokerage.ports import UnitOfWork

logger = logging.getLogger(__name__)


class BuyAssetUseCase:
    """Executes a purchase against the caller's wallet."""

    def __init__(self, uow: UnitOfWork, currency: str = DEFAULT_CURRENCY) -> None:
        self._uow = uow
        self._currency = currency

    def execute(self, command: BuyAssetCommand) -> PurchaseResult:
        logger.info(
            "Buy request: user=%d, symbol=%s, qty=%s, price=%s",
            command.user_id,
            command.asset_symbol,
            command.quantity,
            command.price,
        )
        with self._uow as uow:
            purchase = bind_services(uow, self._currency).engine.buy(
                command.user_id,
                command.asset_symbol,
                command.asset_type,
                command.quantity,
                command.price,
                command.terms,
            )
        return PurchaseResult(
            holding=PortfolioEntryResult.from_entity(purchase.holding),
            transaction=TransactionResult.from_entity(purchase.transaction),
            balance=purchase.balance,
        )
