"""
Use case: Read the caller's wallet.

Input: user id
Output: WalletResult
Side effects: None (read-only query).
Failure cases: WalletNotFoundError.
"""

from tradedesk.application.brokerage.dtos import WalletResult
from tradedesk.domain.brokerage.ledger import AccountLedger
from tradedesk.domain.brokerage.ports import UnitOfWork


class GetWalletUseCase:
    """Returns the balance and currency of a user's wallet."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def execute(self, user_id: int) -> WalletResult:
        with self._uow as uow:
            wallet = AccountLedger(uow.wallets).get_wallet(user_id)
        return WalletResult.from_entity(wallet)
