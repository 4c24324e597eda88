"""
Domain service: Account ledger.

Owns per-user wallet balances. The transaction engine is the only caller
that mutates balances; everything else reads.

Every adjustment goes through a single guarded storage update, so the
balance floor holds even when two requests race on the same wallet.
"""

import logging
from decimal import Decimal

from tradedesk.domain.brokerage.entities import Wallet, to_money
from tradedesk.domain.brokerage.errors import (
    InsufficientFundsError,
    InvalidAmountError,
    WalletNotFoundError,
)
from tradedesk.domain.brokerage.ports import WalletRepository

logger = logging.getLogger(__name__)


class AccountLedger:
    """Reads and adjusts wallet balances."""

    def __init__(self, wallets: WalletRepository) -> None:
        self._wallets = wallets

    def get_wallet(self, user_id: int) -> Wallet:
        """Return the user's wallet.

        Raises:
            WalletNotFoundError: If the user has no wallet.
        """
        wallet = self._wallets.get_by_user(user_id)
        if wallet is None:
            raise WalletNotFoundError(f"user {user_id}")
        return wallet

    def get_balance(self, user_id: int) -> Decimal:
        """Return the user's current balance."""
        return self.get_wallet(user_id).balance

    def adjust_balance(self, wallet_id: int, delta: Decimal) -> Decimal:
        """Apply a signed delta to a wallet and return the new balance.

        Args:
            wallet_id: Wallet to adjust.
            delta: Positive to credit, negative to debit.

        Returns:
            The balance after the adjustment.

        Raises:
            WalletNotFoundError: If the wallet does not exist.
            InsufficientFundsError: If the balance would drop below zero.
        """
        delta = to_money(delta)
        new_balance = self._wallets.adjust_balance(wallet_id, delta)
        if new_balance is not None:
            return new_balance

        wallet = self._wallets.get(wallet_id)
        if wallet is None:
            raise WalletNotFoundError(f"id {wallet_id}")
        logger.warning(
            "Ledger refused debit on wallet=%d: delta=%s, balance=%s",
            wallet_id,
            delta,
            wallet.balance,
        )
        raise InsufficientFundsError(required=-delta, available=wallet.balance)

    def credit(self, wallet_id: int, amount: Decimal) -> Decimal:
        """Add a strictly positive amount to a wallet."""
        if amount <= 0:
            raise InvalidAmountError("amount", amount)
        return self.adjust_balance(wallet_id, amount)

    def debit(self, wallet_id: int, amount: Decimal) -> Decimal:
        """Remove a strictly positive amount from a wallet."""
        if amount <= 0:
            raise InvalidAmountError("amount", amount)
        return self.adjust_balance(wallet_id, -amount)
