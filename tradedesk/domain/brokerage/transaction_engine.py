"""
Domain service: Transaction engine.

The approval-gated state machine at the center of the brokerage context.

States:
    pending -> completed | rejected   (both terminal)

Per type:
    deposit     created pending, completed and credited in the same call.
    withdrawal  KYC and balance checked at creation, stays pending until an
                admin decides; completion re-checks the balance and debits.
    buy         KYC checked, wallet debited, holding recorded and the
                transaction stored as completed, all in the same call.
    sell        not executable; rejected with OperationNotSupportedError.

The engine never commits. Callers run it inside one unit of work so that
a status write and its ledger adjustment succeed or fail together.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from tradedesk.domain.brokerage.entities import (
    DEFAULT_CURRENCY,
    MAX_INTEGER_DIGITS,
    MONEY_PLACES,
    QUANTITY_PLACES,
    PortfolioEntry,
    TradeTerms,
    Transaction,
    TransactionStatus,
    TransactionType,
    fits_precision,
    to_money,
)
from tradedesk.domain.brokerage.errors import (
    InsufficientFundsError,
    InvalidAmountError,
    InvalidDecisionError,
    MissingTradeDetailsError,
    OperationNotSupportedError,
    TransactionAlreadyDecidedError,
    TransactionNotFoundError,
)
from tradedesk.domain.brokerage.kyc_gate import KycGate
from tradedesk.domain.brokerage.ledger import AccountLedger
from tradedesk.domain.brokerage.portfolio_tracker import PortfolioTracker
from tradedesk.domain.brokerage.ports import TransactionRepository

logger = logging.getLogger(__name__)


def _require_positive(field_name: str, value: Decimal, places: int) -> None:
    """Reject values that are not positive or would be rounded on storage."""
    if value <= 0:
        raise InvalidAmountError(field_name, value)
    if not fits_precision(value, places):
        raise InvalidAmountError(
            field_name,
            value,
            f"must have at most {places} decimal places and "
            f"{MAX_INTEGER_DIGITS} integer digits",
        )


@dataclass(frozen=True)
class Purchase:
    """Everything a single buy produced."""

    transaction: Transaction
    holding: PortfolioEntry
    balance: Decimal


class TransactionEngine:
    """Creates and decides deposits, withdrawals and purchases."""

    def __init__(
        self,
        transactions: TransactionRepository,
        ledger: AccountLedger,
        kyc_gate: KycGate,
        portfolio: PortfolioTracker,
        currency: str = DEFAULT_CURRENCY,
    ) -> None:
        self._transactions = transactions
        self._ledger = ledger
        self._kyc_gate = kyc_gate
        self._portfolio = portfolio
        self._currency = currency

    def create(
        self,
        user_id: int,
        transaction_type: TransactionType,
        amount: Optional[Decimal] = None,
        asset_symbol: Optional[str] = None,
        asset_type: Optional[str] = None,
        terms: TradeTerms = TradeTerms(),
        quantity: Optional[Decimal] = None,
        price: Optional[Decimal] = None,
    ) -> Transaction:
        """Create a transaction of any type.

        Buys are delegated to :meth:`buy` and need ``asset_symbol``,
        ``asset_type``, ``quantity`` and ``price``; their amount is the
        total cost. Deposits and withdrawals need a positive ``amount``.

        Raises:
            OperationNotSupportedError: For sells.
            MissingTradeDetailsError: For buys lacking trade details.
            InvalidAmountError: If the amount is not positive or has more
                than 2 decimal places.
            VerificationRequiredError: Withdrawal by an unverified user.
            InsufficientFundsError: Withdrawal above the current balance.
        """
        if transaction_type is TransactionType.SELL:
            raise OperationNotSupportedError("sell")

        if transaction_type is TransactionType.BUY:
            missing = [
                name
                for name, value in (
                    ("asset_symbol", asset_symbol),
                    ("asset_type", asset_type),
                    ("quantity", quantity),
                    ("price", price),
                )
                if value is None
            ]
            if missing:
                raise MissingTradeDetailsError(missing)
            return self.buy(
                user_id, asset_symbol, asset_type, quantity, price, terms
            ).transaction

        if amount is None:
            raise InvalidAmountError("amount", amount)
        _require_positive("amount", amount, MONEY_PLACES)
        amount = to_money(amount)

        if transaction_type is TransactionType.DEPOSIT:
            return self._deposit(user_id, amount)
        return self._request_withdrawal(user_id, amount)

    def _deposit(self, user_id: int, amount: Decimal) -> Transaction:
        wallet = self._ledger.get_wallet(user_id)
        transaction = self._transactions.add(
            Transaction(
                user_id=user_id,
                type=TransactionType.DEPOSIT,
                amount=amount,
                currency=self._currency,
            )
        )
        balance = self._ledger.credit(wallet.id, amount)
        self._transactions.transition(
            transaction.id, TransactionStatus.PENDING, TransactionStatus.COMPLETED
        )
        transaction.status = TransactionStatus.COMPLETED

        logger.info(
            "Deposit completed: tx=%d, user=%d, amount=%s, balance=%s",
            transaction.id,
            user_id,
            amount,
            balance,
        )
        return transaction

    def _request_withdrawal(self, user_id: int, amount: Decimal) -> Transaction:
        self._kyc_gate.require_verified(user_id, "withdrawals")

        balance = self._ledger.get_balance(user_id)
        if balance < amount:
            logger.warning(
                "Withdrawal refused: user=%d, amount=%s, balance=%s",
                user_id,
                amount,
                balance,
            )
            raise InsufficientFundsError(required=amount, available=balance)

        transaction = self._transactions.add(
            Transaction(
                user_id=user_id,
                type=TransactionType.WITHDRAWAL,
                amount=amount,
                currency=self._currency,
            )
        )
        logger.info(
            "Withdrawal requested: tx=%d, user=%d, amount=%s",
            transaction.id,
            user_id,
            amount,
        )
        return transaction

    def buy(
        self,
        user_id: int,
        asset_symbol: str,
        asset_type: str,
        quantity: Decimal,
        price: Decimal,
        terms: TradeTerms = TradeTerms(),
    ) -> Purchase:
        """Buy an asset with wallet funds.

        Debits ``quantity * price`` (rounded to cents), records a holding
        and stores a completed buy transaction.

        Raises:
            InvalidAmountError: If quantity, price or total cost is not positive,
                or quantity or price has more than 8 decimal places.
            VerificationRequiredError: If the user is not KYC-verified.
            InsufficientFundsError: If the balance does not cover the cost.
        """
        _require_positive("quantity", quantity, QUANTITY_PLACES)
        _require_positive("price", price, QUANTITY_PLACES)
        total_cost = to_money(quantity * price)
        if total_cost <= 0:
            raise InvalidAmountError("total cost", total_cost)
        if not fits_precision(total_cost, MONEY_PLACES):
            raise InvalidAmountError(
                "total cost", total_cost, f"exceeds {MAX_INTEGER_DIGITS} integer digits"
            )

        self._kyc_gate.require_verified(user_id, "trading")

        wallet = self._ledger.get_wallet(user_id)
        balance = self._ledger.debit(wallet.id, total_cost)
        holding = self._portfolio.record_buy(
            user_id, asset_symbol, asset_type, quantity, price
        )
        transaction = self._transactions.add(
            Transaction(
                user_id=user_id,
                type=TransactionType.BUY,
                amount=total_cost,
                currency=self._currency,
                status=TransactionStatus.COMPLETED,
                asset_symbol=holding.asset_symbol,
                asset_type=asset_type,
                terms=terms,
            )
        )

        logger.info(
            "Purchase completed: tx=%d, user=%d, symbol=%s, qty=%s, cost=%s",
            transaction.id,
            user_id,
            holding.asset_symbol,
            quantity,
            total_cost,
        )
        return Purchase(transaction=transaction, holding=holding, balance=balance)

    def decide(
        self, transaction_id: int, outcome: TransactionStatus
    ) -> Transaction:
        """Move a pending transaction to a terminal status.

        Completing a withdrawal debits the wallet against the balance at
        decision time. If that fails the whole decision is abandoned and
        the transaction stays pending once the unit of work rolls back.

        Raises:
            InvalidDecisionError: If ``outcome`` is ``pending``.
            TransactionNotFoundError: If the transaction does not exist.
            TransactionAlreadyDecidedError: If it is already terminal.
            InsufficientFundsError: Completing a withdrawal the wallet no
                longer covers.
        """
        if not outcome.is_terminal:
            raise InvalidDecisionError(outcome.value)

        transaction = self._transactions.get(transaction_id)
        if transaction is None:
            raise TransactionNotFoundError(transaction_id)
        if transaction.status.is_terminal:
            raise TransactionAlreadyDecidedError(
                transaction_id, transaction.status.value
            )

        if not self._transactions.transition(
            transaction_id, TransactionStatus.PENDING, outcome
        ):
            current = self._transactions.get(transaction_id)
            raise TransactionAlreadyDecidedError(transaction_id, current.status.value)

        if outcome is TransactionStatus.COMPLETED:
            self._settle(transaction)

        logger.info(
            "Transaction decided: tx=%d, type=%s, user=%d, outcome=%s",
            transaction_id,
            transaction.type.value,
            transaction.user_id,
            outcome.value,
        )
        return self._transactions.get(transaction_id)

    def _settle(self, transaction: Transaction) -> None:
        wallet = self._ledger.get_wallet(transaction.user_id)
        if transaction.type is TransactionType.WITHDRAWAL:
            self._ledger.debit(wallet.id, transaction.amount)
        elif transaction.type is TransactionType.DEPOSIT:
            self._ledger.credit(wallet.id, transaction.amount)

    def list_pending_for_admin(self) -> list[Transaction]:
        return self._transactions.list_by_status(TransactionStatus.PENDING)

    def list_for_user(self, user_id: int) -> list[Transaction]:
        return self._transactions.list_for_user(user_id)
