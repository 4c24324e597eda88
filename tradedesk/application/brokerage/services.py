"""
Binds the brokerage domain services to the repositories of an open
unit of work.
"""

from dataclasses import dataclass

from tradedesk.domain.brokerage.entities import DEFAULT_CURRENCY
from tradedesk.domain.brokerage.kyc_gate import KycGate
from tradedesk.domain.brokerage.ledger import AccountLedger
from tradedesk.domain.brokerage.portfolio_tracker import PortfolioTracker
from tradedesk.domain.brokerage.ports import UnitOfWork
from tradedesk.domain.brokerage.transaction_engine import TransactionEngine


@dataclass(frozen=True)
class BrokerageServices:
    """Domain services sharing one unit of work."""

    ledger: AccountLedger
    kyc_gate: KycGate
    portfolio: PortfolioTracker
    engine: TransactionEngine


def bind_services(uow: UnitOfWork, currency: str = DEFAULT_CURRENCY) -> BrokerageServices:
    """Build the domain services on top of ``uow``.

    Must be called inside the ``with uow:`` block.
    """
    ledger = AccountLedger(uow.wallets)
    kyc_gate = KycGate(uow.kyc, uow.users)
    portfolio = PortfolioTracker(uow.portfolio)
    engine = TransactionEngine(
        uow.transactions, ledger, kyc_gate, portfolio, currency=currency
    )
    return BrokerageServices(
        ledger=ledger, kyc_gate=kyc_gate, portfolio=portfolio, engine=engine
    )
