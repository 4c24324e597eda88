"""
Concurrent approval of two withdrawals that each fit the balance alone
but not together. Exactly one may complete.
"""

import threading
from decimal import Decimal

from tests.helpers import balance_of, make_user
from tradedesk.application.brokerage.decide_transaction import DecideTransactionUseCase
from tradedesk.application.brokerage.dtos import DecideTransactionCommand
from tradedesk.application.brokerage.services import bind_services
from tradedesk.domain.brokerage.entities import TransactionStatus, TransactionType
from tradedesk.domain.brokerage.errors import InsufficientFundsError
from tradedesk.infrastructure.brokerage.unit_of_work import SqlUnitOfWork


class TestConcurrentWithdrawals:
    """Racing decisions never overdraw a wallet."""

    def test_only_one_completes(self, engine) -> None:
        user = make_user(engine, balance=Decimal("100.00"), is_verified=True)
        with SqlUnitOfWork(engine) as uow:
            txs = bind_services(uow).engine
            first = txs.create(user.id, TransactionType.WITHDRAWAL, amount=Decimal("80"))
            second = txs.create(user.id, TransactionType.WITHDRAWAL, amount=Decimal("80"))

        barrier = threading.Barrier(2)
        outcomes = {}

        def decide(transaction_id: int) -> None:
            use_case = DecideTransactionUseCase(SqlUnitOfWork(engine))
            barrier.wait()
            try:
                use_case.execute(
                    DecideTransactionCommand(
                        transaction_id=transaction_id, status="completed"
                    )
                )
                outcomes[transaction_id] = "completed"
            except InsufficientFundsError:
                outcomes[transaction_id] = "insufficient"

        threads = [
            threading.Thread(target=decide, args=(tx.id,)) for tx in (first, second)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)

        assert sorted(outcomes.values()) == ["completed", "insufficient"]
        assert balance_of(engine, user.id) == Decimal("20.00")

        with SqlUnitOfWork(engine) as uow:
            statuses = {
                tx.id: tx.status for tx in bind_services(uow).engine.list_for_user(user.id)
            }
        loser = next(tx_id for tx_id, result in outcomes.items() if result == "insufficient")
        assert statuses[loser] is TransactionStatus.PENDING
        assert list(statuses.values()).count(TransactionStatus.COMPLETED) == 1
