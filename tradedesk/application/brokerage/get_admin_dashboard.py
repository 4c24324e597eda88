"""
Use case: Build the admin dashboard aggregate.

Input: None
Output: DashboardResult
Side effects: None (read-only query).

All figures are read in one unit of work, so they describe the same
snapshot of the platform.
"""

import logging
from collections import Counter

from tradedesk.application.brokerage.dtos import DashboardResult, UserResult
from tradedesk.domain.brokerage.entities import (
    KycStatus,
    TransactionStatus,
    TransactionType,
)
from tradedesk.domain.brokerage.ports import UnitOfWork

logger = logging.getLogger(__name__)

RECENT_USERS_LIMIT = 5


class GetAdminDashboardUseCase:
    """Counts users, pending reviews and balances for the admin console."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def execute(self) -> DashboardResult:
        with self._uow as uow:
            users = uow.users.list_all()
            pending_kyc = uow.kyc.list_by_status(KycStatus.PENDING)
            pending_transactions = uow.transactions.list_by_status(
                TransactionStatus.PENDING
            )
            total_balance = uow.wallets.total_balance()

        total = len(users)
        verified = sum(1 for user in users if user.is_verified)
        by_type = Counter(t.type.value for t in pending_transactions)

        logger.debug(
            "Dashboard computed: users=%d, pending_kyc=%d, pending_tx=%d",
            total,
            len(pending_kyc),
            len(pending_transactions),
        )
        return DashboardResult(
            total_users=total,
            verified_users=verified,
            unverified_users=total - verified,
            verified_percentage=round(verified * 100 / total) if total else 0,
            pending_kyc=len(pending_kyc),
            pending_transactions={t.value: by_type.get(t.value, 0) for t in TransactionType},
            total_balance=total_balance,
            recent_users=[
                UserResult.from_entity(user) for user in users[:RECENT_USERS_LIMIT]
            ],
        )
