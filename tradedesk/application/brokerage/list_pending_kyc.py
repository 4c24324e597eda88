"""
Use case: List KYC submissions awaiting review.

Input: None
Output: list[KycResult], oldest first
Side effects: None (read-only query).
"""

from tradedesk.application.brokerage.dtos import KycResult
from tradedesk.domain.brokerage.kyc_gate import KycGate
from tradedesk.domain.brokerage.ports import UnitOfWork


class ListPendingKycUseCase:
    """Admin queue of pending KYC submissions."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def execute(self) -> list[KycResult]:
        with self._uow as uow:
            records = KycGate(uow.kyc, uow.users).list_pending()
        return [KycResult.from_entity(record) for record in records]
