"""
Use case: Report a user's KYC state.

Input: user id
Output: KycStatusResult (``none`` with no record when nothing was submitted)
Side effects: None (read-only query).
Failure cases: None.
"""

from tradedesk.application.brokerage.dtos import KycResult, KycStatusResult
from tradedesk.domain.brokerage.kyc_gate import KycGate
from tradedesk.domain.brokerage.ports import UnitOfWork


class GetKycStatusUseCase:
    """Reads the KYC record of one user."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def execute(self, user_id: int) -> KycStatusResult:
        with self._uow as uow:
            gate = KycGate(uow.kyc, uow.users)
            status = gate.status_for(user_id)
            record = gate.record_for(user_id)
        return KycStatusResult(
            status=status.value,
            record=KycResult.from_entity(record) if record is not None else None,
        )
