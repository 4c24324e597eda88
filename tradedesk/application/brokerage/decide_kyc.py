"""
Use case: Approve or reject a pending KYC submission.

Input: DecideKycCommand (kyc_id, status, rejection_reason, admin_notes)
Output: KycResult
Side effects: Updates the record; on approval also sets the owner's
    is_verified flag, in the same unit of work.
Failure cases: InvalidDecisionError, RejectionReasonRequiredError,
    KycNotFoundError, KycAlreadyDecidedError.
"""

import logging

from tradedesk.application.brokerage.dtos import DecideKycCommand, KycResult
from tradedesk.domain.brokerage.entities import KycStatus
from tradedesk.domain.brokerage.errors import InvalidDecisionError
from tradedesk.domain.brokerage.kyc_gate import KycGate
from tradedesk.domain.brokerage.ports import UnitOfWork

logger = logging.getLogger(__name__)


class DecideKycUseCase:
    """Applies an admin decision to a KYC submission."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def execute(self, command: DecideKycCommand) -> KycResult:
        """Decide a submission.

        Args:
            command: Target record and the ``approved``/``rejected`` outcome.

        Returns:
            The decided record.
        """
        try:
            decision = KycStatus(command.status)
        except ValueError:
            raise InvalidDecisionError(command.status) from None

        with self._uow as uow:
            record = KycGate(uow.kyc, uow.users).decide(
                command.kyc_id,
                decision,
                rejection_reason=command.rejection_reason,
                admin_notes=command.admin_notes,
            )
        return KycResult.from_entity(record)
