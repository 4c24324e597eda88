"""
Use case: Submit identity documents for review.

Input: SubmitKycCommand (user_id, document_type, document_id, document_path)
Output: KycResult in pending state
Side effects: Inserts a KYC record.
Failure cases: UserNotFoundError, KycAlreadySubmittedError.
"""

import logging

from tradedesk.application.brokerage.dtos import KycResult, SubmitKycCommand
from tradedesk.domain.brokerage.kyc_gate import KycGate
from tradedesk.domain.brokerage.ports import UnitOfWork

logger = logging.getLogger(__name__)


class SubmitKycUseCase:
    """Records a user's KYC submission."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def execute(self, command: SubmitKycCommand) -> KycResult:
        logger.info(
            "KYC submission: user=%d, document_type=%s",
            command.user_id,
            command.document_type,
        )
        with self._uow as uow:
            record = KycGate(uow.kyc, uow.users).submit(
                command.user_id,
                command.document_type,
                command.document_id,
                command.document_path,
            )
        return KycResult.from_entity(record)
