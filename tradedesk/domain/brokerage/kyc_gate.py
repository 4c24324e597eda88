"""
Domain service: KYC gate.

Tracks identity document submissions and their review outcome, and
answers whether a user is cleared for withdrawals and trading.

A user has at most one KYC record. A decision is final: the record
moves from pending to approved or rejected exactly once, and approval
promotes the owner's ``is_verified`` flag in the same unit of work.
"""

import logging
from typing import Optional

from tradedesk.domain.brokerage.entities import KycRecord, KycStatus, User
from tradedesk.domain.brokerage.errors import (
    InvalidDecisionError,
    KycAlreadyDecidedError,
    KycAlreadySubmittedError,
    KycNotFoundError,
    RejectionReasonRequiredError,
    UserNotFoundError,
    VerificationRequiredError,
)
from tradedesk.domain.brokerage.ports import KycRepository, UserRepository

logger = logging.getLogger(__name__)

TERMINAL_DECISIONS = (KycStatus.APPROVED, KycStatus.REJECTED)


class KycGate:
    """Submission, review and clearance checks for KYC."""

    def __init__(self, kyc: KycRepository, users: UserRepository) -> None:
        self._kyc = kyc
        self._users = users

    def submit(
        self,
        user_id: int,
        document_type: str,
        document_id: str,
        document_path: Optional[str] = None,
    ) -> KycRecord:
        """Record a new submission in ``pending`` state.

        Raises:
            UserNotFoundError: If the user does not exist.
            KycAlreadySubmittedError: If the user already has a record,
                whatever its status.
        """
        if self._users.get(user_id) is None:
            raise UserNotFoundError(user_id)
        if self._kyc.get_by_user(user_id) is not None:
            raise KycAlreadySubmittedError(user_id)

        record = self._kyc.add(
            KycRecord(
                user_id=user_id,
                document_type=document_type,
                document_id=document_id,
                document_path=document_path,
            )
        )
        logger.info("KYC submitted: kyc=%d, user=%d", record.id, user_id)
        return record

    def decide(
        self,
        kyc_id: int,
        decision: KycStatus,
        rejection_reason: Optional[str] = None,
        admin_notes: Optional[str] = None,
    ) -> KycRecord:
        """Approve or reject a pending submission.

        Args:
            kyc_id: Record to decide.
            decision: ``approved`` or ``rejected``.
            rejection_reason: Required when rejecting.
            admin_notes: Free-form reviewer notes.

        Returns:
            The updated record.

        Raises:
            InvalidDecisionError: If the decision is not terminal.
            RejectionReasonRequiredError: If rejecting without a reason.
            KycNotFoundError: If the record does not exist.
            KycAlreadyDecidedError: If the record was already decided.
        """
        if decision not in TERMINAL_DECISIONS:
            raise InvalidDecisionError(decision.value)
        if decision is KycStatus.REJECTED and not (rejection_reason or "").strip():
            raise RejectionReasonRequiredError()

        record = self._kyc.get(kyc_id)
        if record is None:
            raise KycNotFoundError(kyc_id)
        if record.status is not KycStatus.PENDING:
            raise KycAlreadyDecidedError(kyc_id, record.status.value)

        reason = rejection_reason if decision is KycStatus.REJECTED else None
        if not self._kyc.decide(kyc_id, decision, reason, admin_notes):
            current = self._kyc.get(kyc_id)
            raise KycAlreadyDecidedError(kyc_id, current.status.value)

        if decision is KycStatus.APPROVED:
            self._users.mark_verified(record.user_id)

        logger.info(
            "KYC decided: kyc=%d, user=%d, decision=%s",
            kyc_id,
            record.user_id,
            decision.value,
        )
        return self._kyc.get(kyc_id)

    def status_for(self, user_id: int) -> KycStatus:
        """Return the review state for a user, ``none`` if nothing was submitted."""
        record = self._kyc.get_by_user(user_id)
        if record is None:
            return KycStatus.NONE
        return record.status

    def record_for(self, user_id: int) -> Optional[KycRecord]:
        return self._kyc.get_by_user(user_id)

    def list_pending(self) -> list[KycRecord]:
        return self._kyc.list_by_status(KycStatus.PENDING)

    def require_verified(self, user_id: int, action: str) -> User:
        """Return the user if cleared by KYC.

        Raises:
            UserNotFoundError: If the user does not exist.
            VerificationRequiredError: If the user is not verified.
        """
        user = self._users.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        if not user.is_verified:
            logger.warning("Unverified user=%d attempted %s", user_id, action)
            raise VerificationRequiredError(user_id, action)
        return user
