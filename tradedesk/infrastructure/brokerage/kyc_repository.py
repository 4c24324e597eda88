"""
Adapter: KYC repository.

Implements KycRepository port. The one-record-per-user rule is backed
by the ``uq_kyc_user_id`` unique constraint, so two concurrent
submissions cannot both succeed.
"""

import logging
from typing import Optional

from sqlalchemy import insert, select, update
from sqlalchemy.engine import Connection, Row
from sqlalchemy.exc import IntegrityError

from tradedesk.domain.brokerage.entities import KycRecord, KycStatus
from tradedesk.domain.brokerage.errors import KycAlreadySubmittedError
from tradedesk.domain.brokerage.ports import KycRepository
from tradedesk.infrastructure.database import as_utc, utcnow
from tradedesk.infrastructure.schema import kyc

logger = logging.getLogger(__name__)


def _to_entity(row: Row) -> KycRecord:
    return KycRecord(
        id=row.id,
        user_id=row.user_id,
        document_type=row.document_type,
        document_id=row.document_id,
        document_path=row.document_path,
        status=KycStatus(row.status),
        rejection_reason=row.rejection_reason,
        admin_notes=row.admin_notes,
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )


class KycRepositoryAdapter(KycRepository):
    """Persists KYC records in the ``kyc`` table."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def add(self, record: KycRecord) -> KycRecord:
        """Insert a record.

        Raises:
            KycAlreadySubmittedError: On a unique constraint violation.
        """
        now = utcnow()
        try:
            row = self._conn.execute(
                insert(kyc)
                .values(
                    user_id=record.user_id,
                    document_type=record.document_type,
                    document_id=record.document_id,
                    document_path=record.document_path,
                    status=record.status.value,
                    created_at=now,
                    updated_at=now,
                )
                .returning(*kyc.c)
            ).one()
        except IntegrityError as exc:
            logger.warning("Duplicate KYC insert for user=%d", record.user_id)
            raise KycAlreadySubmittedError(record.user_id) from exc
        return _to_entity(row)

    def get(self, kyc_id: int) -> Optional[KycRecord]:
        row = self._conn.execute(select(kyc).where(kyc.c.id == kyc_id)).first()
        return _to_entity(row) if row is not None else None

    def get_by_user(self, user_id: int) -> Optional[KycRecord]:
        row = self._conn.execute(select(kyc).where(kyc.c.user_id == user_id)).first()
        return _to_entity(row) if row is not None else None

    def decide(
        self,
        kyc_id: int,
        status: KycStatus,
        rejection_reason: Optional[str],
        admin_notes: Optional[str],
    ) -> bool:
        result = self._conn.execute(
            update(kyc)
            .where(kyc.c.id == kyc_id, kyc.c.status == KycStatus.PENDING.value)
            .values(
                status=status.value,
                rejection_reason=rejection_reason,
                admin_notes=admin_notes,
                updated_at=utcnow(),
            )
        )
        return result.rowcount == 1

    def list_by_status(self, status: KycStatus) -> list[KycRecord]:
        rows = self._conn.execute(
            select(kyc)
            .where(kyc.c.status == status.value)
            .order_by(kyc.c.created_at, kyc.c.id)
        )
        return [_to_entity(row) for row in rows]
