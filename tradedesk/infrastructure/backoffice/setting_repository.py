"""
Adapter: Settings repository.

Implements SettingRepository port on the shared engine.
"""

from typing import Optional

from sqlalchemy import insert, select, update
from sqlalchemy.engine import Engine, Row
from sqlalchemy.exc import IntegrityError

from tradedesk.domain.backoffice.entities import Setting, SettingType
from tradedesk.domain.backoffice.ports import SettingRepository
from tradedesk.infrastructure.database import as_utc, utcnow
from tradedesk.infrastructure.schema import settings


def _to_entity(row: Row) -> Setting:
    return Setting(
        id=row.id,
        key=row.key,
        value=row.value,
        type=SettingType(row.type),
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )


class SettingRepositoryAdapter(SettingRepository):
    """Persists key/value settings in the ``settings`` table."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get(self, key: str) -> Optional[Setting]:
        with self._engine.begin() as conn:
            row = conn.execute(select(settings).where(settings.c.key == key)).first()
        return _to_entity(row) if row is not None else None

    def upsert(self, setting: Setting) -> Setting:
        """Insert the key, or overwrite value and type when it exists.

        The insert runs in a savepoint; a unique violation on the key,
        including one from a concurrent writer, falls through to the update.
        """
        now = utcnow()
        with self._engine.begin() as conn:
            try:
                with conn.begin_nested():
                    row = conn.execute(
                        insert(settings)
                        .values(
                            key=setting.key,
                            value=setting.value,
                            type=setting.type.value,
                            created_at=now,
                            updated_at=now,
                        )
                        .returning(*settings.c)
                    ).one()
            except IntegrityError:
                row = conn.execute(
                    update(settings)
                    .where(settings.c.key == setting.key)
                    .values(value=setting.value, type=setting.type.value, updated_at=now)
                    .returning(*settings.c)
                ).one()
        return _to_entity(row)

    def list_all(self) -> list[Setting]:
        with self._engine.begin() as conn:
            rows = conn.execute(select(settings).order_by(settings.c.key)).all()
        return [_to_entity(row) for row in rows]
