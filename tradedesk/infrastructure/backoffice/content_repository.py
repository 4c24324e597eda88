"""
Adapter: Content page repository.

Implements ContentRepository port on the shared engine.
"""

from typing import Any, Optional

from sqlalchemy import insert, select, update
from sqlalchemy.engine import Engine, Row
from sqlalchemy.exc import IntegrityError

from tradedesk.domain.backoffice.entities import ContentPage
from tradedesk.domain.backoffice.errors import SlugAlreadyExistsError
from tradedesk.domain.backoffice.ports import ContentRepository
from tradedesk.infrastructure.database import as_utc, utcnow
from tradedesk.infrastructure.schema import contents

EDITABLE_FIELDS = ("title", "slug", "content", "is_published")


def _to_entity(row: Row) -> ContentPage:
    return ContentPage(
        id=row.id,
        title=row.title,
        slug=row.slug,
        content=row.content,
        is_published=row.is_published,
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )


class ContentRepositoryAdapter(ContentRepository):
    """Persists CMS pages in the ``contents`` table."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def add(self, page: ContentPage) -> ContentPage:
        now = utcnow()
        try:
            with self._engine.begin() as conn:
                row = conn.execute(
                    insert(contents)
                    .values(
                        title=page.title,
                        slug=page.slug,
                        content=page.content,
                        is_published=page.is_published,
                        created_at=now,
                        updated_at=now,
                    )
                    .returning(*contents.c)
                ).one()
        except IntegrityError as exc:
            raise SlugAlreadyExistsError(page.slug) from exc
        return _to_entity(row)

    def get(self, content_id: int) -> Optional[ContentPage]:
        with self._engine.begin() as conn:
            row = conn.execute(select(contents).where(contents.c.id == content_id)).first()
        return _to_entity(row) if row is not None else None

    def get_by_slug(self, slug: str) -> Optional[ContentPage]:
        with self._engine.begin() as conn:
            row = conn.execute(select(contents).where(contents.c.slug == slug)).first()
        return _to_entity(row) if row is not None else None

    def update(self, content_id: int, changes: dict[str, Any]) -> Optional[ContentPage]:
        """Apply the editable subset of ``changes``.

        Unknown keys are ignored.
        """
        values = {key: changes[key] for key in EDITABLE_FIELDS if key in changes}
        values["updated_at"] = utcnow()
        try:
            with self._engine.begin() as conn:
                row = conn.execute(
                    update(contents)
                    .where(contents.c.id == content_id)
                    .values(**values)
                    .returning(*contents.c)
                ).first()
        except IntegrityError as exc:
            raise SlugAlreadyExistsError(values.get("slug", "")) from exc
        return _to_entity(row) if row is not None else None

    def list_all(self) -> list[ContentPage]:
        with self._engine.begin() as conn:
            rows = conn.execute(
                select(contents).order_by(contents.c.created_at.desc(), contents.c.id.desc())
            ).all()
        return [_to_entity(row) for row in rows]
