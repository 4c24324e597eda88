"""
Data Transfer Objects for the back-office application layer.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from tradedesk.domain.backoffice.entities import ContentPage, Setting


@dataclass(frozen=True)
class CreateContentCommand:
    """Input DTO for a new content page."""

    title: str
    slug: str
    content: str
    is_published: bool = False


@dataclass(frozen=True)
class UpdateContentCommand:
    """Input DTO for editing a content page.

    Attributes:
        content_id: Page to edit.
        changes: Field name to new value. Only title, slug, content and
            is_published are applied.
    """

    content_id: int
    changes: dict[str, Any]


@dataclass(frozen=True)
class ContentResult:
    """Output DTO for a content page."""

    id: int
    title: str
    slug: str
    content: str
    is_published: bool
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    @classmethod
    def from_entity(cls, page: ContentPage) -> "ContentResult":
        return cls(
            id=page.id,
            title=page.title,
            slug=page.slug,
            content=page.content,
            is_published=page.is_published,
            created_at=page.created_at,
            updated_at=page.updated_at,
        )


@dataclass(frozen=True)
class UpsertSettingCommand:
    """Input DTO for creating or replacing a setting."""

    key: str
    value: str
    type: str = "system"


@dataclass(frozen=True)
class SettingResult:
    """Output DTO for a setting."""

    key: str
    value: str
    type: str
    updated_at: Optional[datetime]

    @classmethod
    def from_entity(cls, setting: Setting) -> "SettingResult":
        return cls(
            key=setting.key,
            value=setting.value,
            type=setting.type.value,
            updated_at=setting.updated_at,
        )
