"""
Port interfaces (ABCs) for the back-office bounded context.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from tradedesk.domain.backoffice.entities import ContentPage, Setting


class ContentRepository(ABC):
    """Port for CMS pages."""

    @abstractmethod
    def add(self, page: ContentPage) -> ContentPage:
        """Insert a page.

        Raises:
            SlugAlreadyExistsError: If the slug is taken.
        """
        raise NotImplementedError

    @abstractmethod
    def get(self, content_id: int) -> Optional[ContentPage]:
        raise NotImplementedError

    @abstractmethod
    def get_by_slug(self, slug: str) -> Optional[ContentPage]:
        raise NotImplementedError

    @abstractmethod
    def update(self, content_id: int, changes: dict[str, Any]) -> Optional[ContentPage]:
        """Apply partial changes and return the updated page.

        Raises:
            SlugAlreadyExistsError: If a new slug is taken.
        """
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> list[ContentPage]:
        raise NotImplementedError


class SettingRepository(ABC):
    """Port for platform settings."""

    @abstractmethod
    def get(self, key: str) -> Optional[Setting]:
        raise NotImplementedError

    @abstractmethod
    def upsert(self, setting: Setting) -> Setting:
        """Create the setting or replace the value of an existing key."""
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> list[Setting]:
        raise NotImplementedError
