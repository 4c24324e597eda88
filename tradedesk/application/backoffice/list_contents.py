"""
Use case: List every content page, published or not.

Output: list[ContentResult], newest first
Side effects: None (read-only query).
"""

from tradedesk.application.backoffice.dtos import ContentResult
from tradedesk.domain.backoffice.ports import ContentRepository


class ListContentsUseCase:
    def __init__(self, content_repo: ContentRepository) -> None:
        self._content_repo = content_repo

    def execute(self) -> list[ContentResult]:
        return [ContentResult.from_entity(p) for p in self._content_repo.list_all()]
