"""
Use case: Create a content page.

Input: CreateContentCommand
Output: ContentResult
Side effects: Inserts a page.
Failure cases: SlugAlreadyExistsError.
"""

import logging

from tradedesk.application.backoffice.dtos import ContentResult, CreateContentCommand
from tradedesk.domain.backoffice.entities import ContentPage
from tradedesk.domain.backoffice.ports import ContentRepository

logger = logging.getLogger(__name__)


class CreateContentUseCase:
    def __init__(self, content_repo: ContentRepository) -> None:
        self._content_repo = content_repo

    def execute(self, command: CreateContentCommand) -> ContentResult:
        page = self._content_repo.add(
            ContentPage(
                title=command.title,
                slug=command.slug,
                content=command.content,
                is_published=command.is_published,
            )
        )
        logger.info("Content created: id=%d, slug=%s", page.id, page.slug)
        return ContentResult.from_entity(page)
