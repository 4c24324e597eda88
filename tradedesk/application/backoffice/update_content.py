"""
Use case: Edit a content page.

Input: UpdateContentCommand (content_id, changes)
Output: ContentResult
Side effects: Updates the page.
Failure cases: ContentNotFoundError, SlugAlreadyExistsError.
"""

import logging

from tradedesk.application.backoffice.dtos import ContentResult, UpdateContentCommand
from tradedesk.domain.backoffice.errors import ContentNotFoundError
from tradedesk.domain.backoffice.ports import ContentRepository

logger = logging.getLogger(__name__)


class UpdateContentUseCase:
    def __init__(self, content_repo: ContentRepository) -> None:
        self._content_repo = content_repo

    def execute(self, command: UpdateContentCommand) -> ContentResult:
        page = self._content_repo.update(command.content_id, command.changes)
        if page is None:
            raise ContentNotFoundError(f"id {command.content_id}")
        logger.info("Content updated: id=%d, fields=%s", page.id, sorted(command.changes))
        return ContentResult.from_entity(page)
