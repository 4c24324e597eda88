"""
Use case: Read a published page by its slug.

Input: slug
Output: ContentResult
Side effects: None (read-only query).
Failure cases: ContentNotFoundError when the page is missing or unpublished.
"""

from tradedesk.application.backoffice.dtos import ContentResult
from tradedesk.domain.backoffice.errors import ContentNotFoundError
from tradedesk.domain.backoffice.ports import ContentRepository


class GetPublishedContentUseCase:
    """Public read of CMS pages. Drafts stay invisible."""

    def __init__(self, content_repo: ContentRepository) -> None:
        self._content_repo = content_repo

    def execute(self, slug: str) -> ContentResult:
        page = self._content_repo.get_by_slug(slug)
        if page is None or not page.is_published:
            raise ContentNotFoundError(slug)
        return ContentResult.from_entity(page)
