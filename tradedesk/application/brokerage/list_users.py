"""
Use case: List every registered user for the admin console.

Input: None
Output: list[UserResult], newest first
Side effects: None (read-only query).
"""

from tradedesk.application.brokerage.dtos import UserResult
from tradedesk.domain.brokerage.ports import UnitOfWork


class ListUsersUseCase:
    """Sanitized user listing."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def execute(self) -> list[UserResult]:
        with self._uow as uow:
            users = uow.users.list_all()
        return [UserResult.from_entity(user) for user in users]
