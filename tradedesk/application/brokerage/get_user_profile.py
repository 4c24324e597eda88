"""
Use case: Read the profile of a user.

Input: user id
Output: UserResult (no password hash, no verification token)
Side effects: None (read-only query).
Failure cases: UserNotFoundError.
"""

from tradedesk.application.brokerage.dtos import UserResult
from tradedesk.domain.brokerage.errors import UserNotFoundError
from tradedesk.domain.brokerage.ports import UnitOfWork


class GetUserProfileUseCase:
    """Returns a sanitized view of one user."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def execute(self, user_id: int) -> UserResult:
        with self._uow as uow:
            user = uow.users.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return UserResult.from_entity(user)
