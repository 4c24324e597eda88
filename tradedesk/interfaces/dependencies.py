"""
Dependencies shared by every bounded context.

Provides the database engine, the unit of work and the
authenticated-caller dependencies. Tests override ``get_engine``
to point the whole API at a throwaway database.
"""

import logging
from functools import lru_cache
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.engine import Engine

from tradedesk.application.brokerage.dtos import UserResult
from tradedesk.application.brokerage.get_user_profile import GetUserProfileUseCase
from tradedesk.core.config import settings
from tradedesk.domain.brokerage.errors import UserNotFoundError
from tradedesk.domain.brokerage.ports import UnitOfWork
from tradedesk.infrastructure.brokerage.unit_of_work import SqlUnitOfWork
from tradedesk.infrastructure.database import build_engine
from tradedesk.shared.security.tokens import decode_access_token

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache
def get_engine() -> Engine:
    """Build the SQLAlchemy engine once per process."""
    return build_engine(settings.database_url)


def get_unit_of_work(engine: Engine = Depends(get_engine)) -> UnitOfWork:
    return SqlUnitOfWork(engine)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> UserResult:
    """Resolve the caller from the bearer token.

    Raises:
        HTTPException: 401 if the token is missing, invalid or names a
            user that no longer exists.
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")

    user_id = decode_access_token(credentials.credentials)
    if user_id is None:
        raise _unauthorized("Could not validate credentials")

    try:
        return GetUserProfileUseCase(uow).execute(user_id)
    except UserNotFoundError:
        logger.warning("Token for unknown user=%d", user_id)
        raise _unauthorized("Could not validate credentials") from None


def require_admin(user: UserResult = Depends(get_current_user)) -> UserResult:
    """Allow administrators only.

    Raises:
        HTTPException: 403 for authenticated non-admin callers.
    """
    if not user.is_admin:
        logger.warning("Admin route refused for user=%d", user.id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required"
        )
    return user
