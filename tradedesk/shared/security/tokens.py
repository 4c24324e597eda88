"""
Access tokens.

Signed JWT bearer tokens (python-jose) carrying the user id in ``sub``.
The token is the only identity the API accepts; there is no session state.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from tradedesk.core.config import settings

logger = logging.getLogger(__name__)


def create_access_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed access token for ``user_id``.

    Args:
        user_id: Subject of the token.
        expires_delta: Lifetime; defaults to the configured expiry.

    Returns:
        Encoded JWT.
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    expire = datetime.now(timezone.utc) + expires_delta
    claims = {"sub": str(user_id), "exp": expire}
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Optional[int]:
    """Return the user id carried by ``token``, or None if it is invalid.

    Expired, tampered and malformed tokens are all invalid.
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm]
        )
    except JWTError:
        logger.warning("Rejected access token")
        return None

    subject = payload.get("sub")
    if subject is None or not str(subject).isdigit():
        return None
    return int(subject)
