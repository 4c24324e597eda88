"""
Adapter: Password hashing.

Implements PasswordHasher port with passlib (argon2).
"""

from passlib.context import CryptContext

from tradedesk.domain.brokerage.ports import PasswordHasher

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


class PasslibPasswordHasher(PasswordHasher):
    """Argon2 password hashing via passlib."""

    def hash(self, password: str) -> str:
        """Hash a password.

        Args:
            password: Plain text password

        Returns:
            Hashed password
        """
        return pwd_context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against a hash.

        Args:
            password: Plain text password
            password_hash: Stored hash

        Returns:
            True if password matches, False otherwise
        """
        return pwd_context.verify(password, password_hash)
