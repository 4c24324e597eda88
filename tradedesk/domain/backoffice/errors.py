"""
Domain-specific errors for the back-office bounded context.

Mapped to HTTP responses at the interface layer.
No framework imports allowed.
"""


class BackofficeDomainError(Exception):
    """Base error for all back-office domain errors."""

    kind = "domain_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class ContentNotFoundError(BackofficeDomainError):
    """Raised when a content page does not exist or is not published."""

    kind = "not_found"

    def __init__(self, reference: str) -> None:
        super().__init__(f"Content not found: {reference}")
        self.reference = reference


class SlugAlreadyExistsError(BackofficeDomainError):
    """Raised when a slug is already used by another page."""

    kind = "conflict"

    def __init__(self, slug: str) -> None:
        super().__init__(f"Slug already exists: {slug}")
        self.slug = slug


class SettingNotFoundError(BackofficeDomainError):
    """Raised when a setting key is unknown."""

    kind = "not_found"

    def __init__(self, key: str) -> None:
        super().__init__(f"Setting not found: {key}")
        self.key = key
