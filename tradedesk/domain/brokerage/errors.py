"""
Domain-specific errors for the brokerage bounded context.

All errors raised from the domain layer must be defined here.
These are mapped to HTTP responses at the interface layer.
No framework imports allowed.

Every error belongs to exactly one failure kind (its ``kind`` attribute),
which is what callers see in a structured failure.
"""

from decimal import Decimal


class BrokerageDomainError(Exception):
    """Base error for all brokerage domain errors."""

    kind = "domain_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


# ── Failure kinds ────────────────────────────────────────────────


class ValidationFailedError(BrokerageDomainError):
    """Malformed input that passed the transport schema."""

    kind = "validation_error"


class ConflictError(BrokerageDomainError):
    """The request clashes with existing state."""

    kind = "conflict"


class VerificationRequiredError(BrokerageDomainError):
    """The user must pass KYC before performing the action."""

    kind = "verification_required"

    def __init__(self, user_id: int, action: str) -> None:
        super().__init__(f"KYC verification required for {action}")
        self.user_id = user_id
        self.action = action


class InsufficientFundsError(BrokerageDomainError):
    """Raised when the wallet lacks funds for a debit."""

    kind = "insufficient_funds"

    def __init__(self, required: Decimal, available: Decimal) -> None:
        super().__init__(
            f"Insufficient funds: required {required}, available {available}"
        )
        self.required = required
        self.available = available


class NotFoundError(BrokerageDomainError):
    """An entity referenced by id does not exist."""

    kind = "not_found"


class OperationNotSupportedError(BrokerageDomainError):
    """The operation is part of the vocabulary but has no executable effect."""

    kind = "not_supported"

    def __init__(self, operation: str) -> None:
        super().__init__(f"Operation not supported: {operation}")
        self.operation = operation


class AuthenticationError(BrokerageDomainError):
    """The caller could not be authenticated."""

    kind = "authentication_failed"


# ── Validation ───────────────────────────────────────────────────


class InvalidAmountError(ValidationFailedError):
    """Raised when an amount, quantity or price is not strictly positive,
    or cannot be stored without rounding."""

    def __init__(
        self,
        field_name: str,
        value: Decimal,
        reason: str = "must be greater than zero",
    ) -> None:
        super().__init__(f"{field_name} {reason}, got {value}")
        self.field_name = field_name
        self.value = value


class InvalidDecisionError(ValidationFailedError):
    """Raised when an approval decision is not a terminal outcome."""

    def __init__(self, decision: str) -> None:
        super().__init__(f"Invalid decision: {decision}")
        self.decision = decision


class UnknownTransactionTypeError(ValidationFailedError):
    """Raised when a transaction type is outside the known vocabulary."""

    def __init__(self, transaction_type: str) -> None:
        super().__init__(f"Unknown transaction type: {transaction_type}")
        self.transaction_type = transaction_type


class RejectionReasonRequiredError(ValidationFailedError):
    """Raised when a KYC rejection carries no reason."""

    def __init__(self) -> None:
        super().__init__("A rejection reason is required when rejecting KYC")


class MissingTradeDetailsError(ValidationFailedError):
    """Raised when a buy request lacks its asset, quantity or price."""

    def __init__(self, missing: list[str]) -> None:
        super().__init__(f"Missing trade details: {', '.join(missing)}")
        self.missing = missing


class InvalidVerificationTokenError(ValidationFailedError):
    """Raised when an email verification token is unknown or expired."""

    def __init__(self) -> None:
        super().__init__("Invalid or expired verification token")


# ── Conflicts ────────────────────────────────────────────────────


class UsernameTakenError(ConflictError):
    """Raised when registering a username that already exists."""

    def __init__(self, username: str) -> None:
        super().__init__(f"Username already exists: {username}")
        self.username = username


class EmailTakenError(ConflictError):
    """Raised when registering an email that already exists."""

    def __init__(self, email: str) -> None:
        super().__init__("Email already exists")
        self.email = email


class KycAlreadySubmittedError(ConflictError):
    """Raised on a second KYC submission for the same user."""

    def __init__(self, user_id: int) -> None:
        super().__init__("KYC already submitted")
        self.user_id = user_id


class KycAlreadyDecidedError(ConflictError):
    """Raised when deciding a KYC record that is no longer pending."""

    def __init__(self, kyc_id: int, status: str) -> None:
        super().__init__(f"KYC {kyc_id} has already been {status}")
        self.kyc_id = kyc_id
        self.status = status


class TransactionAlreadyDecidedError(ConflictError):
    """Raised when deciding a transaction that is already terminal."""

    def __init__(self, transaction_id: int, status: str) -> None:
        super().__init__(f"Transaction {transaction_id} is already {status}")
        self.transaction_id = transaction_id
        self.status = status


# ── Not found ────────────────────────────────────────────────────


class UserNotFoundError(NotFoundError):
    """Raised when a user cannot be found."""

    def __init__(self, user_id: int) -> None:
        super().__init__(f"User not found: {user_id}")
        self.user_id = user_id


class WalletNotFoundError(NotFoundError):
    """Raised when a wallet cannot be found."""

    def __init__(self, reference: str) -> None:
        super().__init__(f"Wallet not found: {reference}")
        self.reference = reference


class KycNotFoundError(NotFoundError):
    """Raised when a KYC record cannot be found."""

    def __init__(self, kyc_id: int) -> None:
        super().__init__(f"KYC not found: {kyc_id}")
        self.kyc_id = kyc_id


class TransactionNotFoundError(NotFoundError):
    """Raised when a transaction cannot be found."""

    def __init__(self, transaction_id: int) -> None:
        super().__init__(f"Transaction not found: {transaction_id}")
        self.transaction_id = transaction_id


class WatchlistEntryNotFoundError(NotFoundError):
    """Raised when a watchlist entry does not exist for the user."""

    def __init__(self, entry_id: int) -> None:
        super().__init__(f"Watchlist entry not found: {entry_id}")
        self.entry_id = entry_id


# ── Authentication ───────────────────────────────────────────────


class InvalidCredentialsError(AuthenticationError):
    """Raised on an unknown username or a wrong password."""

    def __init__(self) -> None:
        super().__init__("Incorrect username or password")


class EmailNotVerifiedError(AuthenticationError):
    """Raised when logging in before confirming the email address."""

    def __init__(self, username: str) -> None:
        super().__init__("Please verify your email before logging in")
        self.username = username
