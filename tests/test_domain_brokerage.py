"""
Tests for the brokerage domain layer.

Tests domain entities and error classes in isolation.
No external dependencies or IO required.
"""

from decimal import Decimal

import pytest

from tradedesk.domain.brokerage.entities import (
    PortfolioEntry,
    TradeTerms,
    Transaction,
    TransactionStatus,
    TransactionType,
    Wallet,
    fits_precision,
    to_money,
)
from tradedesk.domain.brokerage.errors import (
    AuthenticationError,
    ConflictError,
    EmailNotVerifiedError,
    InsufficientFundsError,
    InvalidAmountError,
    InvalidCredentialsError,
    KycAlreadySubmittedError,
    MissingTradeDetailsError,
    NotFoundError,
    OperationNotSupportedError,
    TransactionAlreadyDecidedError,
    UnknownTransactionTypeError,
    ValidationFailedError,
    VerificationRequiredError,
    WalletNotFoundError,
)


class TestMoney:
    """Tests for cent quantization."""

    def test_rounds_half_up(self) -> None:
        assert to_money("10.005") == Decimal("10.01")
        assert to_money("10.004") == Decimal("10.00")

    def test_accepts_ints(self) -> None:
        assert to_money(5) == Decimal("5.00")

    @pytest.mark.parametrize(
        "value, places, expected",
        [
            ("1.500", 2, True),
            ("1.999", 2, False),
            ("0.00000001", 8, True),
            ("0.000000001", 8, False),
            ("9999999999999999.99", 2, True),
            ("10000000000000000", 2, False),
            ("NaN", 2, False),
            ("Infinity", 8, False),
        ],
    )
    def test_fits_precision(self, value, places, expected) -> None:
        assert fits_precision(Decimal(value), places) is expected


class TestEntities:
    """Tests for entity defaults and derived values."""

    def test_new_wallet_is_empty(self) -> None:
        wallet = Wallet(user_id=1)
        assert wallet.balance == Decimal("0.00")
        assert wallet.currency == "USD"

    def test_new_transaction_is_pending(self) -> None:
        tx = Transaction(user_id=1, type=TransactionType.DEPOSIT, amount=Decimal("5"))
        assert tx.status is TransactionStatus.PENDING
        assert tx.terms == TradeTerms()
        assert tx.terms.duration == 1

    def test_only_pending_is_non_terminal(self) -> None:
        assert not TransactionStatus.PENDING.is_terminal
        assert TransactionStatus.COMPLETED.is_terminal
        assert TransactionStatus.REJECTED.is_terminal

    def test_cost_basis(self) -> None:
        entry = PortfolioEntry(
            user_id=1,
            asset_symbol="AAPL",
            asset_type="stock",
            quantity=Decimal("3"),
            average_price=Decimal("10.333"),
        )
        assert entry.cost_basis == Decimal("31.00")


class TestDomainErrors:
    """Tests for domain error classes and their failure kinds."""

    @pytest.mark.parametrize(
        "error, kind",
        [
            (InvalidAmountError("amount", Decimal("0")), "validation_error"),
            (MissingTradeDetailsError(["price"]), "validation_error"),
            (UnknownTransactionTypeError("swap"), "validation_error"),
            (KycAlreadySubmittedError(1), "conflict"),
            (TransactionAlreadyDecidedError(1, "completed"), "conflict"),
            (VerificationRequiredError(1, "withdrawals"), "verification_required"),
            (InsufficientFundsError(Decimal("80"), Decimal("10")), "insufficient_funds"),
            (WalletNotFoundError("user 1"), "not_found"),
            (OperationNotSupportedError("sell"), "not_supported"),
            (InvalidCredentialsError(), "authentication_failed"),
            (EmailNotVerifiedError("alice"), "authentication_failed"),
        ],
    )
    def test_kind(self, error, kind) -> None:
        assert error.kind == kind

    def test_kind_hierarchy(self) -> None:
        assert issubclass(InvalidAmountError, ValidationFailedError)
        assert issubclass(KycAlreadySubmittedError, ConflictError)
        assert issubclass(WalletNotFoundError, NotFoundError)
        assert issubclass(InvalidCredentialsError, AuthenticationError)

    def test_insufficient_funds_message(self) -> None:
        error = InsufficientFundsError(Decimal("80.00"), Decimal("20.00"))
        assert "80.00" in error.message
        assert "20.00" in error.message
        assert error.required == Decimal("80.00")
        assert error.available == Decimal("20.00")

    def test_missing_trade_details_lists_fields(self) -> None:
        error = MissingTradeDetailsError(["quantity", "price"])
        assert error.missing == ["quantity", "price"]
        assert "quantity, price" in error.message

    def test_verification_required_names_action(self) -> None:
        error = VerificationRequiredError(7, "trading")
        assert error.user_id == 7
        assert "trading" in error.message
