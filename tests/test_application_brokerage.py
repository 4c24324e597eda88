"""
Tests for the brokerage application layer (use cases).

The mailer and password hasher ports are mocked; persistence runs on the
per-test SQLite database.
"""

from decimal import Decimal
from unittest.mock import Mock

import pytest

from tests.helpers import get_user, make_user
from tradedesk.application.brokerage.add_watchlist_entry import AddWatchlistEntryUseCase
from tradedesk.application.brokerage.authenticate_user import AuthenticateUserUseCase
from tradedesk.application.brokerage.create_transaction import CreateTransactionUseCase
from tradedesk.application.brokerage.decide_kyc import DecideKycUseCase
from tradedesk.application.brokerage.dtos import (
    AddWatchlistEntryCommand,
    AuthenticateCommand,
    CreateTransactionCommand,
    DecideKycCommand,
    RegisterUserCommand,
    SubmitKycCommand,
    VerifyEmailCommand,
)
from tradedesk.application.brokerage.get_admin_dashboard import GetAdminDashboardUseCase
from tradedesk.application.brokerage.get_kyc_status import GetKycStatusUseCase
from tradedesk.application.brokerage.list_watchlist import ListWatchlistUseCase
from tradedesk.application.brokerage.register_user import RegisterUserUseCase
from tradedesk.application.brokerage.remove_watchlist_entry import (
    RemoveWatchlistEntryUseCase,
)
from tradedesk.application.brokerage.submit_kyc import SubmitKycUseCase
from tradedesk.application.brokerage.verify_email import VerifyEmailUseCase
from tradedesk.domain.brokerage.errors import (
    EmailNotVerifiedError,
    EmailTakenError,
    InvalidCredentialsError,
    InvalidDecisionError,
    InvalidVerificationTokenError,
    UnknownTransactionTypeError,
    UsernameTakenError,
    WatchlistEntryNotFoundError,
)
from tradedesk.infrastructure.brokerage.unit_of_work import SqlUnitOfWork


@pytest.fixture
def hasher() -> Mock:
    hasher = Mock()
    hasher.hash.side_effect = lambda password: f"hashed:{password}"
    hasher.verify.side_effect = lambda password, hashed: hashed == f"hashed:{password}"
    return hasher


def _register(engine, hasher, mailer, username="bob", email=None, ttl_hours=24):
    use_case = RegisterUserUseCase(
        SqlUnitOfWork(engine), hasher, mailer, token_ttl_hours=ttl_hours
    )
    return use_case.execute(
        RegisterUserCommand(
            username=username,
            email=email or f"{username}@example.com",
            password="s3cret-password",
        )
    )


def _sent_token(mailer: Mock) -> str:
    return mailer.send_verification.call_args.args[1]


class TestRegisterUserUseCase:
    """Tests for RegisterUserUseCase."""

    def test_creates_user_wallet_and_sends_token(self, engine, hasher) -> None:
        mailer = Mock()
        user = _register(engine, hasher, mailer)

        assert user.username == "bob"
        assert user.is_email_verified is False
        assert user.is_verified is False
        mailer.send_verification.assert_called_once()
        email, token = mailer.send_verification.call_args.args
        assert email == "bob@example.com"
        assert len(token) == 64
        with SqlUnitOfWork(engine) as uow:
            assert uow.wallets.get_by_user(user.id).balance == Decimal("0.00")
            assert uow.users.get(user.id).password_hash == "hashed:s3cret-password"

    def test_duplicate_username(self, engine, hasher) -> None:
        _register(engine, hasher, Mock())
        mailer = Mock()
        with pytest.raises(UsernameTakenError):
            _register(engine, hasher, mailer, email="other@example.com")
        mailer.send_verification.assert_not_called()

    def test_duplicate_email(self, engine, hasher) -> None:
        _register(engine, hasher, Mock())
        with pytest.raises(EmailTakenError):
            _register(engine, hasher, Mock(), username="robert", email="bob@example.com")


class TestVerifyEmailUseCase:
    """Tests for VerifyEmailUseCase."""

    def test_token_is_single_use(self, engine, hasher) -> None:
        mailer = Mock()
        user = _register(engine, hasher, mailer)
        use_case = VerifyEmailUseCase(SqlUnitOfWork(engine))

        verified = use_case.execute(VerifyEmailCommand(token=_sent_token(mailer)))

        assert verified.id == user.id
        assert verified.is_email_verified is True
        assert verified.is_verified is False
        with pytest.raises(InvalidVerificationTokenError):
            use_case.execute(VerifyEmailCommand(token=_sent_token(mailer)))

    def test_expired_token(self, engine, hasher) -> None:
        mailer = Mock()
        user = _register(engine, hasher, mailer, ttl_hours=-1)
        with pytest.raises(InvalidVerificationTokenError):
            VerifyEmailUseCase(SqlUnitOfWork(engine)).execute(
                VerifyEmailCommand(token=_sent_token(mailer))
            )
        assert get_user(engine, user.id).is_email_verified is False

    def test_unknown_token(self, engine) -> None:
        with pytest.raises(InvalidVerificationTokenError):
            VerifyEmailUseCase(SqlUnitOfWork(engine)).execute(
                VerifyEmailCommand(token="deadbeef")
            )

    def test_can_grant_trading(self, engine, hasher) -> None:
        """With the flag on, a confirmed email also clears the account."""
        mailer = Mock()
        _register(engine, hasher, mailer)
        verified = VerifyEmailUseCase(SqlUnitOfWork(engine), grants_trading=True).execute(
            VerifyEmailCommand(token=_sent_token(mailer))
        )
        assert verified.is_verified is True


class TestAuthenticateUserUseCase:
    """Tests for AuthenticateUserUseCase."""

    def test_valid_credentials(self, engine, hasher) -> None:
        user = make_user(engine, password_hash="hashed:pw")
        result = AuthenticateUserUseCase(SqlUnitOfWork(engine), hasher).execute(
            AuthenticateCommand(username="alice", password="pw")
        )
        assert result.id == user.id

    @pytest.mark.parametrize("username, password", [("alice", "wrong"), ("nobody", "pw")])
    def test_bad_credentials(self, engine, hasher, username, password) -> None:
        make_user(engine, password_hash="hashed:pw")
        with pytest.raises(InvalidCredentialsError):
            AuthenticateUserUseCase(SqlUnitOfWork(engine), hasher).execute(
                AuthenticateCommand(username=username, password=password)
            )

    def test_unconfirmed_email(self, engine, hasher) -> None:
        make_user(engine, password_hash="hashed:pw", is_email_verified=False)
        with pytest.raises(EmailNotVerifiedError):
            AuthenticateUserUseCase(SqlUnitOfWork(engine), hasher).execute(
                AuthenticateCommand(username="alice", password="pw")
            )


class TestKycUseCases:
    """Tests for the KYC submission and review use cases."""

    def test_status_before_and_after_review(self, engine) -> None:
        user = make_user(engine)
        status = GetKycStatusUseCase(SqlUnitOfWork(engine))

        assert status.execute(user.id).status == "none"
        assert status.execute(user.id).record is None

        record = SubmitKycUseCase(SqlUnitOfWork(engine)).execute(
            SubmitKycCommand(user_id=user.id, document_type="passport", document_id="X1")
        )
        assert status.execute(user.id).status == "pending"

        DecideKycUseCase(SqlUnitOfWork(engine)).execute(
            DecideKycCommand(kyc_id=record.id, status="approved", admin_notes="ok")
        )
        after = status.execute(user.id)
        assert after.status == "approved"
        assert after.record.admin_notes == "ok"
        assert get_user(engine, user.id).is_verified is True

    def test_unknown_decision(self, engine) -> None:
        with pytest.raises(InvalidDecisionError):
            DecideKycUseCase(SqlUnitOfWork(engine)).execute(
                DecideKycCommand(kyc_id=1, status="maybe")
            )


class TestCreateTransactionUseCase:
    """Tests for CreateTransactionUseCase."""

    def test_deposit(self, engine) -> None:
        user = make_user(engine)
        result = CreateTransactionUseCase(SqlUnitOfWork(engine)).execute(
            CreateTransactionCommand(user_id=user.id, type="deposit", amount=Decimal("50"))
        )
        assert result.status == "completed"
        assert result.amount == Decimal("50.00")
        assert result.duration == 1

    def test_unknown_type(self, engine) -> None:
        user = make_user(engine)
        with pytest.raises(UnknownTransactionTypeError):
            CreateTransactionUseCase(SqlUnitOfWork(engine)).execute(
                CreateTransactionCommand(user_id=user.id, type="swap", amount=Decimal("1"))
            )


class TestWatchlistUseCases:
    """Tests for the watchlist use cases."""

    def _add(self, engine, user_id: int, symbol: str = " msft "):
        return AddWatchlistEntryUseCase(SqlUnitOfWork(engine)).execute(
            AddWatchlistEntryCommand(
                user_id=user_id,
                asset_symbol=symbol,
                asset_name="Microsoft",
                asset_type="stock",
            )
        )

    def test_add_list_remove(self, engine) -> None:
        user = make_user(engine)
        entry = self._add(engine, user.id)
        assert entry.asset_symbol == "MSFT"

        listing = ListWatchlistUseCase(SqlUnitOfWork(engine))
        assert [e.id for e in listing.execute(user.id)] == [entry.id]

        RemoveWatchlistEntryUseCase(SqlUnitOfWork(engine)).execute(user.id, entry.id)
        assert listing.execute(user.id) == []

    def test_cannot_remove_foreign_entry(self, engine) -> None:
        owner = make_user(engine, "owner")
        other = make_user(engine, "other")
        entry = self._add(engine, owner.id)

        with pytest.raises(WatchlistEntryNotFoundError):
            RemoveWatchlistEntryUseCase(SqlUnitOfWork(engine)).execute(other.id, entry.id)

        remaining = ListWatchlistUseCase(SqlUnitOfWork(engine)).execute(owner.id)
        assert len(remaining) == 1


class TestGetAdminDashboardUseCase:
    """Tests for GetAdminDashboardUseCase."""

    def test_counts(self, engine) -> None:
        # the bootstrap administrator is verified and holds 0.00
        make_user(engine, "rich", balance=Decimal("100.00"), is_verified=True)
        make_user(engine, "poor", balance=Decimal("0.50"))
        with SqlUnitOfWork(engine) as uow:
            pending_user = uow.users.get_by_username("rich")
        CreateTransactionUseCase(SqlUnitOfWork(engine)).execute(
            CreateTransactionCommand(
                user_id=pending_user.id, type="withdrawal", amount=Decimal("10")
            )
        )

        dashboard = GetAdminDashboardUseCase(SqlUnitOfWork(engine)).execute()

        assert dashboard.total_users == 3
        assert dashboard.verified_users == 2
        assert dashboard.unverified_users == 1
        assert dashboard.verified_percentage == 67
        assert dashboard.pending_kyc == 0
        assert dashboard.pending_transactions == {
            "deposit": 0,
            "withdrawal": 1,
            "buy": 0,
            "sell": 0,
        }
        assert dashboard.total_balance == Decimal("100.50")
        assert dashboard.recent_users[0].username == "poor"
