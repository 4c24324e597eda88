"""
Dependency injection for the brokerage bounded context.

Provides FastAPI dependency functions that wire infrastructure
adapters into use cases via constructor injection.
These are the composition root for the brokerage context.
"""

from functools import lru_cache

from fastapi import Depends

from tradedesk.application.brokerage.add_watchlist_entry import (
    AddWatchlistEntryUseCase,
)
from tradedesk.application.brokerage.authenticate_user import AuthenticateUserUseCase
from tradedesk.application.brokerage.buy_asset import BuyAssetUseCase
from tradedesk.application.brokerage.create_transaction import (
    CreateTransactionUseCase,
)
from tradedesk.application.brokerage.decide_kyc import DecideKycUseCase
from tradedesk.application.brokerage.decide_transaction import (
    DecideTransactionUseCase,
)
from tradedesk.application.brokerage.get_admin_dashboard import (
    GetAdminDashboardUseCase,
)
from tradedesk.application.brokerage.get_kyc_status import GetKycStatusUseCase
from tradedesk.application.brokerage.get_wallet import GetWalletUseCase
from tradedesk.application.brokerage.list_pending_kyc import ListPendingKycUseCase
from tradedesk.application.brokerage.list_pending_transactions import (
    ListPendingTransactionsUseCase,
)
from tradedesk.application.brokerage.list_portfolio import ListPortfolioUseCase
from tradedesk.application.brokerage.list_transactions import (
    ListTransactionsUseCase,
)
from tradedesk.application.brokerage.list_users import ListUsersUseCase
from tradedesk.application.brokerage.list_watchlist import ListWatchlistUseCase
from tradedesk.application.brokerage.register_user import RegisterUserUseCase
from tradedesk.application.brokerage.remove_watchlist_entry import (
    RemoveWatchlistEntryUseCase,
)
from tradedesk.application.brokerage.submit_kyc import SubmitKycUseCase
from tradedesk.application.brokerage.verify_email import VerifyEmailUseCase
from tradedesk.core.config import settings
from tradedesk.domain.brokerage.ports import (
    PasswordHasher,
    UnitOfWork,
    VerificationMailer,
)
from tradedesk.infrastructure.brokerage.password_hasher import PasslibPasswordHasher
from tradedesk.infrastructure.brokerage.verification_mailer import (
    LoggingVerificationMailer,
    SendGridVerificationMailer,
)
from tradedesk.interfaces.dependencies import get_unit_of_work


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasslibPasswordHasher()


@lru_cache
def get_verification_mailer() -> VerificationMailer:
    """SendGrid when an API key is configured, the in-memory mailer otherwise."""
    if settings.sendgrid_api_key:
        return SendGridVerificationMailer(
            api_key=settings.sendgrid_api_key,
            sender=settings.mail_from,
            base_url=settings.public_base_url,
            token_ttl_hours=settings.verification_token_ttl_hours,
        )
    return LoggingVerificationMailer(base_url=settings.public_base_url)


# ── Accounts ─────────────────────────────────────────────────────


def get_register_user_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: PasswordHasher = Depends(get_password_hasher),
    mailer: VerificationMailer = Depends(get_verification_mailer),
) -> RegisterUserUseCase:
    """Build RegisterUserUseCase with its infrastructure dependencies."""
    return RegisterUserUseCase(
        uow=uow,
        hasher=hasher,
        mailer=mailer,
        token_ttl_hours=settings.verification_token_ttl_hours,
        currency=settings.default_currency,
    )


def get_verify_email_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> VerifyEmailUseCase:
    return VerifyEmailUseCase(
        uow=uow, grants_trading=settings.email_verification_grants_trading
    )


def get_authenticate_user_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> AuthenticateUserUseCase:
    return AuthenticateUserUseCase(uow=uow, hasher=hasher)


# ── KYC ──────────────────────────────────────────────────────────


def get_submit_kyc_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> SubmitKycUseCase:
    return SubmitKycUseCase(uow)


def get_kyc_status_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> GetKycStatusUseCase:
    return GetKycStatusUseCase(uow)


def get_decide_kyc_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> DecideKycUseCase:
    return DecideKycUseCase(uow)


def get_list_pending_kyc_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> ListPendingKycUseCase:
    return ListPendingKycUseCase(uow)


# ── Wallet, transactions, portfolio ─────────────────────────────


def get_wallet_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> GetWalletUseCase:
    return GetWalletUseCase(uow)


def get_create_transaction_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> CreateTransactionUseCase:
    return CreateTransactionUseCase(uow, currency=settings.default_currency)


def get_decide_transaction_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> DecideTransactionUseCase:
    return DecideTransactionUseCase(uow, currency=settings.default_currency)


def get_list_transactions_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> ListTransactionsUseCase:
    return ListTransactionsUseCase(uow)


def get_list_pending_transactions_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> ListPendingTransactionsUseCase:
    return ListPendingTransactionsUseCase(uow)


def get_buy_asset_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> BuyAssetUseCase:
    return BuyAssetUseCase(uow, currency=settings.default_currency)


def get_list_portfolio_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> ListPortfolioUseCase:
    return ListPortfolioUseCase(uow)


# ── Watchlist ────────────────────────────────────────────────────


def get_add_watchlist_entry_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> AddWatchlistEntryUseCase:
    return AddWatchlistEntryUseCase(uow)


def get_list_watchlist_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> ListWatchlistUseCase:
    return ListWatchlistUseCase(uow)


def get_remove_watchlist_entry_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> RemoveWatchlistEntryUseCase:
    return RemoveWatchlistEntryUseCase(uow)


# ── Admin ────────────────────────────────────────────────────────


def get_list_users_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> ListUsersUseCase:
    return ListUsersUseCase(uow)


def get_admin_dashboard_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> GetAdminDashboardUseCase:
    return GetAdminDashboardUseCase(uow)
