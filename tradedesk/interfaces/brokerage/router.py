"""
FastAPI router for the brokerage bounded context (user side).

KYC submission, wallet, transactions, portfolio and watchlist.
Every route acts on behalf of the authenticated caller; the user id
never comes from the request body.

All routes delegate to use cases. No business logic here.
Error mapping is handled by centralized error handlers.
"""

from fastapi import APIRouter, Depends, status

from tradedesk.application.brokerage.add_watchlist_entry import (
    AddWatchlistEntryUseCase,
)
from tradedesk.application.brokerage.buy_asset import BuyAssetUseCase
from tradedesk.application.brokerage.create_transaction import (
    CreateTransactionUseCase,
)
from tradedesk.application.brokerage.dtos import (
    AddWatchlistEntryCommand,
    BuyAssetCommand,
    CreateTransactionCommand,
    SubmitKycCommand,
    UserResult,
)
from tradedesk.application.brokerage.get_kyc_status import GetKycStatusUseCase
from tradedesk.application.brokerage.get_wallet import GetWalletUseCase
from tradedesk.application.brokerage.list_portfolio import ListPortfolioUseCase
from tradedesk.application.brokerage.list_transactions import (
    ListTransactionsUseCase,
)
from tradedesk.application.brokerage.list_watchlist import ListWatchlistUseCase
from tradedesk.application.brokerage.remove_watchlist_entry import (
    RemoveWatchlistEntryUseCase,
)
from tradedesk.application.brokerage.submit_kyc import SubmitKycUseCase
from tradedesk.domain.brokerage.entities import OrderType, TradeTerms
from tradedesk.interfaces.brokerage.dependencies import (
    get_add_watchlist_entry_use_case,
    get_buy_asset_use_case,
    get_create_transaction_use_case,
    get_kyc_status_use_case,
    get_list_portfolio_use_case,
    get_list_transactions_use_case,
    get_list_watchlist_use_case,
    get_remove_watchlist_entry_use_case,
    get_submit_kyc_use_case,
    get_wallet_use_case,
)
from tradedesk.interfaces.brokerage.schemas import (
    BuyRequest,
    ErrorResponse,
    KycResponse,
    KycStatusResponse,
    KycSubmitRequest,
    PortfolioEntryResponse,
    PurchaseResponse,
    TradeTermsFields,
    TransactionRequest,
    TransactionResponse,
    WalletResponse,
    WatchlistEntryResponse,
    WatchlistRequest,
)
from tradedesk.interfaces.dependencies import get_current_user

router = APIRouter(tags=["brokerage"])


def _terms(request: TradeTermsFields) -> TradeTerms:
    return TradeTerms(
        leverage=request.leverage,
        duration=request.duration,
        take_profit=request.take_profit,
        stop_loss=request.stop_loss,
        margin=request.margin,
        order_type=OrderType(request.order_type) if request.order_type else None,
    )


# ── KYC ──────────────────────────────────────────────────────────


@router.post(
    "/kyc",
    response_model=KycResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
    summary="Submit KYC documents",
    description="Submit identity documents for review. One submission per user.",
)
def submit_kyc(
    request: KycSubmitRequest,
    user: UserResult = Depends(get_current_user),
    use_case: SubmitKycUseCase = Depends(get_submit_kyc_use_case),
) -> KycResponse:
    command = SubmitKycCommand(
        user_id=user.id,
        document_type=request.document_type,
        document_id=request.document_id,
        document_path=request.document_path,
    )
    return KycResponse.model_validate(use_case.execute(command))


@router.get(
    "/kyc/status",
    response_model=KycStatusResponse,
    summary="KYC status",
    description="Review state of the caller's KYC submission.",
)
def kyc_status(
    user: UserResult = Depends(get_current_user),
    use_case: GetKycStatusUseCase = Depends(get_kyc_status_use_case),
) -> KycStatusResponse:
    return KycStatusResponse.model_validate(use_case.execute(user.id))


# ── Wallet & transactions ───────────────────────────────────────


@router.get(
    "/wallet",
    response_model=WalletResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Wallet",
    description="Balance and currency of the caller's wallet.",
)
def get_wallet(
    user: UserResult = Depends(get_current_user),
    use_case: GetWalletUseCase = Depends(get_wallet_use_case),
) -> WalletResponse:
    return WalletResponse.model_validate(use_case.execute(user.id))


@router.post(
    "/transactions",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        501: {"model": ErrorResponse},
    },
    summary="Create a transaction",
    description=(
        "Deposits complete immediately. Withdrawals wait for admin approval "
        "and need KYC. Buys execute immediately and need KYC. Sells are not "
        "supported."
    ),
)
def create_transaction(
    request: TransactionRequest,
    user: UserResult = Depends(get_current_user),
    use_case: CreateTransactionUseCase = Depends(get_create_transaction_use_case),
) -> TransactionResponse:
    command = CreateTransactionCommand(
        user_id=user.id,
        type=request.type,
        amount=request.amount,
        asset_symbol=request.asset_symbol,
        asset_type=request.asset_type,
        quantity=request.quantity,
        price=request.price,
        terms=_terms(request),
    )
    return TransactionResponse.model_validate(use_case.execute(command))


@router.get(
    "/transactions",
    response_model=list[TransactionResponse],
    summary="Transaction history",
    description="The caller's transactions, oldest first.",
)
def list_transactions(
    user: UserResult = Depends(get_current_user),
    use_case: ListTransactionsUseCase = Depends(get_list_transactions_use_case),
) -> list[TransactionResponse]:
    return [TransactionResponse.model_validate(t) for t in use_case.execute(user.id)]


# ── Portfolio ────────────────────────────────────────────────────


@router.post(
    "/portfolio",
    response_model=PurchaseResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
    summary="Buy an asset",
    description="Debit quantity x price from the wallet and record the holding.",
)
def buy_asset(
    request: BuyRequest,
    user: UserResult = Depends(get_current_user),
    use_case: BuyAssetUseCase = Depends(get_buy_asset_use_case),
) -> PurchaseResponse:
    command = BuyAssetCommand(
        user_id=user.id,
        asset_symbol=request.asset_symbol,
        asset_type=request.asset_type,
        quantity=request.quantity,
        price=request.price,
        terms=_terms(request),
    )
    return PurchaseResponse.model_validate(use_case.execute(command))


@router.get(
    "/portfolio",
    response_model=list[PortfolioEntryResponse],
    summary="Portfolio",
    description="Holdings recorded from the caller's purchases.",
)
def list_portfolio(
    user: UserResult = Depends(get_current_user),
    use_case: ListPortfolioUseCase = Depends(get_list_portfolio_use_case),
) -> list[PortfolioEntryResponse]:
    return [PortfolioEntryResponse.model_validate(e) for e in use_case.execute(user.id)]


# ── Watchlist ────────────────────────────────────────────────────


@router.get(
    "/watchlist",
    response_model=list[WatchlistEntryResponse],
    summary="Watchlist",
)
def list_watchlist(
    user: UserResult = Depends(get_current_user),
    use_case: ListWatchlistUseCase = Depends(get_list_watchlist_use_case),
) -> list[WatchlistEntryResponse]:
    return [WatchlistEntryResponse.model_validate(e) for e in use_case.execute(user.id)]


@router.post(
    "/watchlist",
    response_model=WatchlistEntryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add to watchlist",
)
def add_watchlist_entry(
    request: WatchlistRequest,
    user: UserResult = Depends(get_current_user),
    use_case: AddWatchlistEntryUseCase = Depends(get_add_watchlist_entry_use_case),
) -> WatchlistEntryResponse:
    command = AddWatchlistEntryCommand(
        user_id=user.id,
        asset_symbol=request.asset_symbol,
        asset_name=request.asset_name,
        asset_type=request.asset_type,
        exchange=request.exchange,
    )
    return WatchlistEntryResponse.model_validate(use_case.execute(command))


@router.delete(
    "/watchlist/{entry_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
    summary="Remove from watchlist",
)
def remove_watchlist_entry(
    entry_id: int,
    user: UserResult = Depends(get_current_user),
    use_case: RemoveWatchlistEntryUseCase = Depends(get_remove_watchlist_entry_use_case),
) -> None:
    use_case.execute(user.id, entry_id)
