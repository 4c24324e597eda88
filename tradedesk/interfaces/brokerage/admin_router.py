"""
FastAPI router for the admin approval surface.

Lists pending KYC submissions and transactions, applies decisions,
and exposes the user list and dashboard. Every route requires an
administrator. All routes delegate to use cases.
"""

from fastapi import APIRouter, Depends

from tradedesk.application.brokerage.decide_kyc import DecideKycUseCase
from tradedesk.application.brokerage.decide_transaction import (
    DecideTransactionUseCase,
)
from tradedesk.application.brokerage.dtos import (
    DecideKycCommand,
    DecideTransactionCommand,
)
from tradedesk.application.brokerage.get_admin_dashboard import (
    GetAdminDashboardUseCase,
)
from tradedesk.application.brokerage.list_pending_kyc import ListPendingKycUseCase
from tradedesk.application.brokerage.list_pending_transactions import (
    ListPendingTransactionsUseCase,
)
from tradedesk.application.brokerage.list_users import ListUsersUseCase
from tradedesk.interfaces.brokerage.dependencies import (
    get_admin_dashboard_use_case,
    get_decide_kyc_use_case,
    get_decide_transaction_use_case,
    get_list_pending_kyc_use_case,
    get_list_pending_transactions_use_case,
    get_list_users_use_case,
)
from tradedesk.interfaces.brokerage.schemas import (
    DashboardResponse,
    ErrorResponse,
    KycDecisionRequest,
    KycResponse,
    TransactionDecisionRequest,
    TransactionResponse,
    UserResponse,
)
from tradedesk.interfaces.dependencies import require_admin

router = APIRouter(
    prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)]
)

DECISION_ERRORS = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
}


@router.get(
    "/kyc/pending",
    response_model=list[KycResponse],
    summary="Pending KYC submissions",
    description="KYC submissions awaiting review, oldest first.",
)
def list_pending_kyc(
    use_case: ListPendingKycUseCase = Depends(get_list_pending_kyc_use_case),
) -> list[KycResponse]:
    return [KycResponse.model_validate(r) for r in use_case.execute()]


@router.put(
    "/kyc/{kyc_id}",
    response_model=KycResponse,
    responses=DECISION_ERRORS,
    summary="Decide a KYC submission",
    description="Approve (verifies the user) or reject (reason required).",
)
def decide_kyc(
    kyc_id: int,
    request: KycDecisionRequest,
    use_case: DecideKycUseCase = Depends(get_decide_kyc_use_case),
) -> KycResponse:
    command = DecideKycCommand(
        kyc_id=kyc_id,
        status=request.status,
        rejection_reason=request.rejection_reason,
        admin_notes=request.admin_notes,
    )
    return KycResponse.model_validate(use_case.execute(command))


@router.get(
    "/transactions/pending",
    response_model=list[TransactionResponse],
    summary="Pending transactions",
    description="Transactions awaiting a decision, oldest first.",
)
def list_pending_transactions(
    use_case: ListPendingTransactionsUseCase = Depends(
        get_list_pending_transactions_use_case
    ),
) -> list[TransactionResponse]:
    return [TransactionResponse.model_validate(t) for t in use_case.execute()]


@router.put(
    "/transactions/{transaction_id}",
    response_model=TransactionResponse,
    responses=DECISION_ERRORS,
    summary="Decide a transaction",
    description=(
        "Complete or reject a pending transaction. Completing a withdrawal "
        "debits the wallet; if funds are short the withdrawal stays pending."
    ),
)
def decide_transaction(
    transaction_id: int,
    request: TransactionDecisionRequest,
    use_case: DecideTransactionUseCase = Depends(get_decide_transaction_use_case),
) -> TransactionResponse:
    command = DecideTransactionCommand(
        transaction_id=transaction_id, status=request.status
    )
    return TransactionResponse.model_validate(use_case.execute(command))


@router.get(
    "/users",
    response_model=list[UserResponse],
    summary="All users",
    description="Every registered user, newest first, without secrets.",
)
def list_users(
    use_case: ListUsersUseCase = Depends(get_list_users_use_case),
) -> list[UserResponse]:
    return [UserResponse.model_validate(u) for u in use_case.execute()]


@router.get(
    "/dashboard",
    response_model=DashboardResponse,
    summary="Admin dashboard",
    description="User counts, pending reviews and total balances.",
)
def dashboard(
    use_case: GetAdminDashboardUseCase = Depends(get_admin_dashboard_use_case),
) -> DashboardResponse:
    return DashboardResponse.model_validate(use_case.execute())
