"""
FastAPI router for registration, login and email verification.

All routes delegate to use cases. No business logic here.
Registration and login are rate limited per client address.
"""

from fastapi import APIRouter, Depends, Request, status

from tradedesk.application.brokerage.authenticate_user import AuthenticateUserUseCase
from tradedesk.application.brokerage.dtos import (
    AuthenticateCommand,
    RegisterUserCommand,
    UserResult,
    VerifyEmailCommand,
)
from tradedesk.application.brokerage.register_user import RegisterUserUseCase
from tradedesk.application.brokerage.verify_email import VerifyEmailUseCase
from tradedesk.interfaces.brokerage.dependencies import (
    get_authenticate_user_use_case,
    get_register_user_use_case,
    get_verify_email_use_case,
)
from tradedesk.interfaces.brokerage.schemas import (
    ErrorResponse,
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
    VerifyEmailRequest,
)
from tradedesk.interfaces.dependencies import get_current_user
from tradedesk.shared.security.rate_limiting import AUTH_RATE_LIMIT, limiter
from tradedesk.shared.security.tokens import create_access_token

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
    summary="Register an account",
    description="Create a user with an empty wallet and send a verification email.",
)
@limiter.limit(AUTH_RATE_LIMIT)
def register(
    request: Request,
    payload: RegisterRequest,
    use_case: RegisterUserUseCase = Depends(get_register_user_use_case),
) -> UserResponse:
    command = RegisterUserCommand(
        username=payload.username,
        email=payload.email,
        password=payload.password,
        first_name=payload.first_name,
        last_name=payload.last_name,
    )
    return UserResponse.model_validate(use_case.execute(command))


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={401: {"model": ErrorResponse}},
    summary="Log in",
    description="Exchange a username and password for a bearer token.",
)
@limiter.limit(AUTH_RATE_LIMIT)
def login(
    request: Request,
    payload: LoginRequest,
    use_case: AuthenticateUserUseCase = Depends(get_authenticate_user_use_case),
) -> TokenResponse:
    user = use_case.execute(
        AuthenticateCommand(username=payload.username, password=payload.password)
    )
    return TokenResponse(
        access_token=create_access_token(user.id),
        user=UserResponse.model_validate(user),
    )


@router.post(
    "/verify-email",
    response_model=UserResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Verify email",
    description="Consume an email verification token.",
)
def verify_email(
    payload: VerifyEmailRequest,
    use_case: VerifyEmailUseCase = Depends(get_verify_email_use_case),
) -> UserResponse:
    user = use_case.execute(VerifyEmailCommand(token=payload.token))
    return UserResponse.model_validate(user)


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Current user",
    description="Profile of the authenticated caller, without secrets.",
)
def me(user: UserResult = Depends(get_current_user)) -> UserResponse:
    return UserResponse.model_validate(user)
