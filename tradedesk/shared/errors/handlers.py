"""
Centralized error handlers for FastAPI.

Maps domain errors to HTTP responses by their failure kind.
No stack traces or internal details are exposed to clients.
All error responses use the ErrorResponse schema:

    {"error": <kind>, "detail": <message>}
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from tradedesk.domain.backoffice.errors import BackofficeDomainError
from tradedesk.domain.brokerage.errors import (
    AuthenticationError,
    BrokerageDomainError,
    ConflictError,
    InsufficientFundsError,
    NotFoundError,
    OperationNotSupportedError,
    ValidationFailedError,
    VerificationRequiredError,
)

logger = logging.getLogger(__name__)

HTTP_400 = 400
HTTP_401 = 401
HTTP_403 = 403
HTTP_404 = 404
HTTP_409 = 409
HTTP_500 = 500
HTTP_501 = 501

STATUS_BY_KIND = {
    ValidationFailedError.kind: HTTP_400,
    ConflictError.kind: HTTP_409,
    VerificationRequiredError.kind: HTTP_403,
    InsufficientFundsError.kind: HTTP_400,
    NotFoundError.kind: HTTP_404,
    OperationNotSupportedError.kind: HTTP_501,
    AuthenticationError.kind: HTTP_401,
}


def _error_response(status_code: int, error: str, detail: str | None = None) -> JSONResponse:
    """Build a consistent JSON error response."""
    body: dict[str, str | None] = {"error": error}
    if detail:
        body["detail"] = detail
    return JSONResponse(status_code=status_code, content=body)


def _domain_response(exc: BrokerageDomainError | BackofficeDomainError) -> JSONResponse:
    status_code = STATUS_BY_KIND.get(exc.kind)
    if status_code is None:
        logger.error("Unmapped domain error %s: %s", type(exc).__name__, exc.message)
        return _error_response(HTTP_500, "internal_error", "Internal server error")
    return _error_response(status_code, exc.kind, exc.message)


def register_error_handlers(app: FastAPI) -> None:
    """Register all domain error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(VerificationRequiredError)
    async def handle_verification_required(
        _request: Request, exc: VerificationRequiredError
    ) -> JSONResponse:
        """Handle actions attempted before KYC approval."""
        logger.warning("Verification required: user=%d, action=%s", exc.user_id, exc.action)
        return _domain_response(exc)

    @app.exception_handler(InsufficientFundsError)
    async def handle_insufficient_funds(
        _request: Request, exc: InsufficientFundsError
    ) -> JSONResponse:
        """Handle debits the wallet cannot cover."""
        logger.warning("Insufficient funds: required=%s", exc.required)
        return _domain_response(exc)

    @app.exception_handler(AuthenticationError)
    async def handle_authentication(
        _request: Request, exc: AuthenticationError
    ) -> JSONResponse:
        """Handle failed logins without revealing which check failed."""
        logger.warning("Authentication failed: %s", type(exc).__name__)
        return _domain_response(exc)

    @app.exception_handler(BrokerageDomainError)
    async def handle_brokerage_domain(
        _request: Request, exc: BrokerageDomainError
    ) -> JSONResponse:
        """Handle the remaining brokerage errors by kind."""
        logger.warning("Brokerage request refused (%s): %s", exc.kind, exc.message)
        return _domain_response(exc)

    @app.exception_handler(BackofficeDomainError)
    async def handle_backoffice_domain(
        _request: Request, exc: BackofficeDomainError
    ) -> JSONResponse:
        """Handle back-office errors by kind."""
        logger.warning("Back-office request refused (%s): %s", exc.kind, exc.message)
        return _domain_response(exc)

    @app.exception_handler(Exception)
    async def handle_unexpected(
        _request: Request, exc: Exception
    ) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(HTTP_500, "internal_error", "Internal server error")
