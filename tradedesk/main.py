"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (one per bounded context, plus the admin surface)
- Error handlers (centralized domain-to-HTTP mapping)
- Security middleware (headers, CORS, rate limiting)
- Logging configuration
- Database schema and bootstrap administrator on startup

No business logic belongs here.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded

from tradedesk.core.config import settings
from tradedesk.infrastructure.database import init_db
from tradedesk.interfaces.backoffice.router import admin_router as backoffice_admin_router
from tradedesk.interfaces.backoffice.router import router as backoffice_router
from tradedesk.interfaces.brokerage.admin_router import router as admin_router
from tradedesk.interfaces.brokerage.auth_router import router as auth_router
from tradedesk.interfaces.brokerage.dependencies import get_password_hasher
from tradedesk.interfaces.brokerage.router import router as brokerage_router
from tradedesk.interfaces.dependencies import get_engine
from tradedesk.interfaces.health import router as health_router
from tradedesk.shared.errors.handlers import register_error_handlers
from tradedesk.shared.logging import configure_logging
from tradedesk.shared.security.headers import SecurityHeadersMiddleware
from tradedesk.shared.security.rate_limiting import (
    limiter,
    rate_limit_exceeded_handler,
)

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: create the schema, then serve."""
    init_db(get_engine(), settings, get_password_hasher())
    logger.info("%s %s started", settings.project_name, settings.version)
    yield
    get_engine().dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Registers routers, error handlers, and security middleware.
    This is the composition root of the application.

    Returns:
        A fully configured FastAPI application instance.
    """
    configure_logging(level=settings.log_level, debug=settings.debug)

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    # --- Rate Limiting ---
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # --- Security Middleware ---
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Authorization", "Content-Type"],
    )

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(health_router, prefix=API_PREFIX)
    app.include_router(auth_router, prefix=API_PREFIX)
    app.include_router(brokerage_router, prefix=API_PREFIX)
    app.include_router(admin_router, prefix=API_PREFIX)
    app.include_router(backoffice_admin_router, prefix=API_PREFIX)
    app.include_router(backoffice_router, prefix=API_PREFIX)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    uvicorn.run("tradedesk.main:app", host="0.0.0.0", port=8000)
