"""
Health check router.

Reports the application version and whether the database answers.
A failing database yields ``degraded`` with HTTP 503 so readiness probes
take the instance out of rotation.
"""

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from tradedesk.core.config import settings
from tradedesk.interfaces.brokerage.schemas import HealthResponse
from tradedesk.interfaces.dependencies import get_engine

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns application version and database reachability.",
)
def health_check(
    response: Response, engine: Engine = Depends(get_engine)
) -> HealthResponse:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.error("Health check could not reach the database", exc_info=True)
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(
            status="degraded", version=settings.version, database="unavailable"
        )
    return HealthResponse(status="ok", version=settings.version)
