"""
Health Check Handler

Provides health check endpoints for monitoring and the keep-alive pinger.

    GET /api/health-check   → {"status": "UP"}     (no database access)
    GET /api/health         → HealthResponse       (includes a database probe)
"""

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from audio_vault.api.dependencies.database import DbSession
from audio_vault.config.settings import settings
from audio_vault.shared.core.logging import logger
from audio_vault.shared.schemas.common import HealthCheckResponse, HealthResponse


router = APIRouter()


@router.get("/health-check", response_model=HealthCheckResponse)
async def health_check():
    """
    Liveness endpoint polled by the keep-alive pinger.

    Returns:
        {"status": "UP"}
    """
    return HealthCheckResponse()


@router.get("/health", response_model=HealthResponse)
async def detailed_health_check(db: DbSession):
    """
    Detailed health check.

    Reports "degraded" instead of failing when the database does not answer,
    so load balancers can tell a slow database from a dead process.
    """
    database = "connected"
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("Health check database probe failed", error=str(e))
        database = "unavailable"

    return HealthResponse(
        status="healthy" if database == "connected" else "degraded",
        version=settings.APP_VERSION,
        database=database,
    )
