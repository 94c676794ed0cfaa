"""Health check endpoints.

Provides endpoints for monitoring service health and readiness.
"""

from fastapi import APIRouter
from pydantic import BaseModel
from sqlalchemy import text

from mercato.infrastructure.config import settings
from mercato.infrastructure.database import session_scope

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    service: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response schema."""

    status: str
    repository: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check service health.

    Returns:
        Health status with service name and version.
    """
    return HealthResponse(
        status="healthy",
        service="mercato-catalog",
        version=settings.api_version,
    )


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check() -> ReadinessResponse:
    """Check if service is ready to accept requests.

    With the database backend a trivial query must succeed; a failure
    propagates and is reported as a 500 by the error handler.
    """
    if settings.repository_backend == "database":
        async with session_scope() as session:
            await session.execute(text("SELECT 1"))
    return ReadinessResponse(status="ready", repository=settings.repository_backend)
