"""Health check endpoints."""

from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from investrisk.core.config import settings
from investrisk.core.logging import get_logger
from investrisk.database.connection import db_healthcheck
from investrisk.schemas.common import HealthResponse


router = APIRouter(prefix="/health")

logger = get_logger("health")


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check",
    description="Check the health status of the API and its database.",
)
async def health_check() -> HealthResponse:
    """
    Perform health check on API and dependencies.

    Returns overall health status and individual service checks.
    """
    checks = {"database": await db_healthcheck()}

    return HealthResponse(
        status="healthy" if all(checks.values()) else "unhealthy",
        version=settings.app_version,
        timestamp=datetime.now(UTC),
        checks=checks,
    )


@router.get(
    "/ready",
    summary="Readiness check",
    description="Check if the API is ready to accept traffic.",
)
async def readiness_check():
    """
    Kubernetes-style readiness probe.

    Returns 200 if ready, 503 otherwise.
    """
    if not await db_healthcheck():
        return JSONResponse(status_code=503, content={"ready": False})
    return {"ready": True}
