"""
Liveness and readiness probes.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Response, status
from loguru import logger
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from inventory.api.dependencies import get_db_session
from inventory.core.config import settings

router = APIRouter()


class HealthStatus(BaseModel):
    status: str
    version: str
    environment: str


class ComponentStatus(BaseModel):
    name: str
    status: str
    details: Optional[Dict[str, Any]] = None


class DetailedHealthStatus(HealthStatus):
    components: List[ComponentStatus]


async def probe_database(db: AsyncSession) -> ComponentStatus:
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Readiness probe: database unavailable: {e}")
        return ComponentStatus(name="database", status="unhealthy", details={"error": type(e).__name__})
    return ComponentStatus(name="database", status="healthy", details={"type": "postgresql"})


@router.get("", response_model=HealthStatus, summary="Liveness probe")
async def health_check() -> HealthStatus:
    """The process is up and serving requests."""
    return HealthStatus(status="ok", version=settings.VERSION, environment=settings.ENVIRONMENT)


@router.get(
    "/ready",
    response_model=DetailedHealthStatus,
    summary="Readiness probe",
    responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"description": "A dependency is unavailable"}},
)
async def readiness_check(response: Response, db: AsyncSession = Depends(get_db_session)) -> DetailedHealthStatus:
    """
    The catalog can be served: PostgreSQL answers a trivial query.

    Answers 503 with ``status: degraded`` while any component is unhealthy.
    """
    components = [await probe_database(db)]
    ready = all(component.status == "healthy" for component in components)
    if not ready:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return DetailedHealthStatus(
        status="ok" if ready else "degraded",
        version=settings.VERSION,
        environment=settings.ENVIRONMENT,
        components=components,
    )
