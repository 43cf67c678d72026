"""Health check endpoints."""
import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from core.auth import get_container
from services.container import ServiceContainer


logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    database: str
    cache: str


@router.get("/health", response_model=HealthResponse)
async def health_check(
    container: ServiceContainer = Depends(get_container),
) -> HealthResponse:
    """Check application, database and cache health."""
    db_status = "healthy"
    try:
        await container.store.ping()
    except Exception:
        logger.exception("Database health check failed")
        db_status = "unhealthy"

    cache_status = "healthy" if await container.cache.ping() else "unhealthy"

    healthy = db_status == "healthy" and cache_status == "healthy"
    return HealthResponse(
        status="healthy" if healthy else "degraded",
        database=db_status,
        cache=cache_status,
    )
