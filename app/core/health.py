"""Health check endpoints."""

from typing import Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.database import get_session_factory, store_boundary
from app.core.exceptions import ShopInsightsError
from app.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: Literal["ok", "unhealthy"]
    database: Literal["connected", "disconnected"] | None = None


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe; does not touch the store."""
    logger.debug("health.check_started")
    return HealthResponse(status="ok")


@router.get("/health/ready", response_model=HealthResponse)
async def readiness_check(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> HealthResponse:
    """Readiness probe including store connectivity.

    Args:
        session_factory: Shared session factory.

    Returns:
        Health status with database state.
    """
    try:
        async with store_boundary("health.ready"), session_factory() as session:
            await session.execute(text("SELECT 1"))
    except ShopInsightsError:
        # store_boundary already logged the cause
        return HealthResponse(status="unhealthy", database="disconnected")

    logger.debug("health.database_connected")
    return HealthResponse(status="ok", database="connected")
