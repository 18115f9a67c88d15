"""ShopInsights ASGI application.

Serve with ``uvicorn app.main:app`` or the ``shopinsights`` console script.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import get_settings
from app.core.database import dispose_engine
from app.core.exceptions import register_exception_handlers
from app.core.health import router as health_router
from app.core.logging import configure_logging, get_logger
from app.core.middleware import RequestIdMiddleware
from app.features.analytics.routes import router as analytics_router
from app.features.lookups.routes import router as lookups_router

logger = get_logger(__name__)

ROUTERS: tuple[APIRouter, ...] = (health_router, analytics_router, lookups_router)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Configure logging on startup and close the connection pool on shutdown."""
    settings = get_settings()
    configure_logging()
    logger.info(
        "shopinsights.started",
        app_env=settings.app_env,
        query_timeout_seconds=settings.query_timeout_seconds,
    )
    try:
        yield
    finally:
        await dispose_engine()
        logger.info("shopinsights.stopped")


def create_app() -> FastAPI:
    """Assemble middleware, error handlers and routers into one application."""
    settings = get_settings()
    docs_enabled = settings.is_development

    app = FastAPI(
        title=settings.app_name,
        description="Read-only analytics over customers, products and orders",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
    )

    # Added last runs first: request ids are bound before CORS sees the request
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins if docs_enabled else [],
        allow_methods=["GET"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestIdMiddleware)
    register_exception_handlers(app)

    for router in ROUTERS:
        app.include_router(router)

    return app


app = create_app()


def run() -> None:
    """Console entry point."""
    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development,
    )
