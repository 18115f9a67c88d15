"""Async SQLAlchemy 2.0 database setup and the store query boundary.

One engine (and therefore one connection pool) exists per process. Request
handlers receive the session factory rather than a single session, because
some queries fan out over several sessions concurrently.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import Any

from sqlalchemy.exc import DataError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.core.config import get_settings
from app.core.exceptions import BadInputError, InternalError, ShopInsightsError
from app.core.logging import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for all models."""

    pass


@lru_cache
def get_engine() -> AsyncEngine:
    """Create the process-wide async engine from settings."""
    settings = get_settings()
    engine: AsyncEngine = create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
    )
    return engine


@lru_cache
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """Create the process-wide async session maker."""
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Dependency returning the shared session factory."""
    return get_session_maker()


async def dispose_engine() -> None:
    """Close pooled connections, used on application shutdown."""
    if get_engine.cache_info().currsize:
        await get_engine().dispose()
        get_engine.cache_clear()
        get_session_maker.cache_clear()


@asynccontextmanager
async def store_boundary(operation: str, **context: Any) -> AsyncIterator[None]:
    """Run a block of store access under a timeout and map its failures.

    Application errors raised inside the block pass through unchanged.
    ``DataError`` means the store rejected a value's format and becomes
    ``BadInputError``; any other driver failure or a timeout becomes
    ``InternalError``. Store detail is logged, never returned.

    Args:
        operation: Dotted name of the query, used in logs.
        **context: Extra log fields (ids, date window, ...).

    Raises:
        BadInputError: The store rejected an input value.
        InternalError: The store failed or did not answer in time.
    """
    settings = get_settings()
    try:
        async with asyncio.timeout(settings.query_timeout_seconds):
            yield
    except ShopInsightsError:
        raise
    except DataError as e:
        logger.warning(
            "store.input_rejected",
            operation=operation,
            error_type=type(e).__name__,
            **context,
        )
        raise BadInputError("Invalid parameter value", details={"operation": operation}) from e
    except TimeoutError as e:
        logger.error(
            "store.query_timeout",
            operation=operation,
            timeout_seconds=settings.query_timeout_seconds,
            **context,
        )
        raise InternalError(details={"operation": operation}) from e
    except (SQLAlchemyError, OSError) as e:
        logger.error(
            "store.query_failed",
            operation=operation,
            error=str(e),
            error_type=type(e).__name__,
            exc_info=True,
            **context,
        )
        raise InternalError(details={"operation": operation}) from e
