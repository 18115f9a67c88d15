"""Test fixtures for analytics module."""

from collections.abc import AsyncGenerator, Callable
from datetime import UTC, datetime
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.database import get_session_factory
from app.features.analytics.service import AnalyticsService
from app.main import app


def make_result(one: Any = None, rows: list[Any] | None = None) -> MagicMock:
    """Build a mock SQLAlchemy Result returning ``one`` and ``rows``."""
    result = MagicMock()
    result.one.return_value = one
    result.all.return_value = rows or []
    return result


@pytest.fixture
def mock_session() -> AsyncMock:
    """Async session mock; configure ``execute``/``get`` per test."""
    return AsyncMock()


@pytest.fixture
def session_factory(mock_session: AsyncMock) -> MagicMock:
    """Session factory whose sessions are all ``mock_session``."""
    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=mock_session)
    context.__aexit__ = AsyncMock(return_value=False)
    return MagicMock(return_value=context)


@pytest.fixture
def service(session_factory: MagicMock) -> AnalyticsService:
    """Analytics service over the mocked session factory."""
    return AnalyticsService(session_factory)


@pytest.fixture
def result_factory() -> Callable[..., MagicMock]:
    """Expose make_result to tests."""
    return make_result


@pytest.fixture
def spending_row() -> SimpleNamespace:
    """Aggregate row for a customer with orders of 100 and 50."""
    return SimpleNamespace(
        order_count=2,
        total_spent=150,
        last_order_date=datetime(2024, 1, 10, tzinfo=UTC),
    )


@pytest.fixture
async def client(session_factory: MagicMock) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client whose requests use the mocked session factory."""

    async def override_get_session_factory() -> MagicMock:
        return session_factory

    app.dependency_overrides[get_session_factory] = override_get_session_factory

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
