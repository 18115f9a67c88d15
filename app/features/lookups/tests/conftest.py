"""Test fixtures for lookups module."""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime
from decimal import Decimal
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.database import get_session_factory
from app.features.data_platform.models import Customer, Product
from app.features.lookups.service import LookupService
from app.main import app


def make_customer(customer_id: str = "c1", **overrides: Any) -> SimpleNamespace:
    """Build a customer row."""
    values: dict[str, Any] = {
        "id": customer_id,
        "name": "Ada Lovelace",
        "email": f"{customer_id}@example.com",
        "age": 36,
        "location": "London",
        "gender": None,
    }
    values.update(overrides)
    return SimpleNamespace(**values)


def make_product(product_id: str = "p1", **overrides: Any) -> SimpleNamespace:
    """Build a product row."""
    values: dict[str, Any] = {
        "id": product_id,
        "name": f"Product {product_id}",
        "category": "Electronics",
        "price": Decimal("10.00"),
        "stock": 5,
    }
    values.update(overrides)
    return SimpleNamespace(**values)


class FakeStore:
    """In-memory stand-in for ``AsyncSession.get`` keyed by model and id.

    Ids listed in ``failing`` raise the configured exception instead.
    """

    def __init__(self) -> None:
        self.rows: dict[tuple[type, str], Any] = {}
        self.failing: dict[str, Exception] = {}
        self.calls: list[tuple[type, str]] = []

    def add(self, model: type, row: Any) -> None:
        self.rows[(model, row.id)] = row

    async def get(self, model: type, entity_id: str) -> Any:
        self.calls.append((model, entity_id))
        if entity_id in self.failing:
            raise self.failing[entity_id]
        return self.rows.get((model, entity_id))


@pytest.fixture
def store() -> FakeStore:
    """Store seeded with customer c1 and products p1, p2."""
    fake = FakeStore()
    fake.add(Customer, make_customer("c1"))
    fake.add(Product, make_product("p1"))
    fake.add(Product, make_product("p2", category="Books", price=Decimal("4.50")))
    return fake


@pytest.fixture
def order_row() -> SimpleNamespace:
    """Order o1 by c1: two units of p1, one of p2, then one more of p1."""
    return SimpleNamespace(
        id="o1",
        customer_id="c1",
        total_amount=Decimal("24.50"),
        order_date=datetime(2024, 1, 5, 10, 0, tzinfo=UTC),
        status="completed",
        items=[
            SimpleNamespace(product_id="p1", quantity=2, price_at_purchase=Decimal("10.00")),
            SimpleNamespace(product_id="p2", quantity=1, price_at_purchase=Decimal("4.50")),
            SimpleNamespace(product_id="p1", quantity=1, price_at_purchase=Decimal("0.00")),
        ],
    )


@pytest.fixture
def mock_session(store: FakeStore, order_row: SimpleNamespace) -> AsyncMock:
    """Session whose ``get`` reads the fake store and whose ``execute`` finds o1."""
    session = AsyncMock()
    session.get.side_effect = store.get

    async def execute(stmt: Any, *_args: Any, **_kwargs: Any) -> MagicMock:
        result = MagicMock()
        params = stmt.compile().params
        result.scalar_one_or_none.return_value = (
            order_row if order_row.id in params.values() else None
        )
        return result

    session.execute.side_effect = execute
    return session


@pytest.fixture
def session_factory(mock_session: AsyncMock) -> MagicMock:
    """Session factory whose sessions are all ``mock_session``."""
    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=mock_session)
    context.__aexit__ = AsyncMock(return_value=False)
    return MagicMock(return_value=context)


@pytest.fixture
def service(session_factory: MagicMock) -> LookupService:
    """Lookup service over the mocked session factory."""
    return LookupService(session_factory)


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
