"""Shared pytest fixtures for ShopInsights end-to-end tests."""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime
from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import get_settings
from app.core.database import Base, get_session_factory
from app.features.data_platform.models import Customer, Order, OrderItem, Product
from app.main import app


@pytest.fixture
async def session_maker() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Create the schema on a fresh engine and drop it afterwards.

    Requires PostgreSQL to be running (docker-compose up -d).
    """
    settings = get_settings()
    engine = create_async_engine(settings.database_url, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


def _order(
    order_id: str,
    customer_id: str,
    total: str,
    day: int,
    status: str,
    items: list[tuple[str, int, str]],
) -> Order:
    """Build a January 2024 order from (product_id, quantity, unit price) tuples."""
    return Order(
        id=order_id,
        customer_id=customer_id,
        total_amount=Decimal(total),
        order_date=datetime(2024, 1, day, tzinfo=UTC),
        status=status,
        items=[
            OrderItem(
                position=position,
                product_id=product_id,
                quantity=quantity,
                price_at_purchase=Decimal(price),
            )
            for position, (product_id, quantity, price) in enumerate(items)
        ],
    )


@pytest.fixture
async def seeded(session_maker: async_sessionmaker[AsyncSession]) -> None:
    """Load a small known dataset.

    - c1 has completed orders o1 (100.00, 2024-01-05) and o2 (50.00, 2024-01-10)
    - c2 has a single pending order o3 (30.00, 2024-01-07)
    - c3 has no orders
    - p1 sells 3 + 5 units, p2 sells 1 unit, p3 sells 2 units
    """
    async with session_maker() as session:
        session.add_all(
            [
                Customer(id="c1", name="Ada Okafor", email="ada@example.com", age=34),
                Customer(id="c2", name="Ben Smith", email="ben@example.com"),
                Customer(id="c3", name="Chloe Ito", email="chloe@example.com"),
                Product(id="p1", name="Lamp", category="Home", price=Decimal("20"), stock=7),
                Product(id="p2", name="Pro Novel", category="Books", price=Decimal("40"), stock=3),
                Product(id="p3", name="Mini Kite", category="Toys", price=Decimal("15"), stock=0),
            ]
        )
        await session.flush()
        session.add_all(
            [
                _order("o1", "c1", "100.00", 5, "completed", [("p1", 3, "20"), ("p2", 1, "40")]),
                _order("o2", "c1", "50.00", 10, "completed", [("p1", 5, "10")]),
                _order("o3", "c2", "30.00", 7, "pending", [("p3", 2, "15")]),
            ]
        )
        await session.commit()


@pytest.fixture
async def client(
    session_maker: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for testing FastAPI endpoints against the test store."""

    async def override_get_session_factory() -> async_sessionmaker[AsyncSession]:
        return session_maker

    app.dependency_overrides[get_session_factory] = override_get_session_factory

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
