"""Fixtures for constraint tests against a live PostgreSQL store.

These live beside the tests because ``tests/conftest.py`` is not on the
fixture lookup path of ``app/features/*/tests``.
"""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime
from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import get_settings
from app.core.database import Base
from app.features.data_platform.models import Customer, Order, Product


@pytest.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Session on freshly created tables, dropped again afterwards."""
    engine = create_async_engine(get_settings().database_url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    session = async_sessionmaker(engine, expire_on_commit=False)()
    try:
        yield session
    finally:
        await session.rollback()
        await session.close()
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        await engine.dispose()


@pytest.fixture
async def sample_customer(db_session: AsyncSession) -> Customer:
    """Create a sample customer."""
    customer = Customer(id="c-test", name="Test Customer", email="test@example.com")
    db_session.add(customer)
    await db_session.commit()
    return customer


@pytest.fixture
async def sample_product(db_session: AsyncSession) -> Product:
    """Create a sample product."""
    product = Product(
        id="p-test",
        name="Test Product",
        category="Books",
        price=Decimal("9.99"),
        stock=10,
    )
    db_session.add(product)
    await db_session.commit()
    return product


@pytest.fixture
async def sample_order(db_session: AsyncSession, sample_customer: Customer) -> Order:
    """Create a sample completed order without items."""
    order = Order(
        id="o-test",
        customer_id=sample_customer.id,
        total_amount=Decimal("0.00"),
        order_date=datetime(2024, 1, 5, tzinfo=UTC),
        status="completed",
    )
    db_session.add(order)
    await db_session.commit()
    return order
