"""Core seeder orchestration module."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.features.data_platform.models import Customer, Order, OrderItem, Product
from app.shared.seeder.generators import CustomerGenerator, OrderGenerator, ProductGenerator

if TYPE_CHECKING:
    from app.shared.seeder.config import SeederConfig

logger = get_logger(__name__)


@dataclass
class SeederResult:
    """Result of a seeder operation.

    Attributes:
        customers_count: Customers inserted or deleted.
        products_count: Products inserted or deleted.
        orders_count: Orders inserted or deleted.
        order_items_count: Line items inserted or deleted.
        seed: Random seed used.
    """

    customers_count: int = 0
    products_count: int = 0
    orders_count: int = 0
    order_items_count: int = 0
    seed: int = 42


class DataSeeder:
    """Loads a reproducible demo dataset into the store.

    This is an operator tool for local development and integration tests;
    the API itself never writes.
    """

    def __init__(self, config: SeederConfig) -> None:
        self.config = config
        self.rng = random.Random(config.seed)

    def build_records(self) -> dict[str, list[dict[str, Any]]]:
        """Generate every record without touching the store.

        Returns:
            Mapping of table name to rows.
        """
        customers = CustomerGenerator(self.rng, self.config).generate()
        products = ProductGenerator(self.rng, self.config).generate()
        orders, items = OrderGenerator(
            self.rng,
            self.config,
            customer_ids=[c["id"] for c in customers],
            product_prices={p["id"]: p["price"] for p in products},
        ).generate()
        return {
            "customer": customers,
            "product": products,
            "orders": orders,
            "order_item": items,
        }

    async def _batch_insert(
        self,
        db: AsyncSession,
        table: type,
        records: list[dict[str, Any]],
    ) -> int:
        """Insert records in batches, skipping rows that already exist."""
        total_inserted = 0
        size = self.config.batch_size

        for i in range(0, len(records), size):
            batch = records[i : i + size]
            stmt = pg_insert(table).values(batch).on_conflict_do_nothing()
            cursor_result = await db.execute(stmt)
            row_count = getattr(cursor_result, "rowcount", None)
            total_inserted += row_count if row_count is not None else len(batch)

        return total_inserted

    async def generate_full(self, db: AsyncSession) -> SeederResult:
        """Insert a complete demo dataset and commit.

        Args:
            db: Async database session.

        Returns:
            Counts of inserted rows.
        """
        records = self.build_records()

        result = SeederResult(seed=self.config.seed)
        result.customers_count = await self._batch_insert(db, Customer, records["customer"])
        result.products_count = await self._batch_insert(db, Product, records["product"])
        result.orders_count = await self._batch_insert(db, Order, records["orders"])
        result.order_items_count = await self._batch_insert(db, OrderItem, records["order_item"])
        await db.commit()

        logger.info(
            "seeder.generate_full_completed",
            customers=result.customers_count,
            products=result.products_count,
            orders=result.orders_count,
            order_items=result.order_items_count,
            seed=self.config.seed,
        )
        return result

    async def delete_data(self, db: AsyncSession, dry_run: bool = False) -> SeederResult:
        """Delete every row of the dataset, children first.

        Args:
            db: Async database session.
            dry_run: Only count what would be deleted.

        Returns:
            Counts of deleted (or deletable) rows.
        """
        counts = await self.get_current_counts(db)
        result = SeederResult(
            customers_count=counts["customer"],
            products_count=counts["product"],
            orders_count=counts["orders"],
            order_items_count=counts["order_item"],
            seed=self.config.seed,
        )
        if dry_run:
            return result

        for model in (OrderItem, Order, Product, Customer):
            await db.execute(delete(model))
        await db.commit()

        logger.info("seeder.delete_completed", **counts)
        return result

    async def get_current_counts(self, db: AsyncSession) -> dict[str, int]:
        """Count rows per dataset table."""
        counts: dict[str, int] = {}
        for model in (Customer, Product, Order, OrderItem):
            row = await db.execute(select(func.count()).select_from(model))
            counts[model.__tablename__] = int(row.scalar_one())
        return counts
