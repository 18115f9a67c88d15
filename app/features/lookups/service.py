"""Service layer for point lookups and relationship resolution.

Point lookups fail loudly (BAD_INPUT / NOT_FOUND / INTERNAL). Resolving an
order's customer or an item's product is best effort: each resolution runs
on its own session, concurrently with its siblings, and anything that goes
wrong leaves that one field null.
"""

import asyncio
from collections.abc import Collection
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from app.core.database import Base, store_boundary
from app.core.exceptions import NotFoundError, ShopInsightsError
from app.core.logging import get_logger
from app.features.data_platform.models import Customer, Order, Product
from app.features.data_platform.schemas import (
    CustomerRead,
    OrderItemRead,
    OrderRead,
    OrderStatus,
    ProductRead,
)
from app.features.lookups.schemas import OrderExpansion
from app.shared.utils import validate_identifier

logger = get_logger(__name__)


class LookupService:
    """Service for fetching single customers, products and orders."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def get_customer(self, customer_id: str | None) -> CustomerRead:
        """Get a customer by id.

        Raises:
            BadInputError: If the id is missing or malformed.
            NotFoundError: If no such customer exists.
        """
        customer_id = validate_identifier(customer_id, "customer_id")
        customer = await self._get_by_id(Customer, customer_id, "customer")
        return CustomerRead.model_validate(customer)

    async def get_product(self, product_id: str | None) -> ProductRead:
        """Get a product by id.

        Raises:
            BadInputError: If the id is missing or malformed.
            NotFoundError: If no such product exists.
        """
        product_id = validate_identifier(product_id, "product_id")
        product = await self._get_by_id(Product, product_id, "product")
        return ProductRead.model_validate(product)

    async def get_order(
        self,
        order_id: str | None,
        expand: Collection[OrderExpansion] = (),
    ) -> OrderRead:
        """Get an order with its line items.

        Args:
            order_id: Order identifier.
            expand: Related entities to resolve into the response.

        Returns:
            The order; ``customer`` and item ``product`` fields are filled
            only when requested and resolvable.

        Raises:
            BadInputError: If the id is missing or malformed.
            NotFoundError: If no such order exists.
        """
        order_id = validate_identifier(order_id, "order_id")
        stmt = select(Order).options(selectinload(Order.items)).where(Order.id == order_id)

        async with (
            store_boundary("lookups.order", order_id=order_id),
            self.session_factory() as session,
        ):
            result = await session.execute(stmt)
            order = result.scalar_one_or_none()

        if order is None:
            raise NotFoundError("Order not found", details={"order_id": order_id})

        response = OrderRead(
            id=order.id,
            customer_id=order.customer_id,
            items=[OrderItemRead.model_validate(item) for item in order.items],
            total_amount=order.total_amount,
            order_date=order.order_date,
            status=OrderStatus(order.status),
        )

        if expand:
            await self.expand_order(response, set(expand))
        return response

    async def expand_order(self, order: OrderRead, expand: set[OrderExpansion]) -> None:
        """Resolve the requested relations of ``order`` in place.

        Each distinct product is fetched once and shared by every item that
        references it.
        """
        product_ids: list[str] = []
        if OrderExpansion.PRODUCTS in expand:
            product_ids = list(dict.fromkeys(item.product_id for item in order.items))

        want_customer = OrderExpansion.CUSTOMER in expand
        resolutions: list[Any] = []
        if want_customer:
            resolutions.append(self.resolve_customer(order.customer_id))
        resolutions.extend(self.resolve_product(product_id) for product_id in product_ids)

        resolved = await asyncio.gather(*resolutions)

        if want_customer:
            order.customer = resolved[0]
            resolved = resolved[1:]

        products = dict(zip(product_ids, resolved, strict=True))
        for item in order.items:
            if item.product_id in products:
                item.product = products[item.product_id]

    async def resolve_customer(self, customer_id: str) -> CustomerRead | None:
        """Fetch a referenced customer, or None if it cannot be retrieved."""
        customer = await self._resolve(Customer, customer_id, "customer")
        return CustomerRead.model_validate(customer) if customer is not None else None

    async def resolve_product(self, product_id: str) -> ProductRead | None:
        """Fetch a referenced product, or None if it cannot be retrieved."""
        product = await self._resolve(Product, product_id, "product")
        return ProductRead.model_validate(product) if product is not None else None

    async def _get_by_id[M: Base](self, model: type[M], entity_id: str, entity: str) -> M:
        async with (
            store_boundary(f"lookups.{entity}", entity_id=entity_id),
            self.session_factory() as session,
        ):
            instance = await session.get(model, entity_id)

        if instance is None:
            raise NotFoundError(
                f"{entity.capitalize()} not found",
                details={f"{entity}_id": entity_id},
            )
        return instance

    async def _resolve[M: Base](self, model: type[M], entity_id: str, entity: str) -> M | None:
        try:
            async with (
                store_boundary(f"lookups.resolve_{entity}", entity_id=entity_id),
                self.session_factory() as session,
            ):
                instance = await session.get(model, entity_id)
        except ShopInsightsError as e:
            logger.warning(
                f"lookups.{entity}_resolution_failed",
                entity_id=entity_id,
                error_code=e.code,
            )
            return None

        if instance is None:
            logger.warning(f"lookups.{entity}_missing", entity_id=entity_id)
        return instance
