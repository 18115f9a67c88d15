"""Service layer for analytics operations.

Each query validates its parameters before touching the store, runs its
aggregation inside ``store_boundary`` (timeout and error mapping), and
rounds money half-up to two decimals only when assembling the response.
"""

import asyncio
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.database import store_boundary
from app.core.exceptions import BadInputError, NotFoundError
from app.core.logging import get_logger
from app.features.analytics.schemas import (
    CategoryRevenue,
    CustomerSpendingResponse,
    SalesAnalyticsResponse,
    TopProduct,
    TopProductsResponse,
)
from app.features.data_platform.models import Customer, Order, OrderItem, Product
from app.features.data_platform.schemas import OrderStatus
from app.shared.utils import parse_timestamp, round_money, validate_identifier

logger = get_logger(__name__)


def completed_in_window(start: datetime, end: datetime) -> list[ColumnElement[bool]]:
    """Filter for completed orders placed in [start, end)."""
    return [
        Order.status == OrderStatus.COMPLETED.value,
        Order.order_date >= start,
        Order.order_date < end,
    ]


class AnalyticsService:
    """Service for the spending, best-seller and sales analytics queries.

    Holds no state besides the session factory; every query opens its own
    session(s), so one instance can serve concurrent requests.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize analytics service.

        Args:
            session_factory: Factory for sessions on the shared engine.
        """
        self.session_factory = session_factory

    async def get_customer_spending(self, customer_id: str | None) -> CustomerSpendingResponse:
        """Summarize what one customer has spent across all of their orders.

        A customer without orders gets a zero summary; an id that matches
        neither orders nor a customer is NOT_FOUND.

        Args:
            customer_id: Customer identifier.

        Returns:
            Total spent, average order value and most recent order date.

        Raises:
            BadInputError: If customer_id is missing or malformed.
            NotFoundError: If the customer does not exist.
            InternalError: If the store fails.
        """
        customer_id = validate_identifier(customer_id, "customer_id")

        stmt = select(
            func.count(Order.id).label("order_count"),
            func.sum(Order.total_amount).label("total_spent"),
            func.max(Order.order_date).label("last_order_date"),
        ).where(Order.customer_id == customer_id)

        async with (
            store_boundary("analytics.customer_spending", customer_id=customer_id),
            self.session_factory() as session,
        ):
            result = await session.execute(stmt)
            row = result.one()
            order_count = int(row.order_count or 0)

            if order_count == 0:
                customer = await session.get(Customer, customer_id)
                if customer is None:
                    raise NotFoundError(
                        "Customer not found",
                        details={"customer_id": customer_id},
                    )

        if order_count == 0:
            logger.info("analytics.customer_spending_empty", customer_id=customer_id)
            return CustomerSpendingResponse(
                customer_id=customer_id,
                total_spent=round_money(0),
                average_order_value=round_money(0),
                last_order_date=None,
            )

        total_spent = Decimal(str(row.total_spent))
        average = total_spent / order_count

        logger.info(
            "analytics.customer_spending_computed",
            customer_id=customer_id,
            order_count=order_count,
            total_spent=float(total_spent),
        )

        return CustomerSpendingResponse(
            customer_id=customer_id,
            total_spent=round_money(total_spent),
            average_order_value=round_money(average),
            last_order_date=row.last_order_date,
        )

    async def get_top_selling_products(self, limit: int | None) -> TopProductsResponse:
        """Rank products by units sold across every order, whatever its status.

        Quantities are grouped per product and cut to ``limit`` before the
        product catalog is joined in, so a product missing from the catalog
        takes up a slot and is then dropped.

        Args:
            limit: Maximum number of products to return.

        Returns:
            Up to ``limit`` products, highest total_sold first.

        Raises:
            BadInputError: If limit is missing or not a positive integer.
            InternalError: If the store fails.
        """
        if limit is None or isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
            raise BadInputError("Limit must be a positive integer", details={"limit": limit})

        total_sold = func.sum(OrderItem.quantity)
        totals = (
            select(
                OrderItem.product_id.label("product_id"),
                total_sold.label("total_sold"),
            )
            .group_by(OrderItem.product_id)
            .order_by(total_sold.desc(), OrderItem.product_id)
            .limit(limit)
            .subquery("totals")
        )
        stmt = (
            select(
                totals.c.product_id,
                Product.name,
                totals.c.total_sold,
            )
            .join(Product, Product.id == totals.c.product_id)
            .order_by(totals.c.total_sold.desc(), totals.c.product_id)
        )

        async with (
            store_boundary("analytics.top_products", limit=limit),
            self.session_factory() as session,
        ):
            result = await session.execute(stmt)
            rows = result.all()

        products = [
            TopProduct(product_id=row.product_id, name=row.name, total_sold=int(row.total_sold))
            for row in rows
        ]

        logger.info(
            "analytics.top_products_computed",
            limit=limit,
            items_count=len(products),
        )

        return TopProductsResponse(limit=limit, products=products)

    async def get_sales_analytics(
        self,
        start_date: str | datetime | date | None,
        end_date: str | datetime | date | None,
    ) -> SalesAnalyticsResponse:
        """Compute completed-order revenue for [start_date, end_date).

        Overall totals and the category breakdown are independent queries
        and run concurrently, each on its own session. If either fails the
        whole query fails.

        Args:
            start_date: Window start (inclusive).
            end_date: Window end (exclusive).

        Returns:
            Total revenue, completed order count and revenue per category.

        Raises:
            BadInputError: If a date cannot be parsed or start >= end.
            InternalError: If the store fails.
        """
        start = parse_timestamp(start_date, "start_date")
        end = parse_timestamp(end_date, "end_date")
        if start >= end:
            raise BadInputError(
                "Start date must be before end date",
                details={"start_date": start.isoformat(), "end_date": end.isoformat()},
            )

        (total_revenue, completed_orders), breakdown = await asyncio.gather(
            self.compute_overall_totals(start, end),
            self.compute_category_breakdown(start, end),
        )

        logger.info(
            "analytics.sales_computed",
            start_date=start.isoformat(),
            end_date=end.isoformat(),
            completed_orders=completed_orders,
            total_revenue=float(total_revenue),
            categories=len(breakdown),
        )

        return SalesAnalyticsResponse(
            start_date=start,
            end_date=end,
            total_revenue=round_money(total_revenue),
            completed_orders=completed_orders,
            category_breakdown=breakdown,
        )

    async def compute_overall_totals(self, start: datetime, end: datetime) -> tuple[Decimal, int]:
        """Sum recorded totals and count completed orders in the window.

        Returns:
            (unrounded total revenue, completed order count).
        """
        stmt = select(
            func.count(Order.id).label("completed_orders"),
            func.sum(Order.total_amount).label("total_revenue"),
        ).where(*completed_in_window(start, end))

        async with (
            store_boundary("analytics.sales_totals", **_window_context(start, end)),
            self.session_factory() as session,
        ):
            result = await session.execute(stmt)
            row = result.one()

        if row.total_revenue is None:
            return Decimal("0"), 0
        return Decimal(str(row.total_revenue)), int(row.completed_orders)

    async def compute_category_breakdown(
        self,
        start: datetime,
        end: datetime,
    ) -> list[CategoryRevenue]:
        """Recompute line-item revenue per product category in the window.

        Each category's revenue is rounded to 2 decimals, then categories
        are ordered by revenue descending and by name on ties.
        """
        item_revenue = OrderItem.quantity * OrderItem.price_at_purchase
        stmt = (
            select(
                Product.category.label("category"),
                func.sum(item_revenue).label("revenue"),
            )
            .select_from(Order)
            .join(OrderItem, OrderItem.order_id == Order.id)
            .join(Product, Product.id == OrderItem.product_id)
            .where(*completed_in_window(start, end))
            .group_by(Product.category)
        )

        async with (
            store_boundary("analytics.sales_categories", **_window_context(start, end)),
            self.session_factory() as session,
        ):
            result = await session.execute(stmt)
            rows = result.all()

        breakdown = [
            CategoryRevenue(category=row.category, revenue=round_money(row.revenue))
            for row in rows
        ]
        breakdown.sort(key=lambda item: (-item.revenue, item.category))
        return breakdown


def _window_context(start: datetime, end: datetime) -> dict[str, Any]:
    return {"start_date": start.isoformat(), "end_date": end.isoformat()}
