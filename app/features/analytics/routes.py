"""API routes for analytics endpoints.

Parameters arrive as optional query values and are validated by the
service, so a missing or malformed value is reported as BAD_INPUT the same
way as an out-of-range one.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.database import get_session_factory
from app.features.analytics.schemas import (
    CustomerSpendingResponse,
    SalesAnalyticsResponse,
    TopProductsResponse,
)
from app.features.analytics.service import AnalyticsService

router = APIRouter(prefix="/analytics", tags=["analytics"])


def get_analytics_service(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> AnalyticsService:
    """Build the analytics service on the shared session factory."""
    return AnalyticsService(session_factory)


# =============================================================================
# Customer Spending
# =============================================================================


@router.get(
    "/customer-spending",
    response_model=CustomerSpendingResponse,
    summary="Get customer spending summary",
    description="""
Total spent, average order value and most recent order date for a customer.

**Rules**:
- All of the customer's orders count, whatever their status
- Money values are rounded to 2 decimals
- A customer with no orders gets zeros and a null `last_order_date`

**Errors**:
- 400 `BAD_INPUT`: `customer_id` missing or malformed
- 404 `NOT_FOUND`: no such customer

**Example**: `GET /analytics/customer-spending?customer_id=c1`
""",
)
async def get_customer_spending(
    customer_id: str | None = Query(
        None,
        description="Customer identifier (required).",
    ),
    service: AnalyticsService = Depends(get_analytics_service),
) -> CustomerSpendingResponse:
    """Return the spending summary of one customer."""
    return await service.get_customer_spending(customer_id)


# =============================================================================
# Top Selling Products
# =============================================================================


@router.get(
    "/top-products",
    response_model=TopProductsResponse,
    summary="Get top-selling products",
    description="""
Products ranked by total units sold across all orders (any status).

**Rules**:
- At most `limit` products, highest `total_sold` first
- Ties are ordered by `product_id`
- Products no longer in the catalog are left out

**Errors**:
- 400 `BAD_INPUT`: `limit` missing, not an integer, or not positive

**Example**: `GET /analytics/top-products?limit=5`
""",
)
async def get_top_selling_products(
    limit: int | None = Query(
        None,
        description="Maximum number of products to return (positive integer, required).",
    ),
    service: AnalyticsService = Depends(get_analytics_service),
) -> TopProductsResponse:
    """Return the best-selling products."""
    return await service.get_top_selling_products(limit)


# =============================================================================
# Sales Analytics
# =============================================================================


@router.get(
    "/sales",
    response_model=SalesAnalyticsResponse,
    summary="Get sales analytics for a date window",
    description="""
Revenue of completed orders within `[start_date, end_date)`.

**Rules**:
- Only orders with status `completed` count
- `start_date` is inclusive, `end_date` is exclusive
- `total_revenue` sums recorded order totals; `category_breakdown`
  recomputes revenue from line items, so they may differ slightly
- Categories are ordered by revenue, highest first

**Date format**: ISO 8601, e.g. `2024-01-01` or `2024-01-01T00:00:00.000Z`.
Values without a timezone are UTC.

**Errors**:
- 400 `BAD_INPUT`: missing or unparsable date, or `start_date >= end_date`

**Example**: `GET /analytics/sales?start_date=2024-01-01&end_date=2024-02-01`
""",
)
async def get_sales_analytics(
    start_date: str | None = Query(
        None,
        description="Window start, inclusive (ISO 8601, required).",
    ),
    end_date: str | None = Query(
        None,
        description="Window end, exclusive (ISO 8601, required).",
    ),
    service: AnalyticsService = Depends(get_analytics_service),
) -> SalesAnalyticsResponse:
    """Return completed-order revenue for a date window."""
    return await service.get_sales_analytics(start_date, end_date)
