"""Pydantic schemas for analytics endpoints.

Monetary values are rounded half-up to two decimal places before they are
placed in these models and serialize as JSON numbers.
"""

from pydantic import BaseModel, ConfigDict, Field

from app.shared.schemas import IsoTimestamp, Money

# =============================================================================
# Customer Spending
# =============================================================================


class CustomerSpendingResponse(BaseModel):
    """Spending summary for one customer across all of their orders."""

    customer_id: str = Field(..., description="Customer the summary belongs to.")
    total_spent: Money = Field(
        ...,
        description="Sum of the recorded order totals, rounded to 2 decimals.",
    )
    average_order_value: Money = Field(
        ...,
        description="total_spent / number of orders, rounded to 2 decimals. "
        "0 when the customer has no orders.",
    )
    last_order_date: IsoTimestamp | None = Field(
        None,
        description="Date of the most recent order. Null when the customer has no orders.",
    )


# =============================================================================
# Top Selling Products
# =============================================================================


class TopProduct(BaseModel):
    """A product ranked by units sold."""

    model_config = ConfigDict(from_attributes=True)

    product_id: str
    name: str
    total_sold: int = Field(..., ge=0, description="Units sold across all orders.")


class TopProductsResponse(BaseModel):
    """Best sellers by units sold, highest first."""

    limit: int = Field(..., gt=0, description="Requested maximum number of products.")
    products: list[TopProduct] = Field(
        ...,
        description="At most `limit` products ordered by total_sold descending. "
        "Ties are ordered by product_id.",
    )


# =============================================================================
# Sales Analytics
# =============================================================================


class CategoryRevenue(BaseModel):
    """Line-item revenue for one product category."""

    category: str
    revenue: Money = Field(
        ...,
        description="Sum of quantity * price_at_purchase, rounded to 2 decimals.",
    )


class SalesAnalyticsResponse(BaseModel):
    """Completed-order revenue within a date window.

    total_revenue comes from recorded order totals while category_breakdown
    is recomputed from line items, so the two need not add up exactly.
    """

    start_date: IsoTimestamp = Field(..., description="Window start (inclusive).")
    end_date: IsoTimestamp = Field(..., description="Window end (exclusive).")
    total_revenue: Money = Field(
        ...,
        description="Sum of total_amount over completed orders in the window.",
    )
    completed_orders: int = Field(..., ge=0)
    category_breakdown: list[CategoryRevenue] = Field(
        default_factory=list,
        description="Revenue per category, highest first. Ties are ordered by category.",
    )
