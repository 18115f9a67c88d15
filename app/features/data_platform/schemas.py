"""Pydantic read schemas for the e-commerce dataset.

These are the wire shapes of customers, products and orders returned by
point lookups. Related entities (``OrderRead.customer``,
``OrderItemRead.product``) are only filled in when the caller asks for them,
and stay ``None`` when they cannot be resolved.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from app.shared.schemas import IsoTimestamp, Money


class OrderStatus(str, Enum):
    """Lifecycle state of an order. Only COMPLETED counts toward sales."""

    PENDING = "pending"
    COMPLETED = "completed"
    CANCELED = "canceled"


# ============================================================================
# REFERENCE SCHEMAS
# ============================================================================


class CustomerRead(BaseModel):
    """Customer as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    age: int | None = None
    location: str | None = None
    gender: str | None = None


class ProductRead(BaseModel):
    """Product as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    category: str
    price: Money = Field(..., ge=0, description="Current list price.")
    stock: int = Field(..., ge=0)


# ============================================================================
# ORDER SCHEMAS
# ============================================================================


class OrderItemRead(BaseModel):
    """Order line item, optionally enriched with its product."""

    model_config = ConfigDict(from_attributes=True)

    product_id: str
    quantity: int = Field(..., gt=0)
    price_at_purchase: Money = Field(..., description="Unit price paid at the time of sale.")
    product: ProductRead | None = Field(
        None,
        description="Resolved product. Null unless requested, or if it could not be fetched.",
    )


class OrderRead(BaseModel):
    """Order with its line items, optionally enriched with its customer."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    customer_id: str
    items: list[OrderItemRead]
    total_amount: Money = Field(..., description="Order total as recorded at checkout.")
    order_date: IsoTimestamp
    status: OrderStatus
    customer: CustomerRead | None = Field(
        None,
        description="Resolved customer. Null unless requested, or if it could not be fetched.",
    )
