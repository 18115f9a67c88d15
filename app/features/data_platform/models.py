"""ORM models for the e-commerce dataset.

Reference data (customers, products) and the order history are loaded and
maintained outside this service; nothing here is ever written by the API.

- Customer, Product: reference tables keyed by string identifiers.
- Order: one row per order, status in {pending, completed, canceled}.
- OrderItem: line items owned exclusively by their order, kept in
  ``position`` order.
"""

import datetime
from decimal import Decimal

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base
from app.shared.utils import IDENTIFIER_REGEX

ORDER_STATUSES = ("pending", "completed", "canceled")

# Stored amounts keep sub-cent precision; rounding happens on aggregates only
MONEY_PRECISION, MONEY_SCALE = 18, 6


def id_format_check(table: str) -> CheckConstraint:
    """Reject primary keys the API could never look up."""
    return CheckConstraint(f"id ~ '^{IDENTIFIER_REGEX}$'", name=f"ck_{table}_id_format")


# ============================================================================
# REFERENCE TABLES
# ============================================================================


class Customer(Base):
    """Customer reference table.

    Attributes:
        id: Primary key (external string identifier).
        name: Display name.
        email: Unique contact address.
        age: Age in years (optional).
        location: Free-form location (optional).
        gender: Free-form gender (optional).
    """

    __tablename__ = "customer"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(200))
    email: Mapped[str] = mapped_column(String(320), unique=True)
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    location: Mapped[str | None] = mapped_column(String(200), nullable=True)
    gender: Mapped[str | None] = mapped_column(String(50), nullable=True)

    orders: Mapped[list["Order"]] = relationship(back_populates="customer")

    __table_args__ = (id_format_check("customer"),)


class Product(Base):
    """Product reference table.

    Attributes:
        id: Primary key (external string identifier).
        name: Display name.
        category: Product category, the key of the revenue breakdown.
        price: Current list price (may differ from prices paid).
        stock: Units on hand.
    """

    __tablename__ = "product"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(200))
    category: Mapped[str] = mapped_column(String(100), index=True)
    price: Mapped[Decimal] = mapped_column(Numeric(MONEY_PRECISION, MONEY_SCALE))
    stock: Mapped[int] = mapped_column(Integer)

    __table_args__ = (
        id_format_check("product"),
        CheckConstraint("price >= 0", name="ck_product_price_non_negative"),
        CheckConstraint("stock >= 0", name="ck_product_stock_non_negative"),
    )


# ============================================================================
# ORDER HISTORY
# ============================================================================


class Order(Base):
    """Order header.

    ``total_amount`` is stored as recorded at checkout. It is expected to
    equal the sum of its line items but is never recomputed or checked.

    Attributes:
        id: Primary key (external string identifier).
        customer_id: Ordering customer (FK).
        total_amount: Order total as recorded.
        order_date: When the order was placed (timezone-aware).
        status: pending, completed or canceled.
    """

    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    customer_id: Mapped[str] = mapped_column(String(64), ForeignKey("customer.id"), index=True)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(MONEY_PRECISION, MONEY_SCALE))
    order_date: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), index=True)
    status: Mapped[str] = mapped_column(String(20), index=True)

    customer: Mapped["Customer"] = relationship(back_populates="orders")
    items: Mapped[list["OrderItem"]] = relationship(
        back_populates="order",
        order_by="OrderItem.position",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        id_format_check("orders"),
        # Sales analytics filters on status and a date window
        Index("ix_orders_status_order_date", "status", "order_date"),
        CheckConstraint(
            "status IN ('pending', 'completed', 'canceled')",
            name="ck_orders_status_valid",
        ),
    )


class OrderItem(Base):
    """Order line item.

    Attributes:
        id: Surrogate primary key.
        order_id: Owning order (FK).
        position: Zero-based position within the order.
        product_id: Product sold (FK).
        quantity: Units sold, always positive.
        price_at_purchase: Unit price paid.
    """

    __tablename__ = "order_item"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    order_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("orders.id", ondelete="CASCADE"), index=True
    )
    position: Mapped[int] = mapped_column(Integer, default=0)
    product_id: Mapped[str] = mapped_column(String(64), ForeignKey("product.id"), index=True)
    quantity: Mapped[int] = mapped_column(Integer)
    price_at_purchase: Mapped[Decimal] = mapped_column(Numeric(MONEY_PRECISION, MONEY_SCALE))

    order: Mapped["Order"] = relationship(back_populates="items")

    __table_args__ = (
        UniqueConstraint("order_id", "position", name="uq_order_item_position"),
        CheckConstraint("quantity > 0", name="ck_order_item_quantity_positive"),
    )
