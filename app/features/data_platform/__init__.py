"""Data platform feature: the e-commerce dataset.

- Reference tables: Customer, Product
- Order history: Order, OrderItem
"""

from app.features.data_platform.models import Customer, Order, OrderItem, Product
from app.features.data_platform.schemas import (
    CustomerRead,
    OrderItemRead,
    OrderRead,
    OrderStatus,
    ProductRead,
)

__all__ = [
    "Customer",
    "CustomerRead",
    "Order",
    "OrderItem",
    "OrderItemRead",
    "OrderRead",
    "OrderStatus",
    "Product",
    "ProductRead",
]
