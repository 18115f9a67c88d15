"""Configuration dataclasses for the demo data seeder."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date


@dataclass
class SeederConfig:
    """Master configuration for the demo data seeder.

    Attributes:
        seed: Random seed for reproducibility.
        customers: Number of customers to generate.
        products: Number of products to generate.
        orders: Number of orders to generate.
        start_date: Earliest order date.
        end_date: Latest order date (inclusive).
        categories: Product categories to draw from.
        status_weights: Relative frequency of each order status.
        max_items_per_order: Upper bound on line items per order.
        max_quantity: Upper bound on units per line item.
        discount_probability: Chance a line item sold below list price.
        batch_size: Rows per INSERT statement.
    """

    seed: int = 42
    customers: int = 50
    products: int = 30
    orders: int = 500
    start_date: date = field(default_factory=lambda: date(2024, 1, 1))
    end_date: date = field(default_factory=lambda: date(2024, 12, 31))
    categories: list[str] = field(
        default_factory=lambda: ["Electronics", "Books", "Clothing", "Home", "Toys", "Sports"]
    )
    status_weights: dict[str, float] = field(
        default_factory=lambda: {"completed": 0.7, "pending": 0.2, "canceled": 0.1}
    )
    max_items_per_order: int = 4
    max_quantity: int = 5
    discount_probability: float = 0.15
    batch_size: int = 1000

    def __post_init__(self) -> None:
        if self.end_date < self.start_date:
            raise ValueError("end_date must be >= start_date")
        if self.customers < 1 or self.products < 1:
            raise ValueError("At least one customer and one product are required")
        unknown = set(self.status_weights) - {"pending", "completed", "canceled"}
        if unknown:
            raise ValueError(f"Unknown order statuses: {sorted(unknown)}")
