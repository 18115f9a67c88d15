"""Record generators for customers, products and orders.

Generators return plain dicts ready for bulk INSERT and draw every random
choice from the injected ``random.Random`` so output is reproducible.
"""

from __future__ import annotations

import random
from datetime import UTC, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from app.shared.seeder.config import SeederConfig

FIRST_NAMES = ["Ada", "Ben", "Chloe", "Dev", "Elena", "Farid", "Grace", "Hiro", "Ines", "Jonas"]
LAST_NAMES = ["Okafor", "Smith", "Nguyen", "Garcia", "Kowalski", "Haddad", "Ito", "Silva"]
LOCATIONS = ["Berlin", "Lagos", "Austin", "Osaka", "Lima", "Toronto", "Nairobi", "Lyon"]
GENDERS = ["female", "male", "non-binary", None]

PRODUCT_ADJECTIVES = ["Classic", "Pro", "Compact", "Deluxe", "Eco", "Smart", "Ultra", "Mini"]

PRODUCT_NOUNS_BY_CATEGORY = {
    "Electronics": ["Headphones", "Charger", "Speaker", "Keyboard", "Monitor"],
    "Books": ["Novel", "Cookbook", "Atlas", "Biography", "Anthology"],
    "Clothing": ["Jacket", "Sneakers", "Scarf", "T-Shirt", "Jeans"],
    "Home": ["Lamp", "Kettle", "Blanket", "Vase", "Pan"],
    "Toys": ["Puzzle", "Robot", "Kite", "Blocks", "Plush"],
    "Sports": ["Ball", "Racket", "Mat", "Bottle", "Gloves"],
}

CENTS = Decimal("0.01")


class CustomerGenerator:
    """Generates customer reference records."""

    def __init__(self, rng: random.Random, config: SeederConfig) -> None:
        self.rng = rng
        self.config = config

    def generate(self) -> list[dict[str, Any]]:
        records = []
        for i in range(1, self.config.customers + 1):
            first = self.rng.choice(FIRST_NAMES)
            last = self.rng.choice(LAST_NAMES)
            records.append(
                {
                    "id": f"c{i}",
                    "name": f"{first} {last}",
                    "email": f"{first.lower()}.{last.lower()}.{i}@example.com",
                    "age": self.rng.randint(18, 80) if self.rng.random() > 0.1 else None,
                    "location": self.rng.choice(LOCATIONS),
                    "gender": self.rng.choice(GENDERS),
                }
            )
        return records


class ProductGenerator:
    """Generates product reference records with list prices and stock."""

    def __init__(self, rng: random.Random, config: SeederConfig) -> None:
        self.rng = rng
        self.config = config

    def generate(self) -> list[dict[str, Any]]:
        records = []
        for i in range(1, self.config.products + 1):
            category = self.rng.choice(self.config.categories)
            nouns = PRODUCT_NOUNS_BY_CATEGORY.get(category, ["Item"])
            price = Decimal(str(self.rng.uniform(2.0, 300.0))).quantize(CENTS)
            records.append(
                {
                    "id": f"p{i}",
                    "name": f"{self.rng.choice(PRODUCT_ADJECTIVES)} {self.rng.choice(nouns)}",
                    "category": category,
                    "price": price,
                    "stock": self.rng.randint(0, 500),
                }
            )
        return records


class OrderGenerator:
    """Generates orders and their line items.

    Line items occasionally sell below list price; the order total is the
    sum of its items at the prices actually paid.
    """

    def __init__(
        self,
        rng: random.Random,
        config: SeederConfig,
        customer_ids: list[str],
        product_prices: dict[str, Decimal],
    ) -> None:
        self.rng = rng
        self.config = config
        self.customer_ids = customer_ids
        self.product_prices = product_prices

    def _order_date(self) -> datetime:
        start = datetime.combine(self.config.start_date, time.min, tzinfo=UTC)
        end = datetime.combine(self.config.end_date, time.max, tzinfo=UTC)
        offset = self.rng.uniform(0, (end - start).total_seconds())
        return start + timedelta(seconds=int(offset))

    def generate(self) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
        """Generate order rows and line item rows.

        Returns:
            Tuple of (orders, order_items).
        """
        statuses = list(self.config.status_weights)
        weights = list(self.config.status_weights.values())
        product_ids = list(self.product_prices)

        orders: list[dict[str, Any]] = []
        items: list[dict[str, Any]] = []
        for i in range(1, self.config.orders + 1):
            order_id = f"o{i}"
            count = self.rng.randint(1, min(self.config.max_items_per_order, len(product_ids)))
            total = Decimal("0")
            for position, product_id in enumerate(self.rng.sample(product_ids, count)):
                price = self.product_prices[product_id]
                if self.rng.random() < self.config.discount_probability:
                    price = (price * Decimal("0.9")).quantize(CENTS, rounding=ROUND_HALF_UP)
                quantity = self.rng.randint(1, self.config.max_quantity)
                total += price * quantity
                items.append(
                    {
                        "order_id": order_id,
                        "position": position,
                        "product_id": product_id,
                        "quantity": quantity,
                        "price_at_purchase": price,
                    }
                )
            orders.append(
                {
                    "id": order_id,
                    "customer_id": self.rng.choice(self.customer_ids),
                    "total_amount": total.quantize(CENTS),
                    "order_date": self._order_date(),
                    "status": self.rng.choices(statuses, weights=weights)[0],
                }
            )
        return orders, items
