"""Demo data seeder.

Generates a reproducible e-commerce dataset (customers, products, orders
with line items) for local development and integration tests.
"""

from app.shared.seeder.config import SeederConfig
from app.shared.seeder.core import DataSeeder, SeederResult

__all__ = [
    "DataSeeder",
    "SeederConfig",
    "SeederResult",
]
