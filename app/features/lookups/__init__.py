"""Point lookups of customers, products and orders by identifier."""

from app.features.lookups.routes import router
from app.features.lookups.schemas import OrderExpansion
from app.features.lookups.service import LookupService

__all__ = [
    "LookupService",
    "OrderExpansion",
    "router",
]
