"""Analytics module: customer spending, best sellers and sales by category."""

from app.features.analytics.routes import router
from app.features.analytics.schemas import (
    CategoryRevenue,
    CustomerSpendingResponse,
    SalesAnalyticsResponse,
    TopProduct,
    TopProductsResponse,
)
from app.features.analytics.service import AnalyticsService

__all__ = [
    "AnalyticsService",
    "CategoryRevenue",
    "CustomerSpendingResponse",
    "SalesAnalyticsResponse",
    "TopProduct",
    "TopProductsResponse",
    "router",
]
