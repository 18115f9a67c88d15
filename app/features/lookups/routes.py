"""API routes for point lookups of customers, products and orders."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.database import get_session_factory
from app.features.data_platform.schemas import CustomerRead, OrderRead, ProductRead
from app.features.lookups.schemas import OrderExpansion
from app.features.lookups.service import LookupService

router = APIRouter(tags=["lookups"])


def get_lookup_service(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> LookupService:
    """Build the lookup service on the shared session factory."""
    return LookupService(session_factory)


@router.get(
    "/customers/{customer_id}",
    response_model=CustomerRead,
    summary="Get customer by ID",
    description="""
**Errors**:
- 400 `BAD_INPUT`: malformed `customer_id`
- 404 `NOT_FOUND`: no such customer
""",
)
async def get_customer(
    customer_id: str,
    service: LookupService = Depends(get_lookup_service),
) -> CustomerRead:
    """Get customer details by ID."""
    return await service.get_customer(customer_id)


@router.get(
    "/products/{product_id}",
    response_model=ProductRead,
    summary="Get product by ID",
    description="""
**Errors**:
- 400 `BAD_INPUT`: malformed `product_id`
- 404 `NOT_FOUND`: no such product
""",
)
async def get_product(
    product_id: str,
    service: LookupService = Depends(get_lookup_service),
) -> ProductRead:
    """Get product details by ID."""
    return await service.get_product(product_id)


@router.get(
    "/orders/{order_id}",
    response_model=OrderRead,
    summary="Get order by ID",
    description="""
Get an order with its line items.

**Expansion**: pass `expand=customer` and/or `expand=products` to embed the
ordering customer and each item's product. An embedded entity that cannot
be fetched is returned as `null` rather than failing the request.

**Errors**:
- 400 `BAD_INPUT`: malformed `order_id` or unknown `expand` value
- 404 `NOT_FOUND`: no such order

**Example**: `GET /orders/o1?expand=customer&expand=products`
""",
)
async def get_order(
    order_id: str,
    expand: list[OrderExpansion] = Query(
        [],
        description="Relations to embed: customer, products.",
    ),
    service: LookupService = Depends(get_lookup_service),
) -> OrderRead:
    """Get order details by ID."""
    return await service.get_order(order_id, expand)
