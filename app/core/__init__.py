"""Core infrastructure: config, database, logging, middleware, exceptions."""

from app.core.config import Settings, get_settings
from app.core.database import Base, get_session_factory, store_boundary
from app.core.exceptions import BadInputError, InternalError, NotFoundError, ShopInsightsError
from app.core.logging import get_logger, request_id_ctx

__all__ = [
    "BadInputError",
    "Base",
    "InternalError",
    "NotFoundError",
    "Settings",
    "ShopInsightsError",
    "get_logger",
    "get_session_factory",
    "get_settings",
    "request_id_ctx",
    "store_boundary",
]
