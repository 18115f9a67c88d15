"""Structured logging for ShopInsights.

Events are dotted names (``analytics.top_products_computed``) with keyword
context, rendered as JSON in deployed environments and as colored console
lines locally. Every event carries the request correlation id when one is
bound to the current task.
"""

import logging
from collections.abc import MutableMapping
from contextvars import ContextVar
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from app.core.config import Settings, get_settings

# Set per request by RequestIdMiddleware
request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)

# Stdlib loggers that would otherwise echo every statement at INFO
_STORE_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "asyncpg")


def add_request_id(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> MutableMapping[str, Any]:
    """Attach the current request_id, if any."""
    if (request_id := request_id_ctx.get()) is not None:
        event_dict["request_id"] = request_id
    return event_dict


def add_app_context(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> MutableMapping[str, Any]:
    """Tag events with the application environment."""
    event_dict.setdefault("app_env", get_settings().app_env)
    return event_dict


def _renderer(settings: Settings) -> Processor:
    if settings.log_format == "console":
        return structlog.dev.ConsoleRenderer(colors=True)
    return structlog.processors.JSONRenderer()


def configure_logging() -> None:
    """Configure structlog and tame the database driver loggers."""
    settings = get_settings()
    level = logging.getLevelNamesMapping()[settings.log_level]

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            add_request_id,
            add_app_context,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            _renderer(settings),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    store_level = logging.DEBUG if settings.debug else logging.WARNING
    for name in _STORE_LOGGERS:
        logging.getLogger(name).setLevel(store_level)


def get_logger(name: str | None = None) -> structlog.typing.FilteringBoundLogger:
    """Return a structlog logger bound to ``name``."""
    return structlog.get_logger(name)  # type: ignore[no-any-return]
