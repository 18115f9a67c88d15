"""Error taxonomy and FastAPI exception handlers.

Three kinds of failure reach callers:

- ``BAD_INPUT``: a caller-supplied parameter is missing, malformed or out of
  range.
- ``NOT_FOUND``: a specifically requested entity does not exist.
- ``INTERNAL``: the data store failed or did not answer.

All are rendered as RFC 7807 Problem Details. ``details`` are for logs
only and never leave the process.
"""

from typing import Any, ClassVar

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from app.core.logging import get_logger
from app.core.problem_details import ProblemDetailResponse, problem_response

logger = get_logger(__name__)

# Parts of a validation error location that say where, not which parameter
_LOCATION_PREFIXES = frozenset({"body", "query", "path", "header"})


# =============================================================================
# Exception Classes
# =============================================================================


class ShopInsightsError(Exception):
    """Base exception for ShopInsights application errors.

    Subclasses pin ``code``, ``status_code`` and ``default_message``;
    instances only vary in their message and log details.
    """

    code: ClassVar[str] = "INTERNAL"
    status_code: ClassVar[int] = 500
    default_message: ClassVar[str] = "Could not complete the query. Please try again later."

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize application error.

        Args:
            message: Human-readable message, safe to return to callers.
            details: Extra context for logs.
        """
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    @property
    def title(self) -> str:
        """RFC 7807 title, e.g. ``Bad Input`` for ``BAD_INPUT``."""
        return self.code.replace("_", " ").title()


class BadInputError(ShopInsightsError):
    """Missing, malformed or out-of-range caller parameter."""

    code = "BAD_INPUT"
    status_code = 400
    default_message = "Bad input"


class NotFoundError(ShopInsightsError):
    """A specifically requested customer, product or order does not exist."""

    code = "NOT_FOUND"
    status_code = 404
    default_message = "Resource not found"


class InternalError(ShopInsightsError):
    """Unexpected failure reaching or querying the data store."""


# =============================================================================
# Exception Handlers (RFC 7807)
# =============================================================================


async def shopinsights_exception_handler(
    request: Request,
    exc: ShopInsightsError,
) -> ProblemDetailResponse:
    """Render a ShopInsightsError as a problem document.

    Caller mistakes are logged at info, store failures at error.
    """
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        "api.query_rejected" if exc.status_code < 500 else "api.query_failed",
        path=request.url.path,
        code=exc.code,
        reason=exc.message,
        details=exc.details,
    )
    return problem_response(
        status=exc.status_code,
        title=exc.title,
        detail=exc.message,
        error_code=exc.code,
    )


def _field_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    """Flatten pydantic errors to ``{field, message, type}`` entries."""
    return [
        {
            "field": ".".join(
                str(part) for part in error.get("loc", ()) if part not in _LOCATION_PREFIXES
            ),
            "message": str(error.get("msg", "Invalid value")),
            "type": str(error.get("type", "unknown")),
        }
        for error in exc.errors()
    ]


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> ProblemDetailResponse:
    """Report parameters FastAPI could not parse as BAD_INPUT (400, not 422)."""
    errors = _field_errors(exc)
    fields = sorted({error["field"] for error in errors})
    logger.info(
        "api.parameters_invalid",
        path=request.url.path,
        fields=fields,
    )
    return problem_response(
        status=BadInputError.status_code,
        title="Bad Input",
        detail=f"Invalid parameter(s): {', '.join(fields)}",
        error_code=BadInputError.code,
        errors=errors,
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> ProblemDetailResponse:
    """Report anything unexpected as INTERNAL without leaking its detail."""
    logger.error(
        "api.unexpected_error",
        path=request.url.path,
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return problem_response(
        status=InternalError.status_code,
        title="Internal",
        detail=InternalError.default_message,
        error_code=InternalError.code,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the three handlers to ``app``."""
    app.add_exception_handler(ShopInsightsError, shopinsights_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)
