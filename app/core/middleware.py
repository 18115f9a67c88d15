"""Request correlation middleware.

Each request runs under a correlation id: the caller's ``X-Request-ID`` when
it sends a usable one, a fresh UUID4 otherwise. The id is bound for logging,
stamped into problem documents and echoed on the response.
"""

import time
import uuid
from collections.abc import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.core.exceptions import unhandled_exception_handler
from app.core.logging import get_logger, request_id_ctx

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 128


def _resolve_request_id(request: Request) -> str:
    """Reuse the caller's id unless it is blank or oversized."""
    supplied = request.headers.get(REQUEST_ID_HEADER, "").strip()
    if supplied and len(supplied) <= MAX_REQUEST_ID_LENGTH:
        return supplied
    return str(uuid.uuid4())


async def _serve(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Run the app, rendering unexpected errors while request_id_ctx is still set."""
    try:
        return await call_next(request)
    except Exception as exc:
        return await unhandled_exception_handler(request, exc)


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Bind a request id to the logging context and echo it back."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = _resolve_request_id(request)
        token = request_id_ctx.set(request_id)
        started = time.perf_counter()
        try:
            response = await _serve(request, call_next)
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(
                "api.request_served",
                method=request.method,
                route=request.url.path,
                params=dict(request.query_params) or None,
                status=response.status_code,
                elapsed_ms=round(elapsed_ms, 2),
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            request_id_ctx.reset(token)
