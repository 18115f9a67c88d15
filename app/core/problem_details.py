"""RFC 7807 problem documents.

Every error response is ``application/problem+json``. Besides the standard
members it carries ``code`` (``BAD_INPUT``, ``NOT_FOUND`` or ``INTERNAL``),
the request's ``request_id`` and, for unparsable parameters, ``errors``.

See https://datatracker.ietf.org/doc/html/rfc7807
"""

from typing import Any

from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from app.core.logging import request_id_ctx


def error_type_uri(code: str) -> str:
    """Map an error code to its relative type URI (``BAD_INPUT`` -> ``/errors/bad-input``)."""
    return "/errors/" + code.lower().replace("_", "-")


class ProblemDetail(BaseModel):
    """Body of an error response."""

    model_config = ConfigDict(extra="allow")

    type: str = Field(default="about:blank", description="Error kind as a URI.")
    title: str = Field(..., description="Error kind in words.")
    status: int = Field(..., ge=400, le=599)
    detail: str | None = Field(None, description="What went wrong with this request.")
    instance: str | None = Field(None, description="This occurrence, as /requests/{request_id}.")
    errors: list[dict[str, Any]] | None = Field(
        None,
        description="One entry per unparsable parameter: field, message and type.",
    )
    code: str | None = Field(None, description="BAD_INPUT, NOT_FOUND or INTERNAL.")
    request_id: str | None = None


class ProblemDetailResponse(JSONResponse):
    media_type = "application/problem+json"


def problem_response(
    status: int,
    title: str,
    detail: str | None = None,
    error_code: str = "INTERNAL",
    errors: list[dict[str, Any]] | None = None,
) -> ProblemDetailResponse:
    """Build an error response for the request being served.

    The current request id, if any, fills ``request_id`` and ``instance``.
    Unset members are left out of the body.
    """
    request_id = request_id_ctx.get()
    body = ProblemDetail(
        type=error_type_uri(error_code),
        title=title,
        status=status,
        detail=detail,
        instance=None if request_id is None else f"/requests/{request_id}",
        errors=errors,
        code=error_code,
        request_id=request_id,
    )
    return ProblemDetailResponse(status_code=status, content=body.model_dump(exclude_none=True))
