"""Problem+JSON utilities and global exception handlers.

Defines the RFC7807 media type, a response helper, and handler callables
that produce application/problem+json responses.
"""

from __future__ import annotations

from typing import Any, Mapping
import logging
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi import HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

PROBLEM_MEDIA_TYPE = "application/problem+json"

logger = logging.getLogger(__name__)


def problem_response(problem: Mapping[str, Any], headers: Mapping[str, str] | None = None) -> JSONResponse:
    """Wrap a problem dict (with a ``status`` key) in a problem+json response."""
    status = int(problem.get("status", 500) or 500)
    return JSONResponse(
        jsonable_encoder(dict(problem)),
        status_code=status,
        media_type=PROBLEM_MEDIA_TYPE,
        headers=dict(headers) if headers else None,
    )


async def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:  # noqa: D401
    status = int(getattr(exc, "status_code", 500) or 500)
    if isinstance(exc.detail, dict):
        detail = {"status": status, **exc.detail}
    else:
        detail = {
            "title": "Error",
            "status": status,
            "detail": str(exc.detail or ""),
        }
    headers = {str(k): str(v) for k, v in (exc.headers or {}).items()}
    return problem_response(detail, headers=headers or None)


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:  # noqa: D401
    problem = {
        "title": "Invalid Request",
        "status": 422,
        "detail": "Request validation failed",
        "errors": list(exc.errors()),
    }
    logger.info("request_validation_failed path=%s errors=%s", request.url.path, len(problem["errors"]))
    return problem_response(problem)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:  # noqa: D401
    logger.error("unexpected_error path=%s", request.url.path, exc_info=exc)
    return problem_response({"title": "Internal Server Error", "status": 500})


__all__ = [
    "PROBLEM_MEDIA_TYPE",
    "problem_response",
    "handle_http_exception",
    "handle_request_validation_error",
    "handle_unexpected_error",
]
