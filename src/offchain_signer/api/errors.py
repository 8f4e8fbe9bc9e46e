"""
HTTP error rendering.

Every failure is answered with status 400. Domain errors render as a
structured JSON body, anything else as plain text. Routes decide which by
building an ``ErrorResult`` where the failure is caught.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from ..runtime.errors import ErrorResult, OffchainError

logger = logging.getLogger(__name__)

ERROR_STATUS = 400


def render_error(result: ErrorResult) -> Response:
    """Render a tagged failure as an HTTP 400 response."""
    if result.is_structured:
        return JSONResponse(status_code=ERROR_STATUS, content=result.body())
    return PlainTextResponse(result.body(), status_code=ERROR_STATUS)


def error_result(exc: Exception) -> ErrorResult:
    """Tag an exception caught at the request boundary."""
    if isinstance(exc, OffchainError):
        return ErrorResult.structured(exc)
    logger.exception(f"Unexpected error: {type(exc).__name__}")
    return ErrorResult.plain(str(exc) or type(exc).__name__)


def reject(request: Request, result: ErrorResult) -> Response:
    """Log a rejected request and render its failure."""
    reason = result.error if result.is_structured else result.message
    logger.warning(f"{request.method} {request.url.path} rejected: {reason}")
    return render_error(result)


__all__ = [
    "ERROR_STATUS",
    "render_error",
    "error_result",
    "reject",
]
