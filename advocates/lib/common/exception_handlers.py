"""Exception handlers that shape every error as ``{"error": ...}``."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from advocates.lib.common.schemas import ErrorResponse, FieldError

logger = logging.getLogger(__name__)

INVALID_PARAMS_MESSAGE = "Invalid query parameters"
INTERNAL_ERROR_MESSAGE = "Internal server error"


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Convert request validation failures into a 400 with field-level details.

    The ``loc`` of each error is flattened to the query parameter name, so
    ``("query", "limit")`` is reported as ``limit``.
    """
    details = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("query", "body")]
        details.append(
            FieldError(
                field=".".join(loc) or "request",
                message=error.get("msg", ""),
                type=error.get("type", ""),
            )
        )

    logger.warning(
        "Request validation failed on %s: %s",
        request.url.path,
        ", ".join(f"{d.field} ({d.type})" for d in details),
    )

    body = ErrorResponse(error=INVALID_PARAMS_MESSAGE, details=details)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=body.model_dump(exclude_none=True),
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render ``HTTPException`` detail under the ``error`` key."""
    body = ErrorResponse(error=str(exc.detail))
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(exclude_none=True),
        headers=getattr(exc, "headers", None),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected exceptions and return a generic 500 body."""
    logger.error(
        "Unexpected %s on %s %s: %s",
        type(exc).__name__,
        request.method,
        request.url.path,
        exc,
        exc_info=True,
    )
    body = ErrorResponse(error=INTERNAL_ERROR_MESSAGE)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(exclude_none=True),
    )


def configure_exception_handlers(app: FastAPI) -> None:
    """Register the error-shaping handlers on ``app``."""
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
