"""Map ordering errors to HTTP responses.

Every error body carries a stable ``error`` category and a ``message``;
validation errors also carry the field-level ``details``.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from ordering.errors import AuthorizationError

logger = structlog.get_logger(__name__)


def _first_message(messages) -> str:
    if isinstance(messages, dict):
        for value in messages.values():
            if isinstance(value, list | tuple) and value:
                return str(value[0])
            if value:
                return str(value)
    return str(messages) if messages else "Invalid request"


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    messages = getattr(exc, "messages", None) or {}
    return JSONResponse(
        status_code=400,
        content={
            "error": getattr(exc, "category", "validation_error"),
            "message": getattr(exc, "message", None) or _first_message(messages),
            "details": messages if isinstance(messages, dict) else None,
        },
    )


async def not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={
            "error": "not_found",
            "message": getattr(exc, "message", None) or "Resource not found",
        },
    )


async def authorization_error_handler(request: Request, exc: AuthorizationError) -> JSONResponse:
    return JSONResponse(status_code=403, content={"error": exc.category, "message": exc.message})


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path, method=request.method)
    return JSONResponse(
        status_code=500,
        content={"error": "internal_error", "message": "Something went wrong. Please try again later."},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(ObjectNotFoundError, not_found_handler)
    app.add_exception_handler(AuthorizationError, authorization_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
