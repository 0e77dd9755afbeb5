"""Exception handlers.

All errors leave the API in the standard envelope:
- request validation failures become 400 with per-field messages
- HTTPException keeps its status and detail
- anything else becomes 500; the traceback is only exposed in development
"""

from __future__ import annotations

import logging
import traceback
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from contactdesk.api.response import error_json
from contactdesk.config import Settings

logger = logging.getLogger(__name__)

VALIDATION_MESSAGE = "Invalid data"
INTERNAL_ERROR_MESSAGE = "An internal error occurred"

# Request locations FastAPI prefixes onto error paths
_LOCATIONS = {"body", "query", "path", "header", "cookie"}


def format_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Flatten pydantic errors into ``{field, message}`` pairs.

    ``("body", "address", "zipCode")`` becomes ``"address.zipCode"``.
    """
    formatted = []
    for error in errors:
        loc = list(error.get("loc", ()))
        if loc and loc[0] in _LOCATIONS:
            loc = loc[1:]
        message = str(error.get("msg", ""))
        if message.startswith("Value error, "):
            message = message[len("Value error, ") :]
        formatted.append({"field": ".".join(str(part) for part in loc), "message": message})
    return formatted


def internal_error_response(request: Request, exc: Exception, settings: Settings) -> JSONResponse:
    """Log an unexpected exception and render it as a 500 envelope."""
    logger.exception("[%s] %s >> unhandled error", request.method, request.url.path)

    message = INTERNAL_ERROR_MESSAGE if settings.is_production else (str(exc) or "Unknown error")
    stack = None
    if settings.is_development:
        stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return error_json(500, message, stack=stack)


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """Turn unexpected exceptions into 500 envelopes inside the middleware stack.

    Installed innermost so CORS, security headers and request logging
    still apply to the error response.
    """

    def __init__(self, app, settings: Settings):
        super().__init__(app)
        self.settings = settings

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            return internal_error_response(request, exc, self.settings)


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Attach the envelope-producing handlers to an app."""

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        errors = format_validation_errors(exc.errors())
        logger.info("[%s] %s >> validation failed: %s", request.method, request.url.path, errors)
        return error_json(400, VALIDATION_MESSAGE, errors=errors)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code >= 500:
            logger.error("[%s] %s >> %s", request.method, request.url.path, exc.detail)
        return error_json(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    # Last resort for errors raised by the outer middleware themselves
    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        return internal_error_response(request, exc, settings)
