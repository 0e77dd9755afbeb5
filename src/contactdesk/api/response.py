"""Standard JSON envelope for API responses.

Every response, success or failure, has the shape
``{success, data, message, timestamp}``. Error responses may add
``errors`` (validation failures) and ``stack`` (development only).
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from fastapi.responses import JSONResponse


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds, e.g. 2024-01-15T10:00:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def create_response(success: bool, data: Any = None, message: str = "") -> dict[str, Any]:
    """Build a response envelope.

    Args:
        success: Whether the operation succeeded.
        data: Payload (pydantic model, list, or None).
        message: Human readable description.

    Returns:
        Envelope dict ready to be returned from a route.
    """
    return {
        "success": success,
        "data": data,
        "message": message,
        "timestamp": utc_timestamp(),
    }


def success_response(data: Any, message: str = "Success") -> dict[str, Any]:
    return create_response(True, data, message)


def error_response(message: str = "Error", data: Any = None) -> dict[str, Any]:
    return create_response(False, data, message)


def error_json(
    status_code: int,
    message: str,
    *,
    errors: list[dict[str, str]] | None = None,
    stack: str | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Render an error envelope as a JSONResponse.

    Used by exception handlers and middleware, which run outside route
    serialization.
    """
    body = error_response(message)
    if errors is not None:
        body["errors"] = errors
    if stack is not None:
        body["stack"] = stack
    return JSONResponse(status_code=status_code, content=body, headers=headers)
