"""HTTP hardening and request logging middleware.

- SecurityHeadersMiddleware: conservative browser security headers
- RateLimitMiddleware: fixed-window request limit per client IP
- RequestLoggingMiddleware: one log line per request
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware

from contactdesk.api.response import error_json
from contactdesk.config import Settings

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later"

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Permitted-Cross-Domain-Policies": "none",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to every response."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


@dataclass
class _Window:
    started_at: float
    count: int


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Limit each client IP to max_requests per window.

    Counters live in memory, so limits are per process. Expired windows
    are swept at most once per window length.
    """

    def __init__(self, app, max_requests: int, window_seconds: int):
        super().__init__(app)
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._windows: dict[str, _Window] = {}
        self._last_sweep: float | None = None

    def _sweep(self, now: float) -> None:
        self._windows = {
            key: window
            for key, window in self._windows.items()
            if now - window.started_at < self.window_seconds
        }
        self._last_sweep = now

    def _hit(self, key: str, now: float) -> _Window:
        if self._last_sweep is None:
            self._last_sweep = now
        elif now - self._last_sweep >= self.window_seconds:
            self._sweep(now)

        window = self._windows.get(key)
        if window is None or now - window.started_at >= self.window_seconds:
            window = _Window(started_at=now, count=0)
            self._windows[key] = window
        window.count += 1
        return window

    async def dispatch(self, request: Request, call_next):
        now = time.monotonic()
        client = request.client.host if request.client else "unknown"
        window = self._hit(client, now)

        reset = max(0, math.ceil(window.started_at + self.window_seconds - now))
        headers = {
            "RateLimit-Limit": str(self.max_requests),
            "RateLimit-Remaining": str(max(0, self.max_requests - window.count)),
            "RateLimit-Reset": str(reset),
        }

        if window.count > self.max_requests:
            logger.warning("Rate limit exceeded for %s", client)
            headers["Retry-After"] = str(reset)
            return error_json(429, RATE_LIMIT_MESSAGE, headers=headers)

        response = await call_next(request)
        response.headers.update(headers)
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and duration of each request."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        path = request.url.path
        if request.url.query:
            path = f"{path}?{request.url.query}"
        logger.info(
            "%s %s -> %s (%.1f ms)", request.method, path, response.status_code, elapsed_ms
        )
        return response


def install_security_middleware(app: FastAPI, settings: Settings) -> None:
    """Register security and logging middleware on the app.

    Starlette runs the last-added middleware first: logging wraps
    everything, and 429 responses still get security headers.
    """
    app.add_middleware(
        RateLimitMiddleware,
        max_requests=settings.rate_limit_max,
        window_seconds=settings.rate_limit_window_seconds,
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
