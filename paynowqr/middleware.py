"""Request logging middleware."""
from __future__ import annotations

import logging
import time
from typing import Any, Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from .monitoring import observe_request

logger = logging.getLogger("paynowqr.http")


def route_path(request: Request) -> str:
    """Templated route path when routing has run, raw URL path otherwise."""

    route = request.scope.get("route")
    return route.path if route else request.url.path


def _level_for(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """One log line and one metrics sample per request.

    Routes are labelled by their template, e.g. ``/v1/paynow/qr``.
    """

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:  # type: ignore[override]
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self._finish(request, start, 500, failed=True)
            raise
        self._finish(request, start, response.status_code)
        return response

    @staticmethod
    def _finish(request: Request, start: float, status_code: int, failed: bool = False) -> None:
        duration_ms = (time.perf_counter() - start) * 1000
        path = route_path(request)
        fields: dict[str, Any] = {
            "method": request.method,
            "path": path,
            "status_code": status_code,
            "client": request.client.host if request.client else None,
            "duration_ms": round(duration_ms, 2),
        }
        if failed:
            logger.exception("request failed", extra=fields)
        else:
            logger.log(_level_for(status_code), "request completed", extra=fields)
        observe_request(request.method, path, status_code, duration_ms)
