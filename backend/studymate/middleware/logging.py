"""
StudyMate Backend — Access Log Middleware
===========================================

One `studymate.access` line per API call, keyed by route template rather than
raw URL: `/partners/{partner_id}/decrease-count` instead of the ObjectId, and
never the `?email=` query of the partner-request listing.

Status routes (`/`, `/health`) are skipped; uptime monitors poll them.
A handler that raises still gets a line (as 500) before the error propagates
to the exception handlers.
"""

import logging
import time
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from studymate.middleware.request_id import request_id_var

logger = logging.getLogger("studymate.access")

STATUS_ROUTES = frozenset({"/", "/health"})


def access_level(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def route_template(request: Request) -> str:
    """Matched path template, or the raw path when no route matched."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in STATUS_ROUTES:
            return await call_next(request)

        started = time.perf_counter()
        status: Optional[int] = None
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            self._log(request, status or 500, (time.perf_counter() - started) * 1000)

    @staticmethod
    def _log(request: Request, status: int, elapsed_ms: float) -> None:
        rid = request_id_var.get("")
        route = route_template(request)
        logger.log(
            access_level(status),
            "[%s] %s %s -> %d (%.1fms)",
            rid,
            request.method,
            route,
            status,
            elapsed_ms,
            extra={"request_id": rid, "route": route, "status": status},
        )
