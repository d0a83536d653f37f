"""
Catalog API — Request Logging Middleware
==========================================

What:  One access-log line per HTTP request with status and duration.
How:   Times call_next() and logs on the `catalog.access` logger, at a level
       chosen from the response status. An exception escaping the app is
       turned into its envelope with render_api_response() and logged as
       the resulting 500 instead of propagating to the server.
When:  Runs inside RequestIDMiddleware, so the request ID is available.

Log line:
    GET /api/products 200 4.2ms [a1b2c3d4] from 127.0.0.1

    Structured `extra` fields: request_id, method, path, status,
    duration_ms, client_ip. Request bodies and headers are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.error_handling import render_api_response
from app.middleware.request_id import request_id_var

logger = logging.getLogger("catalog.access")

# Polled by load balancers every few seconds; not worth a log line each
_QUIET_PATHS = {"/health"}


def _level_for(status: int) -> int:
    """5xx → ERROR, 4xx → WARNING, everything else → INFO."""
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status, duration and client IP for each request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            # Unhandled route errors are rendered here, inside RequestID and
            # CORS, so the 500 envelope still gets their headers
            response = await render_api_response(request, exc)
        duration_ms = (time.perf_counter() - start_time) * 1000

        if path in _QUIET_PATHS:
            return response

        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")
        status = response.status_code

        logger.log(
            _level_for(status),
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
