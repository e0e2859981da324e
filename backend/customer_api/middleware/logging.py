"""
Customer API — Request Logging Middleware
==========================================

What:  One access-log line per customer API request.
How:   Times the downstream call, then logs method, path, status, duration,
       request ID and, for /customers/{id} routes, the addressed customer id.
When:  Runs inside RequestIDMiddleware so the request ID is already set.

Line format:
    PUT /customers/123 -> 422 (3.1ms) rid=a1b2c3d4 customer=123

Request bodies are never logged: customer names and phone numbers are PII.
"""

import logging
import time
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from customer_api.middleware.request_id import request_id_var

logger = logging.getLogger("customer_api.access")

# Health checks hit these every few seconds
_UNLOGGED_PATHS = frozenset({"/health"})


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def _customer_id(request: Request) -> Optional[str]:
    # Routing fills path_params in the shared scope during call_next
    return request.scope.get("path_params", {}).get("customer_id")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request once its response is ready; 5xx at ERROR, 4xx at WARNING."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in _UNLOGGED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        customer_id = _customer_id(request)
        logger.log(
            _level_for(response.status_code),
            "%s %s -> %d (%.1fms) rid=%s customer=%s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            request_id_var.get(""),
            customer_id or "-",
        )
        return response
