"""
Customer API — Request ID Middleware
=====================================

What:  Assigns an ID to each incoming request and returns it in X-Request-ID.
Why:   Every access-log line and error log line from one request shares the ID,
       and clients can quote it when reporting a failed call.
How:   Reuses the client's X-Request-ID when sent, otherwise generates one;
       stores it in a ContextVar for loggers.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on the same event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware that assigns a unique ID to each request for tracing."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 8 hex chars are enough for log correlation
        rid = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]

        request_id_var.set(rid)

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
