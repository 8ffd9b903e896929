"""
MindfulSpace Backend — Request Logging Middleware
===================================================

What:  One access log line per HTTP request.
How:   Measures time around the downstream call and logs method, path,
       status, duration, request ID and the authenticated user id (when the
       auth guard identified one).
When:  Inside RequestIDMiddleware, so the request ID is already set.

Log line:
    POST /api/journal 201 12.4ms [1c9e0a7f] user=42 from 127.0.0.1

Not logged: request bodies, the Authorization header, passwords, tokens.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger("mindfulspace.access")

# Probed every few seconds by orchestrators
QUIET_PATHS = frozenset({"/health", "/api/health"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs each request with a level chosen by status:
    5xx → ERROR, 4xx → WARNING, everything else → INFO.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        rid = request_id_var.get("")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        # Set by the auth guard on protected routes
        identity = getattr(request.state, "identity", None)
        user_id = identity.user_id if identity is not None else "-"

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] user=%s from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            user_id,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "user_id": user_id,
                "client_ip": client_ip,
            },
        )
        return response
