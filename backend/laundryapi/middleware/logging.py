"""
Laundry API Backend: Request Logging Middleware
=================================================

What:  One access log line per HTTP request.
How:   Times the downstream call and logs method, path, status, duration,
       request id, client IP, and the authenticated user id if the route
       resolved one.
When:  Runs inside RequestIDMiddleware, so the request id is already set.

Not logged: request bodies and the Authorization header (passwords and
tokens never reach the log).
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from laundryapi.middleware.request_id import request_id_var

logger = logging.getLogger("laundryapi.access")

# Probed by supervisors every few seconds
SKIPPED_PATHS = frozenset({"/health"})


def level_for_status(status: int) -> int:
    """5xx → ERROR, 4xx → WARNING, everything else → INFO."""
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in SKIPPED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        # Set by get_current_claims on authenticated routes
        user_id = getattr(request.state, "user_id", None)

        logger.log(
            level_for_status(status),
            "%s %s %d %.1fms [%s] from %s user=%s",
            request.method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            user_id if user_id is not None else "-",
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
                "user_id": user_id,
            },
        )
        return response
