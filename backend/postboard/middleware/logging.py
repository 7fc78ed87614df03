"""
Postboard Backend — Request Logging Middleware
=================================================

What:  One access-log line per HTTP request: method, path, status, duration,
       request id, client IP and, once the auth gate has run, the
       authenticated user id.
When:  Runs inside RequestIDMiddleware so the request id is available.

Never logged: request bodies (passwords) and the Authorization header (tokens).
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from postboard.middleware.request_id import request_id_var

logger = logging.getLogger("postboard.access")

# Load balancer probes would drown out real traffic
QUIET_PATHS = frozenset({"/health"})


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log; 4xx at WARNING, 5xx at ERROR."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)

        fields = {
            "request_id": request_id_var.get(""),
            "method": request.method,
            "path": path,
            "status": response.status_code,
            "duration_ms": elapsed_ms,
            "client_ip": request.client.host if request.client else "unknown",
            # Set by require_user on authenticated routes
            "user_id": getattr(request.state, "user_id", None) or "-",
        }
        logger.log(
            level_for_status(response.status_code),
            "%(method)s %(path)s %(status)d %(duration_ms).1fms [%(request_id)s] "
            "user=%(user_id)s from %(client_ip)s",
            fields,
            extra=fields,
        )
        return response
