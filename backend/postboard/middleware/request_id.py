"""
Postboard Backend — Request ID Middleware
============================================

What:  Assigns a short id to each incoming request and echoes it back in the
       X-Request-ID response header.
Why:   Every log line from a request, and every error body, carries the same
       id, so a client-reported error can be matched to server logs.
How:   Reuses a client-supplied X-Request-ID or generates one; stores it in a
       ContextVar for loggers and exception handlers and on request.state
       for route handlers.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one thread each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

MAX_REQUEST_ID_LENGTH = 64


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware that assigns a unique ID to each request for tracing."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 8 chars of a UUID is enough for correlation and reads well in logs
        supplied = request.headers.get("X-Request-ID", "")
        rid = supplied[:MAX_REQUEST_ID_LENGTH] if supplied else str(uuid.uuid4())[:8]

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = rid
        return response
