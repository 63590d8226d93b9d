"""
FormBuilder Backend - Request ID Middleware
============================================

What:  Assigns an id to each incoming request and echoes it in the response.
How:   Reuses the client's X-Request-ID header when present, otherwise
       generates a short UUID. Stores it in a ContextVar (read by loggers and
       exception handlers) and in request.state, and sets X-Request-ID on the
       response.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own id.
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware that assigns a correlation id to each request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
