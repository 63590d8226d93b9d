"""
FormBuilder Backend - Request Logging Middleware
=================================================

What:  One access-log line per HTTP request.
How:   Times the downstream call, then logs method, path, status, duration,
       request id, caller and client IP on the `formbuilder.access` logger.
When:  Runs inside RequestIDMiddleware so the request id is already set.

Level by status class:
    5xx → ERROR, 4xx → WARNING, everything else → INFO

The caller is the account id the authentication gate resolved, or "-" for
public routes and rejected credentials. Request bodies (passwords, submitted
answers) and the Authorization header are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from formbuilder.middleware.request_id import request_id_var

logger = logging.getLogger("formbuilder.access")

_QUIET_PATHS = frozenset({"/health"})


def _level_for(status: int) -> int:
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
        if path in _QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000

        # Set by formbuilder.dependencies.authenticate_account on success.
        # The ORM Account on request.state is detached by now; only the
        # plain id may be read here.
        account_id = getattr(request.state, "account_id", None)
        caller = str(account_id) if account_id is not None else "-"
        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")

        logger.log(
            _level_for(response.status_code),
            "%s %s %d %.1fms [%s] caller=%s from %s",
            request.method,
            path,
            response.status_code,
            duration_ms,
            rid,
            caller,
            client_ip,
            extra={
                "request_id": rid,
                "caller": caller,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response
