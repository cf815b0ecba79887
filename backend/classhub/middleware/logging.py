"""
ClassHub Backend — Access Logging Middleware
==============================================

What:  One log line per HTTP request: method, path, status, duration, client.
How:   Measures the time spent in the rest of the chain and picks the log
       level from the response status.
Who:   Applied to every request via Starlette middleware.
When:  Inside RequestIDMiddleware, so the request id is already set.

Request bodies and Authorization headers are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from classhub.middleware.request_id import request_id_var

logger = logging.getLogger("classhub.access")

QUIET_PATHS = {"/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Log levels:
        5xx → ERROR
        4xx → WARNING
        everything else → INFO
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        client_ip = request.client.host if request.client else "unknown"
        logger.log(
            log_level,
            "%s %s %d %.1fms from %s",
            request.method,
            request.url.path,
            status,
            duration_ms,
            client_ip,
            extra={
                "method": request.method,
                "path": request.url.path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
                "rid": request_id_var.get(""),
            },
        )
        return response
