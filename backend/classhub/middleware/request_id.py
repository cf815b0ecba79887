"""
ClassHub Backend — Request ID Middleware
==========================================

What:  Assigns a correlation id to each request and returns it in the response.
How:   Reuses the caller's X-Request-ID header or generates a short UUID,
       stores it in a ContextVar, and echoes it back as X-Request-ID.
Who:   Applied to every request via Starlette middleware.

Every log record emitted while the request is being handled carries the id
through `RequestIDLogFilter`, so all lines of one middleware chain can be
grouped together.
"""

import logging
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on the same event loop each see their own id.
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDLogFilter(logging.Filter):
    """Adds `request_id` to every log record (empty outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("") or "-"
        return True


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Behavior:
        1. Take X-Request-ID from the request if the client sent one
        2. Otherwise generate an 8-character id
        3. Store it in the ContextVar and on request.state
        4. Add it to the response headers
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
