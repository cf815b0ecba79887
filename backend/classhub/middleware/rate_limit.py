"""
ClassHub Backend — Rate Limiting Middleware
=============================================

What:  Per-IP sliding window rate limiter.
How:   Keeps the timestamps of each client's recent requests in memory and
       rejects the request with 429 once the window is full.
Who:   Applied to every request via Starlette middleware.

Algorithm: Sliding Window Log
    1. Drop the client's timestamps older than `rate_limit_window`
    2. If `rate_limit_requests` remain, reject with 429 and Retry-After
    3. Otherwise record the current timestamp and continue the chain

State is per process; running several workers multiplies the effective limit.
"""

import logging
import time
from collections import defaultdict
from typing import Dict, List

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from classhub.config import settings
from classhub.responses import error_response

logger = logging.getLogger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    In-memory sliding window rate limiter.

    Excluded paths: /health and the API documentation.
    """

    EXCLUDED_PATHS = {"/health", "/docs", "/openapi.json", "/redoc"}

    # Inactive clients are purged every this many recorded requests
    CLEANUP_EVERY = 1000

    def __init__(self, app, **kwargs):
        super().__init__(app, **kwargs)
        self._requests: Dict[str, List[float]] = defaultdict(list)
        self._recorded = 0

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.EXCLUDED_PATHS:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        now = time.time()
        window_start = now - settings.rate_limit_window

        recent = [ts for ts in self._requests[client_ip] if ts > window_start]
        self._requests[client_ip] = recent

        if len(recent) >= settings.rate_limit_requests:
            retry_after = int(recent[0] + settings.rate_limit_window - now) + 1
            logger.warning(
                "Rate limit exceeded for IP %s: %d requests in %ds window",
                client_ip,
                len(recent),
                settings.rate_limit_window,
            )
            return error_response(
                status_code=429,
                error="rate_limit_exceeded",
                message=f"Too many requests. Please wait {retry_after} seconds before retrying.",
                details={"retry_after": retry_after},
                headers={"Retry-After": str(retry_after)},
            )

        recent.append(now)
        self._recorded += 1
        if self._recorded % self.CLEANUP_EVERY == 0:
            self._cleanup_inactive_ips(window_start)

        return await call_next(request)

    def _cleanup_inactive_ips(self, window_start: float) -> None:
        """Remove clients with no request inside the current window."""
        inactive_ips = [
            ip for ip, timestamps in self._requests.items()
            if not timestamps or timestamps[-1] <= window_start
        ]
        for ip in inactive_ips:
            del self._requests[ip]

        if inactive_ips:
            logger.debug("Cleaned up %d inactive IP entries", len(inactive_ips))
