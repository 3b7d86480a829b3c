"""Per-client request throttling.

Each request that reaches a data route turns into one or more Sheets API
calls, and Google meters those per minute. Clients are keyed by IP and each
gets a bucket holding RATE_LIMIT_RPM requests that refills over a minute.
"""

from __future__ import annotations

import logging
import time
from collections import defaultdict

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from taskboard.middleware.auth import PUBLIC_PATHS

logger = logging.getLogger(__name__)


class TokenBucket:
    """``capacity`` requests up front, refilled at ``rate`` per second."""

    def __init__(self, rate: float, capacity: int) -> None:
        self.rate = rate
        self.capacity = capacity
        self.tokens = float(capacity)
        self.last_refill = time.monotonic()

    def _refill(self) -> None:
        now = time.monotonic()
        self.tokens = min(self.capacity, self.tokens + (now - self.last_refill) * self.rate)
        self.last_refill = now

    def consume(self) -> bool:
        self._refill()
        if self.tokens < 1.0:
            return False
        self.tokens -= 1.0
        return True


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Answers 429 with Retry-After once a client's bucket is empty.

    Args:
        rpm: Bucket size and refill per minute. Zero or less turns throttling off.
    """

    def __init__(self, app, rpm: int = 100) -> None:
        super().__init__(app)
        self.rpm = rpm
        self._buckets: dict[str, TokenBucket] = defaultdict(
            lambda: TokenBucket(rate=rpm / 60.0, capacity=rpm)
        )

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if self.rpm <= 0 or path in PUBLIC_PATHS:
            return await call_next(request)

        client = request.client.host if request.client else "unknown"
        if self._buckets[client].consume():
            return await call_next(request)

        logger.warning("Throttled %s on %s", client, path)
        return JSONResponse(
            status_code=429,
            content={"detail": f"Too many requests; the limit is {self.rpm} per minute"},
            headers={"Retry-After": "60"},
        )
