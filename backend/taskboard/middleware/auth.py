"""Bearer API key check for the task board API.

The board has one shared key, TASKBOARD_API_KEY. Leaving it unset turns the
check off, which is how local runs and the test suite work.

Open without a key: /health, the OpenAPI docs and the root path.
"""

from __future__ import annotations

import logging
import secrets

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from taskboard.config import settings

logger = logging.getLogger(__name__)

PUBLIC_PATHS = frozenset({"/health", "/docs", "/openapi.json", "/redoc", "/"})


def _bearer_token(request: Request) -> str | None:
    scheme, _, token = request.headers.get("Authorization", "").partition(" ")
    if scheme != "Bearer":
        return None
    return token


class APIKeyAuthMiddleware(BaseHTTPMiddleware):
    """401 without a Bearer header, 403 when the key does not match."""

    async def dispatch(self, request: Request, call_next):
        api_key = settings.taskboard_api_key
        if not api_key or request.method == "OPTIONS" or request.url.path in PUBLIC_PATHS:
            return await call_next(request)

        token = _bearer_token(request)
        if token is None:
            return JSONResponse(
                status_code=401,
                content={"detail": "Authorization header with a Bearer key is required"},
            )

        if not secrets.compare_digest(token, api_key):
            logger.warning(
                "Rejected API key from %s for %s",
                request.client.host if request.client else "unknown",
                request.url.path,
            )
            return JSONResponse(status_code=403, content={"detail": "API key rejected"})

        return await call_next(request)
