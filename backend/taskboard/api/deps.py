"""Router dependencies: service registry access and error mapping.

The registry is set once from the app lifespan (``set_services``). Tests
override ``get_services`` through ``app.dependency_overrides``.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException

from taskboard.services.errors import ConflictError, NotFoundError
from taskboard.services.registry import ServiceRegistry
from taskboard.sheets.errors import SheetAccessError, SheetsError

logger = logging.getLogger(__name__)

# Module-level reference, set by main.py at startup
_services: ServiceRegistry | None = None

DOMAIN_ERRORS = (NotFoundError, ConflictError, ValueError, SheetsError)


def set_services(services: ServiceRegistry | None) -> None:
    global _services
    _services = services


def get_services() -> ServiceRegistry:
    if _services is None:
        raise HTTPException(status_code=503, detail="Spreadsheet backend not initialized.")
    return _services


def to_http_error(exc: Exception, fallback: str) -> HTTPException:
    """Map a service exception onto an HTTP status."""
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, ConflictError):
        return HTTPException(status_code=409, detail=str(exc))
    if isinstance(exc, SheetAccessError):
        logger.error("%s: %s", fallback, exc)
        return HTTPException(status_code=503, detail=f"Spreadsheet temporarily unavailable: {exc}")
    if isinstance(exc, SheetsError):
        logger.error("%s: %s", fallback, exc)
        return HTTPException(status_code=500, detail=str(exc) or fallback)
    if isinstance(exc, ValueError):
        return HTTPException(status_code=400, detail=str(exc))
    logger.error("%s: %s", fallback, exc, exc_info=True)
    return HTTPException(status_code=500, detail=fallback)


def get_optional_services() -> ServiceRegistry | None:
    """Registry or None, for endpoints that report on startup state."""
    return _services
