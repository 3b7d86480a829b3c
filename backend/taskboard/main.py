"""Taskboard FastAPI Application.

Entry point for the backend server. The spreadsheet client and services are
built once in the lifespan; a configuration error leaves them unset so the
API answers 503 and /health reports unhealthy instead of refusing to start.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from taskboard.api.deps import set_services
from taskboard.api.health import VERSION
from taskboard.api.health import router as health_router
from taskboard.api.routes.analytics import router as analytics_router
from taskboard.api.routes.discussions import router as discussions_router
from taskboard.api.routes.loa import router as loa_router
from taskboard.api.routes.sheets import router as sheets_router
from taskboard.api.routes.supervisors import router as supervisors_router
from taskboard.api.routes.tasks import router as tasks_router
from taskboard.config import settings
from taskboard.middleware.auth import APIKeyAuthMiddleware
from taskboard.middleware.rate_limit import RateLimitMiddleware
from taskboard.services.registry import create_services
from taskboard.sheets.client import create_sheets_client
from taskboard.sheets.errors import SheetsConfigError

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    configure_logging(settings.log_level)

    try:
        sheets = create_sheets_client(settings)
        set_services(create_services(sheets, settings))
        logger.info(
            "Spreadsheet backend ready (%s, sheet=%s)",
            sheets.backend, settings.google_sheet_id or "-",
        )
    except SheetsConfigError as e:
        logger.error("Spreadsheet backend not configured: %s", e)
        set_services(None)

    yield

    set_services(None)


app = FastAPI(
    title="Taskboard",
    description="Supervisor task board backed by a Google Spreadsheet",
    version=VERSION,
    lifespan=lifespan,
)

# Middleware (order matters: last added = outermost)
app.add_middleware(APIKeyAuthMiddleware)
app.add_middleware(RateLimitMiddleware, rpm=settings.rate_limit_rpm)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.cors_origins.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report request validation failures as 400."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = first.get("msg", "Invalid request")
    return JSONResponse(
        status_code=400,
        content={"detail": f"{location}: {message}" if location else message},
    )


# Global exception handler: no internal details in responses
@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    if isinstance(exc, HTTPException):
        raise exc
    logger.error("Unhandled exception on %s %s: %s", request.method, request.url.path, exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error."},
    )


# Routes
app.include_router(health_router)
app.include_router(tasks_router)
app.include_router(discussions_router)
app.include_router(supervisors_router)
app.include_router(loa_router)
app.include_router(analytics_router)
app.include_router(sheets_router)


@app.get("/")
async def root():
    return {"name": "Taskboard", "version": VERSION, "status": "running"}
