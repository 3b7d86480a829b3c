"""Health check endpoint: spreadsheet backend and configuration checks.

Checks: spreadsheet reachability (metadata read), required tabs present,
Google credentials configured, API key auth enabled.
"""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from taskboard.api.deps import get_optional_services
from taskboard.config import settings
from taskboard.services.registry import ServiceRegistry
from taskboard.sheets.errors import SheetsError

router = APIRouter()

VERSION = "0.3.0"


class HealthStatus(BaseModel):
    status: str  # "healthy" | "degraded" | "unhealthy"
    version: str
    checks: dict[str, dict]
    dependencies: dict[str, str]  # Simplified view for frontend
    timestamp: datetime


@router.get("/health", response_model=HealthStatus)
async def health_check(services: ServiceRegistry | None = Depends(get_optional_services)) -> HealthStatus:
    checks: dict[str, dict] = {}
    overall_healthy = True
    has_warning = False

    # 1. Spreadsheet backend
    if services is None:
        checks["spreadsheet"] = {"status": "error", "detail": "Spreadsheet backend not initialized"}
        overall_healthy = False
    else:
        try:
            metadata = await services.sheets.get_metadata()
            title = metadata.get("properties", {}).get("title", "")
            tabs = [s.get("properties", {}).get("title", "") for s in metadata.get("sheets", [])]
            checks["spreadsheet"] = {
                "status": "ok",
                "detail": f"{services.sheets.backend}: {title or 'untitled'} ({len(tabs)} tabs)",
            }

            # 2. Required tabs
            required = [settings.tasks_sheet, settings.discussions_sheet]
            missing = [name for name in required if name not in tabs]
            if missing:
                checks["tabs"] = {"status": "error", "detail": f"missing: {', '.join(missing)}"}
                overall_healthy = False
            else:
                optional = [settings.task_history_sheet, settings.loa_sheet, settings.task_rotation_sheet]
                absent = [name for name in optional if name not in tabs]
                if absent:
                    checks["tabs"] = {"status": "warning", "detail": f"created on first write: {', '.join(absent)}"}
                    has_warning = True
                else:
                    checks["tabs"] = {"status": "ok", "detail": "all tabs present"}
        except SheetsError as e:
            checks["spreadsheet"] = {"status": "error", "detail": str(e)}
            overall_healthy = False

    # 3. Credentials
    if settings.sheets_backend == "memory":
        checks["credentials"] = {"status": "disabled", "detail": "in-memory backend"}
    elif settings.has_google_credentials:
        checks["credentials"] = {"status": "ok", "detail": "service account configured"}
    else:
        checks["credentials"] = {"status": "error", "detail": "Google service account credentials not set"}
        overall_healthy = False

    # 4. API key auth (informational)
    if settings.taskboard_api_key:
        checks["auth"] = {"status": "ok", "detail": "API key required"}
    else:
        checks["auth"] = {"status": "warning", "detail": "TASKBOARD_API_KEY not set (auth disabled)"}
        has_warning = True

    dependencies = {name: check["status"] for name, check in checks.items()}

    if overall_healthy:
        status = "degraded" if has_warning else "healthy"
    else:
        status = "unhealthy"

    return HealthStatus(
        status=status,
        version=VERSION,
        checks=checks,
        dependencies=dependencies,
        timestamp=datetime.now(timezone.utc),
    )
