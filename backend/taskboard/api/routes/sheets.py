"""Sheet structure endpoints.

GET /api/sheets/validate — structured report on the Tasks tab
GET /api/sheets/summary  — the same report as plain text
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from taskboard.api.deps import get_services
from taskboard.services.registry import ServiceRegistry
from taskboard.services.validation import ValidationReport

router = APIRouter(prefix="/api/sheets", tags=["sheets"])


@router.get("/validate", response_model=ValidationReport)
async def validate_tasks_sheet(services: ServiceRegistry = Depends(get_services)) -> ValidationReport:
    return await services.validation.validate_tasks_sheet()


@router.get("/summary", response_class=PlainTextResponse)
async def tasks_sheet_summary(services: ServiceRegistry = Depends(get_services)) -> str:
    return await services.validation.get_tasks_summary()
