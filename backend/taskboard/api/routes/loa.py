"""LOA API endpoints: leave-of-absence records.

GET    /api/loa        — list records
GET    /api/loa/active — records with status Active
GET    /api/loa/{id}   — single record
POST   /api/loa        — create record
PUT    /api/loa/{id}   — update record
DELETE /api/loa/{id}   — delete record
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from taskboard.api.deps import DOMAIN_ERRORS, get_services, to_http_error
from taskboard.models.base import CamelModel
from taskboard.models.supervisor import LOARecord
from taskboard.services.registry import ServiceRegistry

router = APIRouter(prefix="/api/loa", tags=["loa"])


class CreateLOARequest(CamelModel):
    supervisor_name: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    reason: str = ""
    status: str | None = None


class UpdateLOARequest(CamelModel):
    supervisor_name: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    reason: str | None = None
    status: str | None = None


@router.get("", response_model=list[LOARecord])
async def list_loa_records(services: ServiceRegistry = Depends(get_services)) -> list[LOARecord]:
    try:
        return await services.loa.get_all_loa_records()
    except DOMAIN_ERRORS as e:
        raise to_http_error(e, "Failed to fetch LOA records") from e


@router.get("/active", response_model=list[LOARecord])
async def list_active_loa(services: ServiceRegistry = Depends(get_services)) -> list[LOARecord]:
    try:
        return await services.loa.get_active_loa()
    except DOMAIN_ERRORS as e:
        raise to_http_error(e, "Failed to fetch active LOA records") from e


@router.get("/{record_id}", response_model=LOARecord)
async def get_loa_record(record_id: str, services: ServiceRegistry = Depends(get_services)) -> LOARecord:
    try:
        record = await services.loa.get_loa_record(record_id)
    except DOMAIN_ERRORS as e:
        raise to_http_error(e, "Failed to fetch LOA record") from e
    if record is None:
        raise HTTPException(status_code=404, detail="LOA record not found")
    return record


@router.post("", response_model=LOARecord, status_code=201)
async def create_loa_record(
    request: CreateLOARequest,
    services: ServiceRegistry = Depends(get_services),
) -> LOARecord:
    if not (request.supervisor_name or "").strip() or not request.start_date or not request.end_date:
        raise HTTPException(status_code=400, detail="Supervisor name, start date, and end date are required")
    try:
        return await services.loa.create_loa_record(
            supervisor_name=request.supervisor_name,
            start_date=request.start_date,
            end_date=request.end_date,
            reason=request.reason,
            status=request.status,
        )
    except DOMAIN_ERRORS as e:
        raise to_http_error(e, "Failed to create LOA record") from e


@router.put("/{record_id}", response_model=LOARecord)
async def update_loa_record(
    record_id: str,
    request: UpdateLOARequest,
    services: ServiceRegistry = Depends(get_services),
) -> LOARecord:
    try:
        return await services.loa.update_loa_record(record_id, request.model_dump(exclude_unset=True))
    except DOMAIN_ERRORS as e:
        raise to_http_error(e, "Failed to update LOA record") from e


@router.delete("/{record_id}", status_code=204)
async def delete_loa_record(record_id: str, services: ServiceRegistry = Depends(get_services)) -> None:
    try:
        await services.loa.delete_loa_record(record_id)
    except DOMAIN_ERRORS as e:
        raise to_http_error(e, "Failed to delete LOA record") from e
