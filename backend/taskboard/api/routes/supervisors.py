"""Supervisors API endpoints: the roster.

GET    /api/supervisors        — list roster with rank and LOA flag
GET    /api/supervisors/{name} — single supervisor
POST   /api/supervisors        — add supervisor (409 if present)
PUT    /api/supervisors/{name} — update rank
DELETE /api/supervisors/{name} — remove supervisor column
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from taskboard.api.deps import DOMAIN_ERRORS, get_services, to_http_error
from taskboard.models.base import CamelModel
from taskboard.models.supervisor import Supervisor
from taskboard.services.registry import ServiceRegistry

router = APIRouter(prefix="/api/supervisors", tags=["supervisors"])


class AddSupervisorRequest(CamelModel):
    name: str | None = None
    rank: str = ""


class UpdateSupervisorRequest(CamelModel):
    rank: str = ""


@router.get("", response_model=list[Supervisor])
async def list_supervisors(services: ServiceRegistry = Depends(get_services)) -> list[Supervisor]:
    try:
        return await services.supervisors.get_all_supervisors()
    except DOMAIN_ERRORS as e:
        raise to_http_error(e, "Failed to fetch supervisors") from e


@router.get("/{name}", response_model=Supervisor)
async def get_supervisor(name: str, services: ServiceRegistry = Depends(get_services)) -> Supervisor:
    try:
        supervisor = await services.supervisors.get_supervisor(name)
    except DOMAIN_ERRORS as e:
        raise to_http_error(e, "Failed to fetch supervisor") from e
    if supervisor is None:
        raise HTTPException(status_code=404, detail="Supervisor not found")
    return supervisor


@router.post("", response_model=Supervisor, status_code=201)
async def add_supervisor(
    request: AddSupervisorRequest,
    services: ServiceRegistry = Depends(get_services),
) -> Supervisor:
    if not (request.name or "").strip():
        raise HTTPException(status_code=400, detail="Supervisor name is required")
    try:
        return await services.supervisors.add_supervisor(request.name, request.rank)
    except DOMAIN_ERRORS as e:
        raise to_http_error(e, "Failed to add supervisor") from e


@router.put("/{name}", response_model=Supervisor)
async def update_supervisor(
    name: str,
    request: UpdateSupervisorRequest,
    services: ServiceRegistry = Depends(get_services),
) -> Supervisor:
    try:
        return await services.supervisors.update_supervisor(name, request.rank)
    except DOMAIN_ERRORS as e:
        raise to_http_error(e, "Failed to update supervisor") from e


@router.delete("/{name}", status_code=204)
async def remove_supervisor(name: str, services: ServiceRegistry = Depends(get_services)) -> None:
    try:
        await services.supervisors.remove_supervisor(name)
    except DOMAIN_ERRORS as e:
        raise to_http_error(e, "Failed to remove supervisor") from e
