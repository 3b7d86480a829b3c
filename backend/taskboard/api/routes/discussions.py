"""Discussions API endpoints.

GET    /api/discussions               — list discussions
GET    /api/discussions/{id}          — single discussion
POST   /api/discussions               — create discussion
PUT    /api/discussions/{id}          — update date / topic / link
PUT    /api/discussions/{id}/feedback — set one supervisor's feedback flag
DELETE /api/discussions/{id}          — delete discussion
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from taskboard.api.deps import DOMAIN_ERRORS, get_services, to_http_error
from taskboard.models.base import CamelModel
from taskboard.models.discussion import Discussion
from taskboard.services.registry import ServiceRegistry

router = APIRouter(prefix="/api/discussions", tags=["discussions"])


class CreateDiscussionRequest(CamelModel):
    topic: str | None = None
    date_posted: str | None = None
    link: str = ""


class UpdateDiscussionRequest(CamelModel):
    topic: str | None = None
    date_posted: str | None = None
    link: str | None = None


class FeedbackRequest(CamelModel):
    supervisor_name: str | None = None
    completed: bool = False


@router.get("", response_model=list[Discussion])
async def list_discussions(services: ServiceRegistry = Depends(get_services)) -> list[Discussion]:
    try:
        return await services.discussions.get_all_discussions()
    except DOMAIN_ERRORS as e:
        raise to_http_error(e, "Failed to fetch discussions") from e


@router.get("/{discussion_id}", response_model=Discussion)
async def get_discussion(discussion_id: str, services: ServiceRegistry = Depends(get_services)) -> Discussion:
    try:
        discussion = await services.discussions.get_discussion(discussion_id)
    except DOMAIN_ERRORS as e:
        raise to_http_error(e, "Failed to fetch discussion") from e
    if discussion is None:
        raise HTTPException(status_code=404, detail="Discussion not found")
    return discussion


@router.post("", response_model=Discussion, status_code=201)
async def create_discussion(
    request: CreateDiscussionRequest,
    services: ServiceRegistry = Depends(get_services),
) -> Discussion:
    if not (request.topic or "").strip():
        raise HTTPException(status_code=400, detail="Topic is required")
    try:
        return await services.discussions.create_discussion(
            topic=request.topic, date_posted=request.date_posted, link=request.link
        )
    except DOMAIN_ERRORS as e:
        raise to_http_error(e, "Failed to create discussion") from e


@router.put("/{discussion_id}", response_model=Discussion)
async def update_discussion(
    discussion_id: str,
    request: UpdateDiscussionRequest,
    services: ServiceRegistry = Depends(get_services),
) -> Discussion:
    try:
        return await services.discussions.update_discussion(discussion_id, request.model_dump(exclude_unset=True))
    except DOMAIN_ERRORS as e:
        raise to_http_error(e, "Failed to update discussion") from e


@router.put("/{discussion_id}/feedback", response_model=Discussion)
async def update_feedback(
    discussion_id: str,
    request: FeedbackRequest,
    services: ServiceRegistry = Depends(get_services),
) -> Discussion:
    if not (request.supervisor_name or "").strip():
        raise HTTPException(status_code=400, detail="Supervisor name is required")
    try:
        return await services.discussions.update_discussion_feedback(
            discussion_id, request.supervisor_name, request.completed is True
        )
    except DOMAIN_ERRORS as e:
        raise to_http_error(e, "Failed to update discussion feedback") from e


@router.delete("/{discussion_id}", status_code=204)
async def delete_discussion(discussion_id: str, services: ServiceRegistry = Depends(get_services)) -> None:
    try:
        await services.discussions.delete_discussion(discussion_id)
    except DOMAIN_ERRORS as e:
        raise to_http_error(e, "Failed to delete discussion") from e
