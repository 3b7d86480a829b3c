"""Tasks API endpoints: CRUD over the Tasks tab, plus the completion ledger.

GET    /api/tasks             — list all tasks
GET    /api/tasks/history/all — completion history
GET    /api/tasks/{id}        — single task
POST   /api/tasks             — create task
PUT    /api/tasks/{id}        — update task (Completed transition logs history)
DELETE /api/tasks/{id}        — delete task (later rows shift up)
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from taskboard.api.deps import DOMAIN_ERRORS, get_services, to_http_error
from taskboard.models.base import CamelModel
from taskboard.models.task import Task, TaskHistoryEntry
from taskboard.services.registry import ServiceRegistry

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


# === Request Models ===


class CreateTaskRequest(CamelModel):
    """Request to create a task. ``task`` is required."""

    task: str | None = None
    task_owner: str = ""
    status: str | None = None
    claimed_date: str | None = None
    due_date: str | None = None
    completed_date: str | None = None
    notes: str = ""


class UpdateTaskRequest(CamelModel):
    """Request to update a task. All fields optional."""

    task: str | None = None
    task_owner: str | None = None
    status: str | None = None
    claimed_date: str | None = None
    due_date: str | None = None
    completed_date: str | None = None
    notes: str | None = None


# === Endpoints ===


@router.get("", response_model=list[Task])
async def list_tasks(services: ServiceRegistry = Depends(get_services)) -> list[Task]:
    try:
        return await services.tasks.get_all_tasks()
    except DOMAIN_ERRORS as e:
        raise to_http_error(e, "Failed to fetch tasks") from e


@router.get("/history/all", response_model=list[TaskHistoryEntry])
async def list_task_history(services: ServiceRegistry = Depends(get_services)) -> list[TaskHistoryEntry]:
    try:
        return await services.tasks.get_task_history()
    except DOMAIN_ERRORS as e:
        raise to_http_error(e, "Failed to fetch task history") from e


@router.get("/{task_id}", response_model=Task)
async def get_task(task_id: str, services: ServiceRegistry = Depends(get_services)) -> Task:
    try:
        task = await services.tasks.get_task(task_id)
    except DOMAIN_ERRORS as e:
        raise to_http_error(e, "Failed to fetch task") from e
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.post("", response_model=Task, status_code=201)
async def create_task(request: CreateTaskRequest, services: ServiceRegistry = Depends(get_services)) -> Task:
    if not (request.task or "").strip():
        raise HTTPException(status_code=400, detail="Task name is required")
    try:
        return await services.tasks.create_task(
            task=request.task,
            task_owner=request.task_owner,
            status=request.status,
            claimed_date=request.claimed_date,
            due_date=request.due_date,
            completed_date=request.completed_date,
            notes=request.notes,
        )
    except DOMAIN_ERRORS as e:
        raise to_http_error(e, "Failed to create task") from e


@router.put("/{task_id}", response_model=Task)
async def update_task(
    task_id: str,
    request: UpdateTaskRequest,
    services: ServiceRegistry = Depends(get_services),
) -> Task:
    try:
        return await services.tasks.update_task(task_id, request.model_dump(exclude_unset=True))
    except DOMAIN_ERRORS as e:
        raise to_http_error(e, "Failed to update task") from e


@router.delete("/{task_id}", status_code=204)
async def delete_task(task_id: str, services: ServiceRegistry = Depends(get_services)) -> None:
    try:
        await services.tasks.delete_task(task_id)
    except DOMAIN_ERRORS as e:
        raise to_http_error(e, "Failed to delete task") from e
