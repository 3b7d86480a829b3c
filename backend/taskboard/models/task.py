"""Task and Task History models.

Status vocabulary is the fixed set of stage labels the supervisors use.
An empty status means the task has not been started.
"""

from __future__ import annotations

from pydantic import Field

from taskboard.models.base import CamelModel

TASK_STATUSES: tuple[str, ...] = (
    "Assigned",
    "Claimed",
    "Pending Reach Out",
    "Pending Meeting",
    "Pending Employee Reach Out",
    "Pending Discussion",
    "Completed",
)
COMPLETED = "Completed"

_BY_KEY = {s.casefold(): s for s in TASK_STATUSES}


def normalize_status(value: str | None) -> str:
    return (value or "").strip().casefold()


def is_completed(status: str | None) -> bool:
    return normalize_status(status) == COMPLETED.casefold()


def canonical_status(value: str | None) -> str:
    """Map user input onto a canonical label. Raises ValueError for unknown labels."""
    key = normalize_status(value)
    if not key:
        return ""
    try:
        return _BY_KEY[key]
    except KeyError:
        raise ValueError(
            f"Invalid status {value!r} (valid options: {', '.join(TASK_STATUSES)})"
        ) from None


class Task(CamelModel):
    """One row of the Tasks tab. ``id`` is ``task-<row number>``."""

    id: str
    task: str
    task_owner: str = ""
    status: str = ""
    claimed_date: str = ""
    due_date: str | None = None
    completed_date: str | None = None
    notes: str = ""


class TaskHistoryEntry(CamelModel):
    """Denormalised completion record, appended when a task is completed."""

    id: str
    task_name: str
    supervisor: str = ""
    completed_date: str = ""
    duration_days: int | None = Field(default=None, description="None when the claimed date was unknown")
