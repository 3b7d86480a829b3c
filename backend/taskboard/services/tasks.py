"""Tasks service: Tasks tab rows <-> Task records, plus the Task History ledger.

Columns (A:G): Task, Task Owner, Status, Claimed Date, Due Date, Completed Date, Notes.
History (A:D): Task, Supervisor, Completed Date, Duration (Days).

A status change into "Completed" stamps the completed date and appends one
history row. The history append is best-effort: the task update stands even
when the ledger write fails.
"""

from __future__ import annotations

import logging
from typing import Any

from taskboard.dates import days_between, today_iso
from taskboard.models.task import Task, TaskHistoryEntry, canonical_status, is_completed
from taskboard.services.errors import NotFoundError
from taskboard.services.rows import (
    append_with_header,
    cell,
    delete_row,
    is_blank,
    make_id,
    parse_row_id,
)
from taskboard.sheets.a1 import build_range, row_from_range
from taskboard.sheets.client import SheetsClient
from taskboard.sheets.errors import SheetAccessError, SheetsError
from taskboard.sheets.layout import (
    HISTORY_COLUMNS,
    HISTORY_HEADERS,
    TASK_COLUMNS,
    TASK_HEADERS,
    TASK_LAST_COL,
)

logger = logging.getLogger(__name__)

_NULLABLE = frozenset({"due_date", "completed_date"})
_EDITABLE = frozenset({"task", "task_owner", "status", "claimed_date", "due_date", "completed_date", "notes"})


def _row_to_task(row: list[Any], row_number: int) -> Task:
    return Task(
        id=make_id("task", row_number),
        task=cell(row, 0).strip(),
        task_owner=cell(row, 1).strip(),
        status=cell(row, 2).strip(),
        claimed_date=cell(row, 3),
        due_date=cell(row, 4) or None,
        completed_date=cell(row, 5) or None,
        notes=cell(row, 6),
    )


def _task_to_row(task: Task) -> list[str]:
    return [
        task.task,
        task.task_owner,
        task.status,
        task.claimed_date,
        task.due_date or "",
        task.completed_date or "",
        task.notes,
    ]


def _parse_duration(value: str) -> int | None:
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return None


class TasksService:
    def __init__(
        self,
        sheets: SheetsClient,
        tasks_sheet: str = "Tasks",
        history_sheet: str = "Task History",
    ) -> None:
        self.sheets = sheets
        self.tasks_sheet = tasks_sheet
        self.history_sheet = history_sheet

    def _range(self, cells: str) -> str:
        return build_range(self.tasks_sheet, cells)

    async def get_all_tasks(self) -> list[Task]:
        rows = await self.sheets.read_range(self._range(f"A2:{TASK_LAST_COL}"))
        tasks = []
        for index, row in enumerate(rows):
            # Blank rows and rows without a description keep their row number but are skipped
            if is_blank(row) or not cell(row, 0).strip():
                continue
            tasks.append(_row_to_task(row, index + 2))
        return tasks

    async def get_task(self, task_id: str) -> Task | None:
        tasks = await self.get_all_tasks()
        return next((t for t in tasks if t.id == task_id), None)

    async def create_task(
        self,
        task: str,
        task_owner: str = "",
        status: str | None = "",
        claimed_date: str | None = None,
        due_date: str | None = None,
        completed_date: str | None = None,
        notes: str = "",
    ) -> Task:
        """Append a task row. A task created as Completed is recorded in history."""
        if not (task or "").strip():
            raise ValueError("Task name is required")

        new_task = Task(
            id="",
            task=task.strip(),
            task_owner=(task_owner or "").strip(),
            status=canonical_status(status),
            claimed_date=claimed_date or today_iso(),
            due_date=due_date or None,
            completed_date=completed_date or None,
            notes=notes or "",
        )
        completed = is_completed(new_task.status)
        if completed and not new_task.completed_date:
            new_task.completed_date = today_iso()

        updated_range = await append_with_header(
            self.sheets, self.tasks_sheet, TASK_COLUMNS, TASK_HEADERS, [_task_to_row(new_task)]
        )
        if updated_range:
            new_task.id = make_id("task", row_from_range(updated_range))
        else:
            tasks = await self.get_all_tasks()
            new_task.id = tasks[-1].id if tasks else make_id("task", 2)
        logger.info("Created %s", new_task.id)

        if completed:
            await self._add_to_history(new_task)
        return new_task

    async def update_task(self, task_id: str, updates: dict[str, Any]) -> Task:
        """Merge ``updates`` into the task and rewrite its row."""
        row_number = parse_row_id(task_id, "task", "Task")
        current = await self.get_task(task_id)
        if current is None:
            raise NotFoundError("Task not found")

        changes: dict[str, Any] = {}
        for key, value in updates.items():
            if key not in _EDITABLE:
                continue
            if value is None and key not in _NULLABLE:
                value = ""
            changes[key] = value
        if "status" in changes:
            changes["status"] = canonical_status(changes["status"])
        if "task" in changes and not str(changes["task"]).strip():
            raise ValueError("Task name is required")

        updated = current.model_copy(update=changes)
        transitioned = is_completed(updated.status) and not is_completed(current.status)
        if transitioned and not updated.completed_date:
            updated.completed_date = today_iso()

        row_range = self._range(f"A{row_number}:{TASK_LAST_COL}{row_number}")
        await self.sheets.write_range(row_range, [_task_to_row(updated)])

        if transitioned:
            await self._add_to_history(updated)
        return updated

    async def delete_task(self, task_id: str) -> None:
        row_number = parse_row_id(task_id, "task", "Task")
        await delete_row(self.sheets, self.tasks_sheet, TASK_LAST_COL, row_number, key_index=0, label="Task")
        logger.info("Deleted task at row %d", row_number)

    async def _add_to_history(self, task: Task) -> None:
        duration = days_between(task.claimed_date, task.completed_date)
        row = [
            task.task,
            task.task_owner,
            task.completed_date or "",
            "" if duration is None else str(duration),
        ]
        try:
            await append_with_header(self.sheets, self.history_sheet, HISTORY_COLUMNS, HISTORY_HEADERS, [row])
        except SheetsError as e:
            logger.warning("Failed to add %s to task history (task update kept): %s", task.id, e)

    async def get_task_history(self) -> list[TaskHistoryEntry]:
        """History ledger. A missing tab reads as empty; access errors propagate."""
        try:
            rows = await self.sheets.read_range(build_range(self.history_sheet, "A2:D"))
        except SheetAccessError:
            raise
        except SheetsError as e:
            logger.warning("Task history unavailable: %s", e)
            return []

        entries = []
        for index, row in enumerate(rows):
            if is_blank(row):
                continue
            entries.append(
                TaskHistoryEntry(
                    id=make_id("history", index + 2),
                    task_name=cell(row, 0),
                    supervisor=cell(row, 1).strip(),
                    completed_date=cell(row, 2),
                    duration_days=_parse_duration(cell(row, 3)),
                )
            )
        return entries
