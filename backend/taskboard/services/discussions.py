"""Discussions service: topics awaiting supervisor feedback.

Columns: Date Posted, Topic, Link, then one column per supervisor (D onward).
The header row doubles as the supervisor roster.
"""

from __future__ import annotations

import logging
from typing import Any

from taskboard.dates import today_iso
from taskboard.models.discussion import Discussion, feedback_received
from taskboard.services.errors import NotFoundError
from taskboard.services.rows import cell, delete_row, is_blank, make_id, parse_row_id
from taskboard.sheets.a1 import build_range, column_letter, row_from_range
from taskboard.sheets.client import SheetsClient
from taskboard.sheets.layout import (
    DISCUSSION_COLUMNS,
    DISCUSSION_FIXED_COLS,
    DISCUSSION_HEADERS,
    DISCUSSION_LAST_COL,
)

logger = logging.getLogger(__name__)


def _supervisor_columns(headers: list[str]) -> list[tuple[int, str]]:
    """(column index, name) for every non-empty supervisor header."""
    return [
        (i, cell(headers, i).strip())
        for i in range(DISCUSSION_FIXED_COLS, len(headers))
        if cell(headers, i).strip()
    ]


def _row_to_discussion(row: list[Any], row_number: int, supervisors: list[tuple[int, str]]) -> Discussion:
    return Discussion(
        id=make_id("discussion", row_number),
        date_posted=cell(row, 0),
        topic=cell(row, 1).strip(),
        link=cell(row, 2),
        supervisor_feedback={name: feedback_received(cell(row, i)) for i, name in supervisors},
    )


class DiscussionsService:
    def __init__(self, sheets: SheetsClient, sheet: str = "Discussions Pending Feedback") -> None:
        self.sheets = sheets
        self.sheet = sheet

    def _range(self, cells: str) -> str:
        return build_range(self.sheet, cells)

    async def _rows(self) -> list[list[str]]:
        return await self.sheets.read_range(self._range(DISCUSSION_COLUMNS))

    async def get_all_discussions(self) -> list[Discussion]:
        rows = await self._rows()
        if not rows:
            return []

        supervisors = _supervisor_columns(rows[0])
        discussions = []
        for index, row in enumerate(rows[1:], start=2):
            if is_blank(row) or not cell(row, 1).strip():
                continue
            discussions.append(_row_to_discussion(row, index, supervisors))
        return discussions

    async def get_discussion(self, discussion_id: str) -> Discussion | None:
        discussions = await self.get_all_discussions()
        return next((d for d in discussions if d.id == discussion_id), None)

    async def get_supervisor_names(self) -> list[str]:
        rows = await self.sheets.read_range(self._range(f"A1:{DISCUSSION_LAST_COL}1"))
        if not rows:
            return []
        return [name for _, name in _supervisor_columns(rows[0])]

    async def create_discussion(self, topic: str, date_posted: str | None = None, link: str = "") -> Discussion:
        if not (topic or "").strip():
            raise ValueError("Topic is required")

        rows = await self._rows()
        if not rows:
            logger.info("Discussions tab is empty; writing header row")
            await self.sheets.write_range(self._range("A1:C1"), [list(DISCUSSION_HEADERS)])
            rows = [list(DISCUSSION_HEADERS)]
        headers = rows[0]
        feedback_cells = [""] * max(len(headers) - DISCUSSION_FIXED_COLS, 0)
        new_row = [date_posted or today_iso(), topic.strip(), link or ""] + feedback_cells

        updated_range = await self.sheets.append_range(self._range(DISCUSSION_COLUMNS), [new_row])
        row_number = row_from_range(updated_range) if updated_range else len(rows) + 1
        logger.info("Created discussion at row %d", row_number)
        return _row_to_discussion(new_row, row_number, _supervisor_columns(headers))

    async def update_discussion(self, discussion_id: str, updates: dict[str, Any]) -> Discussion:
        """Rewrite date, topic and link. Feedback columns are left untouched."""
        row_number = parse_row_id(discussion_id, "discussion", "Discussion")
        current = await self.get_discussion(discussion_id)
        if current is None:
            raise NotFoundError("Discussion not found")

        changes = {
            k: ("" if v is None else v)
            for k, v in updates.items()
            if k in ("date_posted", "topic", "link")
        }
        if "topic" in changes and not str(changes["topic"]).strip():
            raise ValueError("Topic is required")
        updated = current.model_copy(update=changes)

        await self.sheets.write_range(
            self._range(f"A{row_number}:C{row_number}"),
            [[updated.date_posted, updated.topic, updated.link]],
        )
        return updated

    async def update_discussion_feedback(self, discussion_id: str, supervisor_name: str, completed: bool) -> Discussion:
        row_number = parse_row_id(discussion_id, "discussion", "Discussion")
        rows = await self._rows()
        if not rows:
            raise NotFoundError("No discussions found")

        column = next(
            (i for i, name in _supervisor_columns(rows[0]) if name == supervisor_name.strip()),
            None,
        )
        if column is None:
            raise NotFoundError("Supervisor not found in discussions sheet")

        index = row_number - 1
        if index >= len(rows) or not cell(rows[index], 1).strip():
            raise NotFoundError("Discussion not found")

        await self.sheets.write_range(
            self._range(f"{column_letter(column + 1)}{row_number}"),
            [["TRUE" if completed else ""]],
        )

        discussion = await self.get_discussion(discussion_id)
        if discussion is None:
            raise NotFoundError("Discussion not found")
        return discussion

    async def delete_discussion(self, discussion_id: str) -> None:
        row_number = parse_row_id(discussion_id, "discussion", "Discussion")
        await delete_row(
            self.sheets, self.sheet, DISCUSSION_LAST_COL, row_number, key_index=1, label="Discussion"
        )
        logger.info("Deleted discussion at row %d", row_number)
