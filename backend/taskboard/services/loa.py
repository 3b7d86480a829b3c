"""LOA service: leave-of-absence records in the LOA Tracking tab.

Columns (A:E): Supervisor Name, Start Date, End Date, Reason, Status.

Each mutation is mirrored into the Task Rotation tab on a best-effort basis:
a sync failure is logged and the LOA change still succeeds. Log lines carry
record IDs and row numbers, not leave details.
"""

from __future__ import annotations

import logging
from typing import Any

from taskboard.models.supervisor import LOA_ACTIVE, LOA_COMPLETED, LOARecord
from taskboard.services.errors import NotFoundError
from taskboard.services.rotation import RotationSheet
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
from taskboard.sheets.layout import LOA_COLUMNS, LOA_HEADERS, LOA_LAST_COL

logger = logging.getLogger(__name__)

_EDITABLE = frozenset({"supervisor_name", "start_date", "end_date", "reason", "status"})


def canonical_loa_status(value: str | None) -> str:
    key = (value or "").strip().casefold()
    if not key or key == LOA_ACTIVE.casefold():
        return LOA_ACTIVE
    if key == LOA_COMPLETED.casefold():
        return LOA_COMPLETED
    raise ValueError(f"Invalid LOA status {value!r} (valid options: Active, Completed)")


def _row_to_record(row: list[Any], row_number: int) -> LOARecord:
    status = cell(row, 4).strip()
    return LOARecord(
        id=make_id("loa", row_number),
        supervisor_name=cell(row, 0).strip(),
        start_date=cell(row, 1),
        end_date=cell(row, 2),
        reason=cell(row, 3),
        status=LOA_COMPLETED if status.casefold() == LOA_COMPLETED.casefold() else LOA_ACTIVE,
    )


def _record_to_row(record: LOARecord) -> list[str]:
    return [record.supervisor_name, record.start_date, record.end_date, record.reason, record.status]


class LOAService:
    def __init__(
        self,
        sheets: SheetsClient,
        rotation: RotationSheet,
        loa_sheet: str = "LOA Tracking",
    ) -> None:
        self.sheets = sheets
        self.rotation = rotation
        self.loa_sheet = loa_sheet

    def _range(self, cells: str) -> str:
        return build_range(self.loa_sheet, cells)

    async def get_all_loa_records(self) -> list[LOARecord]:
        """All records. A missing tab reads as empty; access errors propagate."""
        try:
            rows = await self.sheets.read_range(self._range(LOA_COLUMNS))
        except SheetAccessError:
            raise
        except SheetsError as e:
            logger.warning("LOA records unavailable: %s", e)
            return []

        records = []
        for index, row in enumerate(rows[1:], start=2):
            if is_blank(row) or not cell(row, 0).strip():
                continue
            records.append(_row_to_record(row, index))
        return records

    async def get_active_loa(self) -> list[LOARecord]:
        return [r for r in await self.get_all_loa_records() if r.is_active]

    async def get_loa_record(self, record_id: str) -> LOARecord | None:
        records = await self.get_all_loa_records()
        return next((r for r in records if r.id == record_id), None)

    async def create_loa_record(
        self,
        supervisor_name: str,
        start_date: str,
        end_date: str,
        reason: str = "",
        status: str | None = LOA_ACTIVE,
    ) -> LOARecord:
        if not (supervisor_name or "").strip() or not start_date or not end_date:
            raise ValueError("Supervisor name, start date, and end date are required")

        record = LOARecord(
            id="",
            supervisor_name=supervisor_name.strip(),
            start_date=start_date,
            end_date=end_date,
            reason=reason or "",
            status=canonical_loa_status(status),
        )
        updated_range = await append_with_header(
            self.sheets, self.loa_sheet, LOA_COLUMNS, LOA_HEADERS, [_record_to_row(record)]
        )
        if updated_range:
            record.id = make_id("loa", row_from_range(updated_range))
        else:
            records = await self.get_all_loa_records()
            record.id = records[-1].id if records else make_id("loa", 2)
        logger.info("Created LOA record %s", record.id)

        await self._sync_rotation(record.supervisor_name, record.id)
        return record

    async def update_loa_record(self, record_id: str, updates: dict[str, Any]) -> LOARecord:
        row_number = parse_row_id(record_id, "loa", "LOA record")
        current = await self.get_loa_record(record_id)
        if current is None:
            logger.error("LOA record not found: %s", record_id)
            raise NotFoundError("LOA record not found")

        changes = {k: ("" if v is None else v) for k, v in updates.items() if k in _EDITABLE}
        if "status" in changes:
            changes["status"] = canonical_loa_status(changes["status"])
        if "supervisor_name" in changes:
            changes["supervisor_name"] = str(changes["supervisor_name"]).strip()
            if not changes["supervisor_name"]:
                raise ValueError("Supervisor name is required")
        logger.info("Updating LOA record at row %d (fields: %s)", row_number, sorted(changes))

        updated = current.model_copy(update=changes)
        await self.sheets.write_range(
            self._range(f"A{row_number}:{LOA_LAST_COL}{row_number}"), [_record_to_row(updated)]
        )

        await self._sync_rotation(updated.supervisor_name, record_id)
        if updated.supervisor_name != current.supervisor_name:
            await self._sync_rotation(current.supervisor_name, record_id)
        return updated

    async def delete_loa_record(self, record_id: str) -> None:
        row_number = parse_row_id(record_id, "loa", "LOA record")
        logger.info("Deleting LOA record at row %d", row_number)
        removed = await delete_row(
            self.sheets, self.loa_sheet, LOA_LAST_COL, row_number, key_index=0, label="LOA record"
        )
        await self._sync_rotation(cell(removed, 0).strip(), record_id)

    async def _sync_rotation(self, supervisor_name: str, record_id: str) -> None:
        """Mirror the supervisor's current LOA state into Task Rotation (best-effort)."""
        try:
            active = [
                r for r in await self.get_active_loa()
                if r.supervisor_name == supervisor_name.strip()
            ]
            if active:
                latest = active[-1]
                await self.rotation.set_loa(supervisor_name, True, latest.start_date, latest.end_date)
            else:
                await self.rotation.set_loa(supervisor_name, False)
        except (SheetsError, NotFoundError) as e:
            logger.warning("Task Rotation sync skipped after change to %s: %s", record_id, e)
