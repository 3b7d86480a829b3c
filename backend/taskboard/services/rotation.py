"""Task Rotation tab: supervisor rank and the mirrored LOA flag.

Columns (A:E): Employee Name, Rank, LOA?, LOA Start Date, LOA End Date.
"""

from __future__ import annotations

import logging

from taskboard.services.errors import NotFoundError
from taskboard.services.rows import cell
from taskboard.sheets.a1 import build_range
from taskboard.sheets.client import SheetsClient
from taskboard.sheets.errors import SheetAccessError, SheetsError
from taskboard.sheets.layout import ROTATION_COLUMNS, ROTATION_HEADERS

logger = logging.getLogger(__name__)


class RotationSheet:
    def __init__(self, sheets: SheetsClient, sheet: str = "Task Rotation") -> None:
        self.sheets = sheets
        self.sheet = sheet

    def _range(self, cells: str) -> str:
        return build_range(self.sheet, cells)

    async def _rows(self, create: bool = False) -> list[list[str]]:
        """All rows including the header. With ``create``, a missing or empty tab gets a header row."""
        try:
            rows = await self.sheets.read_range(self._range(ROTATION_COLUMNS))
        except SheetAccessError:
            raise
        except SheetsError:
            if not create:
                raise
            rows = []
        if not rows and create:
            logger.info("Task Rotation tab missing or empty; writing header row")
            await self.sheets.write_range(self._range("A1:E1"), [list(ROTATION_HEADERS)])
        return rows or [list(ROTATION_HEADERS)]

    def _find(self, rows: list[list[str]], name: str) -> int | None:
        """Sheet row number of ``name``, or None."""
        target = name.strip()
        for index, row in enumerate(rows[1:], start=2):
            if cell(row, 0).strip() == target:
                return index
        return None

    async def ranks(self) -> dict[str, str]:
        rows = await self._rows()
        return {cell(r, 0).strip(): cell(r, 1).strip() for r in rows[1:] if cell(r, 0).strip()}

    async def upsert_rank(self, name: str, rank: str) -> None:
        rows = await self._rows(create=True)
        row_number = self._find(rows, name)
        if row_number is None:
            await self.sheets.append_range(
                self._range(ROTATION_COLUMNS), [[name.strip(), rank, "FALSE", "", ""]]
            )
            return
        await self.sheets.write_range(self._range(f"B{row_number}"), [[rank]])

    async def set_loa(self, name: str, on_loa: bool, start_date: str = "", end_date: str = "") -> None:
        """Mirror LOA state into the supervisor's row. Raises NotFoundError when the name is absent."""
        rows = await self._rows(create=True)
        row_number = self._find(rows, name)
        if row_number is None:
            raise NotFoundError(
                f"Supervisor not found in {self.sheet} sheet. Verify the name exists in column A."
            )
        await self.sheets.write_range(
            self._range(f"C{row_number}:E{row_number}"),
            [["TRUE" if on_loa else "FALSE", start_date if on_loa else "", end_date if on_loa else ""]],
        )
