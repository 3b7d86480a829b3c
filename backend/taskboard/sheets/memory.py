"""In-memory spreadsheet backend for local development and tests.

Mirrors the Sheets API behaviour the services depend on:
- reads drop trailing empty cells and trailing empty rows
- appends land after the last non-empty row in the range's columns
- reading, appending to or clearing a missing tab fails like an unparseable range
- writing to a missing tab creates it

Usage:
    sheets = InMemorySheetsClient({"Tasks": [["Task", "Task Owner", "Status"]]})
    await sheets.append_range("Tasks!A:G", [["Call Bob", "Alice", "Claimed"]])
    sheets.fail("append", "Task History")  # next appends to that tab raise
"""

from __future__ import annotations

import copy
from typing import Any

from taskboard.sheets.a1 import RangeRef, build_range, column_letter, parse_range
from taskboard.sheets.client import Row, SheetsClient
from taskboard.sheets.errors import SheetsError


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if value is True:
        return "TRUE"
    if value is False:
        return "FALSE"
    return str(value)


def _trim_row(row: list[str]) -> list[str]:
    end = len(row)
    while end > 0 and row[end - 1] == "":
        end -= 1
    return row[:end]


class InMemorySheetsClient(SheetsClient):
    """Spreadsheet held as ``{tab: [[cell, ...], ...]}``."""

    backend = "memory"

    def __init__(self, tabs: dict[str, list[list[Any]]] | None = None, title: str = "Taskboard") -> None:
        self.title = title
        self.tabs: dict[str, list[list[str]]] = {
            name: [[_cell(v) for v in row] for row in rows] for name, rows in (tabs or {}).items()
        }
        self.call_log: list[dict] = []
        self._failures: dict[tuple[str, str], SheetsError] = {}

    # --- test hooks ---

    def fail(self, action: str, sheet: str, error: SheetsError | None = None) -> None:
        """Make every ``action`` ("read", "write", "append", "clear") on ``sheet`` raise."""
        self._failures[(action, sheet)] = error or SheetsError(f"Simulated {action} failure on {sheet}")

    def recover(self) -> None:
        self._failures.clear()

    def snapshot(self, sheet: str) -> list[list[str]]:
        """Raw grid for a tab, trailing blanks trimmed."""
        rows = [_trim_row(r) for r in self.tabs.get(sheet, [])]
        while rows and not rows[-1]:
            rows.pop()
        return copy.deepcopy(rows)

    # --- internals ---

    def _check(self, action: str, ref: RangeRef, range_: str) -> None:
        self.call_log.append({"action": action, "range": range_})
        err = self._failures.get((action, ref.sheet))
        if err is not None:
            raise err

    def _grid(self, ref: RangeRef, range_: str) -> list[list[str]]:
        grid = self.tabs.get(ref.sheet)
        if grid is None:
            raise SheetsError(f"Unable to parse range: {range_}", range_)
        return grid

    @staticmethod
    def _parse(range_: str) -> RangeRef:
        try:
            return parse_range(range_)
        except ValueError as e:
            raise SheetsError(str(e), range_) from e

    @staticmethod
    def _put(grid: list[list[str]], row: int, col: int, value: str) -> None:
        while len(grid) < row:
            grid.append([])
        target = grid[row - 1]
        while len(target) < col:
            target.append("")
        target[col - 1] = value

    def _write_at(self, grid: list[list[str]], ref: RangeRef, values: list[Row]) -> None:
        for r_offset, row in enumerate(values):
            for c_offset, value in enumerate(row):
                self._put(grid, ref.start_row + r_offset, ref.start_col + c_offset, _cell(value))

    # --- SheetsClient ---

    async def read_range(self, range_: str) -> list[list[str]]:
        ref = self._parse(range_)
        self._check("read", ref, range_)
        grid = self._grid(ref, range_)

        last_row = ref.end_row if ref.end_row is not None else len(grid)
        out: list[list[str]] = []
        for row_no in range(ref.start_row, last_row + 1):
            row = grid[row_no - 1] if row_no <= len(grid) else []
            stop = ref.end_col if ref.end_col is not None else len(row)
            out.append(_trim_row(row[ref.start_col - 1:stop]))
        while out and not out[-1]:
            out.pop()
        return out

    async def write_range(self, range_: str, values: list[Row]) -> None:
        ref = self._parse(range_)
        self._check("write", ref, range_)
        grid = self.tabs.setdefault(ref.sheet, [])
        self._write_at(grid, ref, values)

    async def append_range(self, range_: str, values: list[Row]) -> str:
        ref = self._parse(range_)
        self._check("append", ref, range_)
        grid = self._grid(ref, range_)

        last = 0
        for row_no, row in enumerate(grid, start=1):
            stop = ref.end_col if ref.end_col is not None else len(row)
            if any(cell != "" for cell in row[ref.start_col - 1:stop]):
                last = row_no
        first_row = max(last + 1, ref.start_row)
        target = RangeRef(sheet=ref.sheet, start_col=ref.start_col, start_row=first_row)
        self._write_at(grid, target, values)

        width = max((len(v) for v in values), default=1) or 1
        end_col = column_letter(ref.start_col + width - 1)
        end_row = first_row + max(len(values), 1) - 1
        return build_range(ref.sheet, f"{column_letter(ref.start_col)}{first_row}:{end_col}{end_row}")

    async def clear_range(self, range_: str) -> None:
        ref = self._parse(range_)
        self._check("clear", ref, range_)
        grid = self._grid(ref, range_)

        last_row = ref.end_row if ref.end_row is not None else len(grid)
        for row_no in range(ref.start_row, min(last_row, len(grid)) + 1):
            row = grid[row_no - 1]
            stop = ref.end_col if ref.end_col is not None else len(row)
            for col in range(ref.start_col - 1, min(stop, len(row))):
                row[col] = ""

    async def get_metadata(self) -> dict:
        return {
            "properties": {"title": self.title},
            "sheets": [{"properties": {"title": name}} for name in self.tabs],
        }
