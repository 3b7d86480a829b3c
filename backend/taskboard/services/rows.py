"""Row-level helpers shared by the record services.

Record IDs are ``<kind>-<sheet row number>``. Data starts at row 2 under a
header row, so the first record of every tab is ``<kind>-2``.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from taskboard.sheets.a1 import build_range, column_index
from taskboard.sheets.client import SheetsClient
from taskboard.sheets.errors import SheetAccessError, SheetsError
from taskboard.services.errors import NotFoundError

logger = logging.getLogger(__name__)

FIRST_DATA_ROW = 2


def cell(row: list[Any], index: int) -> str:
    if index < len(row) and row[index] is not None:
        return str(row[index])
    return ""


def is_blank(row: list[Any]) -> bool:
    return all(not str(v).strip() for v in row if v is not None)


def make_id(kind: str, row_number: int) -> str:
    return f"{kind}-{row_number}"


def parse_row_id(record_id: str, kind: str, label: str) -> int:
    """Row number from ``<kind>-<n>``. Raises NotFoundError for malformed IDs."""
    m = re.fullmatch(rf"{re.escape(kind)}-(\d+)", record_id or "")
    if not m or int(m.group(1)) < FIRST_DATA_ROW:
        raise NotFoundError(f"{label} not found")
    return int(m.group(1))


async def ensure_header(sheets: SheetsClient, sheet: str, last_col: str, headers: list[str]) -> None:
    """Write the header row when row 1 is blank or the tab does not exist yet."""
    header_range = build_range(sheet, f"A1:{last_col}1")
    try:
        first = await sheets.read_range(header_range)
    except SheetAccessError:
        raise
    except SheetsError as e:
        logger.warning("Header read from %r failed (%s); writing header row", sheet, e)
        first = []
    if not first or is_blank(first[0]):
        await sheets.write_range(header_range, [list(headers)])


async def append_with_header(
    sheets: SheetsClient,
    sheet: str,
    columns: str,
    headers: list[str],
    values: list[list[Any]],
) -> str:
    """Append rows below the header, writing the header first if row 1 is empty."""
    await ensure_header(sheets, sheet, columns.split(":")[-1], headers)
    return await sheets.append_range(build_range(sheet, columns), values)


def pad_row(row: list[Any], width: int) -> list[Any]:
    return list(row) + [""] * (width - len(row))


async def delete_row(
    sheets: SheetsClient,
    sheet: str,
    last_col: str,
    row_number: int,
    key_index: int,
    label: str,
) -> list[str]:
    """Remove one data row and shift every later row up by one.

    The later rows are written one row higher first, padded to the full
    width, and only then is the now-duplicated last row cleared. A failed
    write leaves the tab as it was. Returns the removed row.
    """
    rows = await sheets.read_range(build_range(sheet, f"A:{last_col}"))
    index = row_number - 1
    if index < 1 or index >= len(rows) or not cell(rows[index], key_index).strip():
        raise NotFoundError(f"{label} not found")

    stale_row = len(rows)
    removed = rows.pop(index)
    width = column_index(last_col)
    shifted = [pad_row(r, width) for r in rows[index:]]
    if shifted:
        await sheets.write_range(build_range(sheet, f"A{row_number}:{last_col}"), shifted)
    await sheets.clear_range(build_range(sheet, f"A{stale_row}:{last_col}{stale_row}"))
    return removed
