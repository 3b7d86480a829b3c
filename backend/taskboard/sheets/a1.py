"""A1 range notation helpers.

Ranges look like ``Tasks!A2:G``, ``'Task History'!A:D`` or ``Tasks!D7``.
Columns and rows are 1-based; an omitted row or column bound is open-ended.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_CELL_RE = re.compile(r"^([A-Za-z]*)(\d*)$")
_PLAIN_SHEET_RE = re.compile(r"^[A-Za-z0-9_]+$")


def column_letter(index: int) -> str:
    """1 -> "A", 26 -> "Z", 27 -> "AA"."""
    if index < 1:
        raise ValueError(f"Column index must be >= 1, got {index}")
    letters = ""
    while index > 0:
        index, remainder = divmod(index - 1, 26)
        letters = chr(65 + remainder) + letters
    return letters


def column_index(letters: str) -> int:
    """"A" -> 1, "AA" -> 27."""
    if not letters or not letters.isalpha():
        raise ValueError(f"Invalid column letters: {letters!r}")
    index = 0
    for ch in letters.upper():
        index = index * 26 + (ord(ch) - 64)
    return index


def quote_sheet(name: str) -> str:
    """Quote a tab name when it contains anything besides letters/digits/underscore."""
    if _PLAIN_SHEET_RE.match(name):
        return name
    return "'" + name.replace("'", "''") + "'"


def build_range(sheet: str, cells: str) -> str:
    return f"{quote_sheet(sheet)}!{cells}"


@dataclass(frozen=True)
class RangeRef:
    sheet: str
    start_col: int = 1
    start_row: int = 1
    end_col: int | None = None
    end_row: int | None = None


def _split_sheet(a1: str) -> tuple[str, str]:
    if a1.startswith("'"):
        i = 1
        name = ""
        while i < len(a1):
            ch = a1[i]
            if ch == "'":
                if i + 1 < len(a1) and a1[i + 1] == "'":
                    name += "'"
                    i += 2
                    continue
                rest = a1[i + 1:]
                if rest and not rest.startswith("!"):
                    raise ValueError(f"Invalid range: {a1!r}")
                return name, rest[1:]
            name += ch
            i += 1
        raise ValueError(f"Unterminated sheet name in range: {a1!r}")
    if "!" in a1:
        sheet, cells = a1.split("!", 1)
        return sheet, cells
    return a1, ""


def _parse_cell(cell: str, a1: str) -> tuple[int | None, int | None]:
    m = _CELL_RE.match(cell)
    if not m or not cell:
        raise ValueError(f"Invalid cell reference {cell!r} in range {a1!r}")
    letters, digits = m.groups()
    col = column_index(letters) if letters else None
    row = int(digits) if digits else None
    return col, row


def parse_range(a1: str) -> RangeRef:
    """Parse an A1 range into a RangeRef. A bare sheet name covers the whole tab."""
    sheet, cells = _split_sheet(a1.strip())
    if not sheet:
        raise ValueError(f"Range has no sheet name: {a1!r}")
    if not cells:
        return RangeRef(sheet=sheet)

    if ":" in cells:
        start, end = cells.split(":", 1)
        start_col, start_row = _parse_cell(start, a1)
        end_col, end_row = _parse_cell(end, a1)
    else:
        start_col, start_row = _parse_cell(cells, a1)
        end_col, end_row = start_col, start_row

    return RangeRef(
        sheet=sheet,
        start_col=start_col or 1,
        start_row=start_row or 1,
        end_col=end_col,
        end_row=end_row,
    )


def row_from_range(a1: str) -> int:
    """First row number of a range, e.g. ``Tasks!A12:G12`` -> 12."""
    return parse_range(a1).start_row
