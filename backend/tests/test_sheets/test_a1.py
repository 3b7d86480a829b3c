"""Tests for A1 range notation helpers."""

import pytest

from taskboard.sheets.a1 import (
    RangeRef,
    build_range,
    column_index,
    column_letter,
    parse_range,
    quote_sheet,
    row_from_range,
)


def test_column_letter():
    assert column_letter(1) == "A"
    assert column_letter(7) == "G"
    assert column_letter(26) == "Z"
    assert column_letter(27) == "AA"
    assert column_letter(52) == "AZ"
    assert column_letter(703) == "AAA"


def test_column_letter_rejects_zero():
    with pytest.raises(ValueError):
        column_letter(0)


def test_column_index():
    assert column_index("A") == 1
    assert column_index("z") == 26
    assert column_index("AA") == 27
    assert column_index("AAA") == 703


def test_column_index_rejects_digits():
    with pytest.raises(ValueError):
        column_index("A1")


def test_quote_sheet():
    assert quote_sheet("Tasks") == "Tasks"
    assert quote_sheet("Task History") == "'Task History'"
    assert quote_sheet("Bob's") == "'Bob''s'"


def test_build_range():
    assert build_range("Tasks", "A2:G") == "Tasks!A2:G"
    assert build_range("LOA Tracking", "A:E") == "'LOA Tracking'!A:E"


def test_parse_open_ended_range():
    ref = parse_range("Tasks!A2:G")
    assert ref == RangeRef(sheet="Tasks", start_col=1, start_row=2, end_col=7, end_row=None)


def test_parse_quoted_column_range():
    ref = parse_range("'Task History'!A:D")
    assert ref.sheet == "Task History"
    assert ref.start_row == 1
    assert ref.end_col == 4
    assert ref.end_row is None


def test_parse_single_cell():
    ref = parse_range("Tasks!D7")
    assert (ref.start_col, ref.start_row, ref.end_col, ref.end_row) == (4, 7, 4, 7)


def test_parse_escaped_quote_in_sheet_name():
    assert parse_range("'Bob''s'!B3").sheet == "Bob's"


def test_parse_bare_sheet_name():
    ref = parse_range("Tasks")
    assert ref.sheet == "Tasks"
    assert ref.end_col is None


def test_parse_invalid_ranges():
    with pytest.raises(ValueError):
        parse_range("!A1")
    with pytest.raises(ValueError):
        parse_range("Tasks!1A")
    with pytest.raises(ValueError):
        parse_range("'Unterminated!A1")


def test_row_from_range():
    assert row_from_range("Tasks!A12:G12") == 12
    assert row_from_range("'Task History'!A3:D3") == 3
