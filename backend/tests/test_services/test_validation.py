"""Tests for the Tasks tab structure report."""

import pytest

from taskboard.services.validation import format_report
from taskboard.sheets.errors import SheetAccessError, SheetsError


@pytest.mark.asyncio
async def test_seeded_sheet_is_valid_apart_from_owner(services):
    report = await services.validation.validate_tasks_sheet()
    # "Plan offsite" has no owner
    assert report.valid is False
    assert report.issues == ['1 tasks have empty "Task Owner" values']
    assert report.sheet_data.headers[0] == "Task"
    assert len(report.sheet_data.sample_rows) == 3


@pytest.mark.asyncio
async def test_clean_sheet_is_valid(services):
    await services.tasks.update_task("task-4", {"task_owner": "Carol"})
    report = await services.validation.validate_tasks_sheet()
    assert report.valid is True
    assert report.issues == []


@pytest.mark.asyncio
async def test_wrong_headers_and_statuses(services, sheets):
    sheets.tabs["Tasks"][0] = ["Name", "Owner", "State"]
    for row in sheets.tabs["Tasks"][1:]:
        row[1] = row[1] or "Carol"
        row[2] = "Done"
    sheets.tabs["Tasks"].append(["Extra", "Bob", "Waiting"])

    report = await services.validation.validate_tasks_sheet()
    assert report.valid is False
    assert report.issues[0] == "Header row does not match expected structure"
    status_rows = [i for i in report.issues if i.startswith("Row ")]
    assert len(status_rows) == 3
    assert "5 tasks have invalid status values" in report.issues


@pytest.mark.asyncio
async def test_empty_sheet(services, sheets):
    sheets.tabs["Tasks"] = [sheets.tabs["Tasks"][0]]
    report = await services.validation.validate_tasks_sheet()
    assert report.valid is False
    assert report.issues == ["No data rows found (sheet appears empty)"]


@pytest.mark.asyncio
async def test_missing_headers(services, sheets):
    sheets.tabs["Tasks"] = []
    report = await services.validation.validate_tasks_sheet()
    assert report.issues == ["No headers found in row 1"]


@pytest.mark.asyncio
async def test_missing_tab_suggests_tab_name(services, sheets):
    del sheets.tabs["Tasks"]
    report = await services.validation.validate_tasks_sheet()
    assert report.valid is False
    assert report.issues[0].startswith("Failed to read sheet")
    assert 'tab named exactly "Tasks"' in report.suggestions[0]


@pytest.mark.asyncio
async def test_permission_error_suggests_sharing(services, sheets):
    sheets.fail("read", "Tasks", SheetAccessError("The caller does not have permission"))
    report = await services.validation.validate_tasks_sheet()
    assert "service account" in report.suggestions[0]

    sheets.fail("read", "Tasks", SheetsError("Something odd"))
    report = await services.validation.validate_tasks_sheet()
    assert report.suggestions == []


@pytest.mark.asyncio
async def test_summary_text(services):
    text = await services.validation.get_tasks_summary()
    assert text.startswith("=== Tasks Sheet Summary ===")
    assert "Headers (Row 1): Task | Task Owner | Status" in text
    assert "Row 2: Call vendor | Alice | Claimed" in text
    assert "Issues Found:" in text
    assert text.rstrip().endswith("Sheet needs attention before it can be used.")


@pytest.mark.asyncio
async def test_summary_for_valid_sheet(services):
    await services.tasks.update_task("task-4", {"task_owner": "Carol"})
    report = await services.validation.validate_tasks_sheet()
    text = format_report(report)
    assert "Issues Found:" not in text
    assert text.rstrip().endswith("Sheet structure is valid!")
