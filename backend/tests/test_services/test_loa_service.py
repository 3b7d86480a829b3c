"""Tests for LOAService and the Task Rotation mirror."""

import pytest

from taskboard.services.errors import NotFoundError
from taskboard.services.loa import canonical_loa_status
from taskboard.sheets.errors import SheetAccessError


def _rotation_row(sheets, name):
    for row in sheets.snapshot("Task Rotation")[1:]:
        if row and row[0] == name:
            return row + [""] * (5 - len(row))
    return None


async def _seed_three(services):
    await services.loa.create_loa_record("Alice", "2025-03-01", "2025-03-10", reason="Vacation")
    await services.loa.create_loa_record("Bob", "2025-04-01", "2025-04-15", reason="Medical")
    await services.loa.create_loa_record("Carol", "2025-05-01", "2025-05-05", reason="Training", status="Completed")


def test_canonical_loa_status():
    assert canonical_loa_status(None) == "Active"
    assert canonical_loa_status(" active ") == "Active"
    assert canonical_loa_status("COMPLETED") == "Completed"
    with pytest.raises(ValueError):
        canonical_loa_status("Paused")


@pytest.mark.asyncio
async def test_create_marks_supervisor_on_leave(services, sheets):
    record = await services.loa.create_loa_record("Alice", "2025-03-01", "2025-03-10", reason="Vacation")
    assert record.id == "loa-2"
    assert record.status == "Active"
    assert sheets.snapshot("LOA Tracking")[1] == ["Alice", "2025-03-01", "2025-03-10", "Vacation", "Active"]
    assert _rotation_row(sheets, "Alice") == ["Alice", "Senior", "TRUE", "2025-03-01", "2025-03-10"]
    assert _rotation_row(sheets, "Bob")[2] == "FALSE"


@pytest.mark.asyncio
async def test_create_validates_input(services):
    with pytest.raises(ValueError, match="required"):
        await services.loa.create_loa_record("Alice", "2025-03-01", "")
    with pytest.raises(ValueError, match="required"):
        await services.loa.create_loa_record("  ", "2025-03-01", "2025-03-02")
    with pytest.raises(ValueError, match="Invalid LOA status"):
        await services.loa.create_loa_record("Alice", "2025-03-01", "2025-03-02", status="Paused")


@pytest.mark.asyncio
async def test_create_writes_header_when_tab_missing(services, sheets):
    del sheets.tabs["LOA Tracking"]
    assert await services.loa.get_all_loa_records() == []

    record = await services.loa.create_loa_record("Bob", "2025-04-01", "2025-04-15")
    assert record.id == "loa-2"
    assert sheets.snapshot("LOA Tracking")[0] == ["Supervisor Name", "Start Date", "End Date", "Reason", "Status"]


@pytest.mark.asyncio
async def test_create_on_empty_tab_keeps_first_record(services, sheets):
    sheets.tabs["LOA Tracking"] = []

    record = await services.loa.create_loa_record("Bob", "2025-04-01", "2025-04-15")
    assert record.id == "loa-2"
    assert sheets.snapshot("LOA Tracking")[0][0] == "Supervisor Name"
    assert (await services.loa.get_loa_record("loa-2")).supervisor_name == "Bob"
    assert [r.id for r in await services.loa.get_all_loa_records()] == ["loa-2"]


@pytest.mark.asyncio
async def test_active_records(services):
    await _seed_three(services)
    records = await services.loa.get_all_loa_records()
    assert [r.id for r in records] == ["loa-2", "loa-3", "loa-4"]
    active = await services.loa.get_active_loa()
    assert [r.supervisor_name for r in active] == ["Alice", "Bob"]


@pytest.mark.asyncio
async def test_completing_leave_clears_rotation(services, sheets):
    await services.loa.create_loa_record("Alice", "2025-03-01", "2025-03-10")
    updated = await services.loa.update_loa_record("loa-2", {"status": "completed"})
    assert updated.status == "Completed"
    assert _rotation_row(sheets, "Alice") == ["Alice", "Senior", "FALSE", "", ""]


@pytest.mark.asyncio
async def test_reassigning_leave_syncs_both_names(services, sheets):
    await services.loa.create_loa_record("Alice", "2025-03-01", "2025-03-10")
    updated = await services.loa.update_loa_record("loa-2", {"supervisor_name": "Bob", "reason": None})
    assert updated.supervisor_name == "Bob"
    assert updated.reason == ""
    assert _rotation_row(sheets, "Bob")[2:] == ["TRUE", "2025-03-01", "2025-03-10"]
    assert _rotation_row(sheets, "Alice")[2] == "FALSE"


@pytest.mark.asyncio
async def test_update_errors(services):
    await services.loa.create_loa_record("Alice", "2025-03-01", "2025-03-10")
    with pytest.raises(NotFoundError, match="LOA record not found"):
        await services.loa.update_loa_record("loa-9", {"reason": "x"})
    with pytest.raises(ValueError):
        await services.loa.update_loa_record("loa-2", {"status": "Paused"})
    with pytest.raises(ValueError):
        await services.loa.update_loa_record("loa-2", {"supervisor_name": " "})


@pytest.mark.asyncio
async def test_delete_keeps_other_records_intact(services, sheets):
    await _seed_three(services)
    await services.loa.delete_loa_record("loa-3")

    records = await services.loa.get_all_loa_records()
    assert [(r.id, r.supervisor_name) for r in records] == [("loa-2", "Alice"), ("loa-3", "Carol")]
    carol = records[1]
    assert (carol.start_date, carol.end_date, carol.reason, carol.status) == (
        "2025-05-01", "2025-05-05", "Training", "Completed",
    )
    assert _rotation_row(sheets, "Bob")[2] == "FALSE"
    assert _rotation_row(sheets, "Alice")[2] == "TRUE"


@pytest.mark.asyncio
async def test_delete_unknown_record(services):
    await services.loa.create_loa_record("Alice", "2025-03-01", "2025-03-10")
    with pytest.raises(NotFoundError):
        await services.loa.delete_loa_record("loa-5")
    with pytest.raises(NotFoundError):
        await services.loa.delete_loa_record("task-2")


@pytest.mark.asyncio
async def test_rotation_failure_does_not_block_leave(services, sheets):
    sheets.fail("write", "Task Rotation")
    record = await services.loa.create_loa_record("Alice", "2025-03-01", "2025-03-10")
    assert record.id == "loa-2"
    assert sheets.snapshot("LOA Tracking")[1][0] == "Alice"
    assert _rotation_row(sheets, "Alice")[2] == "FALSE"


@pytest.mark.asyncio
async def test_name_missing_from_rotation_is_skipped(services, sheets):
    before = sheets.snapshot("Task Rotation")
    record = await services.loa.create_loa_record("Dave", "2025-03-01", "2025-03-10")
    assert record.supervisor_name == "Dave"
    assert sheets.snapshot("Task Rotation") == before


@pytest.mark.asyncio
async def test_access_error_propagates(services, sheets):
    sheets.fail("read", "LOA Tracking", SheetAccessError("quota exceeded"))
    with pytest.raises(SheetAccessError):
        await services.loa.get_all_loa_records()
