"""Tests for TasksService: task rows, the Completed transition and the history ledger."""

import pytest

from taskboard.dates import today_iso
from taskboard.services.errors import NotFoundError
from taskboard.sheets.errors import SheetAccessError, SheetsError


@pytest.mark.asyncio
async def test_get_all_tasks_assigns_row_ids(services):
    tasks = await services.tasks.get_all_tasks()
    assert [t.id for t in tasks] == ["task-2", "task-3", "task-4", "task-5"]
    assert tasks[0].task == "Call vendor"
    assert tasks[0].due_date == "2025-03-10"
    assert tasks[0].completed_date is None
    assert tasks[2].task_owner == ""
    assert tasks[2].status == ""


@pytest.mark.asyncio
async def test_blank_rows_keep_row_numbers(services, sheets):
    sheets.tabs["Tasks"].insert(2, ["", "", ""])
    tasks = await services.tasks.get_all_tasks()
    assert [t.id for t in tasks] == ["task-2", "task-4", "task-5", "task-6"]
    assert (await services.tasks.get_task("task-4")).task == "Review budget"


@pytest.mark.asyncio
async def test_get_task_unknown_returns_none(services):
    assert await services.tasks.get_task("task-99") is None


@pytest.mark.asyncio
async def test_create_task_defaults(services, sheets):
    task = await services.tasks.create_task(task="  Order supplies ", task_owner="Carol", status="pending meeting")
    assert task.id == "task-6"
    assert task.task == "Order supplies"
    assert task.status == "Pending Meeting"
    assert task.claimed_date == today_iso()
    assert task.completed_date is None
    assert sheets.snapshot("Tasks")[5][:4] == ["Order supplies", "Carol", "Pending Meeting", today_iso()]
    assert sheets.snapshot("Task History") == [["Task", "Supervisor", "Completed Date", "Duration (Days)"]]


@pytest.mark.asyncio
async def test_create_task_rejects_bad_input(services):
    with pytest.raises(ValueError, match="Task name is required"):
        await services.tasks.create_task(task="   ")
    with pytest.raises(ValueError, match="Invalid status"):
        await services.tasks.create_task(task="Something", status="Done-ish")


@pytest.mark.asyncio
async def test_create_completed_task_records_history(services):
    task = await services.tasks.create_task(
        task="Close ticket", task_owner="Bob", status="Completed", claimed_date="2025-03-01"
    )
    assert task.completed_date == today_iso()

    history = await services.tasks.get_task_history()
    assert len(history) == 1
    assert history[0].task_name == "Close ticket"
    assert history[0].supervisor == "Bob"


@pytest.mark.asyncio
async def test_completing_task_appends_history_once(services):
    updated = await services.tasks.update_task("task-2", {"status": "completed", "completed_date": "2025-03-05"})
    assert updated.status == "Completed"
    assert updated.completed_date == "2025-03-05"

    # Further edits of a completed task do not add history
    await services.tasks.update_task("task-2", {"notes": "closed out"})
    await services.tasks.update_task("task-2", {"status": "Completed"})

    history = await services.tasks.get_task_history()
    assert len(history) == 1
    entry = history[0]
    assert entry.task_name == "Call vendor"
    assert entry.supervisor == "Alice"
    assert entry.completed_date == "2025-03-05"
    assert entry.duration_days == 4


@pytest.mark.asyncio
async def test_completing_without_date_stamps_today(services, sheets):
    updated = await services.tasks.update_task("task-5", {"status": "Completed"})
    assert updated.completed_date == today_iso()
    assert sheets.snapshot("Tasks")[4][5] == today_iso()


@pytest.mark.asyncio
async def test_unknown_claimed_date_gives_no_duration(services):
    await services.tasks.update_task("task-4", {"claimed_date": "", "task_owner": "Carol"})
    await services.tasks.update_task("task-4", {"status": "Completed"})
    history = await services.tasks.get_task_history()
    assert history[0].duration_days is None


@pytest.mark.asyncio
async def test_history_failure_keeps_task_update(services, sheets):
    sheets.fail("append", "Task History")
    sheets.fail("write", "Task History")

    updated = await services.tasks.update_task("task-2", {"status": "Completed"})
    assert updated.status == "Completed"
    assert sheets.snapshot("Tasks")[1][2] == "Completed"

    sheets.recover()
    assert await services.tasks.get_task_history() == []


@pytest.mark.asyncio
async def test_missing_history_tab_is_created(services, sheets):
    del sheets.tabs["Task History"]
    assert await services.tasks.get_task_history() == []

    await services.tasks.update_task("task-2", {"status": "Completed", "completed_date": "2025-03-02"})
    assert sheets.snapshot("Task History") == [
        ["Task", "Supervisor", "Completed Date", "Duration (Days)"],
        ["Call vendor", "Alice", "2025-03-02", "1"],
    ]


@pytest.mark.asyncio
async def test_empty_history_tab_gets_header_before_first_entry(services, sheets):
    sheets.tabs["Task History"] = []

    await services.tasks.update_task("task-2", {"status": "Completed", "completed_date": "2025-03-02"})
    assert sheets.snapshot("Task History")[0] == ["Task", "Supervisor", "Completed Date", "Duration (Days)"]
    history = await services.tasks.get_task_history()
    assert [(h.task_name, h.supervisor) for h in history] == [("Call vendor", "Alice")]


@pytest.mark.asyncio
async def test_create_task_on_empty_tab_writes_header(services, sheets):
    sheets.tabs["Tasks"] = []
    task = await services.tasks.create_task(task="Order supplies")
    assert task.id == "task-2"
    assert sheets.snapshot("Tasks")[0][0] == "Task"
    assert [t.task for t in await services.tasks.get_all_tasks()] == ["Order supplies"]


@pytest.mark.asyncio
async def test_history_access_error_propagates(services, sheets):
    sheets.fail("read", "Task History", SheetAccessError("quota exceeded"))
    with pytest.raises(SheetAccessError):
        await services.tasks.get_task_history()


@pytest.mark.asyncio
async def test_update_task_fields(services):
    updated = await services.tasks.update_task(
        "task-3", {"notes": "approved", "due_date": None, "id": "task-99", "unknown": 1}
    )
    assert updated.id == "task-3"
    assert updated.notes == "approved"
    assert updated.due_date is None
    assert updated.status == "Completed"


@pytest.mark.asyncio
async def test_update_task_errors(services):
    with pytest.raises(NotFoundError):
        await services.tasks.update_task("task-99", {"notes": "x"})
    with pytest.raises(NotFoundError):
        await services.tasks.update_task("bogus", {"notes": "x"})
    with pytest.raises(ValueError):
        await services.tasks.update_task("task-2", {"status": "Finished"})
    with pytest.raises(ValueError):
        await services.tasks.update_task("task-2", {"task": ""})


@pytest.mark.asyncio
async def test_delete_task_shifts_later_rows_up(services):
    await services.tasks.delete_task("task-3")
    tasks = await services.tasks.get_all_tasks()
    assert [(t.id, t.task) for t in tasks] == [
        ("task-2", "Call vendor"),
        ("task-3", "Plan offsite"),
        ("task-4", "Schedule 1:1s"),
    ]
    moved = tasks[2]
    assert moved.task_owner == "Alice"
    assert moved.status == "Pending Meeting"
    assert moved.claimed_date == "2025-03-04"
    assert moved.notes == "weekly"


@pytest.mark.asyncio
async def test_delete_last_task(services, sheets):
    for task_id in ("task-5", "task-4", "task-3", "task-2"):
        await services.tasks.delete_task(task_id)
    assert await services.tasks.get_all_tasks() == []
    assert sheets.snapshot("Tasks")[0][0] == "Task"


@pytest.mark.asyncio
async def test_delete_unknown_task(services):
    with pytest.raises(NotFoundError, match="Task not found"):
        await services.tasks.delete_task("task-20")
    with pytest.raises(NotFoundError):
        await services.tasks.delete_task("task-1")


@pytest.mark.asyncio
async def test_failed_delete_write_leaves_rows_intact(services, sheets):
    before = sheets.snapshot("Tasks")
    sheets.fail("write", "Tasks")
    with pytest.raises(SheetsError):
        await services.tasks.delete_task("task-3")

    sheets.recover()
    assert sheets.snapshot("Tasks") == before
    assert len(await services.tasks.get_all_tasks()) == 4


@pytest.mark.asyncio
async def test_delete_clears_only_the_vacated_last_row(services, sheets):
    await services.tasks.delete_task("task-3")
    clears = [c["range"] for c in sheets.call_log if c["action"] == "clear"]
    assert clears == ["Tasks!A5:G5"]
    # a shorter row shifted onto a longer one leaves no stale cells
    assert sheets.snapshot("Tasks")[2] == ["Plan offsite", "", "", "2025-03-02"]
