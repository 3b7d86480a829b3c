"""Tab layout: header rows and column spans for every tab the services use."""

from __future__ import annotations

from taskboard.config import Settings

TASK_HEADERS = ["Task", "Task Owner", "Status", "Claimed Date", "Due Date", "Completed Date", "Notes"]
TASK_COLUMNS = "A:G"
TASK_LAST_COL = "G"

HISTORY_HEADERS = ["Task", "Supervisor", "Completed Date", "Duration (Days)"]
HISTORY_COLUMNS = "A:D"

# Supervisor columns start at D (index 3)
DISCUSSION_HEADERS = ["Date Posted", "Topic", "Link"]
DISCUSSION_FIXED_COLS = len(DISCUSSION_HEADERS)
DISCUSSION_COLUMNS = "A:Z"
DISCUSSION_LAST_COL = "Z"

LOA_HEADERS = ["Supervisor Name", "Start Date", "End Date", "Reason", "Status"]
LOA_COLUMNS = "A:E"
LOA_LAST_COL = "E"

ROTATION_HEADERS = ["Employee Name", "Rank", "LOA?", "LOA Start Date", "LOA End Date"]
ROTATION_COLUMNS = "A:E"


def default_tabs(cfg: Settings) -> dict[str, list[list[str]]]:
    """Header-only tabs used to seed the in-memory backend."""
    return {
        cfg.tasks_sheet: [list(TASK_HEADERS)],
        cfg.task_history_sheet: [list(HISTORY_HEADERS)],
        cfg.discussions_sheet: [list(DISCUSSION_HEADERS)],
        cfg.loa_sheet: [list(LOA_HEADERS)],
        cfg.task_rotation_sheet: [list(ROTATION_HEADERS)],
    }
