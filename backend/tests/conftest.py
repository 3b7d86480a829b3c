"""Shared test fixtures for the Taskboard backend tests."""

import os
import sys

import pytest

# Ensure backend is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
os.environ["SHEETS_BACKEND"] = "memory"
os.environ["TASKBOARD_API_KEY"] = ""
# The shared app is hit by every API test; limiter behaviour is tested on its own app
os.environ["RATE_LIMIT_RPM"] = "0"

from fastapi.testclient import TestClient

from taskboard.api.deps import get_optional_services, get_services
from taskboard.config import Settings
from taskboard.main import app
from taskboard.services.registry import create_services
from taskboard.sheets.layout import (
    DISCUSSION_HEADERS,
    HISTORY_HEADERS,
    LOA_HEADERS,
    ROTATION_HEADERS,
    TASK_HEADERS,
)
from taskboard.sheets.memory import InMemorySheetsClient


def seeded_tabs() -> dict[str, list[list[str]]]:
    """A small board: three supervisors, four tasks, two discussions, no leave."""
    return {
        "Tasks": [
            list(TASK_HEADERS),
            ["Call vendor", "Alice", "Claimed", "2025-03-01", "2025-03-10", "", "first call"],
            ["Review budget", "Bob", "Completed", "2025-02-20", "", "2025-03-03", ""],
            ["Plan offsite", "", "", "2025-03-02", "", "", ""],
            ["Schedule 1:1s", "Alice", "Pending Meeting", "2025-03-04", "", "", "weekly"],
        ],
        "Task History": [list(HISTORY_HEADERS)],
        "Discussions Pending Feedback": [
            list(DISCUSSION_HEADERS) + ["Alice", "Bob", "Carol"],
            ["2025-03-01", "Hiring plan", "https://example.com/hiring", "TRUE", "", ""],
            ["2025-03-02", "Q2 goals", "", "", "yes", "FALSE"],
        ],
        "LOA Tracking": [list(LOA_HEADERS)],
        "Task Rotation": [
            list(ROTATION_HEADERS),
            ["Alice", "Senior", "FALSE", "", ""],
            ["Bob", "Junior", "FALSE", "", ""],
            ["Carol", "Lead", "FALSE", "", ""],
        ],
    }


@pytest.fixture
def board_settings():
    return Settings(_env_file=None, sheets_backend="memory", google_sheet_id="", taskboard_api_key="")


@pytest.fixture
def sheets():
    return InMemorySheetsClient(seeded_tabs())


@pytest.fixture
def services(sheets, board_settings):
    return create_services(sheets, board_settings)


@pytest.fixture
def client(services):
    """TestClient over the full app, wired to the seeded in-memory sheet."""
    app.dependency_overrides[get_services] = lambda: services
    app.dependency_overrides[get_optional_services] = lambda: services
    yield TestClient(app)
    app.dependency_overrides.clear()
