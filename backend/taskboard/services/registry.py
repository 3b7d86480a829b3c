"""Service wiring: builds every record service over one spreadsheet client."""

from __future__ import annotations

from dataclasses import dataclass

from taskboard.config import Settings, settings
from taskboard.services.analytics import AnalyticsService
from taskboard.services.discussions import DiscussionsService
from taskboard.services.loa import LOAService
from taskboard.services.rotation import RotationSheet
from taskboard.services.supervisors import SupervisorsService
from taskboard.services.tasks import TasksService
from taskboard.services.validation import SheetValidationService
from taskboard.sheets.client import SheetsClient


@dataclass
class ServiceRegistry:
    sheets: SheetsClient
    tasks: TasksService
    discussions: DiscussionsService
    supervisors: SupervisorsService
    loa: LOAService
    analytics: AnalyticsService
    validation: SheetValidationService


def create_services(sheets: SheetsClient, cfg: Settings | None = None) -> ServiceRegistry:
    cfg = cfg or settings
    rotation = RotationSheet(sheets, cfg.task_rotation_sheet)
    tasks = TasksService(sheets, cfg.tasks_sheet, cfg.task_history_sheet)
    discussions = DiscussionsService(sheets, cfg.discussions_sheet)
    loa = LOAService(sheets, rotation, cfg.loa_sheet)
    supervisors = SupervisorsService(sheets, discussions, loa, rotation)
    return ServiceRegistry(
        sheets=sheets,
        tasks=tasks,
        discussions=discussions,
        supervisors=supervisors,
        loa=loa,
        analytics=AnalyticsService(tasks, supervisors),
        validation=SheetValidationService(sheets, cfg.tasks_sheet),
    )
