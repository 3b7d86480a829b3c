"""Analytics: summary counts, per-supervisor metrics, workload distribution.

Everything here is a fold over records already in memory. The pure functions
take an explicit reference date so results are deterministic; AnalyticsService
only gathers the inputs.

Sources:
- totalCompleted counts current tasks (owner + Completed status).
- thisMonth / thisWeek / averageCompletionDays come from the Task History
  ledger, which is only written when a task transitions into Completed.
"""

from __future__ import annotations

import logging
import statistics
from collections import defaultdict
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from taskboard.dates import parse_date, start_of_month, start_of_week, today
from taskboard.models.analytics import (
    Analytics,
    SupervisorMetrics,
    TaskCounts,
    WorkloadDistribution,
    WorkloadEntry,
)
from taskboard.models.supervisor import Supervisor
from taskboard.models.task import Task, TaskHistoryEntry, is_completed, normalize_status
from taskboard.services.supervisors import SupervisorsService
from taskboard.services.tasks import TasksService

logger = logging.getLogger(__name__)


def classify_tasks(tasks: list[Task]) -> TaskCounts:
    """Completed / in progress / not started. The three always sum to total."""
    counts = TaskCounts(total=len(tasks))
    for t in tasks:
        if is_completed(t.status):
            counts.completed += 1
        elif normalize_status(t.status):
            counts.in_progress += 1
        else:
            counts.not_started += 1
    return counts


def completion_rate(completed: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return completed / total * 100


def round_half_up(value: float, places: str = "0.1") -> float:
    """Round halves away from zero (2.25 -> 2.3), unlike the builtin round()."""
    return float(Decimal(str(value)).quantize(Decimal(places), rounding=ROUND_HALF_UP))


def compute_supervisor_metrics(
    supervisors: list[Supervisor],
    tasks: list[Task],
    history: list[TaskHistoryEntry],
    ref: date,
) -> list[SupervisorMetrics]:
    month_start = start_of_month(ref)
    week_start = start_of_week(ref)

    completed_by_owner: dict[str, int] = defaultdict(int)
    for t in tasks:
        if is_completed(t.status):
            completed_by_owner[t.task_owner.strip()] += 1

    history_by_supervisor: dict[str, list[TaskHistoryEntry]] = defaultdict(list)
    for h in history:
        history_by_supervisor[h.supervisor.strip()].append(h)

    metrics = []
    for s in supervisors:
        name = s.name.strip()
        entries = history_by_supervisor.get(name, [])

        this_month = 0
        this_week = 0
        for h in entries:
            done = parse_date(h.completed_date)
            if done is None:
                continue
            if done >= month_start:
                this_month += 1
            if done >= week_start:
                this_week += 1

        durations = [h.duration_days for h in entries if h.duration_days is not None]
        avg_days = sum(durations) / len(durations) if durations else 0.0

        metrics.append(
            SupervisorMetrics(
                name=s.name,
                total_completed=completed_by_owner.get(name, 0),
                this_month=this_month,
                this_week=this_week,
                average_completion_days=round_half_up(avg_days),
                on_loa=s.on_loa,
            )
        )
    return metrics


def compute_workload_distribution(metrics: list[SupervisorMetrics]) -> WorkloadDistribution:
    """Mean, extremes and population standard deviation of completion counts."""
    if not metrics:
        return WorkloadDistribution()

    counts = [m.total_completed for m in metrics]
    highest = max(metrics, key=lambda m: m.total_completed)
    lowest = min(metrics, key=lambda m: m.total_completed)
    return WorkloadDistribution(
        average_tasks_per_supervisor=statistics.fmean(counts),
        highest_workload=WorkloadEntry(name=highest.name, task_count=highest.total_completed),
        lowest_workload=WorkloadEntry(name=lowest.name, task_count=lowest.total_completed),
        distribution_std_dev=statistics.pstdev(counts),
    )


def build_analytics(
    tasks: list[Task],
    supervisors: list[Supervisor],
    history: list[TaskHistoryEntry],
    ref: date | None = None,
) -> Analytics:
    ref = ref or today()
    counts = classify_tasks(tasks)
    on_loa = sum(1 for s in supervisors if s.on_loa)
    metrics = compute_supervisor_metrics(supervisors, tasks, history, ref)

    return Analytics(
        total_tasks=counts.total,
        completed_tasks=counts.completed,
        in_progress_tasks=counts.in_progress,
        not_started_tasks=counts.not_started,
        total_supervisors=len(supervisors),
        active_supervisors=len(supervisors) - on_loa,
        supervisors_on_loa=on_loa,
        completion_rate=completion_rate(counts.completed, counts.total),
        supervisor_metrics=metrics,
        workload_distribution=compute_workload_distribution(metrics),
    )


class AnalyticsService:
    def __init__(self, tasks: TasksService, supervisors: SupervisorsService) -> None:
        self.tasks = tasks
        self.supervisors = supervisors

    async def get_analytics(self, ref: date | None = None) -> Analytics:
        tasks = await self.tasks.get_all_tasks()
        supervisors = await self.supervisors.get_all_supervisors()
        history = await self.tasks.get_task_history()
        logger.debug(
            "Analytics over %d tasks, %d supervisors, %d history entries",
            len(tasks), len(supervisors), len(history),
        )
        return build_analytics(tasks, supervisors, history, ref)

    async def get_supervisor_metrics(self, name: str, ref: date | None = None) -> SupervisorMetrics | None:
        supervisor = await self.supervisors.get_supervisor(name)
        if supervisor is None:
            return None
        tasks = await self.tasks.get_all_tasks()
        history = await self.tasks.get_task_history()
        metrics = compute_supervisor_metrics([supervisor], tasks, history, ref or today())
        return metrics[0]
