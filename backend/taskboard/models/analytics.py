"""Analytics models: derived on every request, never stored."""

from __future__ import annotations

from pydantic import Field

from taskboard.models.base import CamelModel


class SupervisorMetrics(CamelModel):
    name: str
    total_completed: int = 0
    this_month: int = 0
    this_week: int = 0
    average_completion_days: float = 0.0
    on_loa: bool = Field(default=False, alias="onLOA")


class WorkloadEntry(CamelModel):
    name: str = ""
    task_count: int = 0


class WorkloadDistribution(CamelModel):
    average_tasks_per_supervisor: float = 0.0
    highest_workload: WorkloadEntry = Field(default_factory=WorkloadEntry)
    lowest_workload: WorkloadEntry = Field(default_factory=WorkloadEntry)
    distribution_std_dev: float = 0.0


class TaskCounts(CamelModel):
    total: int = 0
    completed: int = 0
    in_progress: int = 0
    not_started: int = 0


class Analytics(CamelModel):
    total_tasks: int
    completed_tasks: int
    in_progress_tasks: int
    not_started_tasks: int
    total_supervisors: int
    active_supervisors: int
    supervisors_on_loa: int = Field(alias="supervisorsOnLOA")
    completion_rate: float
    supervisor_metrics: list[SupervisorMetrics] = Field(default_factory=list)
    workload_distribution: WorkloadDistribution = Field(default_factory=WorkloadDistribution)
