"""DTOs for performance metrics."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class EmployeeMetrics:
    """Completion and on-time statistics over one employee's tasks (rates are 0-100)."""

    employee_id: str
    total: int
    completed: int
    in_progress: int
    not_started: int
    overdue: int
    completion_rate: int
    on_time_rate: int


@dataclass(frozen=True)
class TeamMetrics:
    """Per-employee metrics plus totals across every task."""

    total_tasks: int
    completed_tasks: int
    completion_rate: int
    on_time_rate: int
    employees: list[EmployeeMetrics] = field(default_factory=list)
