"""Performance metrics over a task set.

Pure functions: the result depends only on the tasks given and the
reference instant `now`. Percentages are rounded half-up to an integer.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from taskdesk.application.dtos.metrics import EmployeeMetrics, TeamMetrics
from taskdesk.application.dtos.profile import ProfileResult
from taskdesk.application.dtos.task import TaskResult
from taskdesk.domain.enums import TaskStatus
from taskdesk.shared.utils.datetime import ensure_utc, start_of_day_utc


def percentage(part: int, whole: int) -> int:
    """Return round_half_up(100 * part / whole), or 0 when whole is 0."""
    if whole == 0:
        return 0
    ratio = Decimal(100 * part) / Decimal(whole)
    return int(ratio.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def is_on_time(task: TaskResult) -> bool:
    """True when a finished task was completed no later than 00:00 UTC of its deadline date."""
    if task.status != TaskStatus.FINISHED or task.completed_at is None:
        return False
    return ensure_utc(task.completed_at) <= start_of_day_utc(task.deadline_date)


def completion_rate(tasks: Sequence[TaskResult]) -> int:
    """Share of tasks that are finished (0 for an empty set)."""
    finished = sum(1 for t in tasks if t.status == TaskStatus.FINISHED)
    return percentage(finished, len(tasks))


def on_time_rate(tasks: Sequence[TaskResult]) -> int:
    """Share of finished, timestamped tasks completed by their deadline.

    0 when no finished task carries a completion timestamp.
    """
    completed = [
        t for t in tasks if t.status == TaskStatus.FINISHED and t.completed_at is not None
    ]
    return percentage(sum(1 for t in completed if is_on_time(t)), len(completed))


def is_overdue(task: TaskResult, now: datetime) -> bool:
    """True when the task is not finished and 00:00 UTC of its deadline date has passed."""
    return task.status != TaskStatus.FINISHED and start_of_day_utc(
        task.deadline_date
    ) < ensure_utc(now)


def summarize_employee(
    employee_id: str, tasks: Sequence[TaskResult], now: datetime
) -> EmployeeMetrics:
    """Build EmployeeMetrics for the given (already filtered) tasks."""
    by_status = {status: 0 for status in TaskStatus}
    for t in tasks:
        by_status[t.status] += 1
    return EmployeeMetrics(
        employee_id=employee_id,
        total=len(tasks),
        completed=by_status[TaskStatus.FINISHED],
        in_progress=by_status[TaskStatus.IN_PROGRESS],
        not_started=by_status[TaskStatus.NOT_STARTED],
        overdue=sum(1 for t in tasks if is_overdue(t, now)),
        completion_rate=completion_rate(tasks),
        on_time_rate=on_time_rate(tasks),
    )


def summarize_team(
    employees: Iterable[ProfileResult], tasks: Sequence[TaskResult], now: datetime
) -> TeamMetrics:
    """Per-employee metrics (in the given employee order) plus totals over all tasks."""
    grouped: dict[str, list[TaskResult]] = {}
    for t in tasks:
        grouped.setdefault(t.assigned_to, []).append(t)
    return TeamMetrics(
        total_tasks=len(tasks),
        completed_tasks=sum(1 for t in tasks if t.status == TaskStatus.FINISHED),
        completion_rate=completion_rate(tasks),
        on_time_rate=on_time_rate(tasks),
        employees=[
            summarize_employee(e.id, grouped.get(e.id, []), now) for e in employees
        ],
    )
