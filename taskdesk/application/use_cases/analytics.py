"""Analytics use case: completion and on-time metrics per employee and for the team."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from taskdesk.application.dtos.metrics import EmployeeMetrics, TeamMetrics
from taskdesk.application.dtos.task import TaskFilter
from taskdesk.application.services import metrics
from taskdesk.application.services.access_policy import Operation, PolicyTarget, require
from taskdesk.domain.enums import Role
from taskdesk.domain.exceptions import ResourceNotFoundException
from taskdesk.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from taskdesk.application.dtos.profile import ProfileResult
    from taskdesk.application.interfaces.repositories import (
        IProfileRepository,
        ITaskRepository,
    )


class MetricsService:
    """Reads the task set and hands it to the pure metrics functions with a fixed `now`."""

    def __init__(
        self,
        task_repo: ITaskRepository,
        profile_repo: IProfileRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._task_repo = task_repo
        self._profile_repo = profile_repo
        self._clock = clock

    async def compute_employee_metrics(
        self, actor: ProfileResult, employee_id: str
    ) -> EmployeeMetrics:
        """Metrics over one employee's tasks (manager, or the employee themself)."""
        require(actor, Operation.READ_METRICS, PolicyTarget.metrics(employee_id))
        if await self._profile_repo.get_profile(employee_id) is None:
            raise ResourceNotFoundException("profile", employee_id)
        tasks = await self._task_repo.list_tasks(TaskFilter(assigned_to=employee_id))
        return metrics.summarize_employee(employee_id, tasks, self._clock())

    async def compute_team_metrics(self, actor: ProfileResult) -> TeamMetrics:
        """Per-employee metrics and totals across all tasks (manager only)."""
        require(actor, Operation.READ_TEAM_METRICS, PolicyTarget.metrics())
        employees = await self._profile_repo.list_by_role(Role.EMPLOYEE)
        tasks = await self._task_repo.list_tasks(TaskFilter())
        return metrics.summarize_team(employees, tasks, self._clock())
