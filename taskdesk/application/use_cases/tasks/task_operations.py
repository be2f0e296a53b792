"""Task use cases: create, edit, status transitions, listing and history.

Every call is authorized against the resolved actor before the store is
touched. Status side effects (completion timestamp, audit entry) are
applied by the store itself, atomically with the status write.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from taskdesk.application.dtos.task import TaskCreate, TaskFilter, TaskResult, TaskUpdate
from taskdesk.application.services.access_policy import Operation, PolicyTarget, require
from taskdesk.domain.enums import Role, TaskStatus
from taskdesk.domain.exceptions import ResourceNotFoundException, ValidationException
from taskdesk.domain.value_objects import TaskSchedule, TaskTitle
from taskdesk.shared.logging import get_logger

if TYPE_CHECKING:
    from taskdesk.application.dtos.profile import ProfileResult
    from taskdesk.application.dtos.task_history import TaskHistoryResult
    from taskdesk.application.interfaces.repositories import (
        IProfileRepository,
        ITaskHistoryRepository,
        ITaskRepository,
    )

logger = get_logger(__name__)

# Task fields a manager edit may change but not clear.
_REQUIRED_FIELDS = ("title", "assigned_to", "start_date", "deadline_date")


class TaskService:
    """Task lifecycle operations for a resolved actor."""

    def __init__(
        self,
        task_repo: ITaskRepository,
        profile_repo: IProfileRepository,
        history_repo: ITaskHistoryRepository,
    ) -> None:
        self._task_repo = task_repo
        self._profile_repo = profile_repo
        self._history_repo = history_repo

    async def _get_task(self, task_id: str) -> TaskResult:
        task = await self._task_repo.get_task(task_id)
        if task is None:
            raise ResourceNotFoundException("task", task_id)
        return task

    async def _require_active_employee(self, profile_id: str) -> None:
        """Raise ValidationException unless profile_id is an active employee."""
        profile = await self._profile_repo.get_profile(profile_id)
        if profile is None or profile.role != Role.EMPLOYEE or not profile.is_active:
            raise ValidationException(
                "Assignee must be an active employee", field="assigned_to"
            )

    async def create_task(self, actor: ProfileResult, data: TaskCreate) -> TaskResult:
        """Create a not_started task assigned by actor (manager only).

        Raises:
            AuthorizationException: Actor is not an active manager.
            ValidationException: Empty title, start after deadline, or assignee is
                not an active employee. Nothing is persisted.
        """
        require(actor, Operation.CREATE_TASK, PolicyTarget("task"))
        title = TaskTitle(data.title)
        TaskSchedule(data.start_date, data.deadline_date)
        await self._require_active_employee(data.assigned_to)
        task = await self._task_repo.create_task(
            replace(data, title=title.value), assigned_by=actor.id
        )
        logger.info(
            "Task %s created by %s for %s (deadline %s)",
            task.id,
            actor.id,
            task.assigned_to,
            task.deadline_date.isoformat(),
        )
        return task

    async def update_status(
        self, actor: ProfileResult, task_id: str, new_status: TaskStatus | str
    ) -> TaskResult:
        """Move a task to new_status (manager, or the assignee for their own task).

        Same-status updates are a no-op. Otherwise the store sets or clears
        completed_at and appends one history entry in the same transaction.

        Raises:
            ResourceNotFoundException: Unknown task_id.
            AuthorizationException: Actor may not change this task.
            ValidationException: new_status is not a task status.
        """
        try:
            status = TaskStatus(new_status)
        except ValueError:
            raise ValidationException(
                f"Invalid status: {new_status!r}", field="status"
            ) from None
        task = await self._get_task(task_id)
        require(actor, Operation.UPDATE_TASK, PolicyTarget.task(task, {"status"}))
        updated = await self._task_repo.update_status(task_id, status, changed_by=actor.id)
        if updated is None:
            raise ResourceNotFoundException("task", task_id)
        return updated

    async def update_task(
        self, actor: ProfileResult, task_id: str, data: TaskUpdate
    ) -> TaskResult:
        """Edit non-status fields (manager only). Edits are not audited.

        Start and deadline dates are not re-validated against each other.
        """
        changes = data.changes()
        if not changes:
            raise ValidationException("No fields to update")
        task = await self._get_task(task_id)
        require(actor, Operation.UPDATE_TASK, PolicyTarget.task(task, changes))
        for field in _REQUIRED_FIELDS:
            if field in changes and changes[field] is None:
                raise ValidationException(f"{field} cannot be cleared", field=field)
        if "title" in changes:
            changes["title"] = TaskTitle(str(changes["title"])).value
        if "assigned_to" in changes:
            await self._require_active_employee(str(changes["assigned_to"]))
        updated = await self._task_repo.update_task(task_id, changes)
        if updated is None:
            raise ResourceNotFoundException("task", task_id)
        logger.info("Task %s edited by %s: %s", task_id, actor.id, sorted(changes))
        return updated

    async def get_task(self, actor: ProfileResult, task_id: str) -> TaskResult:
        """Return one task (manager, or its assignee)."""
        task = await self._get_task(task_id)
        require(actor, Operation.READ_TASK, PolicyTarget.task(task))
        return task

    async def list_tasks_for_actor(
        self, actor: ProfileResult, task_filter: TaskFilter | None = None
    ) -> list[TaskResult]:
        """Managers see all tasks; employees only tasks assigned to them.

        Default order is deadline ascending.
        """
        require(actor, Operation.LIST_TASKS, PolicyTarget("task"))
        task_filter = task_filter or TaskFilter()
        if not actor.is_manager:
            task_filter = replace(task_filter, assigned_to=actor.id)
        return await self._task_repo.list_tasks(task_filter)

    async def get_task_history(
        self, actor: ProfileResult, task_id: str
    ) -> list[TaskHistoryResult]:
        """Return the status history of a task, oldest first (manager, or its assignee)."""
        task = await self._get_task(task_id)
        require(actor, Operation.READ_TASK_HISTORY, PolicyTarget.task_history(task))
        return await self._history_repo.list_for_task(task_id)
