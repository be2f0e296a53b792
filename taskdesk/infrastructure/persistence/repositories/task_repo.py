"""Task repository: the lifecycle store. Returns application DTOs.

Status writes go through update_status, which locks the row and sets the
status inside acting_profile(); the Task before_update hook then stamps or
clears completed_at and appends the history entry in the same flush.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from taskdesk.application.dtos.task import TaskCreate, TaskFilter, TaskResult
from taskdesk.domain.enums import TaskStatus
from taskdesk.domain.exceptions import ConflictException
from taskdesk.infrastructure.persistence.models.task import Task, acting_profile
from taskdesk.infrastructure.persistence.repositories.base import BaseRepository
from taskdesk.shared.logging import get_logger
from taskdesk.shared.utils.datetime import ensure_utc

logger = get_logger(__name__)

_EDITABLE_FIELDS = frozenset(
    {"title", "description", "assigned_to", "start_date", "deadline_date"}
)


def _task_to_result(t: Task) -> TaskResult:
    """Map ORM Task to TaskResult."""
    return TaskResult(
        id=t.id,
        title=t.title,
        description=t.description,
        assigned_to=t.assigned_to,
        assigned_by=t.assigned_by,
        status=TaskStatus(t.status),
        start_date=t.start_date,
        deadline_date=t.deadline_date,
        completed_at=ensure_utc(t.completed_at),
        created_at=ensure_utc(t.created_at),
        updated_at=ensure_utc(t.updated_at),
    )


class TaskRepository(BaseRepository[Task]):
    """Task repository. create_task, update_status, update_task, list_tasks."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Task)

    async def get_task(self, task_id: str) -> TaskResult | None:
        task = await self.get_by_id(task_id)
        return _task_to_result(task) if task else None

    async def create_task(self, data: TaskCreate, assigned_by: str) -> TaskResult:
        task = Task(
            title=data.title,
            description=data.description,
            assigned_to=data.assigned_to,
            assigned_by=assigned_by,
            status=TaskStatus.NOT_STARTED.value,
            start_date=data.start_date,
            deadline_date=data.deadline_date,
            completed_at=None,
        )
        created = await self.create(task)
        return _task_to_result(created)

    async def update_status(
        self, task_id: str, new_status: TaskStatus, changed_by: str
    ) -> TaskResult | None:
        """Apply new_status under a row lock. Same status returns the task untouched.

        Raises:
            ConflictException: The status write and its audit entry could not be flushed.
        """
        result = await self.db.execute(
            select(Task)
            .where(Task.id == task_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        task = result.scalar_one_or_none()
        if task is None:
            return None
        status = TaskStatus(new_status)
        if task.status == status.value:
            return _task_to_result(task)
        try:
            with acting_profile(self.db, changed_by):
                task.status = status.value
                await self.db.flush()
        except SQLAlchemyError as e:
            logger.warning("Status update of task %s failed: %s", task_id, e)
            raise ConflictException(
                "Task status could not be updated; retry the request",
                "task",
                task_id,
            ) from e
        await self.db.refresh(task)
        return _task_to_result(task)

    async def update_task(
        self, task_id: str, changes: dict[str, object]
    ) -> TaskResult | None:
        task = await self.get_by_id(task_id)
        if task is None:
            return None
        unknown = set(changes) - _EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields not editable through update_task: {sorted(unknown)}")
        values: dict[str, Any] = dict(changes)
        updated = await self.update(task, values)
        return _task_to_result(updated)

    async def list_tasks(self, task_filter: TaskFilter) -> list[TaskResult]:
        stmt = select(Task)
        if task_filter.assigned_to is not None:
            stmt = stmt.where(Task.assigned_to == task_filter.assigned_to)
        if task_filter.status is not None:
            stmt = stmt.where(Task.status == TaskStatus(task_filter.status).value)
        if task_filter.order == "created":
            stmt = stmt.order_by(Task.created_at.desc(), Task.id)
        else:
            stmt = stmt.order_by(Task.deadline_date.asc(), Task.created_at, Task.id)
        result = await self.db.execute(stmt)
        return [_task_to_result(t) for t in result.scalars().all()]
