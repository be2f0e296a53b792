"""Task history repository: read side of the append-only status log."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskdesk.application.dtos.task_history import TaskHistoryResult
from taskdesk.domain.enums import TaskStatus
from taskdesk.infrastructure.persistence.models.task_history import TaskHistory
from taskdesk.shared.utils.datetime import ensure_utc


def _history_to_result(h: TaskHistory) -> TaskHistoryResult:
    return TaskHistoryResult(
        id=h.id,
        task_id=h.task_id,
        old_status=TaskStatus(h.old_status) if h.old_status else None,
        new_status=TaskStatus(h.new_status),
        changed_by=h.changed_by,
        changed_at=ensure_utc(h.changed_at),
    )


class TaskHistoryRepository:
    """Entries are written only by the task status hook; this class only reads."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_for_task(self, task_id: str) -> list[TaskHistoryResult]:
        result = await self.db.execute(
            select(TaskHistory)
            .where(TaskHistory.task_id == task_id)
            .order_by(TaskHistory.sequence.asc())
        )
        return [_history_to_result(h) for h in result.scalars().all()]
