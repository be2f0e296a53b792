"""DTOs for task status history (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from taskdesk.domain.enums import TaskStatus


@dataclass(frozen=True)
class TaskHistoryResult:
    """One status change of a task. old_status is None for the task's first recorded change."""

    id: str
    task_id: str
    old_status: TaskStatus | None
    new_status: TaskStatus
    changed_by: str
    changed_at: datetime
