"""DTOs for task use cases (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Literal

from taskdesk.application.dtos.unset import UNSET, Unset, set_fields
from taskdesk.domain.enums import TaskStatus

TaskOrder = Literal["deadline", "created"]


@dataclass(frozen=True)
class TaskResult:
    """Task read-model."""

    id: str
    title: str
    description: str | None
    assigned_to: str
    assigned_by: str
    status: TaskStatus
    start_date: date
    deadline_date: date
    completed_at: datetime | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class TaskCreate:
    """Input for creating a task; the assigner is the acting manager."""

    title: str
    assigned_to: str
    start_date: date
    deadline_date: date
    description: str | None = None


@dataclass(frozen=True)
class TaskUpdate:
    """Manager edit of non-status task fields. UNSET leaves a field unchanged; None clears it."""

    title: str | None | Unset = UNSET
    description: str | None | Unset = UNSET
    assigned_to: str | None | Unset = UNSET
    start_date: date | None | Unset = UNSET
    deadline_date: date | None | Unset = UNSET

    def changes(self) -> dict[str, object]:
        """Return the fields that were given, including explicit None."""
        return set_fields(self)


@dataclass(frozen=True)
class TaskFilter:
    """Listing filter. order='deadline' is ascending deadline; 'created' is newest first."""

    assigned_to: str | None = None
    status: TaskStatus | None = None
    order: TaskOrder = "deadline"
