"""Task and task history API schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from taskdesk.domain.enums import TaskStatus


class TaskCreateRequest(BaseModel):
    """Request body for creating a task (manager only)."""

    title: str = Field(..., max_length=500)
    description: str | None = None
    assigned_to: str = Field(..., min_length=1, description="Profile id of the assignee")
    start_date: date
    deadline_date: date


class TaskUpdateRequest(BaseModel):
    """Request body for a manager edit of non-status fields (partial)."""

    title: str | None = Field(default=None, max_length=500)
    description: str | None = None
    assigned_to: str | None = Field(default=None, min_length=1)
    start_date: date | None = None
    deadline_date: date | None = None


class TaskStatusUpdateRequest(BaseModel):
    """Request body for a status transition. Unknown values are rejected by the use case."""

    status: str = Field(..., description="not_started, in_progress or finished")


class TaskResponse(BaseModel):
    """Task response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str | None = None
    assigned_to: str
    assigned_by: str
    status: TaskStatus
    start_date: date
    deadline_date: date
    completed_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class TaskHistoryResponse(BaseModel):
    """One status change of a task."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    task_id: str
    old_status: TaskStatus | None = None
    new_status: TaskStatus
    changed_by: str
    changed_at: datetime
