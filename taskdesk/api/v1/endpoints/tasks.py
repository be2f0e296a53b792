"""Task API: create, list, read, edit, status transitions and status history."""

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Query, Request

from taskdesk.api.v1.dependencies import (
    CurrentActor,
    get_task_service,
    get_task_service_for_write,
)
from taskdesk.application.dtos.task import TaskCreate, TaskFilter, TaskUpdate
from taskdesk.application.use_cases.tasks import TaskService
from taskdesk.core.limiter import limit_writes
from taskdesk.domain.enums import TaskStatus
from taskdesk.schemas.task import (
    TaskCreateRequest,
    TaskHistoryResponse,
    TaskResponse,
    TaskStatusUpdateRequest,
    TaskUpdateRequest,
)

router = APIRouter()


@router.post("", response_model=TaskResponse, status_code=201)
@limit_writes
async def create_task(
    request: Request,
    body: TaskCreateRequest,
    actor: CurrentActor,
    service: Annotated[TaskService, Depends(get_task_service_for_write)],
):
    """Create a not_started task assigned to an active employee (manager only)."""
    task = await service.create_task(
        actor,
        TaskCreate(
            title=body.title,
            description=body.description,
            assigned_to=body.assigned_to,
            start_date=body.start_date,
            deadline_date=body.deadline_date,
        ),
    )
    return TaskResponse.model_validate(task)


@router.get("", response_model=list[TaskResponse])
async def list_tasks(
    actor: CurrentActor,
    service: Annotated[TaskService, Depends(get_task_service)],
    status: TaskStatus | None = None,
    assignee_id: str | None = None,
    order: Annotated[Literal["deadline", "created"], Query()] = "deadline",
):
    """Managers see every task; employees only their own (assignee_id is ignored for them)."""
    tasks = await service.list_tasks_for_actor(
        actor, TaskFilter(assigned_to=assignee_id, status=status, order=order)
    )
    return [TaskResponse.model_validate(t) for t in tasks]


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str,
    actor: CurrentActor,
    service: Annotated[TaskService, Depends(get_task_service)],
):
    """Return one task (manager, or its assignee)."""
    return TaskResponse.model_validate(await service.get_task(actor, task_id))


@router.patch("/{task_id}", response_model=TaskResponse)
@limit_writes
async def update_task(
    request: Request,
    task_id: str,
    body: TaskUpdateRequest,
    actor: CurrentActor,
    service: Annotated[TaskService, Depends(get_task_service_for_write)],
):
    """Edit title, description, assignee or dates (manager only; not audited)."""
    task = await service.update_task(
        actor, task_id, TaskUpdate(**body.model_dump(exclude_unset=True))
    )
    return TaskResponse.model_validate(task)


@router.patch("/{task_id}/status", response_model=TaskResponse)
@limit_writes
async def update_task_status(
    request: Request,
    task_id: str,
    body: TaskStatusUpdateRequest,
    actor: CurrentActor,
    service: Annotated[TaskService, Depends(get_task_service_for_write)],
):
    """Move a task to a new status; completion time and history are recorded with it."""
    task = await service.update_status(actor, task_id, body.status)
    return TaskResponse.model_validate(task)


@router.get("/{task_id}/history", response_model=list[TaskHistoryResponse])
async def get_task_history(
    task_id: str,
    actor: CurrentActor,
    service: Annotated[TaskService, Depends(get_task_service)],
):
    """Status changes of a task, oldest first (manager, or its assignee)."""
    entries = await service.get_task_history(actor, task_id)
    return [TaskHistoryResponse.model_validate(e) for e in entries]
