"""Use-case service dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from taskdesk.api.v1.dependencies.db import (
    get_profile_repo,
    get_profile_repo_for_write,
    get_task_history_repo,
    get_task_repo,
    get_task_repo_for_write,
)
from taskdesk.application.use_cases.analytics import MetricsService
from taskdesk.application.use_cases.employees import EmployeeService
from taskdesk.application.use_cases.tasks import TaskService
from taskdesk.infrastructure.persistence.repositories import (
    ProfileRepository,
    TaskHistoryRepository,
    TaskRepository,
)


def get_employee_service(
    profile_repo: Annotated[ProfileRepository, Depends(get_profile_repo)],
) -> EmployeeService:
    return EmployeeService(profile_repo)


def get_employee_service_for_write(
    profile_repo: Annotated[ProfileRepository, Depends(get_profile_repo_for_write)],
) -> EmployeeService:
    return EmployeeService(profile_repo)


def get_task_service(
    task_repo: Annotated[TaskRepository, Depends(get_task_repo)],
    profile_repo: Annotated[ProfileRepository, Depends(get_profile_repo)],
    history_repo: Annotated[TaskHistoryRepository, Depends(get_task_history_repo)],
) -> TaskService:
    return TaskService(task_repo, profile_repo, history_repo)


def get_task_service_for_write(
    task_repo: Annotated[TaskRepository, Depends(get_task_repo_for_write)],
    profile_repo: Annotated[ProfileRepository, Depends(get_profile_repo_for_write)],
    history_repo: Annotated[TaskHistoryRepository, Depends(get_task_history_repo)],
) -> TaskService:
    return TaskService(task_repo, profile_repo, history_repo)


def get_metrics_service(
    task_repo: Annotated[TaskRepository, Depends(get_task_repo)],
    profile_repo: Annotated[ProfileRepository, Depends(get_profile_repo)],
) -> MetricsService:
    return MetricsService(task_repo, profile_repo)
