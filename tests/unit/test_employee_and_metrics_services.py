"""EmployeeService and MetricsService unit tests with mocked repositories."""

from datetime import UTC, date, datetime
from unittest.mock import AsyncMock

import pytest

from taskdesk.application.dtos.profile import ProfileCreate, ProfileUpdate
from taskdesk.application.dtos.task import TaskFilter
from taskdesk.application.use_cases.analytics import MetricsService
from taskdesk.application.use_cases.employees import EmployeeService
from taskdesk.domain.enums import Role
from taskdesk.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)
from tests.factories import finished, make_profile

MANAGER = make_profile("m1", Role.MANAGER)
EMPLOYEE = make_profile("e1")


async def test_create_employee_forces_employee_role() -> None:
    repo = AsyncMock()
    repo.create_profile = AsyncMock(return_value=EMPLOYEE)
    svc = EmployeeService(repo)

    await svc.create_employee(
        MANAGER,
        ProfileCreate(
            username=" emp ", password="secret-123", full_name="Eve", role=Role.MANAGER
        ),
    )

    data, = repo.create_profile.call_args.args
    assert data.role == Role.EMPLOYEE
    assert data.username == "emp"


async def test_create_employee_requires_full_name() -> None:
    repo = AsyncMock()
    svc = EmployeeService(repo)
    with pytest.raises(ValidationException) as exc_info:
        await svc.create_employee(
            MANAGER, ProfileCreate(username="emp", password="secret-123", full_name=" ")
        )
    assert exc_info.value.details == {"field": "full_name"}
    repo.create_profile.assert_not_awaited()


async def test_create_employee_by_employee_denied() -> None:
    repo = AsyncMock()
    with pytest.raises(AuthorizationException):
        await EmployeeService(repo).create_employee(
            EMPLOYEE, ProfileCreate(username="x", password="secret-123", full_name="X")
        )
    repo.create_profile.assert_not_awaited()


async def test_get_profile_of_other_denied_before_lookup() -> None:
    repo = AsyncMock()
    with pytest.raises(AuthorizationException):
        await EmployeeService(repo).get_profile(EMPLOYEE, "e2")
    repo.get_profile.assert_not_awaited()


async def test_update_employee_unknown_profile() -> None:
    repo = AsyncMock()
    repo.update_profile = AsyncMock(return_value=None)
    with pytest.raises(ResourceNotFoundException):
        await EmployeeService(repo).update_employee(
            MANAGER, "nope", ProfileUpdate(is_active=False)
        )
    repo.update_profile.assert_awaited_once_with("nope", {"is_active": False})


async def test_update_employee_clears_optional_fields() -> None:
    repo = AsyncMock()
    repo.update_profile = AsyncMock(return_value=EMPLOYEE)

    await EmployeeService(repo).update_employee(
        MANAGER, "e1", ProfileUpdate(position=None, details=None)
    )

    repo.update_profile.assert_awaited_once_with("e1", {"position": None, "details": None})


async def test_update_employee_cannot_clear_role() -> None:
    repo = AsyncMock()
    with pytest.raises(ValidationException) as exc_info:
        await EmployeeService(repo).update_employee(MANAGER, "e1", ProfileUpdate(role=None))
    assert exc_info.value.details == {"field": "role"}
    repo.update_profile.assert_not_awaited()


async def test_employee_metrics_for_self() -> None:
    task_repo = AsyncMock()
    profile_repo = AsyncMock()
    profile_repo.get_profile = AsyncMock(return_value=EMPLOYEE)
    task_repo.list_tasks = AsyncMock(
        return_value=[
            finished("a", date(2024, 1, 10), datetime(2024, 1, 5, tzinfo=UTC)),
        ]
    )
    svc = MetricsService(
        task_repo, profile_repo, clock=lambda: datetime(2024, 1, 20, tzinfo=UTC)
    )

    result = await svc.compute_employee_metrics(EMPLOYEE, "e1")

    task_repo.list_tasks.assert_awaited_once_with(TaskFilter(assigned_to="e1"))
    assert result.completion_rate == 100
    assert result.on_time_rate == 100
    assert result.overdue == 0


async def test_employee_metrics_for_other_employee_denied() -> None:
    task_repo = AsyncMock()
    svc = MetricsService(task_repo, AsyncMock())
    with pytest.raises(AuthorizationException):
        await svc.compute_employee_metrics(EMPLOYEE, "e2")
    task_repo.list_tasks.assert_not_awaited()


async def test_employee_metrics_unknown_profile() -> None:
    profile_repo = AsyncMock()
    profile_repo.get_profile = AsyncMock(return_value=None)
    svc = MetricsService(AsyncMock(), profile_repo)
    with pytest.raises(ResourceNotFoundException):
        await svc.compute_employee_metrics(MANAGER, "ghost")


async def test_team_metrics_manager_only() -> None:
    svc = MetricsService(AsyncMock(), AsyncMock())
    with pytest.raises(AuthorizationException):
        await svc.compute_team_metrics(EMPLOYEE)
