"""Test data builders shared by unit, integration and API tests."""

from datetime import UTC, date, datetime

from taskdesk.application.dtos.profile import ProfileResult
from taskdesk.application.dtos.task import TaskResult
from taskdesk.domain.enums import Role, TaskStatus
from taskdesk.infrastructure.security.jwt import create_access_token

MANAGER_PASSWORD = "manager-password-123"
EMPLOYEE_PASSWORD = "employee-password-123"


def make_profile(
    profile_id: str = "p1",
    role: Role = Role.EMPLOYEE,
    is_active: bool = True,
    full_name: str = "Test Person",
) -> ProfileResult:
    return ProfileResult(
        id=profile_id,
        user_id=f"user-{profile_id}",
        username=profile_id,
        full_name=full_name,
        role=role,
        is_active=is_active,
        created_at=datetime(2024, 1, 1, tzinfo=UTC),
        updated_at=datetime(2024, 1, 1, tzinfo=UTC),
    )


def make_task(
    task_id: str = "t1",
    assigned_to: str = "e1",
    status: TaskStatus = TaskStatus.NOT_STARTED,
    deadline_date: date = date(2024, 1, 10),
    completed_at: datetime | None = None,
    start_date: date = date(2024, 1, 1),
) -> TaskResult:
    return TaskResult(
        id=task_id,
        title="Write report",
        description=None,
        assigned_to=assigned_to,
        assigned_by="m1",
        status=status,
        start_date=start_date,
        deadline_date=deadline_date,
        completed_at=completed_at,
        created_at=datetime(2024, 1, 1, tzinfo=UTC),
        updated_at=datetime(2024, 1, 1, tzinfo=UTC),
    )


def finished(
    task_id: str, deadline: date, completed: datetime, assigned_to: str = "e1"
) -> TaskResult:
    return make_task(
        task_id,
        assigned_to=assigned_to,
        status=TaskStatus.FINISHED,
        deadline_date=deadline,
        completed_at=completed,
    )


def bearer_for(profile: ProfileResult) -> dict[str, str]:
    """Authorization header for profile, as issued by login."""
    token = create_access_token(
        {"sub": profile.user_id, "username": profile.username, "role": profile.role.value}
    )
    return {"Authorization": f"Bearer {token}"}
