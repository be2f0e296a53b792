"""Access policy tests: role and ownership decisions, deny reasons, require()."""

import pytest

from taskdesk.application.services.access_policy import (
    DenyReason,
    Operation,
    PolicyTarget,
    authorize,
    require,
)
from taskdesk.domain.enums import Role
from taskdesk.domain.exceptions import AuthorizationException
from tests.factories import make_profile, make_task

MANAGER = make_profile("m1", Role.MANAGER)
EMPLOYEE = make_profile("e1")
OWN_TASK = make_task("t1", assigned_to="e1")
FOREIGN_TASK = make_task("t2", assigned_to="e2")


@pytest.mark.parametrize("operation", list(Operation))
def test_manager_is_allowed_everything(operation: Operation) -> None:
    assert authorize(MANAGER, operation, PolicyTarget.task(FOREIGN_TASK)).allowed


@pytest.mark.parametrize("operation", list(Operation))
def test_inactive_actor_is_denied_everything(operation: Operation) -> None:
    """Inactive profiles are denied even when they hold the manager role."""
    inactive_manager = make_profile("m2", Role.MANAGER, is_active=False)
    decision = authorize(inactive_manager, operation, PolicyTarget.task(OWN_TASK))
    assert not decision.allowed
    assert decision.reason == DenyReason.INACTIVE_ACTOR


def test_unresolved_actor_is_denied() -> None:
    decision = authorize(None, Operation.LIST_TASKS)
    assert decision.reason == DenyReason.INACTIVE_ACTOR


@pytest.mark.parametrize(
    "operation",
    [
        Operation.CREATE_EMPLOYEE,
        Operation.UPDATE_PROFILE,
        Operation.LIST_EMPLOYEES,
        Operation.CREATE_TASK,
        Operation.READ_TEAM_METRICS,
    ],
)
def test_employee_denied_manager_only_operations(operation: Operation) -> None:
    decision = authorize(EMPLOYEE, operation, PolicyTarget.profile("e1"))
    assert not decision.allowed
    assert decision.reason == DenyReason.MANAGER_REQUIRED


def test_employee_may_list_tasks() -> None:
    assert authorize(EMPLOYEE, Operation.LIST_TASKS, PolicyTarget("task")).allowed


def test_employee_reads_own_task_and_history_only() -> None:
    assert authorize(EMPLOYEE, Operation.READ_TASK, PolicyTarget.task(OWN_TASK)).allowed
    assert authorize(
        EMPLOYEE, Operation.READ_TASK_HISTORY, PolicyTarget.task_history(OWN_TASK)
    ).allowed
    denied = authorize(EMPLOYEE, Operation.READ_TASK, PolicyTarget.task(FOREIGN_TASK))
    assert denied.reason == DenyReason.NOT_ASSIGNEE
    denied = authorize(
        EMPLOYEE, Operation.READ_TASK_HISTORY, PolicyTarget.task_history(FOREIGN_TASK)
    )
    assert denied.reason == DenyReason.NOT_ASSIGNEE


def test_employee_reads_own_profile_and_metrics_only() -> None:
    assert authorize(EMPLOYEE, Operation.READ_PROFILE, PolicyTarget.profile("e1")).allowed
    assert authorize(EMPLOYEE, Operation.READ_METRICS, PolicyTarget.metrics("e1")).allowed
    assert (
        authorize(EMPLOYEE, Operation.READ_PROFILE, PolicyTarget.profile("e2")).reason
        == DenyReason.NOT_OWNER
    )
    assert (
        authorize(EMPLOYEE, Operation.READ_METRICS, PolicyTarget.metrics("e2")).reason
        == DenyReason.NOT_OWNER
    )


def test_employee_may_change_status_of_own_task() -> None:
    target = PolicyTarget.task(OWN_TASK, {"status"})
    assert authorize(EMPLOYEE, Operation.UPDATE_TASK, target).allowed


def test_employee_may_not_change_status_of_foreign_task() -> None:
    target = PolicyTarget.task(FOREIGN_TASK, {"status"})
    assert authorize(EMPLOYEE, Operation.UPDATE_TASK, target).reason == DenyReason.NOT_ASSIGNEE


@pytest.mark.parametrize(
    "fields",
    [{"title"}, {"status", "deadline_date"}, {"assigned_to"}, set()],
)
def test_employee_may_not_change_other_fields(fields: set[str]) -> None:
    target = PolicyTarget.task(OWN_TASK, fields)
    assert authorize(EMPLOYEE, Operation.UPDATE_TASK, target).reason == (
        DenyReason.FIELD_RESTRICTED
    )


def test_require_raises_with_reason_in_details() -> None:
    with pytest.raises(AuthorizationException) as exc_info:
        require(EMPLOYEE, Operation.CREATE_TASK, PolicyTarget("task"))
    exc = exc_info.value
    assert exc.error_code == "PERMISSION_DENIED"
    assert exc.details == {
        "resource": "task",
        "action": "create_task",
        "reason": "ManagerRequired",
    }


def test_require_returns_none_when_allowed() -> None:
    assert require(MANAGER, Operation.CREATE_TASK, PolicyTarget("task")) is None


def test_decision_reflects_current_snapshot() -> None:
    """Deactivating a manager takes effect on the next decision (no caching)."""
    active = make_profile("m3", Role.MANAGER)
    assert authorize(active, Operation.CREATE_TASK).allowed
    deactivated = make_profile("m3", Role.MANAGER, is_active=False)
    assert not authorize(deactivated, Operation.CREATE_TASK).allowed
