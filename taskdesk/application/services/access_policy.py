"""Access policy: which actor may perform which operation on which row.

authorize() is a pure function of the actor snapshot (role, active flag,
identity) and the target's ownership. Nothing is cached between calls,
since role and active flag can change between requests.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from taskdesk.application.dtos.profile import ProfileResult
from taskdesk.application.dtos.task import TaskResult
from taskdesk.domain.enums import Role
from taskdesk.domain.exceptions import AuthorizationException
from taskdesk.shared.logging import get_logger

logger = get_logger(__name__)

# The only task field an assignee may change.
EMPLOYEE_WRITABLE_TASK_FIELDS = frozenset({"status"})


class Operation(str, Enum):
    """Operations subject to authorization."""

    CREATE_EMPLOYEE = "create_employee"
    UPDATE_PROFILE = "update_profile"
    LIST_EMPLOYEES = "list_employees"
    READ_PROFILE = "read_profile"
    CREATE_TASK = "create_task"
    READ_TASK = "read_task"
    LIST_TASKS = "list_tasks"
    UPDATE_TASK = "update_task"
    READ_TASK_HISTORY = "read_task_history"
    READ_METRICS = "read_metrics"
    READ_TEAM_METRICS = "read_team_metrics"


class DenyReason(str, Enum):
    """Why an operation was denied (surfaced in error details)."""

    INACTIVE_ACTOR = "InactiveActor"
    MANAGER_REQUIRED = "ManagerRequired"
    NOT_ASSIGNEE = "NotAssignee"
    NOT_OWNER = "NotOwner"
    FIELD_RESTRICTED = "FieldRestricted"


@dataclass(frozen=True)
class PolicyTarget:
    """The row an operation touches.

    owner_id is the task assignee (tasks, task history) or the profile id
    (profiles, metrics). fields lists the attributes a write would change.
    """

    resource: str
    owner_id: str | None = None
    fields: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def task(cls, task: TaskResult, fields: Iterable[str] = ()) -> PolicyTarget:
        return cls("task", owner_id=task.assigned_to, fields=frozenset(fields))

    @classmethod
    def task_history(cls, task: TaskResult) -> PolicyTarget:
        return cls("task_history", owner_id=task.assigned_to)

    @classmethod
    def profile(cls, profile_id: str | None = None) -> PolicyTarget:
        return cls("profile", owner_id=profile_id)

    @classmethod
    def metrics(cls, employee_id: str | None = None) -> PolicyTarget:
        return cls("metrics", owner_id=employee_id)


@dataclass(frozen=True)
class PolicyDecision:
    """Allow, or Deny with a reason."""

    allowed: bool
    reason: DenyReason | None = None

    @classmethod
    def allow(cls) -> PolicyDecision:
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: DenyReason) -> PolicyDecision:
        return cls(allowed=False, reason=reason)


_MANAGER_ONLY = frozenset(
    {
        Operation.CREATE_EMPLOYEE,
        Operation.UPDATE_PROFILE,
        Operation.LIST_EMPLOYEES,
        Operation.CREATE_TASK,
        Operation.READ_TEAM_METRICS,
    }
)

# Employee operations allowed only when the target is owned by the actor.
_OWNER_SCOPED = {
    Operation.READ_PROFILE: DenyReason.NOT_OWNER,
    Operation.READ_TASK: DenyReason.NOT_ASSIGNEE,
    Operation.READ_TASK_HISTORY: DenyReason.NOT_ASSIGNEE,
    Operation.READ_METRICS: DenyReason.NOT_OWNER,
}


def authorize(
    actor: ProfileResult | None,
    operation: Operation,
    target: PolicyTarget | None = None,
) -> PolicyDecision:
    """Decide whether actor may perform operation on target.

    An unresolved or inactive actor is denied everything. Managers are
    allowed everything. Employees may list tasks (the listing is scoped to
    their own), read their own profile, metrics, tasks and task history,
    and change the status (only) of tasks assigned to them.
    """
    if actor is None or not actor.is_active:
        return PolicyDecision.deny(DenyReason.INACTIVE_ACTOR)
    if actor.role == Role.MANAGER:
        return PolicyDecision.allow()

    if operation in _MANAGER_ONLY:
        return PolicyDecision.deny(DenyReason.MANAGER_REQUIRED)
    if operation == Operation.LIST_TASKS:
        return PolicyDecision.allow()

    owned = target is not None and target.owner_id == actor.id
    if operation in _OWNER_SCOPED:
        if owned:
            return PolicyDecision.allow()
        return PolicyDecision.deny(_OWNER_SCOPED[operation])

    if operation == Operation.UPDATE_TASK:
        if target is None or not owned:
            return PolicyDecision.deny(DenyReason.NOT_ASSIGNEE)
        if not target.fields or not target.fields <= EMPLOYEE_WRITABLE_TASK_FIELDS:
            return PolicyDecision.deny(DenyReason.FIELD_RESTRICTED)
        return PolicyDecision.allow()

    return PolicyDecision.deny(DenyReason.MANAGER_REQUIRED)


def require(
    actor: ProfileResult | None,
    operation: Operation,
    target: PolicyTarget | None = None,
) -> None:
    """Raise AuthorizationException unless authorize() allows the operation."""
    decision = authorize(actor, operation, target)
    if decision.allowed:
        return
    resource = target.resource if target is not None else "service"
    reason = decision.reason.value if decision.reason else None
    logger.warning(
        "Denied %s on %s for actor %s: %s",
        operation.value,
        resource,
        actor.id if actor else None,
        reason,
    )
    raise AuthorizationException(
        resource=resource, action=operation.value, reason=reason
    )
