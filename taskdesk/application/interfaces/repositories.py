"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from taskdesk.application.dtos.profile import ProfileCreate, ProfileResult
    from taskdesk.application.dtos.task import TaskCreate, TaskFilter, TaskResult
    from taskdesk.application.dtos.task_history import TaskHistoryResult
    from taskdesk.domain.enums import Role, TaskStatus


class IProfileRepository(Protocol):
    """Protocol for profile repository (DIP)."""

    async def get_profile(self, profile_id: str) -> ProfileResult | None:
        """Return profile by id."""

    async def get_by_user_id(self, user_id: str) -> ProfileResult | None:
        """Return profile by credential subject (user_id)."""

    async def authenticate(self, username: str, password: str) -> ProfileResult | None:
        """Return the active profile whose credential matches, else None."""

    async def create_profile(self, data: ProfileCreate) -> ProfileResult:
        """Create a profile with a hashed credential. Raises UsernameAlreadyExistsException."""

    async def update_profile(
        self, profile_id: str, changes: dict[str, object]
    ) -> ProfileResult | None:
        """Apply field changes; None if the profile does not exist."""

    async def list_by_role(self, role: Role) -> list[ProfileResult]:
        """Return profiles with role, ordered by full name."""


class ITaskRepository(Protocol):
    """Protocol for task repository (the lifecycle store)."""

    async def get_task(self, task_id: str) -> TaskResult | None:
        """Return task by id."""

    async def create_task(self, data: TaskCreate, assigned_by: str) -> TaskResult:
        """Insert a not_started task."""

    async def update_status(
        self, task_id: str, new_status: TaskStatus, changed_by: str
    ) -> TaskResult | None:
        """Lock the row, apply the status with its side effects and audit entry atomically.

        Returns None when the task does not exist.
        """

    async def update_task(
        self, task_id: str, changes: dict[str, object]
    ) -> TaskResult | None:
        """Apply non-status field changes; None if the task does not exist."""

    async def list_tasks(self, task_filter: TaskFilter) -> list[TaskResult]:
        """Return tasks matching the filter in the requested order."""


class ITaskHistoryRepository(Protocol):
    """Protocol for reading the append-only status history."""

    async def list_for_task(self, task_id: str) -> list[TaskHistoryResult]:
        """Return history entries for task, oldest first."""
