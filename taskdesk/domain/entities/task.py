"""Task status transition rules.

Represents the lifecycle side effects independent of persistence. The
persistence layer applies a planned transition atomically with its audit
entry.
"""

from dataclasses import dataclass
from datetime import datetime

from taskdesk.domain.enums import TaskStatus


@dataclass(frozen=True)
class StatusTransition:
    """An actual status change (old != new) and the completion timestamp it implies.

    completed_at is the instant the task was finished when moving into
    FINISHED, and None when moving to any other status.
    """

    old_status: TaskStatus
    new_status: TaskStatus
    completed_at: datetime | None

    @classmethod
    def plan(
        cls,
        old_status: TaskStatus | str,
        new_status: TaskStatus | str,
        now: datetime,
    ) -> "StatusTransition | None":
        """Return the transition from old_status to new_status, or None when they are equal.

        No transition is structurally forbidden; equal statuses are a no-op
        (no audit entry, no timestamp change).

        Args:
            old_status: Status stored immediately before the change.
            new_status: Requested status.
            now: Server time used as the completion timestamp.

        Raises:
            ValueError: If either status is not a TaskStatus value.
        """
        old = TaskStatus(old_status)
        new = TaskStatus(new_status)
        if old == new:
            return None
        completed_at = now if new == TaskStatus.FINISHED else None
        return cls(old_status=old, new_status=new, completed_at=completed_at)
