"""Domain enumerations for taskdesk.

Enums represent fixed sets of domain values (roles, task status).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class Role(_ValuesMixin, str, Enum):
    """Profile role. Managers assign work; employees carry it out."""

    MANAGER = "manager"
    EMPLOYEE = "employee"


class TaskStatus(_ValuesMixin, str, Enum):
    """Task lifecycle status.

    Any status may move to any other; the lifecycle only attaches side
    effects (completion timestamp, audit entry) to actual changes.
    """

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"
