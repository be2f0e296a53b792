"""Application DTOs (no dependency on ORM)."""

from taskdesk.application.dtos.metrics import EmployeeMetrics, TeamMetrics
from taskdesk.application.dtos.profile import ProfileCreate, ProfileResult, ProfileUpdate
from taskdesk.application.dtos.task import TaskCreate, TaskFilter, TaskResult, TaskUpdate
from taskdesk.application.dtos.task_history import TaskHistoryResult

__all__ = [
    "EmployeeMetrics",
    "ProfileCreate",
    "ProfileResult",
    "ProfileUpdate",
    "TaskCreate",
    "TaskFilter",
    "TaskHistoryResult",
    "TaskResult",
    "TaskUpdate",
    "TeamMetrics",
]
