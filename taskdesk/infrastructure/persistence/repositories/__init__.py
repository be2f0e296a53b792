"""Persistence repositories. Re-exports for dependency injection."""

from taskdesk.infrastructure.persistence.repositories.base import BaseRepository
from taskdesk.infrastructure.persistence.repositories.profile_repo import (
    ProfileRepository,
)
from taskdesk.infrastructure.persistence.repositories.task_history_repo import (
    TaskHistoryRepository,
)
from taskdesk.infrastructure.persistence.repositories.task_repo import TaskRepository

__all__ = [
    "BaseRepository",
    "ProfileRepository",
    "TaskHistoryRepository",
    "TaskRepository",
]
