"""Task use cases."""

from taskdesk.application.use_cases.tasks.task_operations import TaskService

__all__ = ["TaskService"]
