"""Presentation-layer dependency injection (composition root).

Routes depend only on these providers, never on infrastructure directly.
"""

from taskdesk.api.v1.dependencies.auth import (
    CurrentActor,
    get_current_actor,
    get_identity_service,
    get_token_service,
)
from taskdesk.api.v1.dependencies.db import (
    get_profile_repo,
    get_profile_repo_for_write,
    get_task_history_repo,
    get_task_repo,
    get_task_repo_for_write,
)
from taskdesk.api.v1.dependencies.services import (
    get_employee_service,
    get_employee_service_for_write,
    get_metrics_service,
    get_task_service,
    get_task_service_for_write,
)

__all__ = [
    "CurrentActor",
    "get_current_actor",
    "get_employee_service",
    "get_employee_service_for_write",
    "get_identity_service",
    "get_metrics_service",
    "get_profile_repo",
    "get_profile_repo_for_write",
    "get_task_history_repo",
    "get_task_repo",
    "get_task_repo_for_write",
    "get_task_service",
    "get_task_service_for_write",
    "get_token_service",
]
