"""Persistence models: ORM entities and mixins.

Importing this package registers the task status lifecycle hook.
"""

from taskdesk.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin
from taskdesk.infrastructure.persistence.models.profile import Profile
from taskdesk.infrastructure.persistence.models.task import (
    ACTING_PROFILE_KEY,
    Task,
    acting_profile,
)
from taskdesk.infrastructure.persistence.models.task_history import (
    TaskHistory,
    record_status_change,
)

__all__ = [
    "ACTING_PROFILE_KEY",
    "CuidMixin",
    "Profile",
    "Task",
    "TaskHistory",
    "TimestampMixin",
    "acting_profile",
    "record_status_change",
]
