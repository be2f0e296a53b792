"""Domain layer: entities, value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from taskdesk.domain.entities import StatusTransition
from taskdesk.domain.enums import Role, TaskStatus
from taskdesk.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ConflictException,
    ResourceNotFoundException,
    TaskdeskException,
    UsernameAlreadyExistsException,
    ValidationException,
)
from taskdesk.domain.value_objects import TaskSchedule, TaskTitle

__all__ = [
    # Entities
    "StatusTransition",
    # Enums
    "Role",
    "TaskStatus",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "ConflictException",
    "ResourceNotFoundException",
    "TaskdeskException",
    "UsernameAlreadyExistsException",
    "ValidationException",
    # Value objects
    "TaskSchedule",
    "TaskTitle",
]
