"""Domain value objects for taskdesk.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

from dataclasses import dataclass
from datetime import date

from taskdesk.domain.exceptions import ValidationException


@dataclass(frozen=True)
class TaskTitle:
    """Non-empty task title (surrounding whitespace stripped)."""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValidationException("Task title is required", field="title")
        object.__setattr__(self, "value", self.value.strip())


@dataclass(frozen=True)
class TaskSchedule:
    """Start and deadline calendar dates of a task.

    The start must not fall after the deadline. Checked when a task is
    created; later edits of either date are not re-validated.
    """

    start_date: date
    deadline_date: date

    def __post_init__(self) -> None:
        if self.start_date > self.deadline_date:
            raise ValidationException(
                "Start date cannot be after deadline date", field="start_date"
            )
