"""Domain tests: status transitions, value objects, enums."""

from datetime import UTC, date, datetime

import pytest

from taskdesk.domain.entities.task import StatusTransition
from taskdesk.domain.enums import Role, TaskStatus
from taskdesk.domain.exceptions import ValidationException
from taskdesk.domain.value_objects import TaskSchedule, TaskTitle

NOW = datetime(2024, 1, 5, 12, 0, tzinfo=UTC)


def test_same_status_is_no_transition() -> None:
    for status in TaskStatus:
        assert StatusTransition.plan(status, status, NOW) is None


def test_finishing_stamps_completion_time() -> None:
    transition = StatusTransition.plan("in_progress", "finished", NOW)
    assert transition is not None
    assert transition.old_status == TaskStatus.IN_PROGRESS
    assert transition.new_status == TaskStatus.FINISHED
    assert transition.completed_at == NOW


@pytest.mark.parametrize("new_status", [TaskStatus.NOT_STARTED, TaskStatus.IN_PROGRESS])
def test_leaving_finished_clears_completion_time(new_status: TaskStatus) -> None:
    transition = StatusTransition.plan(TaskStatus.FINISHED, new_status, NOW)
    assert transition is not None
    assert transition.completed_at is None


def test_any_status_may_move_to_any_other() -> None:
    transition = StatusTransition.plan(TaskStatus.NOT_STARTED, TaskStatus.FINISHED, NOW)
    assert transition is not None
    assert transition.completed_at == NOW


def test_unknown_status_raises_value_error() -> None:
    with pytest.raises(ValueError):
        StatusTransition.plan("not_started", "done", NOW)


def test_task_title_strips_whitespace() -> None:
    assert TaskTitle("  Quarterly report ").value == "Quarterly report"


@pytest.mark.parametrize("title", ["", "   "])
def test_task_title_rejects_empty(title: str) -> None:
    with pytest.raises(ValidationException) as exc_info:
        TaskTitle(title)
    assert exc_info.value.details == {"field": "title"}


def test_task_schedule_allows_same_day() -> None:
    TaskSchedule(date(2024, 1, 1), date(2024, 1, 1))


def test_task_schedule_rejects_start_after_deadline() -> None:
    with pytest.raises(ValidationException) as exc_info:
        TaskSchedule(date(2024, 1, 11), date(2024, 1, 10))
    assert exc_info.value.details == {"field": "start_date"}


def test_enum_values() -> None:
    assert Role.values() == ["manager", "employee"]
    assert TaskStatus.values() == ["not_started", "in_progress", "finished"]
