"""Task ORM model and its status lifecycle hook.

A before_update mapper event applies the status side effects inside the
flush that writes the status: completed_at is set or cleared and the
history entry is inserted on the same connection, so the three commit or
roll back together. No code path that persists a status change through the
ORM can skip them, and bulk ORM UPDATEs of status are refused. On
PostgreSQL the log_task_status_change trigger applies the same side effects
to every UPDATE, including raw SQL. The CHECK constraint guards the
completed_at invariant on every backend.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date, datetime
from typing import Any

from sqlalchemy import (
    CheckConstraint,
    Connection,
    Date,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    event,
    func,
    inspect,
    select,
)
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import (
    Mapped,
    Mapper,
    ORMExecuteState,
    Session,
    mapped_column,
    object_session,
)

from taskdesk.domain.entities.task import StatusTransition
from taskdesk.domain.enums import TaskStatus
from taskdesk.infrastructure.persistence.database import Base
from taskdesk.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin
from taskdesk.infrastructure.persistence.models.task_history import record_status_change
from taskdesk.shared.logging import get_logger
from taskdesk.shared.utils.datetime import utc_now

logger = get_logger(__name__)

# Session.info key holding the profile id credited with status changes in that session.
ACTING_PROFILE_KEY = "taskdesk.acting_profile_id"
# Transaction-local PostgreSQL setting read by the log_task_status_change trigger.
ACTING_PROFILE_SETTING = "taskdesk.acting_profile"


class Task(CuidMixin, TimestampMixin, Base):
    """Unit of work assigned by a manager to an employee. Table: task."""

    __tablename__ = "task"

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    assigned_to: Mapped[str] = mapped_column(
        String, ForeignKey("profile.id", ondelete="CASCADE"), nullable=False, index=True
    )
    assigned_by: Mapped[str] = mapped_column(
        String, ForeignKey("profile.id", ondelete="CASCADE"), nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=TaskStatus.NOT_STARTED.value,
        server_default="not_started",
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    deadline_date: Mapped[date] = mapped_column(Date, nullable=False)
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    __table_args__ = (
        CheckConstraint(
            "status IN ('not_started', 'in_progress', 'finished')",
            name="ck_task_status",
        ),
        CheckConstraint(
            "(status = 'finished' AND completed_at IS NOT NULL) "
            "OR (status <> 'finished' AND completed_at IS NULL)",
            name="ck_task_completed_at_matches_status",
        ),
        Index("ix_task_deadline_date", "deadline_date"),
    )


@contextmanager
def acting_profile(session: AsyncSession | Session, profile_id: str) -> Iterator[None]:
    """Credit status changes flushed inside the block to profile_id."""
    previous = session.info.get(ACTING_PROFILE_KEY)
    session.info[ACTING_PROFILE_KEY] = profile_id
    try:
        yield
    finally:
        if previous is None:
            session.info.pop(ACTING_PROFILE_KEY, None)
        else:
            session.info[ACTING_PROFILE_KEY] = previous


def _set_acting_setting(connection: Connection, value: str) -> None:
    """Expose the actor to the log_task_status_change trigger for this transaction."""
    connection.execute(select(func.set_config(ACTING_PROFILE_SETTING, value, True)))


@event.listens_for(Task, "before_update")
def _apply_status_side_effects(
    _mapper: Mapper[Any], connection: Connection, target: Task
) -> None:
    """Set/clear completed_at and append the history entry when status actually changes.

    On PostgreSQL the log_task_status_change trigger writes the entry and the
    completion timestamp; here only the actor is handed to it.
    """
    history = inspect(target).attrs.status.history
    if not history.has_changes():
        return
    if history.deleted:
        old_status = history.deleted[0]
    else:
        old_status = connection.execute(
            select(Task.status).where(Task.id == target.id)
        ).scalar_one()
    now = utc_now()
    transition = StatusTransition.plan(old_status, target.status, now)
    if transition is None:
        return
    session = object_session(target)
    changed_by = session.info.get(ACTING_PROFILE_KEY) if session is not None else None
    if changed_by is None:
        raise ValueError(
            "Task status changes must be made inside acting_profile() so they can be audited."
        )
    target.completed_at = transition.completed_at
    if connection.dialect.name == "postgresql":
        _set_acting_setting(connection, changed_by)
    else:
        record_status_change(connection, target.id, transition, changed_by, now)
    logger.info(
        "Task %s status %s -> %s by %s",
        target.id,
        transition.old_status.value,
        transition.new_status.value,
        changed_by,
    )


@event.listens_for(Task, "after_update")
def _clear_acting_setting(
    _mapper: Mapper[Any], connection: Connection, target: Task
) -> None:
    if connection.dialect.name != "postgresql":
        return
    if inspect(target).attrs.status.history.has_changes():
        _set_acting_setting(connection, "")


def _sets_status(orm_execute_state: ORMExecuteState) -> bool:
    params = orm_execute_state.parameters
    if isinstance(params, list):
        return any("status" in row for row in params)
    if params and "status" in params:
        return True
    return "status" in orm_execute_state.statement.compile().params


@event.listens_for(Session, "do_orm_execute")
def _reject_bulk_status_updates(orm_execute_state: ORMExecuteState) -> None:
    """Bulk UPDATEs of task.status skip the per-row hook above, so they are refused."""
    if not orm_execute_state.is_update:
        return
    mapper = orm_execute_state.bind_mapper
    if mapper is None or mapper.class_ is not Task:
        return
    if _sets_status(orm_execute_state):
        raise ValueError(
            "Task status cannot be changed by a bulk UPDATE; "
            "load the task and set its status inside acting_profile()."
        )
