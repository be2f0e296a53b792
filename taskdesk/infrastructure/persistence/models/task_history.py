"""Task history ORM model and status-change recorder. Append-only."""

from datetime import datetime
from typing import Any

from sqlalchemy import (
    Connection,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    event,
    func,
    insert,
    select,
    text,
)
from sqlalchemy.orm import Mapped, Mapper, mapped_column

from taskdesk.domain.entities.task import StatusTransition
from taskdesk.infrastructure.persistence.database import Base
from taskdesk.shared.utils.generators import generate_cuid


class TaskHistory(Base):
    """One actual status change of a task. No update/delete (rows go only with their task).

    sequence numbers the entries of one task from 1; it orders entries that
    share a changed_at instant.
    """

    __tablename__ = "task_history"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=generate_cuid)
    task_id: Mapped[str] = mapped_column(
        String, ForeignKey("task.id", ondelete="CASCADE"), nullable=False, index=True
    )
    sequence: Mapped[int] = mapped_column(Integer, nullable=False)
    old_status: Mapped[str | None] = mapped_column(String(32), nullable=True)
    new_status: Mapped[str] = mapped_column(String(32), nullable=False)
    changed_by: Mapped[str] = mapped_column(
        String, ForeignKey("profile.id", ondelete="CASCADE"), nullable=False, index=True
    )
    changed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=text("CURRENT_TIMESTAMP"), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("task_id", "sequence", name="uq_task_history_task_sequence"),
    )


@event.listens_for(TaskHistory, "before_update")
def _prevent_task_history_updates(
    _mapper: Mapper[Any], _connection: Connection, _target: TaskHistory
) -> None:
    """History entries are append-only; updates are forbidden."""
    raise ValueError("Task history entries are immutable and cannot be updated.")


@event.listens_for(TaskHistory, "before_delete")
def _prevent_task_history_deletes(
    _mapper: Mapper[Any], _connection: Connection, _target: TaskHistory
) -> None:
    """History entries are removed only by the database cascade from their task."""
    raise ValueError("Task history entries cannot be deleted.")


def record_status_change(
    connection: Connection,
    task_id: str,
    transition: StatusTransition,
    changed_by: str,
    changed_at: datetime,
) -> None:
    """Append the history entry for one transition on the caller's connection.

    old_status is stored as NULL on the first entry of a task. Runs inside the
    flush of the status update, under the task row lock, so both commit together.
    """
    last = connection.execute(
        select(func.coalesce(func.max(TaskHistory.sequence), 0)).where(
            TaskHistory.task_id == task_id
        )
    ).scalar_one()
    connection.execute(
        insert(TaskHistory.__table__).values(
            id=generate_cuid(),
            task_id=task_id,
            sequence=last + 1,
            old_status=transition.old_status.value if last else None,
            new_status=transition.new_status.value,
            changed_by=changed_by,
            changed_at=changed_at,
        )
    )
