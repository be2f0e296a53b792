"""initial schema: profile, task, task_history

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-17

task.completed_at must be set exactly when status is finished (CHECK).
task_history is append-only: a trigger rejects UPDATE. Rows are deleted
only by the cascade from their task.

log_task_status_change applies the status side effects to every UPDATE of
task.status, whether it comes from the ORM or raw SQL: completed_at is set
or cleared and one task_history row is inserted. The actor is read from the
transaction-local setting taskdesk.acting_profile; an UPDATE without it fails.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "a1b2c3d4e5f6"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _trigger_function_task_history() -> str:
    """Return SQL for trigger function that blocks task_history UPDATE."""
    return """
    CREATE OR REPLACE FUNCTION prevent_task_history_update()
    RETURNS TRIGGER
    LANGUAGE plpgsql
    AS $$
    BEGIN
        RAISE EXCEPTION 'task_history rows are append-only and cannot be updated'
            USING ERRCODE = 'integrity_constraint_violation';
    END;
    $$
    """


def _trigger_function_task_status() -> str:
    """Return SQL for trigger function that audits task status changes."""
    return """
    CREATE OR REPLACE FUNCTION log_task_status_change()
    RETURNS TRIGGER
    LANGUAGE plpgsql
    AS $$
    DECLARE
        actor TEXT;
        last_sequence INTEGER;
    BEGIN
        IF NEW.status IS NOT DISTINCT FROM OLD.status THEN
            RETURN NEW;
        END IF;
        actor := NULLIF(current_setting('taskdesk.acting_profile', true), '');
        IF actor IS NULL THEN
            RAISE EXCEPTION 'task status change on % has no acting profile', NEW.id
                USING ERRCODE = 'insufficient_privilege';
        END IF;
        IF NEW.status = 'finished' THEN
            NEW.completed_at := now();
        ELSE
            NEW.completed_at := NULL;
        END IF;
        SELECT COALESCE(MAX(sequence), 0) INTO last_sequence
            FROM task_history WHERE task_id = NEW.id;
        INSERT INTO task_history
            (id, task_id, sequence, old_status, new_status, changed_by, changed_at)
        VALUES (
            gen_random_uuid()::text,
            NEW.id,
            last_sequence + 1,
            CASE WHEN last_sequence = 0 THEN NULL ELSE OLD.status END,
            NEW.status,
            actor,
            now()
        );
        RETURN NEW;
    END;
    $$
    """


def upgrade() -> None:
    op.create_table(
        "profile",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("username", sa.String(length=128), nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column(
            "role", sa.String(length=16), nullable=False, server_default="employee"
        ),
        sa.Column("title", sa.String(length=255), nullable=True),
        sa.Column("position", sa.String(length=255), nullable=True),
        sa.Column("details", sa.Text(), nullable=True),
        sa.Column(
            "is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")
        ),
        sa.Column("hashed_password", sa.String(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id"),
        sa.UniqueConstraint("username"),
        sa.CheckConstraint("role IN ('manager', 'employee')", name="ck_profile_role"),
    )

    op.create_table(
        "task",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("assigned_to", sa.String(), nullable=False),
        sa.Column("assigned_by", sa.String(), nullable=False),
        sa.Column(
            "status", sa.String(length=32), nullable=False, server_default="not_started"
        ),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("deadline_date", sa.Date(), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["assigned_to"], ["profile.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["assigned_by"], ["profile.id"], ondelete="CASCADE"),
        sa.CheckConstraint(
            "status IN ('not_started', 'in_progress', 'finished')",
            name="ck_task_status",
        ),
        sa.CheckConstraint(
            "(status = 'finished' AND completed_at IS NOT NULL) "
            "OR (status <> 'finished' AND completed_at IS NULL)",
            name="ck_task_completed_at_matches_status",
        ),
    )
    op.create_index("ix_task_assigned_to", "task", ["assigned_to"], unique=False)
    op.create_index("ix_task_assigned_by", "task", ["assigned_by"], unique=False)
    op.create_index("ix_task_deadline_date", "task", ["deadline_date"], unique=False)

    op.create_table(
        "task_history",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("task_id", sa.String(), nullable=False),
        sa.Column("sequence", sa.Integer(), nullable=False),
        sa.Column("old_status", sa.String(length=32), nullable=True),
        sa.Column("new_status", sa.String(length=32), nullable=False),
        sa.Column("changed_by", sa.String(), nullable=False),
        sa.Column(
            "changed_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["task_id"], ["task.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["changed_by"], ["profile.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("task_id", "sequence", name="uq_task_history_task_sequence"),
    )
    op.create_index(
        "ix_task_history_task_id", "task_history", ["task_id"], unique=False
    )
    op.create_index(
        "ix_task_history_changed_by", "task_history", ["changed_by"], unique=False
    )

    op.execute(_trigger_function_task_history())
    op.execute(
        "CREATE TRIGGER prevent_task_history_update "
        "BEFORE UPDATE ON task_history "
        "FOR EACH ROW EXECUTE PROCEDURE prevent_task_history_update()"
    )

    op.execute(_trigger_function_task_status())
    op.execute(
        "CREATE TRIGGER log_task_status_change "
        "BEFORE UPDATE OF status ON task "
        "FOR EACH ROW EXECUTE PROCEDURE log_task_status_change()"
    )


def downgrade() -> None:
    op.execute("DROP TRIGGER IF EXISTS log_task_status_change ON task")
    op.execute("DROP FUNCTION IF EXISTS log_task_status_change()")
    op.execute("DROP TRIGGER IF EXISTS prevent_task_history_update ON task_history")
    op.execute("DROP FUNCTION IF EXISTS prevent_task_history_update()")
    op.drop_index("ix_task_history_changed_by", table_name="task_history")
    op.drop_index("ix_task_history_task_id", table_name="task_history")
    op.drop_table("task_history")
    op.drop_index("ix_task_deadline_date", table_name="task")
    op.drop_index("ix_task_assigned_by", table_name="task")
    op.drop_index("ix_task_assigned_to", table_name="task")
    op.drop_table("task")
    op.drop_table("profile")
