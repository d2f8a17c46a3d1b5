"""create children, tasks and chores tables

Revision ID: 0002_children_tasks_chores
Revises: 0001_users
Create Date: 2026-10-19 00:10:00.000000
"""

from alembic import op
import sqlalchemy as sa

revision = "0002_children_tasks_chores"
down_revision = "0001_users"
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "CreatedAt",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.current_timestamp(),
        ),
        sa.Column(
            "UpdatedAt",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.current_timestamp(),
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "children",
        sa.Column("Id", sa.Integer(), primary_key=True),
        sa.Column("FirstName", sa.String(length=120), nullable=False),
        sa.Column("LastName", sa.String(length=120), nullable=False),
        sa.Column("IsActive", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_children_Id", "children", ["Id"])

    op.create_table(
        "tasks",
        sa.Column("Id", sa.Integer(), primary_key=True),
        sa.Column("Name", sa.String(length=200), nullable=False),
        sa.Column("Points", sa.Integer(), nullable=False),
        sa.Column("IsActive", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_tasks_Id", "tasks", ["Id"])

    op.create_table(
        "chores",
        sa.Column("Id", sa.Integer(), primary_key=True),
        sa.Column("ChildId", sa.Integer(), sa.ForeignKey("children.Id"), nullable=False),
        sa.Column("TaskId", sa.Integer(), sa.ForeignKey("tasks.Id"), nullable=False),
        sa.Column("DueOn", sa.Date(), nullable=False),
        sa.Column("IsCompleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index("ix_chores_Id", "chores", ["Id"])
    op.create_index("ix_chores_ChildId", "chores", ["ChildId"])
    op.create_index("ix_chores_TaskId", "chores", ["TaskId"])
    op.create_index("ix_chores_due_on_completed", "chores", ["DueOn", "IsCompleted"])


def downgrade() -> None:
    op.drop_index("ix_chores_due_on_completed", table_name="chores")
    op.drop_index("ix_chores_TaskId", table_name="chores")
    op.drop_index("ix_chores_ChildId", table_name="chores")
    op.drop_index("ix_chores_Id", table_name="chores")
    op.drop_table("chores")
    op.drop_index("ix_tasks_Id", table_name="tasks")
    op.drop_table("tasks")
    op.drop_index("ix_children_Id", table_name="children")
    op.drop_table("children")
