"""create users table

Revision ID: 0001_users
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa

revision = "0001_users"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("Id", sa.Integer(), primary_key=True),
        sa.Column("Username", sa.String(length=120), nullable=False),
        sa.Column("PasswordHash", sa.String(length=255), nullable=True),
        sa.Column("ApiKey", sa.String(length=128), nullable=False),
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
    )
    op.create_index("ix_users_Id", "users", ["Id"])
    op.create_index("ix_users_Username", "users", ["Username"], unique=True)
    op.create_index("ix_users_ApiKey", "users", ["ApiKey"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_users_ApiKey", table_name="users")
    op.drop_index("ix_users_Username", table_name="users")
    op.drop_index("ix_users_Id", table_name="users")
    op.drop_table("users")
