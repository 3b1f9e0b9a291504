# alembic/versions/001_meetcal_core.py
"""Core schema - users, daily availability, meet groups

Revision ID: 001_meetcal_core
Revises:
Create Date: 2025-06-01 00:00:00.000000

Creates the users table, the packed per-day availability table
(schedule_days, 4 bytes per user per date) and the meet group tables.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001_meetcal_core"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create meetcal core tables."""
    print("Creating meetcal core tables...")

    op.create_table(
        "users",
        sa.Column("id", sa.String(26), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("timezone", sa.String(50), nullable=False, server_default="UTC"),
        sa.Column("profile_img", sa.String(500), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "schedule_days",
        sa.Column("user_id", sa.String(26), nullable=False),
        sa.Column("day_date", sa.Date(), nullable=False),
        sa.Column(
            "bits",
            postgresql.BYTEA().with_variant(sa.LargeBinary(), "sqlite"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id", "day_date"),
        comment="30 half-hour availability slots per user per date, packed MSB-first",
    )

    op.create_table(
        "meet_groups",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("owner_id", sa.String(26), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_meet_groups_owner_id", "meet_groups", ["owner_id"])

    op.create_table(
        "meet_members",
        sa.Column("group_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(26), nullable=False),
        sa.Column(
            "joined_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["group_id"], ["meet_groups.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("group_id", "user_id"),
    )
    op.create_index("ix_meet_members_user_id", "meet_members", ["user_id"])

    print("meetcal core tables created successfully!")


def downgrade() -> None:
    """Drop meetcal core tables."""
    print("Dropping meetcal core tables...")

    op.drop_index("ix_meet_members_user_id", table_name="meet_members")
    op.drop_table("meet_members")
    op.drop_index("ix_meet_groups_owner_id", table_name="meet_groups")
    op.drop_table("meet_groups")
    op.drop_table("schedule_days")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_index("ix_users_id", table_name="users")
    op.drop_table("users")

    print("meetcal core tables dropped successfully!")
