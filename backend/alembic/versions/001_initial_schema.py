"""Initial schema — users, user_groups, user_group_members, date_dimensions.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("username", sa.String(255), nullable=False, unique=True),
        sa.Column("first_name", sa.String(255), nullable=False),
        sa.Column("last_name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        "user_groups",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("role", sa.String(255), nullable=False, unique=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "user_group_members",
        sa.Column("user_id", sa.Uuid, sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("user_group_id", sa.Uuid, sa.ForeignKey("user_groups.id", ondelete="CASCADE"), primary_key=True),
    )

    op.create_table(
        "date_dimensions",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("date", sa.Date, nullable=False, unique=True),
        sa.Column("year", sa.Integer, nullable=False),
        sa.Column("month", sa.Integer, nullable=False),
        sa.Column("day", sa.Integer, nullable=False),
        sa.Column("quarter", sa.Integer, nullable=False),
        sa.Column("week_number", sa.Integer, nullable=False),
        sa.Column("day_number_of_week", sa.Integer, nullable=False),
        sa.Column("day_number_of_year", sa.Integer, nullable=False),
        sa.Column("leap_year", sa.Boolean, nullable=False),
        sa.Column("week_numbering_year", sa.Integer, nullable=False),
        sa.Column("unix_time", sa.BigInteger, nullable=False),
    )


def downgrade() -> None:
    op.drop_table("date_dimensions")
    op.drop_table("user_group_members")
    op.drop_table("user_groups")
    op.drop_table("users")
