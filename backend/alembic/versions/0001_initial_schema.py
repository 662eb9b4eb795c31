"""Initial schema — users, ratings (integer 1-5 stars)

Revision ID: 0001
Revises: —
Create Date: 2025-01-01 00:00:00

Stores created before migrations were tracked already hold these tables;
they are adopted as-is and later revisions bring them up to date.
"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    existing = set(sa.inspect(op.get_bind()).get_table_names())

    # ── users ─────────────────────────────────────────────────────────────────
    if "users" not in existing:
        op.create_table(
            "users",
            sa.Column("id", sa.Integer, primary_key=True),
            sa.Column("google_id", sa.Text, nullable=False, unique=True),
            sa.Column("name", sa.Text, nullable=True),
            sa.Column("email", sa.Text, nullable=True),
            sa.Column("picture", sa.Text, nullable=True),
            sqlite_autoincrement=True,
        )

    # ── ratings ───────────────────────────────────────────────────────────────
    if "ratings" not in existing:
        op.create_table(
            "ratings",
            sa.Column("id", sa.Integer, primary_key=True),
            sa.Column("user_id", sa.Integer, sa.ForeignKey("users.id"), nullable=False),
            sa.Column("movie_id", sa.Integer, nullable=False),
            sa.Column("rating", sa.Integer, nullable=False),
            sa.CheckConstraint("rating >= 1 AND rating <= 5"),
            sa.UniqueConstraint("user_id", "movie_id"),
            sqlite_autoincrement=True,
        )


def downgrade() -> None:
    op.drop_table("ratings")
    op.drop_table("users")
