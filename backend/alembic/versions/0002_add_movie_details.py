"""Denormalize movie title and release year into ratings.

Revision ID: 0002
Revises: 0001
Create Date: 2025-03-02 00:00:00
"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "0002"
down_revision: Union[str, None] = "0001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    columns = {c["name"] for c in sa.inspect(op.get_bind()).get_columns("ratings")}

    # Untracked stores may already have one or both columns.
    if "movie_title" not in columns:
        op.add_column("ratings", sa.Column("movie_title", sa.Text, nullable=True, server_default=""))
    if "movie_year" not in columns:
        op.add_column("ratings", sa.Column("movie_year", sa.Integer, nullable=True))


def downgrade() -> None:
    with op.batch_alter_table("ratings") as batch_op:
        batch_op.drop_column("movie_year")
        batch_op.drop_column("movie_title")
