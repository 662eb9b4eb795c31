"""Half-star ratings: REAL score column, 0.5-5 range.

Revision ID: 0003
Revises: 0002
Create Date: 2025-04-12 00:00:00

SQLite cannot alter a column's type or CHECK constraint, so the ratings
table is rebuilt: create the new shape, copy every row (integer scores cast
to REAL), drop the old table, rename the new one into place.
"""
import logging
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "0003"
down_revision: Union[str, None] = "0002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

logger = logging.getLogger("alembic.runtime.migration")


def _rating_column_is_integral(bind) -> bool:
    for column in sa.inspect(bind).get_columns("ratings"):
        if column["name"] == "rating":
            return isinstance(column["type"], sa.Integer)
    raise RuntimeError("ratings table has no rating column")


def _rebuild_ratings(min_rating: float, rating_type) -> None:
    bind = op.get_bind()

    # Must run before anything opens a write transaction on this connection
    op.execute("PRAGMA foreign_keys=OFF")

    op.create_table(
        "_ratings_new",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.id"), nullable=False),
        sa.Column("movie_id", sa.Integer, nullable=False),
        sa.Column("rating", rating_type, nullable=False),
        sa.Column("movie_title", sa.Text, nullable=True, server_default=""),
        sa.Column("movie_year", sa.Integer, nullable=True),
        sa.CheckConstraint(f"rating >= {min_rating} AND rating <= 5"),
        sa.UniqueConstraint("user_id", "movie_id"),
        sqlite_autoincrement=True,
    )
    cast_to = "REAL" if isinstance(rating_type, sa.REAL) else "INTEGER"
    op.execute(
        f"""
        INSERT INTO _ratings_new (id, user_id, movie_id, rating, movie_title, movie_year)
        SELECT id, user_id, movie_id, CAST(rating AS {cast_to}),
               COALESCE(movie_title, ''), movie_year
        FROM ratings
        """
    )
    op.drop_table("ratings")
    op.rename_table("_ratings_new", "ratings")

    violations = bind.exec_driver_sql("PRAGMA foreign_key_check").fetchall()
    if violations:
        raise RuntimeError(f"Foreign key violations after ratings rebuild: {violations}")

    op.execute("PRAGMA foreign_keys=ON")


def upgrade() -> None:
    if not _rating_column_is_integral(op.get_bind()):
        return

    logger.info("Rebuilding ratings table with REAL scores")
    _rebuild_ratings(0.5, sa.REAL())


def downgrade() -> None:
    # Half stars round up so no row falls outside the 1-5 integer range
    op.execute("UPDATE ratings SET rating = CAST(rating + 0.5 AS INTEGER) WHERE rating != CAST(rating AS INTEGER)")
    _rebuild_ratings(1, sa.Integer())
