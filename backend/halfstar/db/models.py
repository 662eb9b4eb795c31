"""
SQLAlchemy ORM models.

Column names match the on-disk SQLite schema produced by the Alembic
revisions in alembic/versions, including the legacy names (google_id,
picture) that older stores already carry.
"""
from sqlalchemy import (
    CheckConstraint,
    Column,
    Float,
    ForeignKey,
    Integer,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase


# ── Base ──────────────────────────────────────────────────────────────────────

class Base(DeclarativeBase):
    pass


# ── Rating domain ─────────────────────────────────────────────────────────────

MIN_RATING = 0.5
MAX_RATING = 5.0
RATING_STEP = 0.5

# SQLite INTEGER is a signed 64-bit value
MAX_SQL_INTEGER = 2**63 - 1
MIN_SQL_INTEGER = -(2**63)


# ── Models ────────────────────────────────────────────────────────────────────

class User(Base):
    """
    Application user, created on first Google sign-in.

    Rows are never updated or deleted; name/email/picture are whatever the
    identity provider reported the first time the user signed in.
    """
    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    google_id = Column(
        Text,
        unique=True,
        nullable=False,
        comment="External identity key (OpenID Connect 'sub')",
    )
    name = Column(Text, nullable=True)
    email = Column(Text, nullable=True)
    picture = Column(Text, nullable=True)


class Rating(Base):
    """
    One user's star rating for one movie.

    movie_title / movie_year are copied from the search result at rating
    time and never re-fetched. movie_year is NULL when the provider had no
    release date.
    """
    __tablename__ = "ratings"
    __table_args__ = (
        UniqueConstraint("user_id", "movie_id"),
        CheckConstraint("rating >= 0.5 AND rating <= 5"),
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    movie_id = Column(Integer, nullable=False, comment="TMDB movie id")
    rating = Column(Float, nullable=False)
    movie_title = Column(Text, nullable=True, server_default="")
    movie_year = Column(Integer, nullable=True)
