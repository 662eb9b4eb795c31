"""
Rating business logic — one half-star rating per (user, movie).
"""
import math

from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from halfstar.db.models import (
    MAX_RATING,
    MAX_SQL_INTEGER,
    MIN_RATING,
    MIN_SQL_INTEGER,
    RATING_STEP,
    Rating,
    User,
)


class InvalidRatingError(ValueError):
    """Raised when a movie id or score falls outside the accepted domain."""


def validate_rating(movie_id: int, rating: float) -> None:
    """Reject anything but a positive movie id and a 0.5-5 score in half steps."""
    if isinstance(movie_id, bool) or not isinstance(movie_id, int):
        raise InvalidRatingError("Invalid movieId")
    if not 0 < movie_id <= MAX_SQL_INTEGER:
        raise InvalidRatingError("Invalid movieId")
    if isinstance(rating, bool) or not isinstance(rating, (int, float)):
        raise InvalidRatingError("Rating must be a number")
    if math.isnan(rating) or not MIN_RATING <= rating <= MAX_RATING:
        raise InvalidRatingError("Invalid rating (0.5-5 in 0.5 increments)")
    if (rating / RATING_STEP) % 1 != 0:
        raise InvalidRatingError("Invalid rating (0.5-5 in 0.5 increments)")


def _build_rating_dict(rating: Rating) -> dict:
    return {
        "movie_id": rating.movie_id,
        "rating": float(rating.rating),
        "movie_title": rating.movie_title or "",
        "movie_year": rating.movie_year,
    }


def get_ratings_for_user(db: Session, user_id: int) -> list[dict]:
    """All of a user's ratings, ordered by movie id."""
    rows = (
        db.query(Rating)
        .filter(Rating.user_id == user_id)
        .order_by(Rating.movie_id.asc())
        .all()
    )
    return [_build_rating_dict(r) for r in rows]


def set_rating(
    db: Session,
    user_id: int,
    movie_id: int,
    rating: float,
    movie_title: str | None = "",
    movie_year: int | None = None,
) -> dict:
    """
    Insert or overwrite the user's rating for a movie.

    A single INSERT ... ON CONFLICT DO UPDATE, so two concurrent writes for
    the same pair can never both insert. Title and year are replaced
    together with the score; the row keeps its id (and feed position).
    """
    validate_rating(movie_id, rating)
    if movie_year is not None and not MIN_SQL_INTEGER <= movie_year <= MAX_SQL_INTEGER:
        raise InvalidRatingError("Invalid movieYear")
    values = {
        "user_id": user_id,
        "movie_id": movie_id,
        "rating": float(rating),
        "movie_title": movie_title or "",
        "movie_year": movie_year,
    }

    stmt = sqlite_insert(Rating).values(**values)
    stmt = stmt.on_conflict_do_update(
        index_elements=[Rating.user_id, Rating.movie_id],
        set_={
            "rating": stmt.excluded.rating,
            "movie_title": stmt.excluded.movie_title,
            "movie_year": stmt.excluded.movie_year,
        },
    )
    db.execute(stmt)
    db.commit()

    return {
        "movie_id": movie_id,
        "rating": values["rating"],
        "movie_title": values["movie_title"],
        "movie_year": movie_year,
    }


def delete_rating(db: Session, user_id: int, movie_id: int) -> bool:
    """Delete the user's rating for a movie. Returns False if there was none."""
    deleted = (
        db.query(Rating)
        .filter(Rating.user_id == user_id, Rating.movie_id == movie_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    return deleted > 0


def get_all_ratings(db: Session) -> list[dict]:
    """Every rating with its owner's name and avatar, newest first."""
    rows = (
        db.query(Rating, User)
        .join(User, User.id == Rating.user_id)
        .order_by(Rating.id.desc())
        .all()
    )

    return [
        {
            **_build_rating_dict(rating),
            "user_name": owner.name,
            "user_picture": owner.picture,
        }
        for rating, owner in rows
    ]
