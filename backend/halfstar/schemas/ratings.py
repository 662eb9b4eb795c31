"""
Rating request/response schemas.

Request bodies use the camelCase keys the web client sends
({movieId, rating, movieTitle, movieYear}).
"""
from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt

from halfstar.db.models import MAX_SQL_INTEGER, MIN_SQL_INTEGER


class SetRatingRequest(BaseModel):
    """
    Payload for POST /api/ratings.

    Integers are bounded to what SQLite can store; the star range is checked
    in the service. Booleans are not accepted as scores.
    """

    model_config = ConfigDict(populate_by_name=True)

    movie_id: int = Field(..., alias="movieId", gt=0, le=MAX_SQL_INTEGER)
    rating: StrictFloat | StrictInt
    movie_title: str | None = Field(None, alias="movieTitle")
    movie_year: int | None = Field(
        None, alias="movieYear", ge=MIN_SQL_INTEGER, le=MAX_SQL_INTEGER
    )


class SetRatingResponse(BaseModel):
    """Returned after a rating is saved."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    movie_id: int = Field(..., alias="movieId")
    rating: float


class RatingResponse(BaseModel):
    """One of the current user's ratings."""

    movie_id: int
    rating: float
    movie_title: str = ""
    movie_year: int | None = None


class FeedItemResponse(BaseModel):
    """One rating event in the community feed."""

    movie_id: int
    rating: float
    movie_title: str = ""
    movie_year: int | None = None
    user_name: str | None = None
    user_picture: str | None = None


class SuccessResponse(BaseModel):
    success: bool = True
