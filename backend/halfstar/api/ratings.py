"""
Ratings API — /api/ratings
──────────────────────────
Endpoints:
  GET    /api/ratings/feed         — Everyone's ratings, newest first (public)
  GET    /api/ratings              — My ratings
  POST   /api/ratings              — Create/overwrite my rating for a movie
  DELETE /api/ratings/{movie_id}   — Delete my rating for a movie
"""
from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.orm import Session

from halfstar.db.models import MAX_SQL_INTEGER, User
from halfstar.db.session import get_db
from halfstar.deps.auth import get_current_user
from halfstar.schemas.ratings import (
    FeedItemResponse,
    RatingResponse,
    SetRatingRequest,
    SetRatingResponse,
    SuccessResponse,
)
from halfstar.services.feed_service import get_feed
from halfstar.services.rating_service import (
    InvalidRatingError,
    delete_rating,
    get_ratings_for_user,
    set_rating,
)

router = APIRouter()


def _error(code: str, message: str) -> dict:
    """Standard error envelope."""
    return {"error": {"code": code, "message": message}}


# ── Routes ────────────────────────────────────────────────────────────────────

@router.get("/feed", response_model=list[FeedItemResponse])
def community_feed(db: Session = Depends(get_db)) -> list[dict]:
    return get_feed(db)


@router.get("", response_model=list[RatingResponse])
def list_my_ratings(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[dict]:
    return get_ratings_for_user(db, current_user.id)


@router.post("", response_model=SetRatingResponse)
def save_rating(
    payload: SetRatingRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> SetRatingResponse:
    """
    Upsert a rating.

    Returns 400 if the score is outside 0.5-5 or not a half-star step.
    """
    try:
        saved = set_rating(
            db,
            current_user.id,
            payload.movie_id,
            payload.rating,
            payload.movie_title,
            payload.movie_year,
        )
    except InvalidRatingError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=_error("INVALID_RATING", str(exc)),
        ) from exc

    return SetRatingResponse(movie_id=saved["movie_id"], rating=saved["rating"])


@router.delete("/{movie_id}", response_model=SuccessResponse)
def remove_rating(
    movie_id: int = Path(..., gt=0, le=MAX_SQL_INTEGER),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> SuccessResponse:
    if not delete_rating(db, current_user.id, movie_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=_error("RATING_NOT_FOUND", "Rating not found"),
        )
    return SuccessResponse()
