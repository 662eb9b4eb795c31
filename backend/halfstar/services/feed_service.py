"""
Community feed — every user's ratings, newest first.

Recomputed from a single join on each call; there is no stored view.
"""
from sqlalchemy.orm import Session

from halfstar.services.rating_service import get_all_ratings


def get_feed(db: Session) -> list[dict]:
    """Return the public activity feed."""
    return get_all_ratings(db)
