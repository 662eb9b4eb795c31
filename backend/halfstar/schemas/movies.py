"""
Movie search schemas.
"""
from pydantic import BaseModel


class MovieResponse(BaseModel):
    """A search candidate. poster is None when there is no artwork."""

    id: int
    title: str
    year: int | None = None
    poster: str | None = None
