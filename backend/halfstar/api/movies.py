"""
Movies API — /api/movies
────────────────────────
Endpoints:
  GET  /api/movies           — The bundled movie list
  GET  /api/movies/search    — Title search (TMDB, or the bundled list without a key)
"""
from fastapi import APIRouter, HTTPException, Query, status

from halfstar.schemas.movies import MovieResponse
from halfstar.services.catalog import LOCAL_CATALOG
from halfstar.services.movie_service import search_movies
from halfstar.services.tmdb_sync import TMDBUpstreamError

router = APIRouter()


@router.get("", response_model=list[MovieResponse])
def list_movies() -> list[dict]:
    return LOCAL_CATALOG


@router.get("/search", response_model=list[MovieResponse])
async def search(q: str | None = Query(None, description="Search query")) -> list[dict]:
    """Short queries (under two characters) return an empty list."""
    try:
        return await search_movies(q)
    except TMDBUpstreamError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"error": {"code": "SEARCH_FAILED", "message": "Search failed"}},
        ) from exc
