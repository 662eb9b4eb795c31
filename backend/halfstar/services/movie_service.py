"""
Movie search — TMDB when a key is configured, the bundled list otherwise.
"""
from halfstar.core.config import settings
from halfstar.services.catalog import search_catalog
from halfstar.services.tmdb_sync import TMDBService

MIN_QUERY_LENGTH = 2


async def search_movies(query: str | None) -> list[dict]:
    """
    Return candidate movies shaped {id, title, year, poster}.

    Queries shorter than two characters return no results without touching
    either backend. TMDBUpstreamError propagates to the caller.
    """
    cleaned = (query or "").strip()
    if len(cleaned) < MIN_QUERY_LENGTH:
        return []

    if not settings.TMDB_API_KEY:
        return search_catalog(cleaned)

    return await TMDBService().search_movies(cleaned)
