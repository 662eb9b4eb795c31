"""
TMDB Search Service
───────────────────
Wraps the TMDB v3 /search/movie endpoint.

Results are reduced to the shape the rating UI needs:
  {"id": 603, "title": "The Matrix", "year": 1999, "poster": "https://..."}
"""
import logging

import httpx

from halfstar.core.config import settings

logger = logging.getLogger(__name__)

TMDB_BASE_URL = "https://api.themoviedb.org/3"
TMDB_IMAGE_BASE = "https://image.tmdb.org/t/p/w92"
TMDB_TIMEOUT_SECONDS = 10.0


class TMDBConfigError(Exception):
    """Raised when TMDB client is used without an API key."""


class TMDBUpstreamError(Exception):
    """Raised for non-recoverable TMDB request/response errors."""


class TMDBService:
    """
    Thin async wrapper around TMDB v3 API.
    Uses httpx for HTTP — non-blocking in async FastAPI context.
    """

    def __init__(self, api_key: str | None = None) -> None:
        self.api_key = api_key or settings.TMDB_API_KEY
        if not self.api_key:
            raise TMDBConfigError(
                "TMDB_API_KEY is not set. "
                "Add it to your .env file or pass it explicitly."
            )

    async def search_movies(self, query: str, page: int = 1) -> list[dict]:
        """Search TMDB for movies matching *query*."""
        cleaned_query = query.strip()
        if not cleaned_query:
            return []

        params = {
            "api_key": self.api_key,
            "query": cleaned_query,
            "page": page,
        }

        try:
            async with httpx.AsyncClient(timeout=TMDB_TIMEOUT_SECONDS) as client:
                response = await client.get(f"{TMDB_BASE_URL}/search/movie", params=params)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning("TMDB search returned %s", exc.response.status_code)
            raise TMDBUpstreamError(
                f"TMDB search failed with status {exc.response.status_code}"
            ) from exc
        except httpx.RequestError as exc:
            logger.warning("TMDB search request failed: %s", exc)
            raise TMDBUpstreamError("TMDB search request failed") from exc

        payload = response.json()
        mapped: list[dict] = []
        for raw in payload.get("results") or []:
            movie = self._map_search_item(raw)
            if movie is not None:
                mapped.append(movie)
        return mapped

    def _format_poster_url(self, path: str | None) -> str | None:
        """Prefix the TMDB image base URL onto a poster path."""
        if not path:
            return None
        return f"{TMDB_IMAGE_BASE}{path}"

    def _map_search_item(self, raw: dict) -> dict | None:
        """Normalize a TMDB /search/movie result row."""
        tmdb_id = raw.get("id")
        title = raw.get("title")
        if not tmdb_id or not title:
            return None

        release_date = raw.get("release_date")
        try:
            year = int(release_date[:4]) if isinstance(release_date, str) and len(release_date) >= 4 else None
        except ValueError:
            year = None

        return {
            "id": int(tmdb_id),
            "title": title,
            "year": year,
            "poster": self._format_poster_url(raw.get("poster_path")),
        }
