"""
Bundled movie list, used when no TMDB key is configured.

Ids are TMDB ids so ratings made against this list stay valid once TMDB
search is switched on.
"""

LOCAL_CATALOG: list[dict] = [
    {"id": 278, "title": "The Shawshank Redemption", "year": 1994, "poster": None},
    {"id": 238, "title": "The Godfather", "year": 1972, "poster": None},
    {"id": 155, "title": "The Dark Knight", "year": 2008, "poster": None},
    {"id": 680, "title": "Pulp Fiction", "year": 1994, "poster": None},
    {"id": 550, "title": "Fight Club", "year": 1999, "poster": None},
    {"id": 13, "title": "Forrest Gump", "year": 1994, "poster": None},
    {"id": 603, "title": "The Matrix", "year": 1999, "poster": None},
    {"id": 27205, "title": "Inception", "year": 2010, "poster": None},
    {"id": 157336, "title": "Interstellar", "year": 2014, "poster": None},
    {"id": 129, "title": "Spirited Away", "year": 2001, "poster": None},
    {"id": 496243, "title": "Parasite", "year": 2019, "poster": None},
    {"id": 11, "title": "Star Wars", "year": 1977, "poster": None},
    {"id": 329, "title": "Jurassic Park", "year": 1993, "poster": None},
    {"id": 597, "title": "Titanic", "year": 1997, "poster": None},
    {"id": 105, "title": "Back to the Future", "year": 1985, "poster": None},
    {"id": 348, "title": "Alien", "year": 1979, "poster": None},
    {"id": 769, "title": "GoodFellas", "year": 1990, "poster": None},
    {"id": 194, "title": "Amélie", "year": 2001, "poster": None},
    {"id": 244786, "title": "Whiplash", "year": 2014, "poster": None},
    {"id": 693134, "title": "Dune: Part Two", "year": 2024, "poster": None},
]


def search_catalog(query: str, limit: int = 20) -> list[dict]:
    """Case-insensitive substring match on title."""
    needle = query.strip().casefold()
    if not needle:
        return []
    return [m for m in LOCAL_CATALOG if needle in m["title"].casefold()][:limit]
