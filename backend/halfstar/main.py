"""
halfstar API — FastAPI application entry point.

Routers are registered here. Each service lives in halfstar/api/.

Run with:
  halfstar                      # console script, listens on settings.PORT
  uvicorn --factory halfstar.main:create_app
"""
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from halfstar.api import auth, movies, ratings, users
from halfstar.core.config import settings
from halfstar.core.logging_setup import setup_logging
from halfstar.core.oauth import build_oauth
from halfstar.db.session import Database

VERSION = "0.3.0"


def create_app(database: Database | None = None) -> FastAPI:
    """
    Build the application around *database*.

    The database is migrated before the app is returned; a failing
    migration raises here and the process never starts serving.
    """
    setup_logging()

    if database is None:
        database = Database(settings.DATABASE_URL, echo=settings.SQL_ECHO)
    database.initialize()

    app = FastAPI(
        title="halfstar API",
        description="Backend for the halfstar movie rating app.",
        version=VERSION,
        docs_url="/docs" if settings.ENABLE_DOCS else None,
        redoc_url="/redoc" if settings.ENABLE_DOCS else None,
    )
    app.state.database = database
    app.state.oauth = build_oauth(settings)

    # ── Middleware ────────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # Holds OAuth state between /auth/google and the callback
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SECRET_KEY,
        same_site="lax",
        https_only=not settings.is_dev,
    )

    # ── Routers ───────────────────────────────────────────────────────────────
    app.include_router(auth.router,    prefix="/auth",        tags=["auth"])
    app.include_router(users.router,   prefix="/api",         tags=["users"])
    app.include_router(movies.router,  prefix="/api/movies",  tags=["movies"])
    app.include_router(ratings.router, prefix="/api/ratings", tags=["ratings"])

    # ── Health check ──────────────────────────────────────────────────────────
    @app.get("/health", tags=["system"])
    def health_check() -> dict:
        """Liveness probe. Returns 200 when the server is up."""
        return {"status": "ok", "version": VERSION, "env": settings.APP_ENV}

    return app


def run() -> None:
    """Console entry point: serve the app factory on settings.PORT."""
    uvicorn.run(
        "halfstar.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.is_dev,
    )
