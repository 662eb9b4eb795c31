"""
SQLAlchemy engine + session factory, wrapped in an explicit Database object.

create_app() builds one Database, calls initialize() (which migrates the
schema to head) and stores it on app.state. Route handlers get a session
through the *get_db* dependency.
"""
import logging
from collections.abc import Generator

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker

from halfstar.db.migrations import upgrade_to_head

logger = logging.getLogger(__name__)


def _set_sqlite_pragmas(dbapi_connection, connection_record) -> None:
    # Single writer, many readers; FK enforcement is off by default in SQLite
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the engine and session factory for one SQLite store."""

    def __init__(self, url: str, echo: bool = False) -> None:
        self.url = url
        is_sqlite = make_url(url).get_backend_name() == "sqlite"
        self.engine: Engine = create_engine(
            url,
            # Sessions may be used from FastAPI's threadpool
            connect_args={"check_same_thread": False} if is_sqlite else {},
            echo=echo,
        )
        if is_sqlite:
            event.listen(self.engine, "connect", _set_sqlite_pragmas)

        self.session_factory = sessionmaker(
            bind=self.engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,  # Avoid lazy-load errors after commit
        )
        self.initialized = False

    def initialize(self) -> None:
        """
        Bring the on-disk schema up to date.

        Safe to call on every startup; an already-migrated store is a no-op.
        Errors propagate so a broken migration stops the process.
        """
        logger.info("Initializing database %s", self.engine.url)
        upgrade_to_head(self.engine)
        self.initialized = True

    def session(self) -> Session:
        if not self.initialized:
            raise RuntimeError("Database.initialize() must run before sessions are used")
        return self.session_factory()

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a scoped DB session.

    Usage:
        @router.get("/items")
        def list_items(db: Session = Depends(get_db)):
            ...
    """
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
