"""
Programmatic Alembic runner.

The revision scripts live in backend/alembic/versions; the same scripts
serve both `alembic upgrade head` from the CLI and Database.initialize().
"""
import logging
from pathlib import Path

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

ALEMBIC_DIR = Path(__file__).resolve().parents[2] / "alembic"


def build_alembic_config(url: str) -> Config:
    config = Config()
    config.set_main_option("script_location", str(ALEMBIC_DIR))
    config.set_main_option("sqlalchemy.url", url)
    return config


def current_revision(engine: Engine) -> str | None:
    """Return the revision recorded in alembic_version, or None if untracked."""
    with engine.connect() as connection:
        return MigrationContext.configure(connection).get_current_revision()


def upgrade_to_head(engine: Engine) -> None:
    """
    Apply every pending revision in order.

    Runs on a dedicated connection with one transaction per revision, so
    PRAGMA statements issued at the start of a revision take effect.
    """
    before = current_revision(engine)
    config = build_alembic_config(engine.url.render_as_string(hide_password=False))

    with engine.connect() as connection:
        config.attributes["connection"] = connection
        command.upgrade(config, "head")
        connection.commit()
        if engine.dialect.name == "sqlite":
            # A rebuild may leave FK enforcement off on this pooled connection;
            # the pragma only takes effect outside a transaction.
            connection.exec_driver_sql("PRAGMA foreign_keys=ON")
            connection.commit()

    after = current_revision(engine)
    if before != after:
        logger.info("Migrated schema from %s to %s", before or "untracked", after)
    else:
        logger.debug("Schema already at %s", after)
