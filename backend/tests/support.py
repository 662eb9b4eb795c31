"""Shared fixtures: a migrated SQLite store in a temporary directory."""
import os
import tempfile

from halfstar.db.session import Database
from halfstar.services.identity_service import ExternalProfile, find_or_create_user


class TempDatabaseMixin:
    """Gives each test a fresh, migrated Database and an open session."""

    def setUp(self) -> None:
        self._tmpdir = tempfile.TemporaryDirectory()
        self.db_path = os.path.join(self._tmpdir.name, "halfstar.db")
        self.database = Database(f"sqlite:///{self.db_path}")
        self.database.initialize()
        self.db = self.database.session()

    def tearDown(self) -> None:
        self.db.close()
        self.database.dispose()
        self._tmpdir.cleanup()

    def make_user(self, sub: str = "google-1", name: str = "Ada", picture: str | None = None):
        profile = ExternalProfile(
            id=sub,
            display_name=name,
            emails=[f"{sub}@example.com"],
            photos=[picture] if picture else [],
        )
        return find_or_create_user(self.db, profile)
