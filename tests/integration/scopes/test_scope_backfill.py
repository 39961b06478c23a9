"""Integration tests for the scope backfill against real SQLite files."""

import json
import sqlite3
from collections.abc import Iterator
from pathlib import Path

import pytest
from sqlalchemy import Engine

from torre_tempo.modules.scopes.backfill import (
    MigrationFailedError,
    ScopeBackfillMigrator,
    StoreNotFoundError,
    open_store,
)
from torre_tempo.modules.scopes.defaults import ScopeDefaults


pytestmark = pytest.mark.integration


LEGACY_SCHEMA = """
CREATE TABLE settings (id INTEGER PRIMARY KEY, data TEXT);
CREATE TABLE users (id TEXT PRIMARY KEY, email TEXT NOT NULL);
CREATE TABLE rota_weeks (id TEXT PRIMARY KEY, week_start TEXT NOT NULL);
CREATE TABLE rota_shifts (id TEXT PRIMARY KEY, week_id TEXT NOT NULL, date TEXT NOT NULL);
"""

DIRECTORY_SETTINGS = {
    "directories": {
        "locations": ["Madrid Centro", "Valencia"],
        "departments": ["Kitchen", "Floor"],
    }
}


def _execute(path: Path, script: str) -> None:
    conn = sqlite3.connect(path)
    try:
        conn.executescript(script)
        conn.commit()
    finally:
        conn.close()


def _query(path: Path, sql: str) -> list[tuple]:
    conn = sqlite3.connect(path)
    try:
        return conn.execute(sql).fetchall()
    finally:
        conn.close()


def _dump(path: Path) -> list[str]:
    conn = sqlite3.connect(path)
    try:
        return list(conn.iterdump())
    finally:
        conn.close()


def _columns(path: Path, table: str) -> set[str]:
    return {row[1] for row in _query(path, f"PRAGMA table_info({table})")}


def _tables(path: Path) -> set[str]:
    return {row[0] for row in _query(path, "SELECT name FROM sqlite_master WHERE type = 'table'")}


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    """A legacy store with two users, one week and one shift."""
    path = tmp_path / "torre-tempo.sqlite"
    _execute(path, LEGACY_SCHEMA)
    _execute(
        path,
        f"""
        INSERT INTO settings (id, data) VALUES (1, '{json.dumps(DIRECTORY_SETTINGS)}');
        INSERT INTO users (id, email) VALUES ('u1', 'ana@example.com');
        INSERT INTO users (id, email) VALUES ('u2', 'luis@example.com');
        INSERT INTO rota_weeks (id, week_start) VALUES ('w1', '2026-10-05');
        INSERT INTO rota_shifts (id, week_id, date) VALUES ('s1', 'w1', '2026-10-06');
        """,
    )
    return path


@pytest.fixture
def engine(store_path: Path) -> Iterator[Engine]:
    """Engine opened on the legacy store."""
    engine = open_store(store_path)
    yield engine
    engine.dispose()


class TestOpenStore:
    """Tests for opening the store."""

    def test_missing_store_raises(self, tmp_path: Path):
        """A path that does not exist is rejected before anything runs."""
        missing = tmp_path / "missing.sqlite"

        with pytest.raises(StoreNotFoundError) as exc_info:
            open_store(missing)

        assert str(exc_info.value) == f"Database not found at {missing}"
        assert not missing.exists()


class TestBackfill:
    """Tests for a first run against a legacy store."""

    def test_adds_columns_and_scope_table(self, store_path: Path, engine: Engine):
        """Missing scope columns and user_scopes are created."""
        report = ScopeBackfillMigrator(engine).run()

        for table in ("users", "rota_weeks", "rota_shifts"):
            assert {"location", "department"} <= _columns(store_path, table)
        assert "user_scopes" in _tables(store_path)
        assert report.scope_table_created is True
        assert len(report.columns_added) == 6

    def test_users_get_defaults_and_one_scope_each(self, store_path: Path, engine: Engine):
        """Every user is filled from the first directory entries."""
        report = ScopeBackfillMigrator(engine).run()

        assert report.defaults == ScopeDefaults("Madrid Centro", "Kitchen")
        assert _query(store_path, "SELECT id, location, department FROM users ORDER BY id") == [
            ("u1", "Madrid Centro", "Kitchen"),
            ("u2", "Madrid Centro", "Kitchen"),
        ]
        assert _query(store_path, "SELECT * FROM user_scopes ORDER BY user_id") == [
            ("u1", "Madrid Centro", "Kitchen"),
            ("u2", "Madrid Centro", "Kitchen"),
        ]
        assert report.users_backfilled == 2
        assert report.scopes_inserted == 2

    def test_rota_values_filled(self, store_path: Path, engine: Engine):
        """Null rota scope values are filled with the defaults."""
        report = ScopeBackfillMigrator(engine).run()

        assert _query(store_path, "SELECT location, department FROM rota_weeks") == [
            ("Madrid Centro", "Kitchen")
        ]
        assert _query(store_path, "SELECT location, department FROM rota_shifts") == [
            ("Madrid Centro", "Kitchen")
        ]
        assert report.rota_values_filled == {"rota_weeks": 2, "rota_shifts": 2}

    def test_explicit_values_are_kept(self, tmp_path: Path):
        """Values already present survive; only the blank ones are filled."""
        path = tmp_path / "partial.sqlite"
        _execute(path, LEGACY_SCHEMA)
        _execute(
            path,
            """
            ALTER TABLE users ADD COLUMN location TEXT;
            ALTER TABLE users ADD COLUMN department TEXT;
            ALTER TABLE rota_weeks ADD COLUMN location TEXT;
            ALTER TABLE rota_weeks ADD COLUMN department TEXT;
            INSERT INTO users (id, email, location, department)
                VALUES ('u1', 'ana@example.com', 'Branch A', NULL);
            INSERT INTO users (id, email, location, department)
                VALUES ('u2', 'luis@example.com', '', 'Bar');
            INSERT INTO rota_weeks (id, week_start, location, department)
                VALUES ('w1', '2026-10-05', '', 'Bar');
            """,
        )
        engine = open_store(path)
        try:
            report = ScopeBackfillMigrator(engine).run()
        finally:
            engine.dispose()

        assert report.columns_added == ["rota_shifts.location", "rota_shifts.department"]
        assert _query(path, "SELECT id, location, department FROM users ORDER BY id") == [
            ("u1", "Branch A", "general"),
            ("u2", "default", "Bar"),
        ]
        assert _query(path, "SELECT * FROM user_scopes ORDER BY user_id") == [
            ("u1", "Branch A", "general"),
            ("u2", "default", "Bar"),
        ]
        assert _query(path, "SELECT location, department FROM rota_weeks") == [
            ("default", "Bar")
        ]
        assert report.rota_values_filled == {"rota_weeks": 1, "rota_shifts": 0}

    def test_existing_scope_row_is_not_duplicated(self, tmp_path: Path):
        """A membership already recorded is left as the only row."""
        path = tmp_path / "scoped.sqlite"
        _execute(path, LEGACY_SCHEMA)
        _execute(
            path,
            """
            ALTER TABLE users ADD COLUMN location TEXT;
            ALTER TABLE users ADD COLUMN department TEXT;
            CREATE TABLE user_scopes (
                user_id TEXT NOT NULL,
                location TEXT NOT NULL,
                department TEXT NOT NULL,
                PRIMARY KEY (user_id, location, department)
            );
            INSERT INTO users (id, email, location, department)
                VALUES ('u1', 'ana@example.com', 'Valencia', 'Floor');
            INSERT INTO user_scopes VALUES ('u1', 'Valencia', 'Floor');
            """,
        )
        engine = open_store(path)
        try:
            report = ScopeBackfillMigrator(engine).run()
        finally:
            engine.dispose()

        assert report.scope_table_created is False
        assert report.users_backfilled == 0
        assert report.scopes_inserted == 0
        assert _query(path, "SELECT * FROM user_scopes") == [("u1", "Valencia", "Floor")]


class TestDefaults:
    """Tests for reading defaults from the settings singleton."""

    def _run(self, path: Path) -> ScopeDefaults:
        engine = open_store(path)
        try:
            return ScopeBackfillMigrator(engine).run().defaults
        finally:
            engine.dispose()

    def test_missing_settings_table(self, tmp_path: Path):
        """No settings table means the fallbacks."""
        path = tmp_path / "no-settings.sqlite"
        _execute(path, LEGACY_SCHEMA + "DROP TABLE settings;")

        assert self._run(path) == ScopeDefaults("default", "general")

    def test_missing_settings_row(self, tmp_path: Path):
        """An empty settings table means the fallbacks."""
        path = tmp_path / "empty-settings.sqlite"
        _execute(path, LEGACY_SCHEMA)

        assert self._run(path) == ScopeDefaults("default", "general")

    def test_malformed_settings_document(self, tmp_path: Path):
        """A settings document that is not JSON falls back."""
        path = tmp_path / "bad-settings.sqlite"
        _execute(path, LEGACY_SCHEMA + "INSERT INTO settings (id, data) VALUES (1, '{not json');")

        assert self._run(path) == ScopeDefaults("default", "general")

    def test_partial_directories(self, tmp_path: Path):
        """Only the configured dimension overrides its fallback."""
        path = tmp_path / "partial-settings.sqlite"
        document = json.dumps({"directories": {"departments": ["Bar"]}})
        _execute(path, LEGACY_SCHEMA + f"INSERT INTO settings (id, data) VALUES (1, '{document}');")

        assert self._run(path) == ScopeDefaults("default", "Bar")


class TestIdempotence:
    """Tests for re-running the backfill."""

    def test_second_run_changes_nothing(self, store_path: Path, engine: Engine):
        """The store is identical after a second run."""
        first = ScopeBackfillMigrator(engine).run()
        snapshot = _dump(store_path)

        second = ScopeBackfillMigrator(engine).run()

        assert first.changed is True
        assert second.changed is False
        assert second.columns_added == []
        assert second.rota_values_filled == {"rota_weeks": 0, "rota_shifts": 0}
        assert _dump(store_path) == snapshot


class TestAtomicity:
    """Tests for all-or-nothing behavior."""

    def test_failure_rolls_back_schema_and_data(self, store_path: Path, engine: Engine):
        """A failing user update leaves the store exactly as it was."""
        _execute(
            store_path,
            """
            CREATE TRIGGER reject_u2 BEFORE UPDATE ON users
            WHEN OLD.id = 'u2'
            BEGIN
                SELECT RAISE(ABORT, 'rejected');
            END;
            """,
        )
        snapshot = _dump(store_path)

        with pytest.raises(MigrationFailedError) as exc_info:
            ScopeBackfillMigrator(engine).run()

        assert str(exc_info.value).startswith("Migration failed:")
        assert "rejected" in str(exc_info.value)
        assert "location" not in _columns(store_path, "users")
        assert "user_scopes" not in _tables(store_path)
        assert _dump(store_path) == snapshot
