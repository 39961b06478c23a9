"""Location x department scope backfill for legacy SQLite stores.

Stores created before scoping existed have no ``location``/``department``
columns on users and rota tables and no ``user_scopes`` table. The
migrator adds what is missing, derives default scope values from the
settings singleton and fills every blank value, all inside a single
transaction. Each step only acts on rows or schema that still need it,
so a second run changes nothing.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
from sqlalchemy import Connection, Engine, create_engine, event, text

from torre_tempo.core.constants import SETTINGS_ROW_ID
from torre_tempo.modules.scopes.defaults import ScopeDefaults


logger = structlog.get_logger()


# (table, column, type) triples added when absent
SCOPE_COLUMNS: tuple[tuple[str, str, str], ...] = (
    ("users", "location", "TEXT"),
    ("users", "department", "TEXT"),
    ("rota_weeks", "location", "TEXT"),
    ("rota_weeks", "department", "TEXT"),
    ("rota_shifts", "location", "TEXT"),
    ("rota_shifts", "department", "TEXT"),
)

ROTA_TABLES: tuple[str, ...] = ("rota_weeks", "rota_shifts")

USER_SCOPES_DDL = (
    "CREATE TABLE user_scopes ("
    "user_id TEXT NOT NULL, "
    "location TEXT NOT NULL, "
    "department TEXT NOT NULL, "
    "PRIMARY KEY (user_id, location, department))"
)


class ScopeMigrationError(Exception):
    """Base class for scope backfill failures."""


class StoreNotFoundError(ScopeMigrationError):
    """Raised when the configured store file does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Database not found at {path}")


class MigrationFailedError(ScopeMigrationError):
    """Raised when a step fails; the transaction has been rolled back."""


@dataclass
class BackfillReport:
    """Summary of what one migration run changed."""

    defaults: ScopeDefaults
    columns_added: list[str] = field(default_factory=list)
    scope_table_created: bool = False
    users_backfilled: int = 0
    scopes_inserted: int = 0
    rota_values_filled: dict[str, int] = field(default_factory=dict)

    @property
    def changed(self) -> bool:
        """Whether the run altered schema or data."""
        return bool(
            self.columns_added
            or self.scope_table_created
            or self.users_backfilled
            or self.scopes_inserted
            or any(self.rota_values_filled.values())
        )


def open_store(path: Path) -> Engine:
    """Create an engine for an existing SQLite store.

    The pysqlite driver is switched to explicit ``BEGIN`` so that schema
    changes join the surrounding transaction and roll back with it.

    Raises:
        StoreNotFoundError: If ``path`` does not exist
    """
    if not path.exists():
        raise StoreNotFoundError(path)

    engine = create_engine(f"sqlite:///{path}")

    @event.listens_for(engine, "connect")
    def _disable_driver_transactions(dbapi_connection: Any, _record: Any) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin(conn: Connection) -> None:
        conn.exec_driver_sql("BEGIN")

    return engine


class ScopeBackfillMigrator:
    """Runs the scope backfill against an injected engine.

    Usage:
        engine = open_store(Path("data/torre-tempo.sqlite"))
        report = ScopeBackfillMigrator(engine).run()
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def run(self) -> BackfillReport:
        """Apply every step in one transaction.

        Returns:
            What the run changed

        Raises:
            MigrationFailedError: If any step raised; nothing was committed
        """
        try:
            with self.engine.begin() as conn:
                report = self._migrate(conn)
        except Exception as exc:
            logger.error("scope_backfill_failed", error=str(exc), error_type=type(exc).__name__)
            raise MigrationFailedError(f"Migration failed: {exc}") from exc

        logger.info(
            "scope_backfill_completed",
            columns_added=report.columns_added,
            scope_table_created=report.scope_table_created,
            users_backfilled=report.users_backfilled,
            scopes_inserted=report.scopes_inserted,
            rota_values_filled=report.rota_values_filled,
        )
        return report

    def _migrate(self, conn: Connection) -> BackfillReport:
        columns_added = self._ensure_columns(conn)
        scope_table_created = self._ensure_scope_table(conn)

        defaults = self.load_defaults(conn)
        logger.debug(
            "scope_defaults_computed",
            location=defaults.location,
            department=defaults.department,
        )

        report = BackfillReport(
            defaults=defaults,
            columns_added=columns_added,
            scope_table_created=scope_table_created,
        )
        self._backfill_users(conn, report)
        self._backfill_rota(conn, report)
        return report

    def _ensure_columns(self, conn: Connection) -> list[str]:
        added: list[str] = []
        for table, column, column_type in SCOPE_COLUMNS:
            if column in _table_columns(conn, table):
                continue
            conn.exec_driver_sql(f"ALTER TABLE {table} ADD COLUMN {column} {column_type}")
            added.append(f"{table}.{column}")
        return added

    def _ensure_scope_table(self, conn: Connection) -> bool:
        if _table_exists(conn, "user_scopes"):
            return False
        conn.exec_driver_sql(USER_SCOPES_DDL)
        return True

    def load_defaults(self, conn: Connection) -> ScopeDefaults:
        """Read the settings singleton and derive the scope defaults.

        A missing settings table or row yields the fallbacks; so does a
        ``data`` value that is not valid JSON.
        """
        if not _table_exists(conn, "settings"):
            return ScopeDefaults()

        row = conn.execute(
            text("SELECT data FROM settings WHERE id = :id"), {"id": SETTINGS_ROW_ID}
        ).first()
        if row is None:
            return ScopeDefaults()

        try:
            document = json.loads(row.data) if isinstance(row.data, (str, bytes)) else None
        except ValueError:
            logger.warning("settings_document_invalid", settings_id=SETTINGS_ROW_ID)
            document = None
        return ScopeDefaults.from_settings(document)

    def _backfill_users(self, conn: Connection, report: BackfillReport) -> None:
        defaults = report.defaults
        users = conn.execute(text("SELECT id, location, department FROM users")).all()

        update_user = text(
            "UPDATE users SET location = :location, department = :department WHERE id = :id"
        )
        insert_scope = text(
            "INSERT OR IGNORE INTO user_scopes (user_id, location, department) "
            "VALUES (:user_id, :location, :department)"
        )

        for user in users:
            location = user.location or defaults.location
            department = user.department or defaults.department
            if (location, department) != (user.location, user.department):
                report.users_backfilled += 1

            conn.execute(
                update_user, {"location": location, "department": department, "id": user.id}
            )
            result = conn.execute(
                insert_scope,
                {"user_id": user.id, "location": location, "department": department},
            )
            report.scopes_inserted += result.rowcount

    def _backfill_rota(self, conn: Connection, report: BackfillReport) -> None:
        defaults = report.defaults
        for table in ROTA_TABLES:
            updated = 0
            for column, value in (
                ("location", defaults.location),
                ("department", defaults.department),
            ):
                result = conn.execute(
                    text(
                        f"UPDATE {table} SET {column} = :value "
                        f"WHERE {column} IS NULL OR {column} = ''"
                    ),
                    {"value": value},
                )
                updated += result.rowcount
            report.rota_values_filled[table] = updated


def _table_columns(conn: Connection, table: str) -> set[str]:
    return {row[1] for row in conn.exec_driver_sql(f"PRAGMA table_info({table})")}


def _table_exists(conn: Connection, table: str) -> bool:
    row = conn.execute(
        text("SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = :name"),
        {"name": table},
    ).first()
    return row is not None
