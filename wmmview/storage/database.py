"""SQLite access for the forecast cache: WAL connections and schema migrations.

Migrations live in `wmmview.storage.migrations` as modules named
`v###_<name>` exposing `up(conn)`. Applied versions are recorded in
`schema_versions`.
"""

import importlib
import logging
import pkgutil
import re
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)

MIGRATIONS_PACKAGE = "wmmview.storage.migrations"
BUSY_TIMEOUT_SECONDS = 5.0

_MIGRATION_NAME_RE = re.compile(r"^v\d{3}_\w+$")


def connect(
    db_path: str | Path, timeout: float = BUSY_TIMEOUT_SECONDS
) -> sqlite3.Connection:
    """Open a WAL-mode connection, creating the parent directory if needed.

    `timeout` is how long a writer waits on another connection's lock;
    the API opens one connection per request against the same file.
    """
    path = Path(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path), timeout=timeout)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    return conn


def open_database(db_path: str | Path) -> sqlite3.Connection:
    """Connect and bring the schema up to date."""
    conn = connect(db_path)
    applied = run_migrations(conn)
    if applied:
        logger.info("Applied migrations to %s: %s", db_path, ", ".join(applied))
    return conn


def run_migrations(conn: sqlite3.Connection) -> list[str]:
    """Apply pending migrations in version order. Returns the names applied."""
    with conn:
        conn.execute(
            "CREATE TABLE IF NOT EXISTS schema_versions ("
            "  version TEXT PRIMARY KEY,"
            "  applied_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP"
            ")"
        )
    applied = {row[0] for row in conn.execute("SELECT version FROM schema_versions")}

    newly_applied = []
    for name in available_migrations():
        if name in applied:
            continue
        module = importlib.import_module(f"{MIGRATIONS_PACKAGE}.{name}")
        module.up(conn)
        with conn:
            conn.execute("INSERT INTO schema_versions (version) VALUES (?)", (name,))
        newly_applied.append(name)
    return newly_applied


def available_migrations() -> list[str]:
    """Migration module names in the migrations package, sorted by version."""
    package = importlib.import_module(MIGRATIONS_PACKAGE)
    return sorted(
        info.name
        for info in pkgutil.iter_modules(package.__path__)
        if _MIGRATION_NAME_RE.match(info.name)
    )
