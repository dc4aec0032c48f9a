"""Lightweight schema migrations for the SQLite key-value store."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine

logger = logging.getLogger(__name__)

LEGACY_KEY_PREFIX: str = "@awaken:"
CURRENT_KEY_PREFIX: str = "@app:"
LEGACY_COLLECTIONS: tuple[str, ...] = ("orders", "drinks", "settings")


def _sqlite_column_names(connection: Connection, table_name: str) -> set[str]:
    """Return column names for a SQLite table using PRAGMA table_info."""
    rows = connection.execute(text(f"PRAGMA table_info({table_name});")).mappings().all()
    return {str(row["name"]) for row in rows}


def _rename_legacy_keys(connection: Connection) -> None:
    """Move values written under the old ``@awaken:`` namespace to ``@app:``."""
    for collection in LEGACY_COLLECTIONS:
        legacy_key = f"{LEGACY_KEY_PREFIX}{collection}"
        current_key = f"{CURRENT_KEY_PREFIX}{collection}"
        current_exists = connection.execute(
            text("SELECT COUNT(1) FROM storage_entries WHERE key = :key"),
            {"key": current_key},
        ).scalar_one()
        if int(current_exists) > 0:
            continue
        moved = connection.execute(
            text("UPDATE storage_entries SET key = :current WHERE key = :legacy"),
            {"current": current_key, "legacy": legacy_key},
        )
        if moved.rowcount:
            logger.info("[MIGRATION] Moved legacy key %s to %s", legacy_key, current_key)


def ensure_sqlite_schema(engine: Engine) -> None:
    """Apply lightweight store updates for legacy SQLite databases."""
    if engine.dialect.name != "sqlite":
        return

    with engine.begin() as connection:
        table_rows = connection.execute(text("SELECT name FROM sqlite_master WHERE type='table';")).all()
        table_names: set[str] = {str(row[0]) for row in table_rows}

        if "storage_entries" not in table_names:
            connection.execute(
                text(
                    """
                    CREATE TABLE storage_entries (
                        key VARCHAR(255) NOT NULL PRIMARY KEY,
                        value TEXT NOT NULL,
                        updated_at DATETIME NOT NULL
                    )
                    """
                )
            )
            table_names.add("storage_entries")

        entry_columns: set[str] = _sqlite_column_names(connection, "storage_entries")
        if "updated_at" not in entry_columns:
            now_iso: str = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
            connection.execute(
                text(
                    "ALTER TABLE storage_entries ADD COLUMN updated_at DATETIME NOT NULL "
                    f"DEFAULT '{now_iso}'"
                )
            )

        _rename_legacy_keys(connection)
