"""Schema manager: pragmas and the initial, idempotent migration."""
from __future__ import annotations

import logging
import os
import sqlite3

logger = logging.getLogger(__name__)

SCHEMA_PATH = os.path.join(os.path.dirname(__file__), "schema.sql")
TABLES = ("subjects", "notes")


def apply_pragmas(conn: sqlite3.Connection) -> str:
    """Enable WAL and foreign keys. Returns the journal mode the engine accepted."""
    mode = conn.execute("PRAGMA journal_mode=WAL;").fetchone()[0]
    conn.execute("PRAGMA foreign_keys = ON;")
    if str(mode).lower() != "wal":
        # in-memory databases report "memory"
        logger.debug("journal_mode is %s, not wal", mode)
    return mode


def ensure_schema(conn: sqlite3.Connection):
    with open(SCHEMA_PATH, "r", encoding="utf-8") as f:
        conn.executescript(f.read())
    missing = [t for t in TABLES if t not in existing_tables(conn)]
    if missing:
        raise sqlite3.OperationalError(f"schema incomplete, missing tables: {', '.join(missing)}")
    logger.debug("schema ensured")


def existing_tables(conn: sqlite3.Connection) -> list[str]:
    rows = conn.execute("SELECT name FROM sqlite_master WHERE type='table' ORDER BY name").fetchall()
    return [r[0] for r in rows]
