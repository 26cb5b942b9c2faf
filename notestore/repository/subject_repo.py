from __future__ import annotations

from sqlite3 import Connection
from typing import Optional

COLUMNS = "id, name, color_hex, created_at, updated_at"


def list_all(conn: Connection):
    return conn.execute(f"SELECT {COLUMNS} FROM subjects ORDER BY name ASC, rowid ASC").fetchall()


def get_one(conn: Connection, subject_id: str) -> Optional[dict]:
    row = conn.execute(f"SELECT {COLUMNS} FROM subjects WHERE id=?", (subject_id,)).fetchone()
    return dict(row) if row else None


def insert(conn: Connection, subject_id: str, name: str, color_hex: str, now: str):
    conn.execute(
        "INSERT INTO subjects(id, name, color_hex, created_at, updated_at) VALUES(?,?,?,?,?)",
        (subject_id, name, color_hex, now, now),
    )


def update(conn: Connection, subject_id: str, name: str, color_hex: str, now: str) -> int:
    cur = conn.execute(
        "UPDATE subjects SET name=?, color_hex=?, updated_at=? WHERE id=?",
        (name, color_hex, now, subject_id),
    )
    return cur.rowcount


def delete(conn: Connection, subject_id: str) -> int:
    return conn.execute("DELETE FROM subjects WHERE id=?", (subject_id,)).rowcount
