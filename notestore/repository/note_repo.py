"""
Note data access.
Listing order is always most recently modified first.
"""
from __future__ import annotations

from sqlite3 import Connection
from typing import Optional

COLUMNS = "id, subject_id, title, content_json, plain_text, created_at, updated_at"
ORDER = "ORDER BY updated_at DESC, rowid DESC"
SEARCH_LIMIT = 20


def list_by_subject(conn: Connection, subject_id: str):
    return conn.execute(
        f"SELECT {COLUMNS} FROM notes WHERE subject_id=? {ORDER}",
        (subject_id,),
    ).fetchall()


def list_all(conn: Connection):
    return conn.execute(f"SELECT {COLUMNS} FROM notes {ORDER}").fetchall()


def get_one(conn: Connection, note_id: str) -> Optional[dict]:
    row = conn.execute(f"SELECT {COLUMNS} FROM notes WHERE id=?", (note_id,)).fetchone()
    return dict(row) if row else None


def insert(conn: Connection, note_id: str, subject_id: str, title: str,
           content_json: str, plain_text: str, now: str):
    conn.execute(
        "INSERT INTO notes(id, subject_id, title, content_json, plain_text, created_at, updated_at) "
        "VALUES(?,?,?,?,?,?,?)",
        (note_id, subject_id, title, content_json, plain_text, now, now),
    )


def update(conn: Connection, note_id: str, title: str, content_json: str, plain_text: str, now: str) -> int:
    cur = conn.execute(
        "UPDATE notes SET title=?, content_json=?, plain_text=?, updated_at=? WHERE id=?",
        (title, content_json, plain_text, now, note_id),
    )
    return cur.rowcount


def delete(conn: Connection, note_id: str) -> int:
    return conn.execute("DELETE FROM notes WHERE id=?", (note_id,)).rowcount


def delete_by_subject(conn: Connection, subject_id: str) -> int:
    return conn.execute("DELETE FROM notes WHERE subject_id=?", (subject_id,)).rowcount


def search(conn: Connection, query: str, limit: int = SEARCH_LIMIT):
    """
    Substring match on title or plain_text via LIKE.
    The query is not escaped: % and _ keep their wildcard meaning, and an
    empty query matches every row.
    """
    params = {"q": f"%{query}%", "limit": limit}
    sql = (
        f"SELECT {COLUMNS} FROM notes "
        "WHERE title LIKE :q OR plain_text LIKE :q "
        f"{ORDER} LIMIT :limit"
    )
    return conn.execute(sql, params).fetchall()
