import os
import sqlite3

import pytest

from notestore.config import DEFAULTS
from notestore.db import Store
from notestore.errors import StorageUnavailable, ForeignKeyViolation
from notestore.repository import note_repo
from notestore.schema import existing_tables, TABLES
from notestore.services import subject_svc


def test_open_creates_directory_and_tables(db_path, store):
    assert os.path.exists(db_path)
    with store.session() as conn:
        tables = existing_tables(conn)
    for t in TABLES:
        assert t in tables


def test_wal_and_foreign_keys_enabled(store):
    assert store.journal_mode.lower() == "wal"
    with store.session() as conn:
        assert conn.execute("PRAGMA journal_mode").fetchone()[0].lower() == "wal"
        assert conn.execute("PRAGMA foreign_keys").fetchone()[0] == 1


def test_reopen_is_idempotent_and_keeps_rows(db_path, clock):
    with Store(db_path, config=dict(DEFAULTS), clock=clock) as s1:
        created = subject_svc.create_subject(s1, "Math", "#FF0000")
    with Store(db_path, config=dict(DEFAULTS), clock=clock) as s2:
        subjects = subject_svc.list_subjects(s2)
    assert [s.id for s in subjects] == [created.id]


def test_notes_columns(store):
    with store.session() as conn:
        cols = [r["name"] for r in conn.execute("PRAGMA table_info(notes)").fetchall()]
        fks = conn.execute("PRAGMA foreign_key_list(notes)").fetchall()
    assert cols == ["id", "subject_id", "title", "content_json", "plain_text", "created_at", "updated_at"]
    assert len(fks) == 1
    assert fks[0]["table"] == "subjects"
    assert fks[0]["from"] == "subject_id"


def test_unopenable_path_is_storage_unavailable(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    with pytest.raises(StorageUnavailable):
        Store(str(blocker / "sub" / "notes.db"), config=dict(DEFAULTS))


def test_directory_as_db_file_is_storage_unavailable(tmp_path):
    target = tmp_path / "a_dir"
    target.mkdir()
    with pytest.raises(StorageUnavailable) as ei:
        Store(str(target), config=dict(DEFAULTS))
    assert isinstance(ei.value.__cause__, sqlite3.Error)


def test_closed_store_rejects_sessions(db_path):
    s = Store(db_path, config=dict(DEFAULTS))
    s.close()
    assert s.closed
    with pytest.raises(StorageUnavailable):
        subject_svc.list_subjects(s)
    # closing twice is harmless
    s.close()


def test_store_reports_tables(store):
    tables = store.tables()
    assert set(TABLES) <= set(tables)


def test_failed_commit_rolls_back(store):
    with pytest.raises(ForeignKeyViolation):
        with store.session() as conn:
            with store.transaction(conn):
                # foreign keys checked at COMMIT, so COMMIT itself fails
                conn.execute("PRAGMA defer_foreign_keys = ON")
                note_repo.insert(conn, "n1", "missing-subject", "t", "{}", "", store.now())
    with store.session() as conn:
        assert not conn.in_transaction
        assert conn.execute("SELECT COUNT(1) FROM notes").fetchone()[0] == 0
    # store is still writable afterwards
    assert subject_svc.create_subject(store, "After", "#000000").name == "After"
